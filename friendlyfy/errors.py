"""Error definitions shared by every friendlyfy namespace."""


class FriendlyfyError(Exception):
    """Base class for friendlyfy errors."""


class InvalidInput(FriendlyfyError, ValueError):
    """Raised when an argument has the wrong type or an out-of-domain value."""


class OperationFailed(FriendlyfyError):
    """Raised when a delegated operation (file I/O, key derivation) fails.

    The underlying exception is always chained as ``__cause__``.
    """

    def __init__(self, action: str, reason: object) -> None:
        super().__init__(f"Failed to {action}: {reason}")
        self.action = action
        self.reason = reason
