"""Dict transforms and dotted-path access.

Paths are dot separated ("user.address.city") and only descend through
dicts. ``get_path``, ``has_path``, ``object_size`` and ``is_empty`` accept
anything and answer leniently; the rest raise ``InvalidInput`` for
non-dict input.
"""

import copy
from collections.abc import Callable, Iterable
from typing import Any

from friendlyfy.errors import InvalidInput

_MISSING = object()


def _require_dict(value: Any) -> None:
    if not isinstance(value, dict):
        raise InvalidInput(f"Invalid object provided: {type(value).__name__!r}")


def _split_path(path: str) -> list[str]:
    if not isinstance(path, str):
        raise InvalidInput(f"Path must be a string, got {type(path).__name__!r}")
    return path.split(".")


def _as_keys(keys: Any) -> list[Any]:
    return list(keys) if isinstance(keys, (list, tuple, set, frozenset)) else [keys]


def deep_clone(value: Any) -> Any:
    return copy.deepcopy(value)


def deep_merge(target: dict, *sources: dict) -> dict:
    """Recursively merge ``sources`` into ``target`` and return it.

    Nested dicts merge key by key; any other value (lists included) from a
    later source replaces the earlier one. ``target`` is mutated.
    """
    _require_dict(target)
    for source in sources:
        _require_dict(source)
        for key, value in source.items():
            if isinstance(value, dict):
                existing = target.get(key)
                if not isinstance(existing, dict):
                    existing = target[key] = {}
                deep_merge(existing, value)
            else:
                target[key] = value
    return target


def pick(obj: dict, keys: Any) -> dict:
    """New dict with only ``keys`` (a key or a list of keys) that exist in ``obj``."""
    _require_dict(obj)
    return {key: obj[key] for key in _as_keys(keys) if key in obj}


def omit(obj: dict, keys: Any) -> dict:
    _require_dict(obj)
    dropped = _as_keys(keys)
    return {key: value for key, value in obj.items() if key not in dropped}


def get_path(obj: Any, path: str, default: Any = None) -> Any:
    """Read a nested value, returning ``default`` when any step is missing.

    Example:
        >>> get_path({"a": {"b": 1}}, "a.b")
        1
        >>> get_path({"a": {"b": 1}}, "a.c", "none")
        'none'
    """
    if not isinstance(obj, dict):
        return default

    current = obj
    for key in _split_path(path):
        if not isinstance(current, dict):
            return default
        current = current.get(key, _MISSING)
        if current is _MISSING:
            return default
    return current


def set_path(obj: dict, path: str, value: Any) -> dict:
    """Write a nested value, creating (or replacing non-dict) intermediates."""
    _require_dict(obj)
    *parents, leaf = _split_path(path)
    current = obj
    for key in parents:
        if not isinstance(current.get(key), dict):
            current[key] = {}
        current = current[key]
    current[leaf] = value
    return obj


def has_path(obj: Any, path: str) -> bool:
    if not isinstance(obj, dict):
        return False
    current = obj
    for key in _split_path(path):
        if not isinstance(current, dict) or key not in current:
            return False
        current = current[key]
    return True


def transform_keys(obj: dict, fn: Callable[[Any], Any]) -> dict:
    _require_dict(obj)
    return {fn(key): value for key, value in obj.items()}


def transform_values(obj: dict, fn: Callable[[Any, Any], Any]) -> dict:
    """Apply ``fn(value, key)`` to each value."""
    _require_dict(obj)
    return {key: fn(value, key) for key, value in obj.items()}


def invert(obj: dict) -> dict:
    """Swap keys and values. Later keys win when values repeat."""
    _require_dict(obj)
    try:
        return {value: key for key, value in obj.items()}
    except TypeError as e:
        raise InvalidInput(f"Cannot invert object with unhashable values: {e}") from e


def object_size(obj: Any) -> int:
    return len(obj) if isinstance(obj, dict) else 0


def is_empty(obj: Any) -> bool:
    """True for non-dicts and for empty dicts."""
    return not isinstance(obj, dict) or not obj


def from_pairs(pairs: Iterable[Any]) -> dict:
    if not isinstance(pairs, (list, tuple)):
        raise InvalidInput(f"Invalid array provided: {type(pairs).__name__!r}")
    result = {}
    for pair in pairs:
        if not isinstance(pair, (list, tuple)) or len(pair) != 2:
            raise InvalidInput(f"Expected a [key, value] pair, got {pair!r}")
        key, value = pair
        result[key] = value
    return result


def to_pairs(obj: dict) -> list[tuple[Any, Any]]:
    _require_dict(obj)
    return list(obj.items())


def map_values(obj: dict, fn: Callable[[Any, Any], Any]) -> dict:
    """Alias of ``transform_values``."""
    return transform_values(obj, fn)


def filter_object(obj: dict, predicate: Callable[[Any, Any], bool]) -> dict:
    """Keep entries where ``predicate(value, key)`` is truthy."""
    _require_dict(obj)
    return {key: value for key, value in obj.items() if predicate(value, key)}


def _same(left: Any, right: Any) -> bool:
    # Containers compare by identity, like references
    if isinstance(left, (dict, list, set)) or isinstance(right, (dict, list, set)):
        return left is right
    return left == right


def is_equal(left: Any, right: Any) -> bool:
    """Shallow equality: same keys and ``_same`` values one level deep."""
    if left is right:
        return True
    if not isinstance(left, dict) or not isinstance(right, dict):
        return _same(left, right)
    if left.keys() != right.keys():
        return False
    return all(_same(left[key], right[key]) for key in left)
