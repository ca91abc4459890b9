"""List transforms: chunking, de-duplication, set operations and sampling.

Every function returns a new list and leaves its input alone, except
``shuffle(..., in_place=True)``. Items do not have to be hashable;
unhashable items fall back to equality scans.
"""

import math
import random
from collections.abc import Callable, Hashable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Literal

from friendlyfy.errors import InvalidInput

Key = str | Callable[[Any], Any]


def _require_list(value: Any, what: str = "array") -> None:
    if not isinstance(value, (list, tuple)):
        raise InvalidInput(f"Invalid {what} provided: {type(value).__name__!r}")


def _require_size(value: Any, name: str, minimum: int = 0) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise InvalidInput(f"Invalid {name} provided: {value!r}")


def _key_of(item: Any, key: Key) -> Any:
    if callable(key):
        return key(item)
    if isinstance(item, dict):
        return item.get(key)
    return getattr(item, key, None)


class _Seen:
    """Membership set that tolerates unhashable members."""

    def __init__(self, items: Iterable[Any] = ()):
        self._hashed: set[Any] = set()
        self._other: list[Any] = []
        for item in items:
            self.add(item)

    def add(self, item: Any) -> None:
        if isinstance(item, Hashable):
            try:
                self._hashed.add(item)
                return
            except TypeError:
                pass  # e.g. a tuple holding a list
        self._other.append(item)

    def __contains__(self, item: Any) -> bool:
        if isinstance(item, Hashable):
            try:
                if item in self._hashed:
                    return True
            except TypeError:
                pass
        return any(item == other for other in self._other)


def chunk(items: Sequence[Any], size: int) -> list[list[Any]]:
    """Split into consecutive lists of ``size`` items; the last may be shorter.

    Example:
        >>> chunk([1, 2, 3, 4, 5], 2)
        [[1, 2], [3, 4], [5]]
    """
    _require_list(items)
    _require_size(size, "size", minimum=1)
    return [list(items[i : i + size]) for i in range(0, len(items), size)]


def unique(items: Sequence[Any], key: Callable[[Any], Any] | None = None) -> list[Any]:
    """Drop repeated items (or items with a repeated ``key``), keeping first seen."""
    _require_list(items)
    seen = _Seen()
    result = []
    for item in items:
        marker = key(item) if key is not None else item
        if marker in seen:
            continue
        seen.add(marker)
        result.append(item)
    return result


def shuffle(items: list[Any], in_place: bool = False) -> list[Any]:
    """Fisher-Yates shuffle. Returns a shuffled copy unless ``in_place``."""
    _require_list(items)
    if in_place and not isinstance(items, list):
        raise InvalidInput("Only lists can be shuffled in place")
    result = items if in_place else list(items)
    for i in range(len(result) - 1, 0, -1):
        j = random.randint(0, i)
        result[i], result[j] = result[j], result[i]
    return result


def random_item(items: Sequence[Any], count: int = 1) -> Any:
    """Pick one random item, or a list of up to ``count`` distinct positions."""
    _require_list(items)
    if not items:
        raise InvalidInput("Cannot pick from empty array")
    _require_size(count, "count", minimum=1)
    if count == 1:
        return random.choice(items)
    return shuffle(items)[: min(count, len(items))]


def group_by(items: Sequence[Any], key: Key) -> dict[Any, list[Any]]:
    """Group items by a dict key, attribute name or callable."""
    _require_list(items)
    groups: dict[Any, list[Any]] = {}
    for item in items:
        groups.setdefault(_key_of(item, key), []).append(item)
    return groups


def flatten(items: Sequence[Any], depth: float = math.inf) -> list[Any]:
    """Flatten nested lists and tuples up to ``depth`` levels."""
    _require_list(items)
    is_int = isinstance(depth, int) and not isinstance(depth, bool)
    if not (depth == math.inf or is_int):
        raise InvalidInput(f"Invalid depth provided: {depth!r}")

    result: list[Any] = []
    for item in items:
        if isinstance(item, (list, tuple)) and depth >= 1:
            result.extend(flatten(item, depth - 1))
        else:
            result.append(item)
    return result


def intersection(first_items: Sequence[Any], second_items: Sequence[Any]) -> list[Any]:
    """Items of the first list that also appear in the second, in first-list order."""
    _require_list(first_items, "arrays")
    _require_list(second_items, "arrays")
    other = _Seen(second_items)
    return [item for item in first_items if item in other]


def difference(first_items: Sequence[Any], second_items: Sequence[Any]) -> list[Any]:
    _require_list(first_items, "arrays")
    _require_list(second_items, "arrays")
    other = _Seen(second_items)
    return [item for item in first_items if item not in other]


def union(first_items: Sequence[Any], second_items: Sequence[Any]) -> list[Any]:
    _require_list(first_items, "arrays")
    _require_list(second_items, "arrays")
    return unique([*first_items, *second_items])


def sort_by(
    items: Sequence[Any], key: Key, order: Literal["asc", "desc"] = "asc"
) -> list[Any]:
    """Stable sort by a dict key, attribute name or callable."""
    _require_list(items)
    if order not in ("asc", "desc"):
        raise InvalidInput(f"Invalid order '{order}'. Valid orders: asc, desc")
    return sorted(items, key=lambda item: _key_of(item, key), reverse=order == "desc")


@dataclass(frozen=True)
class ArrayStats:
    """Summary of the numeric items in a list.

    ``length`` counts every item; the other fields only consider numbers.
    """

    length: int
    sum: float
    average: float
    min: float | None
    max: float | None
    median: float | None


def array_stats(items: Sequence[Any]) -> ArrayStats:
    _require_list(items)
    numbers = sorted(
        item
        for item in items
        if isinstance(item, (int, float)) and not isinstance(item, bool)
    )
    if not numbers:
        return ArrayStats(len(items), 0, 0, None, None, None)

    total = sum(numbers)
    middle = len(numbers) // 2
    if len(numbers) % 2 == 0:
        median = (numbers[middle - 1] + numbers[middle]) / 2
    else:
        median = numbers[middle]

    return ArrayStats(
        length=len(items),
        sum=total,
        average=total / len(numbers),
        min=numbers[0],
        max=numbers[-1],
        median=median,
    )


def compact(items: Sequence[Any]) -> list[Any]:
    """Drop falsy items (None, 0, "", False, empty containers)."""
    _require_list(items)
    return [item for item in items if item]


def last(items: Sequence[Any], n: int = 1) -> list[Any]:
    _require_list(items)
    _require_size(n, "number")
    if n == 0:
        return []
    return list(items[-n:])


def first(items: Sequence[Any], n: int = 1) -> list[Any]:
    _require_list(items)
    _require_size(n, "number")
    return list(items[:n])


def sample(items: Sequence[Any], size: int) -> list[Any]:
    """Up to ``size`` items taken from distinct random positions."""
    _require_list(items)
    _require_size(size, "size")
    return shuffle(items)[: min(size, len(items))]


def zip_lists(*lists: Sequence[Any]) -> list[list[Any]]:
    """Zip to the longest input, padding missing positions with None.

    Example:
        >>> zip_lists([1, 2], ["a"])
        [[1, 'a'], [2, None]]
    """
    for items in lists:
        _require_list(items, "arrays")
    if not lists:
        return []
    longest = max(len(items) for items in lists)
    return [
        [items[i] if i < len(items) else None for items in lists]
        for i in range(longest)
    ]


def unzip_lists(zipped: Sequence[Sequence[Any]]) -> list[list[Any]]:
    """Inverse of ``zip_lists``."""
    _require_list(zipped)
    return zip_lists(*zipped)
