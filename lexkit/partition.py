"""Character-set and equivalence-set partitioning.

Both set types support a destructive ``intersect``: the common part is
removed from both operands and returned as a new set, which is the step
used to split overlapping inputs into disjoint classes.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

Range = tuple[int, int]


def _normalise(ranges: Iterable[Range]) -> list[Range]:
    result: list[Range] = []
    for first, last in sorted(ranges):
        if result and first <= result[-1][1] + 1:
            prev_first, prev_last = result[-1]
            result[-1] = (prev_first, max(prev_last, last))
        else:
            result.append((first, last))
    return result


def _overlap(lhs: list[Range], rhs: list[Range]) -> list[Range]:
    result: list[Range] = []
    left, right = iter(lhs), iter(rhs)
    a, b = next(left, None), next(right, None)
    while a is not None and b is not None:
        low, high = max(a[0], b[0]), min(a[1], b[1])
        if low <= high:
            result.append((low, high))
        if a[1] < b[1]:
            a = next(left, None)
        else:
            b = next(right, None)
    return _normalise(result)


def _subtract(ranges: list[Range], removed: list[Range]) -> list[Range]:
    result: list[Range] = []
    for first, last in ranges:
        start = first
        for rem_first, rem_last in removed:
            if rem_last < start or rem_first > last:
                continue
            if rem_first > start:
                result.append((start, rem_first - 1))
            start = rem_last + 1
            if start > last:
                break
        if start <= last:
            result.append((start, last))
    return result


class CharRanges:
    """An ordered set of characters held as disjoint inclusive ranges."""

    __slots__ = ("_ranges",)

    def __init__(self, ranges: Iterable[Range] = ()) -> None:
        self._ranges: list[Range] = []
        for first, last in ranges:
            self.add(first, last)

    def add(self, first: int, last: int) -> None:
        """Add the inclusive range first..last."""
        if first > last:
            raise ValueError(f"range start {first} exceeds end {last}")
        self._ranges = _normalise([*self._ranges, (first, last)])

    def merge(self, other: CharRanges) -> None:
        """Add every character of *other* to this set."""
        self._ranges = _normalise([*self._ranges, *other._ranges])

    def intersect(self, other: CharRanges) -> CharRanges:
        """Remove the common characters from both sets and return them."""
        common = _overlap(self._ranges, other._ranges)
        if common:
            self._ranges = _subtract(self._ranges, common)
            other._ranges = _subtract(other._ranges, common)
        result = CharRanges()
        result._ranges = common
        return result

    def __iter__(self) -> Iterator[Range]:
        return iter(self._ranges)

    def __contains__(self, ch: object) -> bool:
        return isinstance(ch, int) and any(
            first <= ch <= last for first, last in self._ranges
        )

    def __bool__(self) -> bool:
        return bool(self._ranges)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CharRanges):
            return NotImplemented
        return self._ranges == other._ranges

    def __repr__(self) -> str:
        return f"CharRanges({self._ranges!r})"


@dataclass
class Charset:
    """A set of characters tagged with the rule indexes that use them."""

    token: CharRanges = field(default_factory=CharRanges)
    indexes: set[int] = field(default_factory=set)

    @property
    def empty(self) -> bool:
        return not self.token and not self.indexes

    def intersect(self, other: Charset) -> Charset:
        """Split off the characters shared with *other* as a new charset."""
        overlap = Charset(self.token.intersect(other.token))
        if overlap.token:
            overlap.indexes = self.indexes | other.indexes
            if not self.token:
                self.indexes.clear()
            if not other.token:
                other.indexes.clear()
        return overlap


@dataclass
class Equivset:
    """A set of equivalence-class indexes with its follow positions.

    Follow-position nodes are compared by identity, never by value.
    """

    indexes: Iterable[int] = field(default_factory=list)
    id: int = 0
    greedy: bool = True
    followpos: list[Any] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.indexes = sorted(set(self.indexes))
        self.followpos = list(self.followpos)

    @property
    def empty(self) -> bool:
        return not self.indexes and not self.followpos

    def intersect(self, other: Equivset) -> Equivset:
        """Split off the indexes shared with *other* as a new set.

        The left operand's id and greediness take priority, so rule
        order is respected.
        """
        overlap = Equivset()
        other_indexes = set(other.indexes)
        common = [index for index in self.indexes if index in other_indexes]
        if not common:
            return overlap

        removed = set(common)
        self.indexes = [i for i in self.indexes if i not in removed]
        other.indexes = [i for i in other.indexes if i not in removed]

        overlap.indexes = common
        overlap.id = self.id
        overlap.greedy = self.greedy
        overlap.followpos = list(self.followpos)
        for node in other.followpos:
            if not any(node is existing for existing in overlap.followpos):
                overlap.followpos.append(node)

        if not self.indexes:
            self.followpos.clear()
        if not other.indexes:
            other.followpos.clear()
        return overlap