"""Immutable, canonically sorted set of panel identifiers.

// [LAW:one-source-of-truth] Canonical order is decided once, at construction.
// [LAW:single-enforcer] _members() is the only place input shapes are coerced.

Pure data, no project imports. Safe for `from` imports.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Iterator


def _sort_key(value: object) -> tuple:
    """Total order across mixed identifier types.

    Numbers first, then strings, then anything else by (type name, repr).
    """
    if isinstance(value, (int, float)):
        return (0, "", value)
    if isinstance(value, str):
        return (1, "", value)
    return (2, type(value).__name__, repr(value))


def _hashable(value: object) -> bool:
    # A tuple holding a list is an instance of Hashable, yet hash() raises.
    try:
        hash(value)
    except TypeError:
        return False
    return True


def _members(source: object) -> tuple:
    """Coerce any input into a sorted, duplicate-free tuple.

    Construction rule:
      None            → ()
      str / bytes     → (source,)   never iterated into characters
      IdentifierSet   → its members
      other iterable  → its hashable members
      anything else   → (source,)
    """
    if source is None:
        return ()
    if isinstance(source, IdentifierSet):
        return source._items
    if isinstance(source, (str, bytes)):
        return (source,)
    if isinstance(source, Iterable):
        items = [x for x in source if _hashable(x)]
    elif _hashable(source):
        items = [source]
    else:
        return ()
    return tuple(sorted(set(items), key=_sort_key))


class IdentifierSet:
    """Sorted, duplicate-free, immutable identifier collection.

    Every operation that looks like a mutation returns a new instance.
    Arguments to binary operations go through the same construction rule
    as the constructor, so a bare scalar is always a singleton.
    """

    __slots__ = ("_items",)

    def __init__(self, source: object = None) -> None:
        self._items: tuple = _members(source)

    @classmethod
    def of(cls, *ids: Hashable) -> IdentifierSet:
        return cls(ids)

    @classmethod
    def coerce(cls, value: object) -> IdentifierSet:
        """Return value unchanged if it is already an IdentifierSet."""
        if isinstance(value, IdentifierSet):
            return value
        return cls(value)

    # ─── Queries ─────────────────────────────────────────────────────────

    def has(self, value: object) -> bool:
        return _hashable(value) and value in self._items

    def size(self) -> int:
        return len(self._items)

    def to_list(self) -> list:
        """Members in canonical order."""
        return list(self._items)

    # ─── Set algebra ─────────────────────────────────────────────────────

    def first(self) -> IdentifierSet:
        """New set holding only the smallest member (empty if self is empty)."""
        return IdentifierSet(self._items[:1])

    def intersect(self, other: object) -> IdentifierSet:
        """Members of `other` that are also members of self."""
        return IdentifierSet([x for x in _members(other) if x in self._items])

    def symmetric_difference(self, other: object = None) -> IdentifierSet:
        """XOR. With no (or an empty) argument, returns a structural clone."""
        theirs = _members(other)
        if not theirs:
            return IdentifierSet(self)
        return IdentifierSet(
            [x for x in self._items if x not in theirs]
            + [x for x in theirs if x not in self._items]
        )

    def equals(self, other: object) -> bool:
        """Order-independent equality against anything the constructor accepts."""
        return self.symmetric_difference(other).size() == 0

    # ─── Python protocol ─────────────────────────────────────────────────

    def __contains__(self, value: object) -> bool:
        return self.has(value)

    def __iter__(self) -> Iterator:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IdentifierSet):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash(self._items)

    def __repr__(self) -> str:
        return f"IdentifierSet({list(self._items)!r})"
