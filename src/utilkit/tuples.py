"""Mutable pair and triple value types.

``MutablePair`` and ``MutableTriple`` behave like ``tuple`` with named, writable
fields: equality is structural, ``str()`` renders ``(first, second)``, and they
unpack in declaration order. Being mutable, they are not hashable.

Example:
    >>> p = to("answer", 42)
    >>> p.second = 43
    >>> str(p)
    '(answer, 43)'
    >>> dict_of_pairs(to("a", 1), to("b", 2))
    {'a': 1, 'b': 2}
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Generic, Iterator, List, Optional, TypeVar, Union

from utilkit.core.exceptions import HeterogeneousTupleError
from utilkit.models.settings import get_settings

A = TypeVar("A")
B = TypeVar("B")
C = TypeVar("C")
T = TypeVar("T")


def _check_homogeneous(kind: str, values: List[Any], strict: Optional[bool]) -> None:
    if strict is None:
        strict = get_settings().strict_homogeneous
    if not strict:
        return
    first_type = type(values[0])
    if any(type(v) is not first_type for v in values[1:]):
        raise HeterogeneousTupleError(kind=kind, field_types=[type(v) for v in values])


class _FieldsMixin:
    """Shared behaviour for the fixed-arity tuple types (unpacking, copying, no field removal)."""

    __slots__ = ()

    def _values(self) -> List[Any]:
        return [getattr(self, name) for name in self.__slots__]

    def __iter__(self) -> Iterator[Any]:
        return iter(self._values())

    def __len__(self) -> int:
        return len(self.__slots__)

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} fields cannot be removed, only reassigned")

    def __str__(self) -> str:
        return "(" + ", ".join(str(v) for v in self._values()) + ")"

    def __getstate__(self):
        return {name: getattr(self, name) for name in self.__slots__}

    def __setstate__(self, state) -> None:
        for name, value in state.items():
            setattr(self, name, value)

    def copy(self):
        """Return a new instance holding the same field values (shallow)."""
        return type(self)(*self._values())

    def copy_to(self, target) -> None:
        """Overwrite every field of ``target`` with this instance's values."""
        if type(target) is not type(self):
            raise TypeError(f"Cannot copy {type(self).__name__} onto {type(target).__name__}")
        for name in self.__slots__:
            setattr(target, name, getattr(self, name))


@dataclass(slots=True)
class MutablePair(_FieldsMixin, Generic[A, B]):
    """A pair of values with no meaning attached; two pairs are equal if both components are equal."""

    first: A
    second: B

    def to_list(self: "MutablePair[T, T]", *, strict: Optional[bool] = None) -> List[T]:
        """
        Return ``[first, second]``.

        Both fields must share one runtime type. With ``strict`` (default taken from
        ``UtilkitSettings.strict_homogeneous``) a mismatch raises HeterogeneousTupleError;
        otherwise the caller owns that precondition and no check or coercion happens.
        Optional or subclass-typed fields (e.g. ``(None, 5)`` or ``(1, True)``) need ``strict=False``.
        """
        values = [self.first, self.second]
        _check_homogeneous("MutablePair", values, strict)
        return values


@dataclass(slots=True)
class MutableTriple(_FieldsMixin, Generic[A, B, C]):
    """A triad of values; two triples are equal if all three components are equal."""

    first: A
    second: B
    third: C

    def to_list(self: "MutableTriple[T, T, T]", *, strict: Optional[bool] = None) -> List[T]:
        """Return ``[first, second, third]``; same homogeneity rules as ``MutablePair.to_list``."""
        values = [self.first, self.second, self.third]
        _check_homogeneous("MutableTriple", values, strict)
        return values


def pair(first: A, second: B) -> MutablePair[A, B]:
    return MutablePair(first, second)


def to(left: A, right: B) -> MutablePair[A, B]:
    """Pair ``left`` with ``right``; reads well when building mappings from many pairs."""
    return MutablePair(left, right)


def triple(first: A, second: B, third: C) -> MutableTriple[A, B, C]:
    return MutableTriple(first, second, third)


def to_list(
    tuplet: Union[MutablePair[T, T], MutableTriple[T, T, T]],
    *,
    strict: Optional[bool] = None,
) -> List[T]:
    return tuplet.to_list(strict=strict)


def dict_of_pairs(*pairs: MutablePair[A, B]) -> Dict[A, B]:
    """Build a dict from pairs; a repeated key keeps the last value."""
    return {p.first: p.second for p in pairs}
