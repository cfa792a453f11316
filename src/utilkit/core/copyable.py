from __future__ import annotations

from typing import Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class Copyable(Protocol[T]):
    """Objects that can hand out a copy of themselves or copy their state onto another instance."""

    def copy(self) -> T:
        ...

    def copy_to(self, target: T) -> None:
        """Set ``target`` to be a copy of this object."""
        ...
