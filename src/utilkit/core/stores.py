from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IdStore(Protocol):
    """Objects persisted by a stable integer id (e.g. enum members stored in a database)."""

    def to_id(self) -> int:
        ...


@runtime_checkable
class SearchStore(Protocol):
    """Objects indexed for search by a stable string key."""

    def to_search_id(self) -> str:
        ...
