from __future__ import annotations

from typing import Any, Callable, Mapping, Protocol, Sequence


class RowStore(Protocol):
    """Row-oriented CRUD interface of the remote store (one table per entity)."""

    def select_page(
        self,
        table: str,
        *,
        order_by: str,
        ascending: bool,
        offset: int,
        limit: int,
    ) -> Sequence[Mapping[str, Any]]:
        raise NotImplementedError

    def upsert(self, table: str, rows: Sequence[Mapping[str, Any]]) -> None:
        raise NotImplementedError

    def delete(self, table: str, ids: Sequence[str]) -> None:
        raise NotImplementedError


class ChangeFeed(Protocol):
    """Delivers ChangeEvent notifications; ``subscribe`` returns an unsubscribe callable."""

    def subscribe(self, callback: Callable[..., Any]) -> Callable[[], None]:
        raise NotImplementedError
