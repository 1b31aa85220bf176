from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Mapping

from ..core.constants import REMOTE_PAGE_SIZE
from ..core.exceptions import RemoteStoreError
from ..state.snapshot import TABLES, Snapshot, TableSpec
from .repository import RowStore

logger = logging.getLogger(__name__)


def fetch_all(
    remote: RowStore,
    table: str,
    *,
    order_by: str,
    ascending: bool,
    page_size: int = REMOTE_PAGE_SIZE,
) -> list[Mapping[str, Any]]:
    """Read every row of ``table`` page by page until a short page comes back."""
    rows: list[Mapping[str, Any]] = []
    offset = 0
    while True:
        page = list(remote.select_page(table, order_by=order_by, ascending=ascending, offset=offset, limit=page_size))
        if not page:
            break
        rows.extend(page)
        if len(page) < page_size:
            break
        offset += page_size
    return rows


def _load_table(remote: RowStore, spec: TableSpec, page_size: int) -> tuple:
    rows = fetch_all(remote, spec.table, order_by=spec.order_by, ascending=spec.ascending, page_size=page_size)
    try:
        return tuple(spec.from_row(r) for r in rows)
    except (KeyError, ValueError) as e:
        raise RemoteStoreError(f"Malformed row in {spec.table}: {e}", table=spec.table) from e


def load_snapshot(remote: RowStore, *, page_size: int = REMOTE_PAGE_SIZE) -> Snapshot:
    """Bulk-load all five tables concurrently into a fresh Snapshot."""
    with ThreadPoolExecutor(max_workers=len(TABLES), thread_name_prefix="load") as pool:
        futures = {spec.attr: pool.submit(_load_table, remote, spec, page_size) for spec in TABLES}
        collections = {attr: f.result() for attr, f in futures.items()}

    snapshot = Snapshot(**collections)
    logger.info(
        "Loaded snapshot: %s",
        ", ".join(f"{attr}={len(items)}" for attr, items in collections.items()),
    )
    return snapshot
