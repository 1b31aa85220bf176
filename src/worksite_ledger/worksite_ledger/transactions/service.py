from __future__ import annotations

import logging
import re
from dataclasses import replace
from datetime import date

from ..common.formatting import to_money
from ..common.ids import new_id
from ..common.validators import require_non_empty, require_positive
from ..core.exceptions import ValidationError
from ..state.snapshot import Snapshot
from ..state.store import SnapshotStore
from .model import Transaction

logger = logging.getLogger(__name__)

_TRAILING_WORKER = re.compile(r"\(([^)]+)\)\s*$")


def assign_sites_from_worklogs(snapshot: Snapshot) -> tuple[Snapshot, int]:
    """Give site-less expenses the site their worker logged work at that day.

    The worker is read from a trailing ``(name)`` in the description; the
    first work log for (date, worker) wins.
    """
    site_by_day_worker: dict[tuple, str] = {}
    for log in snapshot.work_logs:
        site_by_day_worker.setdefault((log.date, log.worker_id), log.site_id)
    worker_by_name = {}
    for w in snapshot.workers:
        worker_by_name.setdefault(w.name, w)

    updated = 0
    txs = []
    for tx in snapshot.transactions:
        if not tx.site_id:
            m = _TRAILING_WORKER.search(tx.description or "")
            worker = worker_by_name.get(m.group(1).strip()) if m else None
            site_id = site_by_day_worker.get((tx.date, worker.id)) if worker else None
            if site_id:
                tx = replace(tx, site_id=site_id)
                updated += 1
        txs.append(tx)
    if not updated:
        return snapshot, 0
    return snapshot.with_collection("transactions", txs), updated


class TransactionService:
    def __init__(self, store: SnapshotStore):
        self._store = store

    def list_transactions(self, *, search: str = "") -> list[Transaction]:
        """Newest first; optional substring search on description/category."""
        q = (search or "").strip().lower()
        items = sorted(self._store.snapshot.transactions, key=lambda t: t.date, reverse=True)
        if q:
            items = [t for t in items if q in t.description.lower() or q in t.category.lower()]
        return items

    def get(self, tx_id: str) -> Transaction:
        tx = self._store.snapshot.find("transactions", tx_id)
        if not tx:
            raise ValidationError("지출 내역을 찾을 수 없습니다.")
        return tx

    def add_transaction(
        self,
        *,
        day: date,
        category: str,
        amount,
        description: str = "",
        site_id: str = "",
        worker_id: str = "",
    ) -> Transaction:
        if not (category or "").strip() or not amount:
            raise ValidationError("항목(카테고리)과 금액을 입력해주세요.")
        category = require_non_empty(category, "항목")
        tx = Transaction(
            id=new_id(),
            date=day,
            category=category,
            amount=int(require_positive(to_money(amount, 0), "금액")),
            description=(description or "").strip() or category,
            site_id=site_id or "",
            worker_id=worker_id or "",
        )
        self._store.submit(lambda prev: prev.put("transactions", tx))
        return tx

    def update_transaction(self, tx_id: str, **changes) -> Transaction:
        tx = self.get(tx_id)
        if "amount" in changes:
            changes["amount"] = int(require_positive(to_money(changes["amount"], 0), "금액"))
        if "category" in changes:
            changes["category"] = require_non_empty(changes["category"], "항목")
        updated = replace(tx, **changes)
        self._store.submit(lambda prev: prev.put("transactions", updated))
        return updated

    def delete_transaction(self, tx_id: str) -> None:
        self.get(tx_id)
        self._store.submit(lambda prev: prev.remove("transactions", tx_id))

    def assign_sites(self) -> int:
        _, count = assign_sites_from_worklogs(self._store.snapshot)
        if count:
            self._store.submit(lambda prev: assign_sites_from_worklogs(prev)[0])
        logger.info("Assigned sites to %s expenses from work logs", count)
        return count
