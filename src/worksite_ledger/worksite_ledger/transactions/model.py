from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping

from ..common.datetime_utils import as_date
from ..common.formatting import to_money


@dataclass(frozen=True)
class Transaction:
    """경비 지출 (엔티티).

    ``worker_id`` is accepted on read but never written back to the remote table.
    """

    id: str
    date: date
    category: str
    amount: int
    description: str = ""
    site_id: str = ""
    worker_id: str = ""

    @classmethod
    def from_row(cls, r: Mapping[str, Any]) -> "Transaction":
        return cls(
            id=str(r["id"]),
            date=as_date(r["date"]),
            category=r.get("category") or "",
            amount=to_money(r.get("amount"), 0),
            description=r.get("description") or "",
            site_id=str(r.get("site_id") or ""),
            worker_id=str(r.get("worker_id") or ""),
        )

    def to_row(self) -> dict:
        return {
            "id": self.id,
            "date": self.date,
            "site_id": self.site_id or None,
            "category": self.category,
            "amount": self.amount,
            "description": self.description or None,
        }
