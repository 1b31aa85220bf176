from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping

from ..common.datetime_utils import as_date
from ..common.formatting import to_num


@dataclass(frozen=True)
class WorkLog:
    """작업일지 (엔티티).

    ``site_id``/``worker_id`` are soft references; a dangling id is allowed and
    rendered as deleted/unregistered by the report layer.
    """

    id: str
    date: date
    site_id: str
    worker_id: str
    md: float = 1.0
    note: str = ""

    @classmethod
    def from_row(cls, r: Mapping[str, Any]) -> "WorkLog":
        return cls(
            id=str(r["id"]),
            date=as_date(r["date"]),
            site_id=str(r.get("site_id") or ""),
            worker_id=str(r.get("worker_id") or ""),
            md=float(to_num(r.get("md"), 0)) or 1.0,
            note=r.get("note") or "",
        )

    def to_row(self) -> dict:
        return {
            "id": self.id,
            "date": self.date,
            "site_id": self.site_id,
            "worker_id": self.worker_id,
            "md": self.md,
            "note": self.note or None,
        }

    def dedup_key(self) -> tuple:
        return (self.date, self.worker_id, self.site_id, self.md, self.note or "")
