from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping

from ..common.datetime_utils import as_date
from ..common.formatting import to_money
from ..core.enums import ChecklistStatus, ChecklistType


@dataclass(frozen=True)
class ChecklistItem:
    """미수금/미지급/업무 체크리스트 항목."""

    id: str
    type: ChecklistType
    date: date
    title: str
    amount: int = 0
    status: ChecklistStatus = ChecklistStatus.PENDING
    memo: str = ""

    @classmethod
    def from_row(cls, r: Mapping[str, Any]) -> "ChecklistItem":
        try:
            status = ChecklistStatus(r.get("status") or ChecklistStatus.PENDING.value)
        except ValueError:
            status = ChecklistStatus.PENDING
        return cls(
            id=str(r["id"]),
            type=ChecklistType(r.get("type") or ChecklistType.TASK.value),
            date=as_date(r["date"]),
            title=r.get("title") or "",
            amount=to_money(r.get("amount"), 0),
            status=status,
            memo=r.get("memo") or "",
        )

    def to_row(self) -> dict:
        return {
            "id": self.id,
            "type": self.type.value,
            "date": self.date,
            "title": self.title,
            "amount": self.amount,
            "status": self.status.value,
            "memo": self.memo or None,
        }
