from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Optional

from ..common.formatting import to_money
from ..common.ids import new_id
from ..common.validators import require_choice, require_non_empty
from ..core.enums import ChecklistStatus, ChecklistType
from ..core.exceptions import ValidationError
from ..state.store import SnapshotStore
from .model import ChecklistItem


class ChecklistService:
    def __init__(self, store: SnapshotStore):
        self._store = store

    def list_items(self, *, item_type: Optional[str] = None) -> list[ChecklistItem]:
        """Open items first, then newest date first."""
        wanted = None if not item_type or item_type == "all" else require_choice(item_type, ChecklistType, "유형")
        items = [c for c in self._store.snapshot.checklists if not wanted or c.type == wanted]
        items.sort(key=lambda c: c.date, reverse=True)
        items.sort(key=lambda c: c.status == ChecklistStatus.COMPLETED)
        return items

    def get(self, item_id: str) -> ChecklistItem:
        item = self._store.snapshot.find("checklists", item_id)
        if not item:
            raise ValidationError("항목을 찾을 수 없습니다.")
        return item

    def add_item(
        self,
        *,
        item_type: str,
        day: date,
        title: str,
        amount=0,
        memo: str = "",
    ) -> ChecklistItem:
        item = ChecklistItem(
            id=new_id(),
            type=require_choice(item_type, ChecklistType, "유형"),
            date=day,
            title=require_non_empty(title, "제목"),
            amount=to_money(amount, 0),
            status=ChecklistStatus.PENDING,
            memo=(memo or "").strip(),
        )
        self._store.submit(lambda prev: prev.put("checklists", item))
        return item

    def set_status(self, item_id: str, status: str) -> ChecklistItem:
        updated = replace(self.get(item_id), status=require_choice(status, ChecklistStatus, "상태"))
        self._store.submit(lambda prev: prev.put("checklists", updated))
        return updated

    def toggle(self, item_id: str) -> ChecklistItem:
        item = self.get(item_id)
        status = ChecklistStatus.PENDING if item.status == ChecklistStatus.COMPLETED else ChecklistStatus.COMPLETED
        return self.set_status(item_id, status.value)

    def delete_item(self, item_id: str) -> None:
        self.get(item_id)
        self._store.submit(lambda prev: prev.remove("checklists", item_id))
