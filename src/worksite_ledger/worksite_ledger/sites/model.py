from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..common.formatting import to_money
from ..core.enums import SiteStatus


@dataclass(frozen=True)
class Site:
    """현장 (엔티티)."""

    id: str
    name: str
    budget: int = 0
    company_name: str = ""
    status: SiteStatus = SiteStatus.ACTIVE

    @classmethod
    def from_row(cls, r: Mapping[str, Any]) -> "Site":
        try:
            status = SiteStatus(r.get("status") or SiteStatus.ACTIVE.value)
        except ValueError:
            status = SiteStatus.ACTIVE
        return cls(
            id=str(r["id"]),
            name=r.get("name") or "",
            budget=to_money(r.get("budget"), 0),
            company_name=r.get("company_name") or "",
            status=status,
        )

    def to_row(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "budget": self.budget,
            "company_name": self.company_name or None,
            "status": self.status.value,
        }
