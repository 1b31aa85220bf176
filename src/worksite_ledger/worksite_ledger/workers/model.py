from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..common.formatting import to_money
from ..core.constants import DEFAULT_DAILY_WAGE


@dataclass(frozen=True)
class Worker:
    """작업자 (엔티티). ``daily`` is the daily wage in KRW."""

    id: str
    name: str
    daily: int = DEFAULT_DAILY_WAGE

    @classmethod
    def from_row(cls, r: Mapping[str, Any]) -> "Worker":
        return cls(
            id=str(r["id"]),
            name=r.get("name") or "",
            daily=to_money(r.get("daily"), 0) or DEFAULT_DAILY_WAGE,
        )

    def to_row(self) -> dict:
        return {"id": self.id, "name": self.name, "daily": self.daily}
