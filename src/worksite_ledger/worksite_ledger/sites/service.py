from __future__ import annotations

from dataclasses import replace
from typing import Optional

from ..common.formatting import to_money
from ..common.ids import new_id
from ..common.validators import require_choice, require_non_empty
from ..core.enums import SiteStatus
from ..core.exceptions import ValidationError
from ..state.store import SnapshotStore
from .model import Site


class SiteService:
    def __init__(self, store: SnapshotStore):
        self._store = store

    def list_sites(self, *, search: str = "", status: Optional[str] = None) -> list[Site]:
        """Filter by name/company substring (case-insensitive) and status ('all' = no filter)."""
        q = (search or "").strip().lower()
        wanted = None if not status or status == "all" else require_choice(status, SiteStatus, "상태")
        out = []
        for s in self._store.snapshot.sites:
            if q and q not in s.name.lower() and q not in (s.company_name or "").lower():
                continue
            if wanted and s.status != wanted:
                continue
            out.append(s)
        return out

    def get(self, site_id: str) -> Site:
        site = self._store.snapshot.find("sites", site_id)
        if not site:
            raise ValidationError("현장을 찾을 수 없습니다.")
        return site

    def add_site(
        self,
        *,
        name: str,
        budget=0,
        company_name: str = "",
        status: str = SiteStatus.SCHEDULED.value,
        site_id: Optional[str] = None,
    ) -> Site:
        site = Site(
            id=site_id or new_id(),
            name=require_non_empty(name, "현장명"),
            budget=to_money(budget, 0),
            company_name=(company_name or "").strip(),
            status=require_choice(status, SiteStatus, "상태"),
        )
        self._store.submit(lambda prev: prev.put("sites", site))
        return site

    def update_site(self, site_id: str, **changes) -> Site:
        site = self.get(site_id)
        if "name" in changes:
            changes["name"] = require_non_empty(changes["name"], "현장명")
        if "budget" in changes:
            changes["budget"] = to_money(changes["budget"], 0)
        if "status" in changes:
            changes["status"] = require_choice(changes["status"], SiteStatus, "상태")
        if "company_name" in changes:
            changes["company_name"] = (changes["company_name"] or "").strip()
        updated = replace(site, **changes)
        self._store.submit(lambda prev: prev.put("sites", updated))
        return updated

    def delete_site(self, site_id: str) -> None:
        self.get(site_id)
        self._store.submit(lambda prev: prev.remove("sites", site_id))
