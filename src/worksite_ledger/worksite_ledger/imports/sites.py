from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Sequence

from ..common.formatting import normalize_text, to_money
from ..common.ids import new_id
from ..common.matching import match_name
from ..core.enums import SiteStatus
from ..core.exceptions import ImportFormatError
from ..sites.model import Site
from ..state.snapshot import Snapshot
from .columns import SITE_COLUMNS, map_columns
from .readers import Row, headers_of


@dataclass(frozen=True)
class SiteImportPlan:
    new_sites: tuple[Site, ...] = ()
    updated_sites: tuple[Site, ...] = ()
    skipped: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.new_sites and not self.updated_sites

    def apply(self, prev: Snapshot) -> Snapshot:
        nxt = prev
        for site in self.updated_sites + self.new_sites:
            nxt = nxt.put("sites", site)
        return nxt


def plan_site_import(snapshot: Snapshot, rows: Sequence[Row]) -> SiteImportPlan:
    """Existing sites (matched by name) get budget/company updates, unknown names become new active sites."""
    if not rows:
        raise ImportFormatError("데이터가 없습니다.")
    headers = headers_of(list(rows))
    cols = map_columns(headers, SITE_COLUMNS)
    if not cols["name"]:
        raise ImportFormatError(
            f"현장명 컬럼을 찾을 수 없습니다. (감지된 헤더: {', '.join(headers)})",
            headers=headers,
        )

    known: list[Site] = list(snapshot.sites)
    changed: dict[str, Site] = {}
    created: list[Site] = []
    skipped = 0

    for row in rows:
        name = normalize_text(row.get(cols["name"]))
        if not name:
            skipped += 1
            continue
        budget = to_money(row.get(cols["budget"]), 0) if cols["budget"] else 0
        company = normalize_text(row.get(cols["company"])) if cols["company"] else ""

        existing = match_name(name, known, key=lambda s: s.name, allow_partial=False)
        if existing is None:
            site = Site(id=new_id(), name=name, budget=budget, company_name=company, status=SiteStatus.ACTIVE)
            created.append(site)
            known.append(site)
            continue

        current = changed.get(existing.id, existing)
        if current.budget != budget or (company and current.company_name != company):
            updated = replace(current, budget=budget, company_name=company or current.company_name)
            if existing.id in {s.id for s in created}:
                created = [updated if s.id == existing.id else s for s in created]
            else:
                changed[existing.id] = updated
            known = [updated if s.id == existing.id else s for s in known]

    return SiteImportPlan(new_sites=tuple(created), updated_sites=tuple(changed.values()), skipped=skipped)
