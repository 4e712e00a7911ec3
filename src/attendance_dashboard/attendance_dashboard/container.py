from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .members.service import MemberService
from .queries.facade import QueryFacade
from .reports.service import DashboardService
from .store.entity_store import EntityStore


@dataclass(frozen=True)
class Container:
    store: EntityStore

    queries: QueryFacade
    member_service: MemberService
    dashboard_service: DashboardService


def build_container(*, settings: Any = None, store: Optional[EntityStore] = None) -> Container:
    store = store or EntityStore()

    queries = QueryFacade(store)
    member_service = MemberService(store)
    dashboard_service = DashboardService(
        store,
        default_expected=getattr(settings, "DEFAULT_EXPECTED", None),
        early_arrival_limit=getattr(settings, "EARLY_ARRIVAL_LIMIT", 3),
        analytics_days=getattr(settings, "ANALYTICS_DAYS", 30),
    )

    return Container(
        store=store,
        queries=queries,
        member_service=member_service,
        dashboard_service=dashboard_service,
    )
