from __future__ import annotations

import io
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from ..attendance.aggregator import ChartPoint, earliest_arrivals, group_by_day, to_chart_series
from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_ANALYTICS_DAYS, DEFAULT_EARLY_ARRIVAL_LIMIT
from ..store.entity_store import EntityStore
from .export import members_to_excel
from .statistics import AttendanceSummary, filter_recent, rate_by_course, summarize


@dataclass(frozen=True)
class DashboardData:
    chart: list[ChartPoint]
    summary: AttendanceSummary
    course_rates: list[dict]
    early_arrivals: list[AttendanceRecord]


class DashboardService:
    """Use case: build the summary views from the latest store contents."""

    def __init__(
        self,
        store: EntityStore,
        *,
        default_expected: Optional[int] = None,
        early_arrival_limit: int = DEFAULT_EARLY_ARRIVAL_LIMIT,
        analytics_days: int = DEFAULT_ANALYTICS_DAYS,
        clock: Callable[[], datetime] = now_local,
    ):
        self._store = store
        self._default_expected = default_expected
        self._early_arrival_limit = int(early_arrival_limit)
        self._analytics_days = int(analytics_days)
        self._clock = clock

    def _records(self, days: Optional[int]) -> list[AttendanceRecord]:
        records = list(self._store.attendance)
        if days is None:
            return records
        return filter_recent(records, days, now=self._clock())

    def weekday_chart(self, *, days: Optional[int] = None) -> list[ChartPoint]:
        buckets = group_by_day(self._records(days), default_expected=self._default_expected)
        return to_chart_series(buckets)

    def summary(self, *, days: Optional[int] = None) -> AttendanceSummary:
        return summarize(self._records(days))

    def course_rates(self, *, days: Optional[int] = None) -> list[dict]:
        return rate_by_course(self._store.courses, self._records(days))

    def early_arrivals(self, *, limit: Optional[int] = None) -> list[AttendanceRecord]:
        sessions = {s.id: s for s in self._store.sessions}
        limit = self._early_arrival_limit if limit is None else int(limit)
        return earliest_arrivals(self._store.attendance, limit, sessions=sessions)

    def build(self) -> DashboardData:
        days = self._analytics_days
        return DashboardData(
            chart=self.weekday_chart(days=days),
            summary=self.summary(days=days),
            course_rates=self.course_rates(days=days),
            early_arrivals=self.early_arrivals(),
        )

    def export_members(self) -> io.BytesIO:
        return members_to_excel(self._store.members)
