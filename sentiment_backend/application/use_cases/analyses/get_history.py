# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, tzinfo
from zoneinfo import ZoneInfo

from sentiment_backend.domain.analyses.entities import Analysis
from sentiment_backend.domain.analyses.history import (
    DailyTrendPoint,
    SentimentCounts,
    daily_trend,
    distribution,
)
from sentiment_backend.domain.analyses.repositories import AnalysisRepository


@dataclass(slots=True, frozen=True)
class HistorySummary:
    distribution: SentimentCounts
    daily_trend: list[DailyTrendPoint]

    def to_dict(self) -> dict[str, object]:
        return {
            "distribution": self.distribution.to_dict(),
            "daily_trend": [point.to_dict() for point in self.daily_trend],
        }


class GetHistoryUseCase:
    def __init__(self, *, analyses: AnalysisRepository) -> None:
        self._analyses = analyses

    def execute(self, owner_id: int) -> Sequence[Analysis]:
        return self._analyses.list_by_owner(owner_id)


class GetHistorySummaryUseCase:
    """Distribution over all records plus the (optionally filtered) daily trend."""

    def __init__(
        self, *, analyses: AnalysisRepository, timezone: str | tzinfo = "UTC"
    ) -> None:
        self._analyses = analyses
        self._tz = ZoneInfo(timezone) if isinstance(timezone, str) else timezone

    def execute(
        self, owner_id: int, start: date | None = None, end: date | None = None
    ) -> HistorySummary:
        records = self._analyses.list_by_owner(owner_id)
        return HistorySummary(
            distribution=distribution(records),
            daily_trend=daily_trend(records, start, end, tz=self._tz),
        )
