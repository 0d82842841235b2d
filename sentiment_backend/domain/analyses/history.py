# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""History aggregation over a user's analysis ledger.

Both projections are pure functions of the records passed in and are
recomputed on every read:

* ``distribution`` tallies every record per sentiment category.
* ``daily_trend`` buckets records by local calendar date, optionally
  restricted to a fully bounded, inclusive date range.

Calendar dates are always derived in an explicit timezone, never the
process-local one.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, tzinfo
from zoneinfo import ZoneInfo

from .entities import Analysis, Sentiment

UTC_ZONE = ZoneInfo("UTC")


@dataclass(slots=True)
class SentimentCounts:
    positive: int = 0
    negative: int = 0
    neutral: int = 0

    def add(self, sentiment: Sentiment) -> None:
        if sentiment is Sentiment.POSITIVE:
            self.positive += 1
        elif sentiment is Sentiment.NEGATIVE:
            self.negative += 1
        else:
            self.neutral += 1

    @property
    def total(self) -> int:
        return self.positive + self.negative + self.neutral

    def to_dict(self) -> dict[str, int]:
        return {
            Sentiment.POSITIVE.value: self.positive,
            Sentiment.NEGATIVE.value: self.negative,
            Sentiment.NEUTRAL.value: self.neutral,
        }


@dataclass(slots=True, frozen=True)
class DateRange:
    """Inclusive, fully bounded day range.

    There is no half-open variant: ``from_bounds`` returns ``None`` unless
    both bounds are given.
    """

    start: date
    end: date

    @classmethod
    def from_bounds(cls, start: date | None, end: date | None) -> DateRange | None:
        if start is None or end is None:
            return None
        return cls(start=start, end=end)

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(slots=True, frozen=True)
class DailyTrendPoint:
    day: date
    counts: SentimentCounts = field(default_factory=SentimentCounts)

    def to_dict(self) -> dict[str, object]:
        return {"date": self.day.isoformat(), **self.counts.to_dict()}


def local_date(record: Analysis, tz: tzinfo = UTC_ZONE) -> date:
    return record.created_at.astimezone(tz).date()


def distribution(records: Iterable[Analysis]) -> SentimentCounts:
    counts = SentimentCounts()
    for record in records:
        counts.add(record.sentiment)
    return counts


def daily_trend(
    records: Iterable[Analysis],
    start: date | None = None,
    end: date | None = None,
    *,
    tz: tzinfo = UTC_ZONE,
) -> list[DailyTrendPoint]:
    """Return per-day sentiment counts sorted by date ascending.

    A single supplied bound is ignored and the full record set is used.
    """

    date_range = DateRange.from_bounds(start, end)
    buckets: dict[date, SentimentCounts] = {}
    for record in records:
        day = local_date(record, tz)
        if date_range is not None and not date_range.contains(day):
            continue
        buckets.setdefault(day, SentimentCounts()).add(record.sentiment)
    return [DailyTrendPoint(day=day, counts=buckets[day]) for day in sorted(buckets)]


__all__ = [
    "DailyTrendPoint",
    "DateRange",
    "SentimentCounts",
    "daily_trend",
    "distribution",
    "local_date",
]
