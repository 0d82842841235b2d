# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import Analysis, ClassificationResult, Sentiment
from .history import (
    DailyTrendPoint,
    DateRange,
    SentimentCounts,
    daily_trend,
    distribution,
)

__all__ = [
    "Analysis",
    "ClassificationResult",
    "DailyTrendPoint",
    "DateRange",
    "Sentiment",
    "SentimentCounts",
    "daily_trend",
    "distribution",
]
