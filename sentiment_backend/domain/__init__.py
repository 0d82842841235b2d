# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .analyses import (
    Analysis,
    ClassificationResult,
    DailyTrendPoint,
    DateRange,
    Sentiment,
    SentimentCounts,
)
from .exceptions import InvariantViolation
from .users.entities import TokenClaims, User

__all__ = [
    "Analysis",
    "ClassificationResult",
    "DailyTrendPoint",
    "DateRange",
    "InvariantViolation",
    "Sentiment",
    "SentimentCounts",
    "TokenClaims",
    "User",
]
