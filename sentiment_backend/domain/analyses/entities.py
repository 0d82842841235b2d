# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Domain entities for sentiment analyses."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from sentiment_backend.domain.exceptions import InvariantViolation


class Sentiment(str, Enum):
    POSITIVE = "Positive"
    NEGATIVE = "Negative"
    NEUTRAL = "Neutral"


@dataclass(slots=True, frozen=True)
class ClassificationResult:
    """Canonical classifier verdict, independent of the remote response shape."""

    sentiment: Sentiment
    confidence: float

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence <= 1.0:
            raise InvariantViolation("confidence must be within [0, 1]", field="confidence")

    def to_dict(self) -> dict[str, object]:
        return {"sentiment": self.sentiment.value, "confidence": self.confidence}


@dataclass(slots=True, frozen=True)
class Analysis:
    """Single ledger entry. Owned by exactly one user and never mutated."""

    id: int
    owner_id: int
    text: str
    sentiment: Sentiment
    confidence: float
    created_at: datetime

    def __post_init__(self) -> None:
        if not self.text:
            raise InvariantViolation("text must not be empty", field="text")
        if self.created_at.tzinfo is None:
            raise InvariantViolation("created_at must be timezone-aware", field="created_at")
