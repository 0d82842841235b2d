# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .entities import Analysis, ClassificationResult, Sentiment


class AnalysisRepository(Protocol):
    def append(
        self, owner_id: int, text: str, sentiment: Sentiment, confidence: float
    ) -> Analysis: ...

    def list_by_owner(self, owner_id: int) -> Sequence[Analysis]: ...


class SentimentClassifier(Protocol):
    def classify(self, text: str) -> ClassificationResult: ...
