# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sentiment_backend.domain.analyses.entities import ClassificationResult
from sentiment_backend.domain.analyses.exceptions import (
    EmptyTextError,
    PersistenceFailureError,
    TextTooLongError,
)
from sentiment_backend.domain.analyses.repositories import (
    AnalysisRepository,
    SentimentClassifier,
)
from sentiment_backend.shared.logging import logger

DEFAULT_MAX_LENGTH = 500


class AnalyzeTextUseCase:
    """Validate, classify and record one piece of text for its owner.

    Nothing is written unless classification succeeded, so a failed call
    can be resubmitted as is.
    """

    def __init__(
        self,
        *,
        classifier: SentimentClassifier,
        analyses: AnalysisRepository,
        max_length: int = DEFAULT_MAX_LENGTH,
    ) -> None:
        self._classifier = classifier
        self._analyses = analyses
        self._max_length = max_length

    def validate(self, text: str) -> str:
        cleaned = (text or "").strip()
        if not cleaned:
            raise EmptyTextError()
        if len(cleaned) > self._max_length:
            raise TextTooLongError(
                context={"max_length": self._max_length, "length": len(cleaned)}
            )
        return cleaned

    def execute(self, owner_id: int, text: str) -> ClassificationResult:
        cleaned = self.validate(text)

        result = self._classifier.classify(cleaned)
        logger.debug(
            f"analyze: classified owner={owner_id} sentiment={result.sentiment.value} "
            f"confidence={result.confidence}"
        )

        try:
            record = self._analyses.append(
                owner_id, cleaned, result.sentiment, result.confidence
            )
        except PersistenceFailureError:
            logger.error(
                f"analyze: classified but not stored owner={owner_id} "
                f"sentiment={result.sentiment.value}"
            )
            raise

        logger.info(f"analyze: stored analysis_id={record.id} owner={owner_id}")
        return result
