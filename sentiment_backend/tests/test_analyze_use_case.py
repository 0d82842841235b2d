from __future__ import annotations

from datetime import UTC, datetime

import pytest

from sentiment_backend.application.use_cases.analyses.analyze_text import AnalyzeTextUseCase
from sentiment_backend.domain.analyses.entities import (
    Analysis,
    ClassificationResult,
    Sentiment,
)
from sentiment_backend.domain.analyses.exceptions import (
    ClassifierUnavailableError,
    EmptyTextError,
    PersistenceFailureError,
    TextTooLongError,
)
from sentiment_backend.domain.analyses.repositories import (
    AnalysisRepository,
    SentimentClassifier,
)


class CountingClassifier(SentimentClassifier):
    def __init__(self, error: Exception | None = None) -> None:
        self.calls: list[str] = []
        self.error = error

    def classify(self, text: str) -> ClassificationResult:
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return ClassificationResult(Sentiment.NEGATIVE, 0.812)


class InMemoryAnalysisRepository(AnalysisRepository):
    def __init__(self, fail: bool = False) -> None:
        self.records: list[Analysis] = []
        self.fail = fail

    def append(
        self, owner_id: int, text: str, sentiment: Sentiment, confidence: float
    ) -> Analysis:
        if self.fail:
            raise PersistenceFailureError()
        record = Analysis(
            id=len(self.records) + 1,
            owner_id=owner_id,
            text=text,
            sentiment=sentiment,
            confidence=confidence,
            created_at=datetime.now(UTC),
        )
        self.records.append(record)
        return record

    def list_by_owner(self, owner_id: int) -> list[Analysis]:
        return [r for r in reversed(self.records) if r.owner_id == owner_id]


def _use_case(
    classifier: CountingClassifier, analyses: InMemoryAnalysisRepository
) -> AnalyzeTextUseCase:
    return AnalyzeTextUseCase(classifier=classifier, analyses=analyses, max_length=500)


def test_analyze_classifies_and_records() -> None:
    classifier, analyses = CountingClassifier(), InMemoryAnalysisRepository()

    result = _use_case(classifier, analyses).execute(3, "  this is awful  ")

    assert result == ClassificationResult(Sentiment.NEGATIVE, 0.812)
    assert classifier.calls == ["this is awful"]
    [record] = analyses.records
    assert (record.owner_id, record.text, record.sentiment, record.confidence) == (
        3,
        "this is awful",
        Sentiment.NEGATIVE,
        0.812,
    )


def test_text_over_limit_is_rejected_before_classification() -> None:
    classifier, analyses = CountingClassifier(), InMemoryAnalysisRepository()

    with pytest.raises(TextTooLongError) as excinfo:
        _use_case(classifier, analyses).execute(1, "a" * 501)

    assert excinfo.value.context == {"max_length": 500, "length": 501}
    assert classifier.calls == []
    assert analyses.records == []


def test_text_at_limit_is_accepted() -> None:
    classifier, analyses = CountingClassifier(), InMemoryAnalysisRepository()

    _use_case(classifier, analyses).execute(1, "a" * 500)

    assert len(classifier.calls) == 1


@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_blank_text_is_rejected(text: str) -> None:
    classifier = CountingClassifier()

    with pytest.raises(EmptyTextError):
        _use_case(classifier, InMemoryAnalysisRepository()).execute(1, text)
    assert classifier.calls == []


def test_classifier_failure_leaves_no_record() -> None:
    classifier = CountingClassifier(error=ClassifierUnavailableError())
    analyses = InMemoryAnalysisRepository()

    with pytest.raises(ClassifierUnavailableError):
        _use_case(classifier, analyses).execute(1, "hello")

    assert analyses.records == []


def test_persistence_failure_is_reported_separately() -> None:
    classifier = CountingClassifier()

    with pytest.raises(PersistenceFailureError) as excinfo:
        _use_case(classifier, InMemoryAnalysisRepository(fail=True)).execute(1, "hello")

    assert not isinstance(excinfo.value, ClassifierUnavailableError)
    assert excinfo.value.code == "persistence_failure"
    assert classifier.calls == ["hello"]
