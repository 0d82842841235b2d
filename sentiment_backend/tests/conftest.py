from __future__ import annotations

from collections.abc import Iterator

import pytest
from flask import Flask

from sentiment_backend.app import create_app
from sentiment_backend.domain.analyses.entities import ClassificationResult, Sentiment
from sentiment_backend.infrastructure.container import Container
from sentiment_backend.shared.config import AppConfig, DatabaseConfig


class StubClassifier:
    def __init__(
        self,
        result: ClassificationResult | None = None,
        error: Exception | None = None,
    ) -> None:
        self.result = result or ClassificationResult(Sentiment.POSITIVE, 0.9)
        self.error = error
        self.calls: list[str] = []

    def classify(self, text: str) -> ClassificationResult:
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture()
def app_config(tmp_path) -> AppConfig:
    return AppConfig(
        secret_key="test-secret",
        log_level="WARNING",
        database=DatabaseConfig(url=f"sqlite:///{tmp_path / 'sentiment.db'}"),
    )


@pytest.fixture()
def stub_classifier() -> StubClassifier:
    return StubClassifier()


@pytest.fixture()
def container(app_config: AppConfig, stub_classifier: StubClassifier) -> Iterator[Container]:
    container = Container(app_config, classifier=stub_classifier)
    yield container
    container.close()


@pytest.fixture()
def app(container: Container) -> Flask:
    return create_app(container=container)
