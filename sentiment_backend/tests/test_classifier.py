from __future__ import annotations

import json

import httpx
import pytest

from sentiment_backend.domain.analyses.entities import ClassificationResult, Sentiment
from sentiment_backend.domain.analyses.exceptions import (
    ClassifierUnavailableError,
    UnexpectedResponseShapeError,
)
from sentiment_backend.infrastructure.classifier import (
    HuggingFaceClassifier,
    normalize_label,
    normalize_response,
)
from sentiment_backend.shared.config import ClassifierConfig

CANDIDATES = [
    {"label": "LABEL_0", "score": 0.2},
    {"label": "LABEL_2", "score": 0.7},
    {"label": "LABEL_1", "score": 0.1},
]


def _classifier(handler) -> HuggingFaceClassifier:
    http = httpx.Client(transport=httpx.MockTransport(handler))
    config = ClassifierConfig(url="https://inference.test/model", api_token="hf_testtoken")
    return HuggingFaceClassifier(config, http=http)


def test_flat_and_nested_responses_classify_identically() -> None:
    assert normalize_response(CANDIDATES) == normalize_response([CANDIDATES])


def test_highest_score_wins() -> None:
    assert normalize_response([CANDIDATES]) == ClassificationResult(Sentiment.POSITIVE, 0.7)


def test_confidence_is_rounded_to_three_places() -> None:
    result = normalize_response([{"label": "LABEL_0", "score": 0.98771}])

    assert result == ClassificationResult(Sentiment.NEGATIVE, 0.988)


@pytest.mark.parametrize(
    ("label", "expected"),
    [
        ("LABEL_0", Sentiment.NEGATIVE),
        ("LABEL_1", Sentiment.NEUTRAL),
        ("LABEL_2", Sentiment.POSITIVE),
        ("positive", Sentiment.POSITIVE),
        ("LABEL_9", Sentiment.NEUTRAL),
        ("joy", Sentiment.NEUTRAL),
    ],
)
def test_normalize_label(label: str, expected: Sentiment) -> None:
    assert normalize_label(label) is expected


@pytest.mark.parametrize(
    "payload",
    [
        {"error": "Model is loading"},
        [],
        [[]],
        [CANDIDATES, CANDIDATES],
        [{"label": "LABEL_0"}],
        [{"label": 0, "score": 0.5}],
        [{"label": "LABEL_2", "score": float("nan")}],
        [{"label": "LABEL_2", "score": float("inf")}],
        "LABEL_0",
    ],
)
def test_unrecognized_shapes_are_rejected(payload) -> None:
    with pytest.raises(UnexpectedResponseShapeError):
        normalize_response(payload)


def test_classify_posts_text_with_bearer_token() -> None:
    seen: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers.get("Authorization")
        seen["body"] = json.loads(request.content)
        seen["url"] = str(request.url)
        return httpx.Response(200, json=[CANDIDATES])

    result = _classifier(handler).classify("I love this")

    assert result == ClassificationResult(Sentiment.POSITIVE, 0.7)
    assert seen == {
        "auth": "Bearer hf_testtoken",
        "body": {"inputs": "I love this"},
        "url": "https://inference.test/model",
    }


def test_non_success_status_is_upstream_failure() -> None:
    classifier = _classifier(lambda request: httpx.Response(503, json={"error": "loading"}))

    with pytest.raises(ClassifierUnavailableError) as excinfo:
        classifier.classify("hello")

    assert not isinstance(excinfo.value, UnexpectedResponseShapeError)
    assert excinfo.value.status == 500


def test_transport_error_is_upstream_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("boom", request=request)

    with pytest.raises(ClassifierUnavailableError):
        _classifier(handler).classify("hello")


def test_non_json_body_is_unexpected_shape() -> None:
    classifier = _classifier(lambda request: httpx.Response(200, text="<html>"))

    with pytest.raises(UnexpectedResponseShapeError):
        classifier.classify("hello")


def test_non_finite_score_is_unexpected_shape() -> None:
    body = '[{"label": "LABEL_2", "score": NaN}]'
    classifier = _classifier(lambda request: httpx.Response(200, text=body))

    with pytest.raises(UnexpectedResponseShapeError):
        classifier.classify("hello")
