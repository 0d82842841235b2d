# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Turn raw classifier payloads into a ``ClassificationResult``.

The inference API answers a single input with either a flat list of
``{"label", "score"}`` candidates or the same list wrapped in one more list.
Both shapes are resolved here and nowhere else.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from sentiment_backend.domain.analyses.entities import ClassificationResult, Sentiment
from sentiment_backend.domain.analyses.exceptions import UnexpectedResponseShapeError

CONFIDENCE_PRECISION = 3

LABEL_SENTIMENTS: dict[str, Sentiment] = {
    # cardiffnlp/twitter-roberta-base-sentiment
    "LABEL_0": Sentiment.NEGATIVE,
    "LABEL_1": Sentiment.NEUTRAL,
    "LABEL_2": Sentiment.POSITIVE,
    # cardiffnlp/twitter-roberta-base-sentiment-latest and similar
    "NEGATIVE": Sentiment.NEGATIVE,
    "NEUTRAL": Sentiment.NEUTRAL,
    "POSITIVE": Sentiment.POSITIVE,
}


@dataclass(slots=True, frozen=True)
class Candidate:
    label: str
    score: float


def normalize_label(label: str) -> Sentiment:
    sentiment = LABEL_SENTIMENTS.get(label.strip().upper())
    if sentiment is None:
        # Unknown vocabularies degrade to Neutral instead of failing the request.
        return Sentiment.NEUTRAL
    return sentiment


def _is_candidate_list(value: Any) -> bool:
    return (
        isinstance(value, Sequence)
        and not isinstance(value, (str, bytes))
        and len(value) > 0
        and all(isinstance(item, Mapping) for item in value)
    )


def unwrap_candidates(payload: Any) -> Sequence[Mapping[str, Any]]:
    """Return the candidate list from a flat or singly nested payload."""

    if _is_candidate_list(payload):
        return payload
    if (
        isinstance(payload, Sequence)
        and not isinstance(payload, (str, bytes))
        and len(payload) == 1
        and _is_candidate_list(payload[0])
    ):
        return payload[0]
    raise UnexpectedResponseShapeError(context={"reason": "expected an array of candidates"})


def parse_candidate(raw: Mapping[str, Any]) -> Candidate:
    label = raw.get("label")
    score = raw.get("score")
    if not isinstance(label, str) or isinstance(score, bool) or not isinstance(score, (int, float)):
        raise UnexpectedResponseShapeError(context={"reason": "candidate needs label and score"})
    if not math.isfinite(score):
        raise UnexpectedResponseShapeError(context={"reason": "score must be a finite number"})
    return Candidate(label=label, score=float(score))


def normalize_response(payload: Any) -> ClassificationResult:
    candidates = [parse_candidate(raw) for raw in unwrap_candidates(payload)]
    # max() keeps the first candidate on ties.
    top = max(candidates, key=lambda candidate: candidate.score)
    confidence = min(max(round(top.score, CONFIDENCE_PRECISION), 0.0), 1.0)
    return ClassificationResult(sentiment=normalize_label(top.label), confidence=confidence)


__all__ = [
    "CONFIDENCE_PRECISION",
    "Candidate",
    "LABEL_SENTIMENTS",
    "normalize_label",
    "normalize_response",
    "parse_candidate",
    "unwrap_candidates",
]
