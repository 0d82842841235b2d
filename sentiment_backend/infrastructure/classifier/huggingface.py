# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import httpx

from sentiment_backend.domain.analyses.entities import ClassificationResult
from sentiment_backend.domain.analyses.exceptions import (
    ClassifierUnavailableError,
    UnexpectedResponseShapeError,
)
from sentiment_backend.domain.analyses.repositories import SentimentClassifier
from sentiment_backend.shared.config import ClassifierConfig
from sentiment_backend.shared.logging import logger

from .normalization import normalize_response


class HuggingFaceClassifier(SentimentClassifier):
    """Sentiment classifier backed by the Hugging Face inference API.

    One shared ``httpx.Client`` serves all request threads. Calls are made
    once; failures are reported, never retried.
    """

    def __init__(
        self,
        config: ClassifierConfig,
        *,
        http: httpx.Client | None = None,
    ) -> None:
        self._url = config.url
        headers = {"Accept": "application/json"}
        if config.api_token:
            headers["Authorization"] = f"Bearer {config.api_token}"
        self._owns_client = http is None
        self._http = http or httpx.Client(timeout=config.timeout)
        self._headers = headers

    def classify(self, text: str) -> ClassificationResult:
        try:
            response = self._http.post(self._url, json={"inputs": text}, headers=self._headers)
        except httpx.HTTPError as exc:
            logger.opt(exception=exc).warning(f"classifier: transport failure url={self._url}")
            raise ClassifierUnavailableError() from exc

        if not response.is_success:
            logger.warning(
                f"classifier: http {response.status_code} body={response.text[:200]}"
            )
            raise ClassifierUnavailableError(context={"upstream_status": response.status_code})

        try:
            payload = response.json()
        except ValueError as exc:
            logger.warning(f"classifier: non-JSON body={response.text[:200]}")
            raise UnexpectedResponseShapeError() from exc

        try:
            return normalize_response(payload)
        except UnexpectedResponseShapeError:
            logger.warning(f"classifier: unexpected response shape body={response.text[:200]}")
            raise

    def close(self) -> None:
        if self._owns_client:
            self._http.close()
