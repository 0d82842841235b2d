# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from sentiment_backend.shared.errors.base import DomainError


class EmptyTextError(DomainError):
    code = "empty_text"
    message = "No text provided"


class TextTooLongError(DomainError):
    code = "text_too_long"
    message = "Text exceeds the maximum length"


class InvalidDateRangeError(DomainError):
    code = "invalid_date_range"
    message = "Dates must use the YYYY-MM-DD format"


class ClassifierUnavailableError(DomainError):
    code = "classifier_unavailable"
    status = HTTPStatus.INTERNAL_SERVER_ERROR
    message = "Sentiment analysis failed"


class UnexpectedResponseShapeError(ClassifierUnavailableError):
    code = "unexpected_response_shape"


class PersistenceFailureError(DomainError):
    code = "persistence_failure"
    status = HTTPStatus.INTERNAL_SERVER_ERROR
    message = "Could not save the analysis result"
