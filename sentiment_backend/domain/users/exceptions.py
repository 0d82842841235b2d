# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from sentiment_backend.shared.errors.base import DomainError


class InvalidInputError(DomainError):
    code = "invalid_input"
    message = "Missing username or password"


class UserAlreadyExistsError(DomainError):
    code = "user_already_exists"
    message = "User already exists"


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    message = "Invalid credentials"


class TokenError(DomainError):
    code = "invalid_token"
    status = HTTPStatus.FORBIDDEN


class MissingTokenError(TokenError):
    code = "missing_token"
    status = HTTPStatus.UNAUTHORIZED


class InvalidSignatureError(TokenError):
    code = "invalid_signature"


class TokenExpiredError(TokenError):
    code = "token_expired"
