# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

from flask import g, request

from sentiment_backend.domain.users.entities import TokenClaims
from sentiment_backend.domain.users.exceptions import MissingTokenError, TokenError
from sentiment_backend.domain.users.repositories import TokenService
from sentiment_backend.shared.errors import ForbiddenError, UnauthorizedError
from sentiment_backend.shared.logging import logger

F = TypeVar("F", bound=Callable[..., Any])


def extract_bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


class AuthGate:
    """Verifies the bearer token before a protected view runs.

    Missing token -> 401, invalid or expired token -> 403. On success the
    verified claims are passed to the view as ``session``.
    """

    def __init__(self, tokens: TokenService) -> None:
        self._tokens = tokens

    def authenticate(self, authorization: str | None) -> TokenClaims:
        token = extract_bearer_token(authorization)
        try:
            return self._tokens.verify(token)
        except MissingTokenError:
            logger.warning(f"auth: no bearer token on {request.method} {request.path}")
            raise UnauthorizedError() from None
        except TokenError as exc:
            logger.warning(
                f"auth: token rejected reason={exc.code} on {request.method} {request.path}"
            )
            raise ForbiddenError() from exc

    def required(self, view: F) -> F:
        @wraps(view)
        def inner(*args: Any, **kwargs: Any) -> Any:
            session = self.authenticate(request.headers.get("Authorization"))
            g.user_id = session.user_id
            kwargs["session"] = session
            logger.debug(f"auth: ok user={session.user_id} {request.method} {request.path}")
            return view(*args, **kwargs)

        return inner  # type: ignore[return-value]
