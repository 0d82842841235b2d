# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""HTTP client for the sentiment backend that owns the caller's session token.

The token is decoded without verification only to show who is logged in.
It is dropped as soon as it is expired, cannot be decoded, or is refused by
the server with 401/403.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, date, datetime
from typing import Any

import httpx
from jose import JWTError, jwt

from sentiment_backend.domain.users.entities import TokenClaims
from sentiment_backend.domain.users.exceptions import InvalidSignatureError
from sentiment_backend.infrastructure.auth.tokens import parse_claims
from sentiment_backend.shared.logging import logger

from .exceptions import ApiClientError, InvalidTextError, NotAuthenticatedError

DEFAULT_MAX_LENGTH = 500


def _utcnow() -> datetime:
    return datetime.now(UTC)


class SessionClient:
    def __init__(
        self,
        base_url: str,
        *,
        http: httpx.Client | None = None,
        clock: Callable[[], datetime] = _utcnow,
        max_length: int = DEFAULT_MAX_LENGTH,
        timeout: float = 30.0,
    ) -> None:
        self._owns_client = http is None
        self._http = http or httpx.Client(base_url=base_url, timeout=timeout)
        self._clock = clock
        self._max_length = max_length
        self._token: str | None = None

    # Session state

    @property
    def token(self) -> str | None:
        return self._token

    @property
    def session(self) -> TokenClaims | None:
        if self._token is None:
            return None
        try:
            claims = parse_claims(jwt.get_unverified_claims(self._token))
        except (JWTError, InvalidSignatureError):
            logger.warning("client: discarding undecodable token")
            self.logout()
            return None
        if claims.expires_at <= self._clock():
            logger.info(f"client: token expired for user={claims.username}")
            self.logout()
            return None
        return claims

    @property
    def is_authenticated(self) -> bool:
        return self.session is not None

    @property
    def username(self) -> str | None:
        session = self.session
        return session.username if session else None

    def set_token(self, token: str | None) -> None:
        self._token = token or None

    def logout(self) -> None:
        self._token = None

    # Endpoints

    def register(self, username: str, password: str) -> dict[str, Any]:
        return self._request(
            "POST", "/register", json={"username": username, "password": password}
        )

    def login(self, username: str, password: str) -> TokenClaims:
        payload = self._request(
            "POST", "/login", json={"username": username, "password": password}
        )
        self.set_token(payload.get("token"))
        session = self.session
        if session is None:
            raise ApiClientError(
                status=200, code="invalid_token", message="Server returned an unusable token"
            )
        return session

    def analyze(self, text: str) -> dict[str, Any]:
        cleaned = (text or "").strip()
        if not cleaned:
            raise InvalidTextError("empty_text", "Please enter some text")
        if len(cleaned) > self._max_length:
            raise InvalidTextError(
                "text_too_long", f"Text must be at most {self._max_length} characters"
            )
        return self._request("POST", "/analyze", auth=True, json={"text": cleaned})

    def history(self) -> list[dict[str, Any]]:
        return self._request("GET", "/history", auth=True)

    def history_summary(
        self, start: date | None = None, end: date | None = None
    ) -> dict[str, Any]:
        params = {}
        if start is not None:
            params["start"] = start.isoformat()
        if end is not None:
            params["end"] = end.isoformat()
        return self._request("GET", "/history/summary", auth=True, params=params)

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    def _request(self, method: str, path: str, *, auth: bool = False, **kwargs: Any) -> Any:
        headers: dict[str, str] = {}
        if auth:
            if self.session is None:
                raise NotAuthenticatedError()
            headers["Authorization"] = f"Bearer {self._token}"

        try:
            response = self._http.request(method, path, headers=headers, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning(f"client: {method} {path} transport failure: {exc}")
            raise ApiClientError(status=0, code="network_error", message=str(exc)) from exc

        if auth and response.status_code in (401, 403):
            logger.info(f"client: token refused with {response.status_code}, logging out")
            self.logout()

        if not response.is_success:
            raise _error_from_response(response)
        return response.json()


def _error_from_response(response: httpx.Response) -> ApiClientError:
    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}
    return ApiClientError(
        status=response.status_code,
        code=str(body.get("error") or "http_error"),
        message=body.get("message"),
        context=body.get("context"),
    )
