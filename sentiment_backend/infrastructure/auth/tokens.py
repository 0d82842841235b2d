# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from sentiment_backend.domain.users.entities import TokenClaims, User
from sentiment_backend.domain.users.exceptions import (
    InvalidSignatureError,
    MissingTokenError,
    TokenExpiredError,
)
from sentiment_backend.domain.users.repositories import TokenService

DEFAULT_TTL = timedelta(hours=1)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class JwtTokenService(TokenService):
    """HMAC-signed, self-contained session tokens.

    Nothing is persisted: a token is valid while its signature matches the
    process secret and ``exp`` lies in the future.
    """

    def __init__(
        self,
        secret: str,
        *,
        ttl: timedelta = DEFAULT_TTL,
        algorithm: str = "HS256",
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret:
            raise ValueError("token secret must not be empty")
        self._secret = secret
        self._ttl = ttl
        self._algorithm = algorithm
        self._clock = clock

    def issue(self, user: User) -> str:
        now = self._clock()
        claims = {
            "id": user.id,
            "username": user.username,
            "iat": int(now.timestamp()),
            "exp": int((now + self._ttl).timestamp()),
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def verify(self, token: str | None) -> TokenClaims:
        if not token:
            raise MissingTokenError()
        try:
            # Expiry is checked below against the injected clock.
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False},
            )
        except JWTError as exc:
            raise InvalidSignatureError() from exc

        claims = parse_claims(payload)
        if claims.expires_at <= self._clock():
            raise TokenExpiredError()
        return claims


def parse_claims(payload: dict[str, Any]) -> TokenClaims:
    user_id = payload.get("id")
    username = payload.get("username")
    iat = payload.get("iat")
    exp = payload.get("exp")
    if (
        not isinstance(user_id, int)
        or isinstance(user_id, bool)
        or not isinstance(username, str)
        or not isinstance(iat, (int, float))
        or not isinstance(exp, (int, float))
    ):
        raise InvalidSignatureError(context={"reason": "malformed claims"})
    return TokenClaims(
        user_id=user_id,
        username=username,
        issued_at=datetime.fromtimestamp(iat, UTC),
        expires_at=datetime.fromtimestamp(exp, UTC),
    )
