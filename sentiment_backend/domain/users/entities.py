# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True, frozen=True)
class User:

    id: int
    username: str
    password_hash: str
    created_at: datetime


@dataclass(slots=True, frozen=True)
class TokenClaims:
    """Verified identity carried by a session token.

    Populated once by the auth gate and handed to request handlers as the
    session context; handlers never decode the token themselves.
    """

    user_id: int
    username: str
    issued_at: datetime
    expires_at: datetime
