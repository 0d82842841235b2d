# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sentiment_backend.domain.users.entities import User
from sentiment_backend.domain.users.exceptions import InvalidCredentialsError, InvalidInputError
from sentiment_backend.domain.users.repositories import (
    PasswordHasher,
    TokenService,
    UserRepository,
)
from sentiment_backend.shared.logging import logger

_DUMMY_PASSWORD = "unknown-user-placeholder"


class VerifyCredentialsUseCase:
    """Look up a user and check the password.

    Unknown usernames and wrong passwords raise the same error after the same
    amount of hashing work.
    """

    def __init__(self, *, users: UserRepository, password_hasher: PasswordHasher) -> None:
        self._users = users
        self._password_hasher = password_hasher
        self._dummy_hash = password_hasher.hash(_DUMMY_PASSWORD)

    def execute(self, username: str, password: str) -> User:
        user = self._users.find_by_username(username)
        if user is None:
            self._password_hasher.verify(password, self._dummy_hash)
            raise InvalidCredentialsError()
        if not self._password_hasher.verify(password, user.password_hash):
            raise InvalidCredentialsError()
        return user


class LoginUserUseCase:
    def __init__(
        self,
        *,
        credentials: VerifyCredentialsUseCase,
        tokens: TokenService,
    ) -> None:
        self._credentials = credentials
        self._tokens = tokens

    def execute(self, username: str, password: str) -> str:
        if not username or not password:
            raise InvalidInputError()

        try:
            user = self._credentials.execute(username, password)
        except InvalidCredentialsError:
            logger.warning("users.login: rejected credentials")
            raise

        token = self._tokens.issue(user)
        logger.info(f"users.login: ok user_id={user.id}")
        return token
