from __future__ import annotations

import time
from datetime import UTC, datetime
from threading import Lock

import pytest

from sentiment_backend.application.services.password_hashing import WerkzeugPasswordHasher
from sentiment_backend.application.use_cases.users.login_user import (
    LoginUserUseCase,
    VerifyCredentialsUseCase,
)
from sentiment_backend.application.use_cases.users.register_user import RegisterUserUseCase
from sentiment_backend.domain.users.entities import TokenClaims, User
from sentiment_backend.domain.users.exceptions import (
    InvalidCredentialsError,
    InvalidInputError,
    UserAlreadyExistsError,
)
from sentiment_backend.domain.users.repositories import PasswordHasher, TokenService, UserRepository


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[str, User] = {}
        self._seq = 1
        self._lock = Lock()

    def find_by_username(self, username: str) -> User | None:
        return self._users.get(username)

    def find_by_id(self, user_id: int) -> User | None:
        return next((u for u in self._users.values() if u.id == user_id), None)

    def add(self, user: User) -> User:
        with self._lock:
            if user.username in self._users:
                raise UserAlreadyExistsError()
            new_user = User(
                id=self._seq,
                username=user.username,
                password_hash=user.password_hash,
                created_at=user.created_at,
            )
            self._seq += 1
            self._users[new_user.username] = new_user
            return new_user


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


class StaticTokenService(TokenService):
    def issue(self, user: User) -> str:
        return f"token-{user.id}"

    def verify(self, token: str | None) -> TokenClaims:
        raise NotImplementedError


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


def _register(users: InMemoryUserRepository) -> RegisterUserUseCase:
    return RegisterUserUseCase(users=users, password_hasher=DeterministicHasher())


def _login(users: InMemoryUserRepository) -> LoginUserUseCase:
    credentials = VerifyCredentialsUseCase(users=users, password_hasher=DeterministicHasher())
    return LoginUserUseCase(credentials=credentials, tokens=StaticTokenService())


def test_register_user_success(users: InMemoryUserRepository) -> None:
    user = _register(users).execute("alice", "pw1")

    assert user.id == 1
    assert user.username == "alice"
    assert user.password_hash == "hashed:pw1"
    assert user.created_at <= datetime.now(UTC)
    assert users.find_by_username("alice") == user


def test_register_user_duplicate_raises(users: InMemoryUserRepository) -> None:
    register = _register(users)
    register.execute("alice", "pw1")

    with pytest.raises(UserAlreadyExistsError):
        register.execute("alice", "other")


@pytest.mark.parametrize(("username", "password"), [("", "pw1"), ("alice", ""), ("", "")])
def test_register_user_requires_both_fields(
    users: InMemoryUserRepository, username: str, password: str
) -> None:
    with pytest.raises(InvalidInputError):
        _register(users).execute(username, password)
    assert users.find_by_username(username) is None


def test_verify_credentials_round_trip(users: InMemoryUserRepository) -> None:
    created = _register(users).execute("alice", "pw1")
    verify = VerifyCredentialsUseCase(users=users, password_hasher=DeterministicHasher())

    assert verify.execute("alice", "pw1") == created


def test_unknown_user_and_wrong_password_fail_identically(
    users: InMemoryUserRepository,
) -> None:
    _register(users).execute("alice", "pw1")
    verify = VerifyCredentialsUseCase(users=users, password_hasher=DeterministicHasher())

    with pytest.raises(InvalidCredentialsError) as wrong_password:
        verify.execute("alice", "wrong")
    with pytest.raises(InvalidCredentialsError) as unknown_user:
        verify.execute("bob", "pw1")

    assert wrong_password.value.to_dict() == unknown_user.value.to_dict()


def test_login_user_issues_token(users: InMemoryUserRepository) -> None:
    _register(users).execute("alice", "pw1")

    assert _login(users).execute("alice", "pw1") == "token-1"


def test_login_user_invalid_credentials(users: InMemoryUserRepository) -> None:
    _register(users).execute("alice", "pw1")

    with pytest.raises(InvalidCredentialsError):
        _login(users).execute("alice", "wrong")


def test_login_user_missing_fields(users: InMemoryUserRepository) -> None:
    with pytest.raises(InvalidInputError):
        _login(users).execute("alice", "")


class CountingHasher(DeterministicHasher):
    def __init__(self) -> None:
        self.verify_calls: list[str] = []

    def verify(self, password: str, hashed: str) -> bool:
        self.verify_calls.append(password)
        return super().verify(password, hashed)


def test_unknown_user_still_runs_one_hash_check(users: InMemoryUserRepository) -> None:
    _register(users).execute("alice", "pw1")
    hasher = CountingHasher()
    verify = VerifyCredentialsUseCase(users=users, password_hasher=hasher)

    with pytest.raises(InvalidCredentialsError):
        verify.execute("alice", "wrong")
    with pytest.raises(InvalidCredentialsError):
        verify.execute("bob", "guess")

    assert hasher.verify_calls == ["wrong", "guess"]


def test_unknown_user_never_matches_placeholder_hash(users: InMemoryUserRepository) -> None:
    verify = VerifyCredentialsUseCase(users=users, password_hasher=DeterministicHasher())

    with pytest.raises(InvalidCredentialsError):
        verify.execute("ghost", "unknown-user-placeholder")


def test_unknown_user_costs_about_as_much_as_wrong_password(
    users: InMemoryUserRepository,
) -> None:
    hasher = WerkzeugPasswordHasher()
    RegisterUserUseCase(users=users, password_hasher=hasher).execute("alice", "pw1")
    verify = VerifyCredentialsUseCase(users=users, password_hasher=hasher)

    def elapsed(username: str) -> float:
        started = time.perf_counter()
        for _ in range(3):
            with pytest.raises(InvalidCredentialsError):
                verify.execute(username, "wrong")
        return time.perf_counter() - started

    wrong_password, unknown_user = elapsed("alice"), elapsed("bob")

    assert unknown_user > wrong_password / 3
