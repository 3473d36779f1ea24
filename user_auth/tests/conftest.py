from __future__ import annotations

from collections.abc import Iterator, Sequence

import pytest
from flask import Flask

from user_auth.app import create_app
from user_auth.application.services.password_hashing import WerkzeugPasswordHasher
from user_auth.application.use_cases.users.session_service import SessionService
from user_auth.application.use_cases.users.user_service import UserService
from user_auth.domain.users.entities import User
from user_auth.domain.users.exceptions import EmailAlreadyExistsError, UserNotFoundError
from user_auth.domain.users.repositories import PasswordHasher, UserStore
from user_auth.infrastructure.container import Container
from user_auth.infrastructure.tokens.memory_token_store import InMemoryTokenStore
from user_auth.shared.config import AppConfig, DatabaseConfig, TokenConfig
from user_auth.shared.deadline import Deadline, check_deadline


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


class InMemoryUserStore(UserStore):
    def __init__(self) -> None:
        self._users: dict[str, User] = {}

    def save(self, user: User, *, deadline: Deadline | None = None) -> User:
        check_deadline(deadline, "users")
        if any(u.email == user.email for u in self._users.values()):
            raise EmailAlreadyExistsError()
        self._users[user.id] = user
        return user

    def update(self, user: User, *, deadline: Deadline | None = None) -> User:
        check_deadline(deadline, "users")
        if user.id not in self._users:
            raise UserNotFoundError()
        if any(u.email == user.email and u.id != user.id for u in self._users.values()):
            raise EmailAlreadyExistsError()
        self._users[user.id] = user
        return user

    def get_by_id(self, user_id: str, *, deadline: Deadline | None = None) -> User:
        check_deadline(deadline, "users")
        try:
            return self._users[user_id]
        except KeyError:
            raise UserNotFoundError() from None

    def get_by_email(self, email: str, *, deadline: Deadline | None = None) -> User:
        check_deadline(deadline, "users")
        for user in self._users.values():
            if user.email == email:
                return user
        raise UserNotFoundError()

    def get_all(self, *, deadline: Deadline | None = None) -> Sequence[User]:
        check_deadline(deadline, "users")
        return list(self._users.values())

    def delete(self, user_id: str, *, deadline: Deadline | None = None) -> None:
        check_deadline(deadline, "users")
        self._users.pop(user_id, None)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def users() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture()
def tokens(clock: FakeClock) -> InMemoryTokenStore:
    return InMemoryTokenStore(ttl_seconds=900, clock=clock)


@pytest.fixture()
def sessions(users: InMemoryUserStore, tokens: InMemoryTokenStore) -> SessionService:
    return SessionService(users=users, tokens=tokens, password_hasher=DeterministicHasher())


@pytest.fixture()
def user_service(
    sessions: SessionService, users: InMemoryUserStore, tokens: InMemoryTokenStore
) -> UserService:
    return UserService(
        sessions=sessions, users=users, tokens=tokens, password_hasher=DeterministicHasher()
    )


@pytest.fixture()
def container() -> Iterator[Container]:
    config = AppConfig(
        database=DatabaseConfig(DATABASE_URL="sqlite://"),
        tokens=TokenConfig(TOKEN_STORE_BACKEND="memory"),
        LOG_LEVEL="WARNING",
        LOG_FILE=None,
    )
    container = Container(config)
    container.password_hasher = WerkzeugPasswordHasher(method="pbkdf2:sha256:1000")
    yield container
    container.close()


@pytest.fixture()
def flask_app(container: Container) -> Flask:
    return create_app(container)
