from __future__ import annotations

from collections.abc import Iterator
from dataclasses import replace
from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

import pytest
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError

from user_auth.domain.users.entities import User
from user_auth.domain.users.exceptions import EmailAlreadyExistsError, UserNotFoundError
from user_auth.infrastructure.db import build_engine, build_session_factory, init_db
from user_auth.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserStore,
)
from user_auth.shared.config import DatabaseConfig
from user_auth.shared.deadline import Deadline
from user_auth.shared.errors import StoreTimeoutError, StoreUnavailableError

from conftest import FakeClock


@pytest.fixture()
def engine() -> Iterator[Engine]:
    engine = build_engine(DatabaseConfig(DATABASE_URL="sqlite://"))
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def store(engine: Engine) -> SqlAlchemyUserStore:
    return SqlAlchemyUserStore(build_session_factory(engine))


def _user(user_id: str, email: str, *, created_at: datetime | None = None) -> User:
    now = created_at or datetime.now(UTC)
    return User(
        id=user_id,
        name=f"user {user_id}",
        email=email,
        password_hash="pbkdf2:sha256:1$salt$hash",
        is_admin=False,
        created_at=now,
        updated_at=now,
    )


def test_save_and_lookup(store: SqlAlchemyUserStore) -> None:
    saved = store.save(_user("u1", "ann@x.com"))

    assert store.get_by_id("u1") == saved
    assert store.get_by_email("ann@x.com").id == "u1"
    assert saved.created_at.tzinfo is not None


def test_missing_user(store: SqlAlchemyUserStore) -> None:
    with pytest.raises(UserNotFoundError):
        store.get_by_id("nope")
    with pytest.raises(UserNotFoundError):
        store.get_by_email("nope@x.com")


def test_duplicate_email_is_rejected(store: SqlAlchemyUserStore) -> None:
    store.save(_user("u1", "ann@x.com"))

    with pytest.raises(EmailAlreadyExistsError):
        store.save(_user("u2", "ann@x.com"))


def test_update_persists_changes(store: SqlAlchemyUserStore) -> None:
    original = store.save(_user("u1", "ann@x.com"))
    later = original.updated_at + timedelta(seconds=5)

    store.update(replace(original, name="Annie", email="annie@x.com", updated_at=later))

    reloaded = store.get_by_id("u1")
    assert reloaded.name == "Annie"
    assert reloaded.email == "annie@x.com"
    assert reloaded.updated_at == later
    assert reloaded.created_at == original.created_at


def test_update_unknown_user(store: SqlAlchemyUserStore) -> None:
    with pytest.raises(UserNotFoundError):
        store.update(_user("ghost", "ghost@x.com"))


def test_get_all_orders_by_creation(store: SqlAlchemyUserStore) -> None:
    base = datetime(2024, 1, 1, tzinfo=UTC)
    store.save(_user("late", "late@x.com", created_at=base + timedelta(hours=1)))
    store.save(_user("early", "early@x.com", created_at=base))

    assert [user.id for user in store.get_all()] == ["early", "late"]


def test_delete_is_idempotent(store: SqlAlchemyUserStore) -> None:
    store.save(_user("u1", "ann@x.com"))

    store.delete("u1")
    store.delete("u1")

    with pytest.raises(UserNotFoundError):
        store.get_by_id("u1")


def test_expired_deadline(store: SqlAlchemyUserStore) -> None:
    deadline = Deadline(expires_at=0.0, clock=lambda: 1.0)

    with pytest.raises(StoreTimeoutError):
        store.get_all(deadline=deadline)


def test_database_error_maps_to_unavailable() -> None:
    session = MagicMock()
    session.get.side_effect = OperationalError("SELECT", {}, Exception("disk I/O error"))
    factory = MagicMock(return_value=session)

    with pytest.raises(StoreUnavailableError):
        SqlAlchemyUserStore(factory).get_by_id("u1")

    session.rollback.assert_called_once()


def test_write_finishing_after_deadline_is_rolled_back(
    engine: Engine, store: SqlAlchemyUserStore
) -> None:
    clock = FakeClock()
    deadline = Deadline.after(1.0, clock=clock)

    def _slow_statement(*_args: object) -> None:
        clock.advance(5.0)

    event.listen(engine, "before_cursor_execute", _slow_statement)
    try:
        with pytest.raises(StoreTimeoutError):
            store.save(_user("u1", "ann@x.com"), deadline=deadline)
    finally:
        event.remove(engine, "before_cursor_execute", _slow_statement)

    with pytest.raises(UserNotFoundError):
        store.get_by_id("u1")


def test_postgres_statement_timeout_follows_deadline() -> None:
    session = MagicMock()
    session.get_bind.return_value.dialect.name = "postgresql"
    session.scalars.return_value.all.return_value = []
    store = SqlAlchemyUserStore(MagicMock(return_value=session))

    assert store.get_all(deadline=Deadline.after(2.0)) == []

    statement = str(session.execute.call_args.args[0])
    assert statement.startswith("SET LOCAL statement_timeout = ")
    assert 0 < int(statement.rsplit(" ", 1)[1]) <= 2000
