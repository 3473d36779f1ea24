# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from datetime import UTC, datetime

from sqlalchemy import delete, select, text
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session, sessionmaker

from user_auth.domain.users.entities import User as DomainUser
from user_auth.domain.users.exceptions import EmailAlreadyExistsError, UserNotFoundError
from user_auth.infrastructure.db.models import User
from user_auth.infrastructure.db.session import session_scope
from user_auth.shared.deadline import Deadline, check_deadline
from user_auth.shared.errors import StoreTimeoutError, StoreUnavailableError
from user_auth.shared.logging import logger

_STORE = "users"


def _aware(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        name=row.name,
        email=row.email,
        password_hash=row.password_hash,
        is_admin=bool(row.is_admin),
        created_at=_aware(row.created_at),
        updated_at=_aware(row.updated_at),
    )


def _limit_statements(session: Session, deadline: Deadline | None) -> None:
    """Cap server-side statement time at the remaining deadline (PostgreSQL)."""
    if deadline is None or session.get_bind().dialect.name != "postgresql":
        return
    timeout_ms = max(1, int(deadline.remaining() * 1000))
    # SET does not take bind parameters; timeout_ms is an int.
    session.execute(text(f"SET LOCAL statement_timeout = {timeout_ms}"))


class SqlAlchemyUserStore:
    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    @contextmanager
    def _session(self, deadline: Deadline | None) -> Iterator[Session]:
        check_deadline(deadline, _STORE)
        try:
            with session_scope(self._session_factory) as session:
                _limit_statements(session, deadline)
                yield session
                # Raising here rolls back work that finished past the deadline.
                check_deadline(deadline, _STORE)
        except IntegrityError as exc:
            raise EmailAlreadyExistsError() from exc
        except PoolTimeoutError as exc:
            logger.error(f"users: connection pool timeout: {exc}")
            raise StoreTimeoutError(_STORE) from exc
        except DBAPIError as exc:
            logger.error(f"users: database error: {type(exc.orig).__name__}")
            raise StoreUnavailableError(_STORE) from exc

    def save(self, user: DomainUser, *, deadline: Deadline | None = None) -> DomainUser:
        with self._session(deadline) as session:
            row = User(
                id=user.id,
                name=user.name,
                email=user.email,
                password_hash=user.password_hash,
                is_admin=user.is_admin,
                created_at=user.created_at,
                updated_at=user.updated_at,
            )
            session.add(row)
            session.flush()
            saved = _to_domain(row)
        logger.info(f"users: saved user {saved.id}")
        return saved

    def update(self, user: DomainUser, *, deadline: Deadline | None = None) -> DomainUser:
        with self._session(deadline) as session:
            row = session.get(User, user.id)
            if row is None:
                raise UserNotFoundError(context={"user_id": user.id})
            row.name = user.name
            row.email = user.email
            row.password_hash = user.password_hash
            row.updated_at = user.updated_at
            session.flush()
            updated = _to_domain(row)
        logger.info(f"users: updated user {updated.id}")
        return updated

    def get_by_id(self, user_id: str, *, deadline: Deadline | None = None) -> DomainUser:
        with self._session(deadline) as session:
            row = session.get(User, user_id)
            if row is None:
                raise UserNotFoundError(context={"user_id": user_id})
            return _to_domain(row)

    def get_by_email(self, email: str, *, deadline: Deadline | None = None) -> DomainUser:
        with self._session(deadline) as session:
            row = session.scalars(select(User).where(User.email == email)).first()
            if row is None:
                raise UserNotFoundError()
            return _to_domain(row)

    def get_all(self, *, deadline: Deadline | None = None) -> Sequence[DomainUser]:
        with self._session(deadline) as session:
            rows = session.scalars(select(User).order_by(User.created_at)).all()
            return [_to_domain(row) for row in rows]

    def delete(self, user_id: str, *, deadline: Deadline | None = None) -> None:
        with self._session(deadline) as session:
            result = session.execute(delete(User).where(User.id == user_id))
        if result.rowcount:
            logger.info(f"users: deleted user {user_id}")


__all__ = ["SqlAlchemyUserStore"]
