# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Session lifecycle: sign-up, sign-in, refresh, authenticate, sign-out."""

from __future__ import annotations

import uuid
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from user_auth.application.services.emails import is_valid_email, normalize_email
from user_auth.application.services.tokens import generate_token
from user_auth.domain.users.entities import Token, User
from user_auth.domain.users.exceptions import (
    EmailAlreadyExistsError,
    EmptyNameError,
    EmptyPasswordError,
    InvalidCredentialsError,
    InvalidEmailError,
    MissingTokenError,
    TokenIssuanceError,
    UnauthorizedError,
    UserNotFoundError,
)
from user_auth.domain.users.repositories import PasswordHasher, TokenStore, UserStore
from user_auth.shared.deadline import Deadline
from user_auth.shared.errors import AppError


class SessionService:
    def __init__(
        self,
        *,
        users: UserStore,
        tokens: TokenStore,
        password_hasher: PasswordHasher,
        token_factory: Callable[[], str] = generate_token,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._password_hasher = password_hasher
        self._token_factory = token_factory
        # Verified against when the email is unknown, so both sign-in failure
        # paths cost one hash verification.
        self._dummy_hash = password_hasher.hash(uuid.uuid4().hex)

    def sign_up(
        self,
        name: str,
        email: str,
        password: str,
        is_admin: bool = False,
        *,
        deadline: Deadline | None = None,
    ) -> User:
        name = (name or "").strip()
        if not name:
            raise EmptyNameError()
        email = normalize_email(email)
        if not email:
            raise InvalidEmailError()
        if not password or not password.strip():
            raise EmptyPasswordError()
        if not is_valid_email(email):
            raise InvalidEmailError()

        try:
            self._users.get_by_email(email, deadline=deadline)
        except UserNotFoundError:
            pass
        else:
            raise EmailAlreadyExistsError()

        now = datetime.now(UTC)
        user = User(
            id=uuid.uuid4().hex,
            name=name,
            email=email,
            password_hash=self._password_hasher.hash(password),
            is_admin=bool(is_admin),
            created_at=now,
            updated_at=now,
        )
        return self._users.save(user, deadline=deadline)

    def sign_in(
        self, email: str, password: str, *, deadline: Deadline | None = None
    ) -> tuple[User, Token]:
        email = normalize_email(email)
        try:
            user = self._users.get_by_email(email, deadline=deadline)
        except UserNotFoundError:
            self._password_hasher.verify(password or "", self._dummy_hash)
            raise InvalidCredentialsError() from None

        if not self._password_hasher.verify(password or "", user.password_hash):
            raise InvalidCredentialsError()

        token = self._issue(user.id, deadline=deadline)
        return user, token

    def refresh(self, presented_token: str, *, deadline: Deadline | None = None) -> Token:
        user_id = self.authenticate(presented_token, deadline=deadline)
        token = self._issue(user_id, deadline=deadline)
        # The old token is removed only once its replacement exists.
        self._tokens.delete(presented_token, deadline=deadline)
        return token

    def authenticate(self, presented_token: str, *, deadline: Deadline | None = None) -> str:
        if not presented_token:
            raise MissingTokenError()
        try:
            user_id = self._tokens.retrieve(presented_token, deadline=deadline)
        except AppError as exc:
            raise UnauthorizedError() from exc
        if not user_id:
            raise UnauthorizedError()
        return user_id

    def sign_out(self, presented_token: str, *, deadline: Deadline | None = None) -> None:
        if presented_token:
            self._tokens.delete(presented_token, deadline=deadline)

    def _issue(self, user_id: str, *, deadline: Deadline | None) -> Token:
        now = datetime.now(UTC)
        try:
            value = self._token_factory()
            self._tokens.create(value, user_id, True, deadline=deadline)
        except AppError as exc:
            raise TokenIssuanceError(context={"cause": exc.code}) from exc
        return Token(
            value=value,
            owner_user_id=user_id,
            expires_at=now + timedelta(seconds=self._tokens.ttl_seconds),
            created_at=now,
        )


__all__ = ["SessionService"]
