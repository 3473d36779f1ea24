# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace
from datetime import UTC, datetime

from user_auth.application.services.emails import is_valid_email, normalize_email
from user_auth.application.use_cases.users.session_service import SessionService
from user_auth.domain.users.entities import User
from user_auth.domain.users.exceptions import (
    EmailAlreadyExistsError,
    ForbiddenError,
    InvalidEmailError,
    UserNotFoundError,
)
from user_auth.domain.users.repositories import PasswordHasher, TokenStore, UserStore
from user_auth.shared.deadline import Deadline


class UserService:
    """Profile operations available to an authenticated account owner."""

    def __init__(
        self,
        *,
        sessions: SessionService,
        users: UserStore,
        tokens: TokenStore,
        password_hasher: PasswordHasher,
    ) -> None:
        self._sessions = sessions
        self._users = users
        self._tokens = tokens
        self._password_hasher = password_hasher

    def list_users(self, token: str, *, deadline: Deadline | None = None) -> Sequence[User]:
        self._sessions.authenticate(token, deadline=deadline)
        return self._users.get_all(deadline=deadline)

    def get_user(self, token: str, user_id: str, *, deadline: Deadline | None = None) -> User:
        owner_id = self._authorize_owner(token, user_id, deadline=deadline)
        return self._users.get_by_id(owner_id, deadline=deadline)

    def update_user(
        self,
        token: str,
        user_id: str,
        *,
        name: str | None = None,
        email: str | None = None,
        password: str | None = None,
        deadline: Deadline | None = None,
    ) -> User:
        owner_id = self._authorize_owner(token, user_id, deadline=deadline)
        user = self._users.get_by_id(owner_id, deadline=deadline)
        changes: dict[str, object] = {}

        if name and name.strip():
            changes["name"] = name.strip()

        if email is not None and email.strip():
            normalized = normalize_email(email)
            if not is_valid_email(normalized):
                raise InvalidEmailError()
            if normalized != user.email:
                try:
                    existing = self._users.get_by_email(normalized, deadline=deadline)
                except UserNotFoundError:
                    pass
                else:
                    if existing.id != owner_id:
                        raise EmailAlreadyExistsError()
                changes["email"] = normalized

        if password:
            # Other live sessions of this user stay valid after a password change.
            changes["password_hash"] = self._password_hasher.hash(password)

        if not changes:
            return user

        updated = replace(user, updated_at=datetime.now(UTC), **changes)
        return self._users.update(updated, deadline=deadline)

    def delete_user(self, token: str, user_id: str, *, deadline: Deadline | None = None) -> None:
        owner_id = self._authorize_owner(token, user_id, deadline=deadline)
        self._tokens.delete_for_user(owner_id, deadline=deadline)
        self._tokens.delete(token, deadline=deadline)
        self._users.delete(owner_id, deadline=deadline)

    def _authorize_owner(self, token: str, user_id: str, *, deadline: Deadline | None) -> str:
        owner_id = self._sessions.authenticate(token, deadline=deadline)
        if user_id != owner_id:
            raise ForbiddenError()
        return owner_id


__all__ = ["UserService"]
