# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from user_auth.shared.deadline import Deadline

from .entities import User

# Lifetime of tokens issued by sign-in and refresh: 15 minutes.
DEFAULT_TTL_SECONDS = 15 * 60


class UserStore(Protocol):
    def save(self, user: User, *, deadline: Deadline | None = None) -> User: ...
    def update(self, user: User, *, deadline: Deadline | None = None) -> User: ...
    def get_by_id(self, user_id: str, *, deadline: Deadline | None = None) -> User: ...
    def get_by_email(self, email: str, *, deadline: Deadline | None = None) -> User: ...
    def get_all(self, *, deadline: Deadline | None = None) -> Sequence[User]: ...
    def delete(self, user_id: str, *, deadline: Deadline | None = None) -> None: ...


class TokenStore(Protocol):
    ttl_seconds: int

    def create(
        self, token: str, user_id: str, expiring: bool, *, deadline: Deadline | None = None
    ) -> None: ...
    def retrieve(self, token: str, *, deadline: Deadline | None = None) -> str: ...
    def delete(self, token: str, *, deadline: Deadline | None = None) -> None: ...
    def delete_for_user(self, user_id: str, *, deadline: Deadline | None = None) -> int: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...
