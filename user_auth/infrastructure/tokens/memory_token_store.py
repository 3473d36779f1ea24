# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock

from user_auth.domain.users.exceptions import TokenNotFoundError
from user_auth.domain.users.repositories import DEFAULT_TTL_SECONDS
from user_auth.shared.deadline import Deadline, check_deadline
from user_auth.shared.logging import logger

_STORE = "tokens"


@dataclass(slots=True)
class TokenEntry:
    user_id: str
    expires_at: float | None

    def is_expired(self, now: float) -> bool:
        return self.expires_at is not None and now >= self.expires_at


class InMemoryTokenStore:
    """Process-local token store for development and tests."""

    def __init__(
        self,
        *,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = Lock()
        self._entries: dict[str, TokenEntry] = {}

    def create(
        self, token: str, user_id: str, expiring: bool, *, deadline: Deadline | None = None
    ) -> None:
        check_deadline(deadline, _STORE)
        expires_at = self._clock() + self.ttl_seconds if expiring else None
        with self._lock:
            self._entries[token] = TokenEntry(user_id=user_id, expires_at=expires_at)
        expires = f"in {self.ttl_seconds} seconds" if expiring else "never"
        logger.info(f"tokens: created token for user {user_id} that expires {expires}")

    def retrieve(self, token: str, *, deadline: Deadline | None = None) -> str:
        check_deadline(deadline, _STORE)
        with self._lock:
            entry = self._entries.get(token)
            if entry is None:
                raise TokenNotFoundError()
            if entry.is_expired(self._clock()):
                self._entries.pop(token, None)
                raise TokenNotFoundError()
            return entry.user_id

    def delete(self, token: str, *, deadline: Deadline | None = None) -> None:
        check_deadline(deadline, _STORE)
        with self._lock:
            self._entries.pop(token, None)
        logger.debug("tokens: deleted token")

    def delete_for_user(self, user_id: str, *, deadline: Deadline | None = None) -> int:
        check_deadline(deadline, _STORE)
        now = self._clock()
        removed = 0
        with self._lock:
            for token, entry in list(self._entries.items()):
                if entry.user_id != user_id:
                    continue
                self._entries.pop(token, None)
                if not entry.is_expired(now):
                    removed += 1
        logger.info(f"tokens: revoked {removed} token(s) for user {user_id}")
        return removed

    def ping(self) -> bool:
        return True


__all__ = ["InMemoryTokenStore", "TokenEntry"]
