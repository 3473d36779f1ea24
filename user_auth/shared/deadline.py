# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Caller-supplied deadlines for store calls."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field

from user_auth.shared.errors import StoreTimeoutError


@dataclass(frozen=True, slots=True)
class Deadline:
    expires_at: float
    clock: Callable[[], float] = field(default=time.monotonic, compare=False)

    @classmethod
    def after(cls, seconds: float, *, clock: Callable[[], float] = time.monotonic) -> Deadline:
        return cls(expires_at=clock() + seconds, clock=clock)

    def remaining(self) -> float:
        return max(0.0, self.expires_at - self.clock())

    @property
    def expired(self) -> bool:
        return self.clock() >= self.expires_at


def check_deadline(deadline: Deadline | None, store: str) -> None:
    """Raise StoreTimeoutError if the deadline has already passed."""
    if deadline is not None and deadline.expired:
        raise StoreTimeoutError(store)


__all__ = ["Deadline", "check_deadline"]
