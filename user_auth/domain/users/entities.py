# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True, frozen=True)
class User:
    """Account record; ``email`` is stored normalized and is unique."""

    id: str
    name: str
    email: str
    password_hash: str
    is_admin: bool
    created_at: datetime
    updated_at: datetime


@dataclass(slots=True, frozen=True)
class Token:
    """A session credential as seen by callers of the session service.

    The token store only persists ``value -> owner_user_id``; ``expires_at``
    is informational and computed at issue time.
    """

    value: str
    owner_user_id: str
    expires_at: datetime | None
    created_at: datetime
