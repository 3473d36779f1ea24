# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets

# 48 random bytes -> 64 url-safe characters, 384 bits of entropy
TOKEN_BYTES = 48


def generate_token() -> str:
    return secrets.token_urlsafe(TOKEN_BYTES)


__all__ = ["TOKEN_BYTES", "generate_token"]
