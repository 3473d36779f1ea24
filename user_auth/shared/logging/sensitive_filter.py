# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Redaction applied to every log record before it reaches a sink.

Session tokens, password material and connection credentials must never be
written to logs; email addresses keep only their domain.
"""

from __future__ import annotations

import re
from typing import Any

_MASK = "***REDACTED***"

_RULES: list[tuple[re.Pattern[str], str]] = [
    # key=value / key: value pairs, including JSON-ish quoting
    (
        re.compile(
            r"""(\b(?:secret[_-]?key|password(?:_hash)?|authorization|token)["']?\s*[:=]\s*["']?)"""
            r"""([^"'\s,}]+)""",
            re.IGNORECASE,
        ),
        rf"\1{_MASK}",
    ),
    (re.compile(r"(\bbearer\s+)([\w\-.~+/]+=*)", re.IGNORECASE), rf"\1{_MASK}"),
    # werkzeug hashes: scrypt:32768:8:1$salt$hex, pbkdf2:sha256:600000$salt$hex
    (re.compile(r"\b(?:scrypt|pbkdf2)(?::[\w]+)*\$[^$\s]+\$[0-9a-f]+"), _MASK),
    # credentials embedded in database / redis URLs
    (
        re.compile(r"\b((?:postgres(?:ql)?|mysql|rediss?)(?:\+\w+)?://[^:/@\s]*:)([^@\s]+)@"),
        rf"\1{_MASK}@",
    ),
    (re.compile(r"[\w.%+-]+@([\w-]+(?:\.[\w-]+)*\.[a-zA-Z]{2,})"), r"***@\1"),
]


def sanitize_message(message: str) -> str:
    for pattern, replacement in _RULES:
        message = pattern.sub(replacement, message)
    return message


def sanitize_record(record: dict[str, Any]) -> bool:
    """loguru ``filter=`` hook; rewrites the message in place and keeps the record."""
    message = record.get("message")
    if message:
        record["message"] = sanitize_message(message)
    return True


__all__ = ["sanitize_message", "sanitize_record"]
