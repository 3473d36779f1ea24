# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

from flask import request

from user_auth.shared.errors import ValidationError


def presented_token() -> str:
    """Raw token from the Authorization header; no scheme prefix is expected."""
    return request.headers.get("Authorization", "")


def json_body() -> Any:
    payload = request.get_json(silent=True)
    if payload is None:
        if request.get_data(cache=True):
            raise ValidationError(code="malformed_json")
        return {}
    return payload


def client_ip() -> str | None:
    ip_address = request.headers.get("X-Forwarded-For", request.remote_addr)
    if ip_address and "," in ip_address:
        ip_address = ip_address.split(",")[0].strip()
    return ip_address


__all__ = ["client_ip", "json_body", "presented_token"]
