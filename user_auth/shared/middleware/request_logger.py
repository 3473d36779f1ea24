# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hashlib
import secrets
import time

from flask import Flask, Response, g, request

from user_auth.shared.logging import (
    clear_correlation_id,
    get_correlation_id,
    logger,
    set_correlation_id,
)

REQUEST_ID_HEADER = "X-Request-ID"

# Session tokens travel raw in Authorization; only a short digest is logged.
_CREDENTIAL_HEADERS = frozenset({"authorization", "cookie", "x-api-key"})

# Health checks hit these every few seconds.
_QUIET_PATHS = frozenset({"/api/v1/ping", "/api/health"})


def _client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.remote_addr or "unknown"


def _fingerprint(value: str) -> str:
    return f"<sha256:{hashlib.sha256(value.encode()).hexdigest()[:8]}>"


def _loggable_headers() -> dict[str, str]:
    return {
        key: _fingerprint(value) if key.lower() in _CREDENTIAL_HEADERS else value
        for key, value in request.headers.items()
    }


def configure_request_logging(app: Flask, *, debug_mode: bool = False) -> None:
    @app.before_request
    def _before_request() -> None:
        set_correlation_id(request.headers.get(REQUEST_ID_HEADER) or secrets.token_hex(8))
        g.request_started = time.perf_counter()

        if request.path in _QUIET_PATHS:
            return
        if debug_mode:
            logger.info(
                f"--> {request.method} {request.path} from {_client_ip()} "
                f"headers={_loggable_headers()} body_size={request.content_length or 0}"
            )
        else:
            logger.info(f"--> {request.method} {request.path} from {_client_ip()}")

    @app.after_request
    def _after_request(response: Response) -> Response:
        elapsed_ms = (time.perf_counter() - g.get("request_started", time.perf_counter())) * 1000
        message = (
            f"<-- {request.method} {request.path} {response.status_code} "
            f"in {elapsed_ms:.1f} ms user={g.get('user_id')}"
        )
        if request.path in _QUIET_PATHS:
            logger.debug(message)
        else:
            logger.info(message)
        response.headers.setdefault(REQUEST_ID_HEADER, get_correlation_id())
        return response

    @app.teardown_request
    def _teardown_request(_exc: BaseException | None) -> None:
        clear_correlation_id()


__all__ = ["REQUEST_ID_HEADER", "configure_request_logging"]
