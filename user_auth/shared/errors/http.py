# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Flask, Response, g, jsonify, request
from werkzeug.exceptions import HTTPException

from user_auth.shared.logging import get_correlation_id, logger

from .base import AppError, StoreError


def error_response(error: AppError) -> tuple[Response, HTTPStatus]:
    response = jsonify(error.to_dict())
    response.headers["X-Request-ID"] = get_correlation_id()
    return response, error.status


def _describe() -> str:
    return f"{request.method} {request.path} user={getattr(g, 'user_id', None)}"


def register_error_handler(
    app: Flask,
    *,
    debug_mode: bool = False,
    default_status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR,
) -> None:
    @app.errorhandler(AppError)
    def _handle_app_error(exc: AppError):
        if isinstance(exc, StoreError):
            logger.error(f"{exc.store} store failed ({exc.code}) on {_describe()}")
        elif exc.status >= HTTPStatus.INTERNAL_SERVER_ERROR:
            logger.error(f"{exc.code} on {_describe()}")
        else:
            # Codes only; request bodies may carry credentials.
            logger.warning(f"{exc.code} on {_describe()}")
        return error_response(exc)

    @app.errorhandler(HTTPException)
    def _handle_http(exc: HTTPException):
        return exc

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        if debug_mode:
            logger.exception(f"Unhandled {type(exc).__name__} on {_describe()}")
        else:
            logger.error(f"Unhandled {type(exc).__name__} on {_describe()}")
        return jsonify({"error": "internal_error"}), default_status


__all__ = ["error_response", "register_error_handler"]
