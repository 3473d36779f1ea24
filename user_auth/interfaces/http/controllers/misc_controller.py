# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus
from typing import Protocol

from flask import Blueprint, jsonify
from sqlalchemy.engine import Engine

from user_auth import __version__
from user_auth.infrastructure.health import check_database
from user_auth.interfaces.http.controllers.auth_controller import API_PREFIX

_ENDPOINTS = {
    "GET| /": "Service info",
    "GET| <api>/ping": "Health check",
    "POST| <api>/signup": "Create a new user",
    "POST| <api>/signin": "Sign in and get token",
    "POST| <api>/refresh": "Refresh token",
    "GET| <api>/auth": "Get user based on token",
    "POST| <api>/signout": "Revoke token",
    "GET| <api>/users/": "Get all users",
    "GET| <api>/users/:id": "Get user by id",
    "PUT| <api>/users/:id": "Update user by id",
    "DELETE| <api>/users/:id": "Delete user by id",
}


class _Pingable(Protocol):
    def ping(self) -> bool: ...


class MiscController:
    def __init__(self, *, engine: Engine, token_store: _Pingable) -> None:
        self._engine = engine
        self._token_store = token_store

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule("/", view_func=self.service_info, methods=["GET"])
        bp.add_url_rule(f"{API_PREFIX}/ping", view_func=self.ping, methods=["GET"])
        bp.add_url_rule("/api/health", view_func=self.health, methods=["GET"])
        return bp

    def service_info(self):
        return jsonify(
            {
                "message": "Welcome to user-auth",
                "service": "user-auth",
                "status": HTTPStatus.OK,
                "version": __version__,
                "api_base_endpoint": API_PREFIX,
                "api_endpoints": _ENDPOINTS,
            }
        )

    def ping(self):
        return jsonify({"message": "pong"})

    def health(self):
        status: dict[str, object] = {"ok": True}
        try:
            check_database(self._engine)
            status["database"] = "ok"
        except Exception as exc:  # pragma: no cover
            status["ok"] = False
            status["database"] = f"error: {type(exc).__name__}"
        try:
            self._token_store.ping()
            status["tokens"] = "ok"
        except Exception as exc:  # pragma: no cover
            status["ok"] = False
            status["tokens"] = f"error: {type(exc).__name__}"
        code = HTTPStatus.OK if status["ok"] else HTTPStatus.SERVICE_UNAVAILABLE
        return jsonify(status), code
