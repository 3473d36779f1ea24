# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, Response, g, jsonify
from pydantic import ValidationError

from user_auth.application.use_cases.users.session_service import SessionService
from user_auth.interfaces.http.dto.auth import (
    AuthResponseDTO,
    SignInRequestDTO,
    SignInResponseDTO,
    SignUpRequestDTO,
    TokenResponseDTO,
    UserDTO,
)
from user_auth.interfaces.http.request_context import client_ip, json_body, presented_token
from user_auth.shared.deadline import Deadline
from user_auth.shared.errors.validation import raise_validation_error
from user_auth.shared.logging import logger

API_PREFIX = "/api/v1"


class AuthController:
    def __init__(self, *, sessions: SessionService, deadline_seconds: float) -> None:
        self._sessions = sessions
        self._deadline_seconds = deadline_seconds

    def _deadline(self) -> Deadline:
        return Deadline.after(self._deadline_seconds)

    def sign_up(self) -> tuple[Response, int]:
        try:
            dto = SignUpRequestDTO.model_validate(json_body())
        except ValidationError as exc:
            raise_validation_error(exc)

        user = self._sessions.sign_up(
            dto.name, dto.email, dto.password, dto.admin, deadline=self._deadline()
        )
        logger.info(f"auth.signup: ok user_id={user.id} ip={client_ip()}")
        return jsonify(UserDTO.from_entity(user).model_dump(mode="json")), HTTPStatus.CREATED

    def sign_in(self) -> tuple[Response, int]:
        try:
            dto = SignInRequestDTO.model_validate(json_body())
        except ValidationError as exc:
            raise_validation_error(exc)

        user, token = self._sessions.sign_in(dto.email, dto.password, deadline=self._deadline())
        g.user_id = user.id
        logger.info(f"auth.signin: ok user_id={user.id} ip={client_ip()}")
        payload = SignInResponseDTO(user=UserDTO.from_entity(user), token=token.value)
        return jsonify(payload.model_dump(mode="json")), HTTPStatus.OK

    def refresh(self) -> tuple[Response, int]:
        token = self._sessions.refresh(presented_token(), deadline=self._deadline())
        g.user_id = token.owner_user_id
        logger.info(f"auth.refresh: ok user_id={token.owner_user_id}")
        return jsonify(TokenResponseDTO(token=token.value).model_dump()), HTTPStatus.OK

    def authenticate(self) -> tuple[Response, int]:
        user_id = self._sessions.authenticate(presented_token(), deadline=self._deadline())
        g.user_id = user_id
        return jsonify(AuthResponseDTO(user_id=user_id).model_dump()), HTTPStatus.OK

    def sign_out(self) -> tuple[str, int]:
        self._sessions.sign_out(presented_token(), deadline=self._deadline())
        logger.info("auth.signout: ok")
        return "", HTTPStatus.NO_CONTENT

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix=API_PREFIX)
        bp.add_url_rule("/signup", view_func=self.sign_up, methods=["POST"])
        bp.add_url_rule("/signin", view_func=self.sign_in, methods=["POST"])
        bp.add_url_rule("/refresh", view_func=self.refresh, methods=["POST"])
        bp.add_url_rule("/auth", view_func=self.authenticate, methods=["GET"])
        bp.add_url_rule("/signout", view_func=self.sign_out, methods=["POST"])
        return bp
