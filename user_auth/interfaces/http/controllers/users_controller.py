# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, Response, g, jsonify, make_response
from pydantic import ValidationError

from user_auth.application.use_cases.users.user_service import UserService
from user_auth.interfaces.http.controllers.auth_controller import API_PREFIX
from user_auth.interfaces.http.dto.auth import UserDTO
from user_auth.interfaces.http.dto.users import UpdateUserRequestDTO
from user_auth.interfaces.http.request_context import json_body, presented_token
from user_auth.shared.deadline import Deadline
from user_auth.shared.errors.validation import raise_validation_error
from user_auth.shared.logging import logger


class UsersController:
    def __init__(self, *, users: UserService, deadline_seconds: float) -> None:
        self._users = users
        self._deadline_seconds = deadline_seconds

    def _deadline(self) -> Deadline:
        return Deadline.after(self._deadline_seconds)

    def list_users(self) -> tuple[Response, int]:
        users = self._users.list_users(presented_token(), deadline=self._deadline())
        payload = [UserDTO.from_entity(user).model_dump(mode="json") for user in users]
        return jsonify(payload), HTTPStatus.OK

    def get_user(self, user_id: str) -> tuple[Response, int]:
        user = self._users.get_user(presented_token(), user_id, deadline=self._deadline())
        g.user_id = user.id
        return jsonify(UserDTO.from_entity(user).model_dump(mode="json")), HTTPStatus.OK

    def update_user(self, user_id: str) -> tuple[Response, int]:
        try:
            dto = UpdateUserRequestDTO.model_validate(json_body())
        except ValidationError as exc:
            raise_validation_error(exc)

        user = self._users.update_user(
            presented_token(),
            user_id,
            name=dto.name,
            email=dto.email,
            password=dto.password,
            deadline=self._deadline(),
        )
        g.user_id = user.id
        logger.info(f"users.update: ok user_id={user.id}")
        return jsonify(UserDTO.from_entity(user).model_dump(mode="json")), HTTPStatus.OK

    def delete_user(self, user_id: str) -> Response:
        self._users.delete_user(presented_token(), user_id, deadline=self._deadline())
        logger.info(f"users.delete: ok user_id={user_id}")
        response = make_response("", HTTPStatus.NO_CONTENT)
        response.headers["Entity"] = user_id
        return response

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("users", __name__, url_prefix=f"{API_PREFIX}/users")
        bp.add_url_rule("", view_func=self.list_users, methods=["GET"], strict_slashes=False)
        bp.add_url_rule("/<user_id>", view_func=self.get_user, methods=["GET"])
        bp.add_url_rule("/<user_id>", view_func=self.update_user, methods=["PUT"])
        bp.add_url_rule("/<user_id>", view_func=self.delete_user, methods=["DELETE"])
        return bp
