# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from user_auth.shared.errors.base import DomainError


class UserValidationError(DomainError):
    code = "invalid_user"
    status = HTTPStatus.BAD_REQUEST


class EmptyNameError(UserValidationError):
    code = "empty_name"


class EmptyPasswordError(UserValidationError):
    code = "empty_password"


class InvalidEmailError(UserValidationError):
    code = "invalid_email"


class EmailAlreadyExistsError(DomainError):
    code = "email_already_exists"
    status = HTTPStatus.CONFLICT


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED


class MissingTokenError(DomainError):
    code = "missing_token"
    status = HTTPStatus.BAD_REQUEST


class UnauthorizedError(DomainError):
    code = "unauthorized"
    status = HTTPStatus.UNAUTHORIZED


class ForbiddenError(DomainError):
    code = "forbidden"
    status = HTTPStatus.FORBIDDEN


class UserNotFoundError(DomainError):
    code = "user_not_found"
    status = HTTPStatus.NOT_FOUND


class TokenNotFoundError(DomainError):
    code = "token_not_found"
    status = HTTPStatus.NOT_FOUND


class TokenIssuanceError(DomainError):
    code = "token_issuance_failed"
    status = HTTPStatus.INTERNAL_SERVER_ERROR
