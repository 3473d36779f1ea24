# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .users.entities import Token, User
from .users.exceptions import (
    EmailAlreadyExistsError,
    EmptyNameError,
    EmptyPasswordError,
    ForbiddenError,
    InvalidCredentialsError,
    InvalidEmailError,
    MissingTokenError,
    TokenIssuanceError,
    TokenNotFoundError,
    UnauthorizedError,
    UserNotFoundError,
    UserValidationError,
)
from .users.repositories import PasswordHasher, TokenStore, UserStore

__all__ = [
    "EmailAlreadyExistsError",
    "EmptyNameError",
    "EmptyPasswordError",
    "ForbiddenError",
    "InvalidCredentialsError",
    "InvalidEmailError",
    "MissingTokenError",
    "PasswordHasher",
    "Token",
    "TokenIssuanceError",
    "TokenNotFoundError",
    "TokenStore",
    "UnauthorizedError",
    "User",
    "UserNotFoundError",
    "UserStore",
    "UserValidationError",
]
