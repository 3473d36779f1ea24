# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .use_cases.users.session_service import SessionService
from .use_cases.users.user_service import UserService

__all__ = [
    "SessionService",
    "UserService",
]
