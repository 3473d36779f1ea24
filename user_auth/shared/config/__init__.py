# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .settings import (
    AppConfig,
    DatabaseConfig,
    RedisConfig,
    SecurityConfig,
    TokenConfig,
    load_config,
)

__all__ = [
    "AppConfig",
    "DatabaseConfig",
    "RedisConfig",
    "SecurityConfig",
    "TokenConfig",
    "load_config",
]
