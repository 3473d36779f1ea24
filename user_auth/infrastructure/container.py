# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

from redis import Redis
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from user_auth.application.services.password_hashing import WerkzeugPasswordHasher
from user_auth.application.use_cases.users.session_service import SessionService
from user_auth.application.use_cases.users.user_service import UserService
from user_auth.infrastructure.db import build_engine, build_session_factory, init_db
from user_auth.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserStore,
)
from user_auth.infrastructure.tokens.memory_token_store import InMemoryTokenStore
from user_auth.infrastructure.tokens.redis_token_store import (
    RedisTokenStore,
    build_redis_client,
)
from user_auth.interfaces.http.controllers.auth_controller import AuthController
from user_auth.interfaces.http.controllers.misc_controller import MiscController
from user_auth.interfaces.http.controllers.users_controller import UsersController
from user_auth.shared.config import AppConfig, load_config


class Container:
    def __init__(self, config: AppConfig | None = None) -> None:
        self.config = config or load_config()

    @cached_property
    def engine(self) -> Engine:
        engine = build_engine(self.config.database)
        init_db(engine)
        return engine

    @cached_property
    def session_factory(self) -> sessionmaker[Session]:
        return build_session_factory(self.engine)

    @cached_property
    def redis_client(self) -> Redis:
        return build_redis_client(self.config.redis)

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def user_store(self) -> SqlAlchemyUserStore:
        return SqlAlchemyUserStore(self.session_factory)

    @cached_property
    def token_store(self) -> RedisTokenStore | InMemoryTokenStore:
        ttl = self.config.tokens.ttl_seconds
        if self.config.tokens.backend == "memory":
            return InMemoryTokenStore(ttl_seconds=ttl)
        return RedisTokenStore(self.redis_client, ttl_seconds=ttl)

    @cached_property
    def session_service(self) -> SessionService:
        return SessionService(
            users=self.user_store,
            tokens=self.token_store,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def user_service(self) -> UserService:
        return UserService(
            sessions=self.session_service,
            users=self.user_store,
            tokens=self.token_store,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            sessions=self.session_service,
            deadline_seconds=self.config.tokens.deadline_seconds,
        )

    @cached_property
    def users_controller(self) -> UsersController:
        return UsersController(
            users=self.user_service,
            deadline_seconds=self.config.tokens.deadline_seconds,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(engine=self.engine, token_store=self.token_store)

    def close(self) -> None:
        if "engine" in self.__dict__:
            self.engine.dispose()
        if "redis_client" in self.__dict__:
            self.redis_client.close()


__all__ = ["Container"]
