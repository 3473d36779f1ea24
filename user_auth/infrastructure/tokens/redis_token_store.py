# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Redis-backed token store.

Layout: ``token:<token> -> <user id>`` with ``EX`` set for expiring tokens,
plus two per-user index sets used only to revoke every token of a user:

* ``user_tokens:<user id>`` holds expiring tokens; its TTL is pushed forward
  on every create so it never expires before its newest member.
* ``user_tokens:<user id>:persistent`` holds non-expiring tokens.

Presented tokens come straight from a request header, so they are only ever
used behind the ``token:`` prefix and can never address an index key.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from redis import Redis
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from user_auth.domain.users.exceptions import TokenNotFoundError
from user_auth.domain.users.repositories import DEFAULT_TTL_SECONDS
from user_auth.shared.config import RedisConfig
from user_auth.shared.deadline import Deadline, check_deadline
from user_auth.shared.errors import StoreTimeoutError, StoreUnavailableError
from user_auth.shared.logging import logger

_STORE = "tokens"


def build_redis_client(config: RedisConfig) -> Redis:
    return Redis(
        host=config.host,
        port=config.port,
        db=config.db,
        password=config.password or None,
        socket_timeout=config.socket_timeout,
        socket_connect_timeout=config.socket_timeout,
        decode_responses=True,
    )


def _token_key(token: str) -> str:
    return f"token:{token}"


def _index_key(user_id: str) -> str:
    return f"user_tokens:{user_id}"


def _persistent_index_key(user_id: str) -> str:
    return f"user_tokens:{user_id}:persistent"


def _text(value: str | bytes) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return value


class RedisTokenStore:
    def __init__(self, client: Redis, *, ttl_seconds: int = DEFAULT_TTL_SECONDS) -> None:
        self._client = client
        self.ttl_seconds = ttl_seconds

    @contextmanager
    def _call(self, deadline: Deadline | None) -> Iterator[None]:
        check_deadline(deadline, _STORE)
        try:
            yield
        except RedisTimeoutError as exc:
            logger.error(f"tokens: redis timeout: {exc}")
            raise StoreTimeoutError(_STORE) from exc
        except RedisError as exc:
            logger.error(f"tokens: redis error: {type(exc).__name__}")
            raise StoreUnavailableError(_STORE) from exc
        # The socket timeout bounds a stalled command; a reply that arrives
        # after the caller's deadline is still a timeout.
        check_deadline(deadline, _STORE)

    def create(
        self, token: str, user_id: str, expiring: bool, *, deadline: Deadline | None = None
    ) -> None:
        with self._call(deadline):
            pipe = self._client.pipeline(transaction=True)
            if expiring:
                pipe.set(_token_key(token), user_id, ex=self.ttl_seconds)
                pipe.sadd(_index_key(user_id), token)
                pipe.expire(_index_key(user_id), self.ttl_seconds)
            else:
                pipe.set(_token_key(token), user_id)
                pipe.sadd(_persistent_index_key(user_id), token)
            pipe.execute()

        expires = f"in {self.ttl_seconds} seconds" if expiring else "never"
        logger.info(f"tokens: created token for user {user_id} that expires {expires}")

    def retrieve(self, token: str, *, deadline: Deadline | None = None) -> str:
        with self._call(deadline):
            value = self._client.get(_token_key(token))
        if value is None:
            raise TokenNotFoundError()
        return _text(value)

    def delete(self, token: str, *, deadline: Deadline | None = None) -> None:
        with self._call(deadline):
            pipe = self._client.pipeline(transaction=True)
            pipe.get(_token_key(token))
            pipe.delete(_token_key(token))
            owner, _ = pipe.execute()
            if owner is not None:
                owner = _text(owner)
                self._client.srem(_index_key(owner), token)
                self._client.srem(_persistent_index_key(owner), token)
        logger.debug("tokens: deleted token")

    def delete_for_user(self, user_id: str, *, deadline: Deadline | None = None) -> int:
        index_keys = [_index_key(user_id), _persistent_index_key(user_id)]
        with self._call(deadline):
            members: set[str] = set()
            for key in index_keys:
                members.update(_text(member) for member in self._client.smembers(key))
            pipe = self._client.pipeline(transaction=True)
            if members:
                pipe.delete(*(_token_key(member) for member in members))
            pipe.delete(*index_keys)
            results = pipe.execute()
        removed = int(results[0]) if members else 0
        logger.info(f"tokens: revoked {removed} token(s) for user {user_id}")
        return removed

    def ping(self) -> bool:
        with self._call(None):
            return bool(self._client.ping())


__all__ = ["RedisTokenStore", "build_redis_client"]
