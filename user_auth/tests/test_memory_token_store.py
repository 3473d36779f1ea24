from __future__ import annotations

import pytest

from user_auth.domain.users.exceptions import TokenNotFoundError
from user_auth.domain.users.repositories import DEFAULT_TTL_SECONDS
from user_auth.infrastructure.tokens.memory_token_store import InMemoryTokenStore
from user_auth.shared.deadline import Deadline
from user_auth.shared.errors import StoreTimeoutError

from conftest import FakeClock


def test_retrieve_returns_owner(tokens: InMemoryTokenStore) -> None:
    tokens.create("tok-1", "user-1", True)

    assert tokens.retrieve("tok-1") == "user-1"


def test_retrieve_unknown_token(tokens: InMemoryTokenStore) -> None:
    with pytest.raises(TokenNotFoundError):
        tokens.retrieve("missing")


def test_expiring_token_lapses(tokens: InMemoryTokenStore, clock: FakeClock) -> None:
    tokens.create("tok-1", "user-1", True)

    clock.advance(tokens.ttl_seconds)

    with pytest.raises(TokenNotFoundError):
        tokens.retrieve("tok-1")


def test_non_expiring_token_survives(tokens: InMemoryTokenStore, clock: FakeClock) -> None:
    tokens.create("tok-1", "user-1", False)

    clock.advance(10 * tokens.ttl_seconds)

    assert tokens.retrieve("tok-1") == "user-1"


def test_delete_is_idempotent(tokens: InMemoryTokenStore) -> None:
    tokens.create("tok-1", "user-1", True)

    tokens.delete("tok-1")
    tokens.delete("tok-1")

    with pytest.raises(TokenNotFoundError):
        tokens.retrieve("tok-1")


def test_delete_for_user_counts_live_tokens(
    tokens: InMemoryTokenStore, clock: FakeClock
) -> None:
    tokens.create("old", "user-1", True)
    clock.advance(tokens.ttl_seconds + 1)
    tokens.create("fresh", "user-1", True)
    tokens.create("forever", "user-1", False)
    tokens.create("other", "user-2", True)

    assert tokens.delete_for_user("user-1") == 2
    assert tokens.retrieve("other") == "user-2"
    with pytest.raises(TokenNotFoundError):
        tokens.retrieve("forever")


def test_expired_deadline_is_rejected(tokens: InMemoryTokenStore, clock: FakeClock) -> None:
    deadline = Deadline.after(0.5, clock=clock)
    clock.advance(1)

    with pytest.raises(StoreTimeoutError):
        tokens.create("tok-1", "user-1", True, deadline=deadline)
    assert tokens.ping()


def test_default_lifetime_is_fifteen_minutes(clock: FakeClock) -> None:
    tokens = InMemoryTokenStore(clock=clock)
    tokens.create("tok-1", "user-1", True)

    assert tokens.ttl_seconds == DEFAULT_TTL_SECONDS == 900
    clock.advance(899)
    assert tokens.retrieve("tok-1") == "user-1"
    clock.advance(1)
    with pytest.raises(TokenNotFoundError):
        tokens.retrieve("tok-1")
