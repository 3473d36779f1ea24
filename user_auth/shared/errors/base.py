# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any


@dataclass(slots=True)
class AppError(Exception):
    code: str
    status: HTTPStatus
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.code)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code}
        if self.context:
            payload["context"] = dict(self.context)
        return payload


def _declared(cls: type, name: str, fallback: Any) -> Any:
    """Class-level ``code``/``status`` declared below AppError, else fallback."""
    for klass in cls.__mro__:
        if klass is AppError:
            break
        if name in vars(klass):
            return vars(klass)[name]
    return fallback


class DomainError(AppError):
    """Business rule failure. Subclasses declare ``code`` and ``status``."""

    def __init__(self, *, context: Mapping[str, Any] | None = None) -> None:
        cls = type(self)
        super().__init__(
            code=_declared(cls, "code", "domain_error"),
            status=_declared(cls, "status", HTTPStatus.BAD_REQUEST),
            context=context,
        )


class ValidationError(AppError):
    """Request payload could not be parsed into the expected shape."""

    def __init__(
        self, code: str = "validation_error", *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__(code=code, status=HTTPStatus.UNPROCESSABLE_ENTITY, context=context)


class StoreError(AppError):
    """A user or token store could not serve the call."""

    def __init__(self, store: str) -> None:
        cls = type(self)
        super().__init__(
            code=_declared(cls, "code", "store_error"),
            status=_declared(cls, "status", HTTPStatus.SERVICE_UNAVAILABLE),
            context={"store": store},
        )
        self.store = store


class StoreUnavailableError(StoreError):
    code = "store_unavailable"
    status = HTTPStatus.SERVICE_UNAVAILABLE


class StoreTimeoutError(StoreError):
    code = "store_timeout"
    status = HTTPStatus.GATEWAY_TIMEOUT
