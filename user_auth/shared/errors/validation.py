# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any, NoReturn

from pydantic import ValidationError as PydanticValidationError

from .base import ValidationError


def _field_path(loc: tuple[Any, ...]) -> str:
    return ".".join(str(part) for part in loc) or "body"


def describe_payload_errors(exc: PydanticValidationError) -> dict[str, Any]:
    """Field names and error types only; offending values are never echoed."""
    errors = [
        {"field": _field_path(tuple(err.get("loc", ()))), "type": err.get("type", "value_error")}
        for err in exc.errors()
    ]
    return {
        "fields": sorted({err["field"] for err in errors}),
        "errors": errors,
    }


def raise_validation_error(exc: PydanticValidationError) -> NoReturn:
    raise ValidationError(context=describe_payload_errors(exc)) from exc


__all__ = ["describe_payload_errors", "raise_validation_error"]
