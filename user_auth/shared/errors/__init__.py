from .base import (
    AppError,
    DomainError,
    StoreError,
    StoreTimeoutError,
    StoreUnavailableError,
    ValidationError,
)
from .http import error_response, register_error_handler

__all__ = [
    "AppError",
    "DomainError",
    "StoreError",
    "StoreTimeoutError",
    "StoreUnavailableError",
    "ValidationError",
    "error_response",
    "register_error_handler",
]
