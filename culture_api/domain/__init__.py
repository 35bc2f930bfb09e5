from __future__ import annotations

from .errors import (
    CultureApiError,
    InternalError,
    UpstreamError,
    ValidationError,
)

__all__ = [
    "CultureApiError",
    "InternalError",
    "UpstreamError",
    "ValidationError",
]
