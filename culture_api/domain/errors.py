from __future__ import annotations

from typing import Any, Dict, Optional


class CultureApiError(Exception):
    """Base error carrying the HTTP status and JSON body returned to clients."""

    status_code = 500

    def __init__(
        self,
        error: str,
        *,
        detail: Optional[Any] = None,
        raw: Optional[Any] = None,
    ) -> None:
        self.error = error
        self.detail = detail
        self.raw = raw
        super().__init__(error)

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.error}
        if self.detail is not None:
            payload["detail"] = self.detail
        if self.raw is not None:
            payload["raw"] = self.raw
        return payload


class ValidationError(CultureApiError):
    """Raised when the caller's body is malformed; no outbound call is made."""

    status_code = 400

    @classmethod
    def for_field(cls, field: str) -> "ValidationError":
        return cls(f"Missing or invalid '{field}' in body.")


class UpstreamError(CultureApiError):
    """Raised when the completion or geocoding API fails or returns nothing usable."""

    status_code = 502


class InternalError(CultureApiError):
    status_code = 500

    @classmethod
    def from_exception(cls, exc: BaseException) -> "InternalError":
        return cls("server_error", detail=str(exc))
