from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _strip_required_text(value: str) -> str:
    stripped = value.strip()
    if not stripped:
        raise ValueError("must not be empty")
    return stripped


class CropQuery(BaseModel):
    """Body of POST /api/culture."""

    model_config = ConfigDict(strict=True)

    culture: str
    region: Optional[str] = None

    @field_validator("culture", mode="after")
    @classmethod
    def strip_culture(cls, value: str) -> str:
        return _strip_required_text(value)

    @field_validator("region", mode="after")
    @classmethod
    def empty_region_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None


class CropResult(BaseModel):
    """Normalized crop calendar answer; every key is always present."""

    culture: str
    region: str = ""
    average_sowing_date: str = Field(default="", description="MM-DD or empty")
    end_of_season: str = Field(default="", description="MM-DD or empty")
    color_hex: str = Field(default="", description="#RRGGBB or empty")
    confidence: Literal["low", "medium", "high"] = "low"
    source_explanation: str = ""


class LocationQuery(BaseModel):
    """Body of POST /api/location."""

    model_config = ConfigDict(strict=True)

    address: str

    @field_validator("address", mode="after")
    @classmethod
    def strip_address(cls, value: str) -> str:
        return _strip_required_text(value)


class LocationResult(BaseModel):
    """Normalized monthly climate estimate for an address."""

    model_config = ConfigDict(populate_by_name=True)

    address: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    postal_code: Optional[str] = Field(default=None, alias="postalCode")
    monthly_temperatures: List[float] = Field(
        default_factory=list, description="12 values in Celsius, Jan-Dec, or empty"
    )
    monthly_rainfall: List[float] = Field(
        default_factory=list, description="12 values in mm, Jan-Dec, or empty"
    )
    confidence: Literal["low", "medium", "high"] = "low"
    source_explanation: str = ""


class GeocodeResult(BaseModel):
    latitude: float
    longitude: float
    postal_code: Optional[str] = None


class ExtractionWarning(BaseModel):
    """Returned with HTTP 200 when the model output holds no readable JSON object."""

    warning: str
    raw: str


class ErrorResponse(BaseModel):
    error: str
    detail: Optional[Any] = None
    raw: Optional[Dict[str, Any]] = None
