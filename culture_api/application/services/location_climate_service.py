from __future__ import annotations

from typing import List, Union

from ...domain.normalizers import (
    SchemaField,
    as_confidence,
    as_monthly_series,
    as_number,
    as_postal_code,
    as_text,
)
from ...infra.geocode_service import AddressGeocoder
from ...infra.llm_extract import StructuredJsonExtractor
from ...observability.logging_utils import log_event
from ...prompts.location_climate import (
    LOCATION_CLIMATE_SYSTEM_PROMPT,
    build_location_climate_user_prompt,
)
from ...schemas.models import ExtractionWarning, LocationQuery, LocationResult


def location_climate_fields(query: LocationQuery) -> List[SchemaField]:
    return [
        SchemaField("address", as_text, query.address),
        SchemaField("latitude", as_number, None),
        SchemaField("longitude", as_number, None),
        SchemaField("postalCode", as_postal_code, None),
        SchemaField("monthly_temperatures", as_monthly_series, []),
        SchemaField("monthly_rainfall", as_monthly_series, []),
        SchemaField("confidence", as_confidence, "low"),
        SchemaField("source_explanation", as_text, ""),
    ]


class LocationClimateService:
    """Monthly climate estimate for an address, anchored on geocoded coordinates."""

    def __init__(
        self,
        geocoder: AddressGeocoder,
        extractor: StructuredJsonExtractor,
        *,
        max_tokens: int = 600,
    ) -> None:
        self._geocoder = geocoder
        self._extractor = extractor
        self._max_tokens = max_tokens

    def handle(self, query: LocationQuery) -> Union[LocationResult, ExtractionWarning]:
        log_event("location_climate_request", address=query.address)
        geocode = self._geocoder.geocode(query.address)
        if geocode is None:
            log_event("geocode_fallback", address=query.address, fallback="model_estimate")

        outcome = self._extractor.ask(
            system_prompt=LOCATION_CLIMATE_SYSTEM_PROMPT,
            user_prompt=build_location_climate_user_prompt(query.address, geocode),
            fields=location_climate_fields(query),
            max_tokens=self._max_tokens,
        )
        if not outcome.ok:
            return ExtractionWarning(warning=outcome.warnings[0], raw=outcome.raw)

        data = dict(outcome.data)
        # 地理编码结果为准，模型给出的坐标只作兜底
        if geocode is not None:
            data["latitude"] = geocode.latitude
            data["longitude"] = geocode.longitude
            if geocode.postal_code:
                data["postalCode"] = geocode.postal_code
        return LocationResult.model_validate(data)
