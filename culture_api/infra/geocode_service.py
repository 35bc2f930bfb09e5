from __future__ import annotations

from typing import Optional

import httpx

from ..domain.errors import UpstreamError
from ..observability.logging_utils import log_event
from ..schemas.models import GeocodeResult
from .config import DEFAULT_GEOCODE_URL


def _parse_float(value: object) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    return None


def _parse_feature(feature: object) -> Optional[GeocodeResult]:
    if not isinstance(feature, dict):
        return None
    geometry = feature.get("geometry")
    coords = geometry.get("coordinates") if isinstance(geometry, dict) else None
    if not isinstance(coords, list) or len(coords) != 2:
        return None
    # GeoJSON 坐标顺序为 [lon, lat]
    lon = _parse_float(coords[0])
    lat = _parse_float(coords[1])
    if lat is None or lon is None:
        return None
    properties = feature.get("properties")
    postcode = properties.get("postcode") if isinstance(properties, dict) else None
    return GeocodeResult(
        latitude=lat,
        longitude=lon,
        postal_code=str(postcode) if postcode else None,
    )


class AddressGeocoder:
    """Client for the api-adresse.data.gouv.fr search endpoint."""

    def __init__(self, client: httpx.Client, url: str = DEFAULT_GEOCODE_URL) -> None:
        self._client = client
        self._url = url

    def geocode(self, address: str) -> Optional[GeocodeResult]:
        """
        Look up the first candidate for ``address``.

        Returns None when the service has no usable candidate; raises
        UpstreamError when it answers with a failure status or a non-JSON body.
        """
        response = self._client.get(
            self._url,
            params={"q": address},
            headers={"Accept": "application/json"},
        )
        log_event("geocode_response", url=str(response.url), status=response.status_code)
        if not response.is_success:
            raise UpstreamError("Geocoding API error", detail=response.text)
        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamError("Geocoding API error", detail=response.text) from exc

        features = payload.get("features") if isinstance(payload, dict) else None
        if not isinstance(features, list) or not features:
            log_event("geocode_miss", address=address, reason="no_features")
            return None
        result = _parse_feature(features[0])
        if result is None:
            log_event("geocode_miss", address=address, reason="malformed_geometry")
        return result
