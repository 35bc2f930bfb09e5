from __future__ import annotations

from typing import Optional

from ..schemas.models import GeocodeResult


LOCATION_CLIMATE_SYSTEM_PROMPT = """
You are a climate data assistant. When given an address or location, provide monthly temperature and rainfall data.
Return fields exactly as in the schema and valid JSON only (no surrounding text).

Schema (JSON keys):
{
  "address": "<original input>",
  "latitude": <number or null>,
  "longitude": <number or null>,
  "postalCode": <string or null>,
  "monthly_temperatures": [<12 numbers in Celsius, Jan-Dec>],
  "monthly_rainfall": [<12 numbers in mm, Jan-Dec>],
  "confidence": "low|medium|high",
  "source_explanation": "short explanation (<= 50 words)"
}

Important:
- RETURN ONLY JSON, no markdown, no backticks, no commentary.
- monthly_temperatures and monthly_rainfall MUST be arrays of exactly 12 numbers.
- If postal code or coordinates are provided, use them; otherwise estimate based on the address.
- Provide typical/average climate data for the location.
""".strip()


def build_location_climate_user_prompt(
    address: str, geocode: Optional[GeocodeResult] = None
) -> str:
    parts = []
    if geocode is not None and geocode.postal_code:
        parts.append(f"Postal code: {geocode.postal_code}")
    parts.append(f'Address: "{address}"')
    if geocode is not None:
        parts.append(f"Latitude: {geocode.latitude}, Longitude: {geocode.longitude}")
    return "; ".join(parts) + ". Provide monthly climate data as JSON."
