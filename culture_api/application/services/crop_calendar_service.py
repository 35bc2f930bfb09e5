from __future__ import annotations

from typing import List, Union

from ...domain.normalizers import (
    SchemaField,
    as_confidence,
    as_hex_color,
    as_month_day,
    as_text,
)
from ...infra.llm_extract import StructuredJsonExtractor
from ...observability.logging_utils import log_event
from ...prompts.crop_calendar import (
    CROP_CALENDAR_SYSTEM_PROMPT,
    build_crop_calendar_user_prompt,
)
from ...schemas.models import CropQuery, CropResult, ExtractionWarning


def crop_calendar_fields(query: CropQuery) -> List[SchemaField]:
    return [
        SchemaField("culture", as_text, query.culture),
        SchemaField("region", as_text, query.region or ""),
        SchemaField("average_sowing_date", as_month_day, ""),
        SchemaField("end_of_season", as_month_day, ""),
        SchemaField("color_hex", as_hex_color, ""),
        SchemaField("confidence", as_confidence, "low"),
        SchemaField("source_explanation", as_text, ""),
    ]


class CropCalendarService:
    """Sowing/harvest window lookup for a single crop."""

    def __init__(self, extractor: StructuredJsonExtractor, *, max_tokens: int = 400) -> None:
        self._extractor = extractor
        self._max_tokens = max_tokens

    def handle(self, query: CropQuery) -> Union[CropResult, ExtractionWarning]:
        log_event("crop_calendar_request", culture=query.culture, region=query.region)
        outcome = self._extractor.ask(
            system_prompt=CROP_CALENDAR_SYSTEM_PROMPT,
            user_prompt=build_crop_calendar_user_prompt(query.culture, query.region),
            fields=crop_calendar_fields(query),
            max_tokens=self._max_tokens,
        )
        if not outcome.ok:
            return ExtractionWarning(warning=outcome.warnings[0], raw=outcome.raw)
        return CropResult(**outcome.data)
