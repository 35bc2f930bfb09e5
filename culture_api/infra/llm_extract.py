from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

import openai
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage

from ..domain.errors import UpstreamError
from ..domain.normalizers import SchemaField, normalize_fields
from ..observability.logging_utils import log_error_event, log_event, summarize_text

EXTRACTION_WARNING = "Could not parse model output as JSON. Returning raw output."

# 贪婪匹配：第一个 "{" 到最后一个 "}"
_JSON_BLOCK_RE = re.compile(r"(\{[\s\S]*\})")

ExtractionStrategy = Callable[[str], Optional[Dict[str, Any]]]


@dataclass
class ExtractionOutcome:
    """Either a normalized object or the raw model text that could not be read."""

    raw: str
    data: Optional[Dict[str, Any]] = None
    warnings: list = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.data is not None


def _load_json_object(text: str) -> Optional[Dict[str, Any]]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


def parse_whole_text(text: str) -> Optional[Dict[str, Any]]:
    return _load_json_object(text)


def parse_brace_block(text: str) -> Optional[Dict[str, Any]]:
    match = _JSON_BLOCK_RE.search(text)
    if not match:
        return None
    return _load_json_object(match.group(1))


EXTRACTION_STRATEGIES: Tuple[ExtractionStrategy, ...] = (
    parse_whole_text,
    parse_brace_block,
)


def extract_json_object(
    text: str, strategies: Sequence[ExtractionStrategy] = EXTRACTION_STRATEGIES
) -> Optional[Dict[str, Any]]:
    """Return the first JSON object any strategy can read from ``text``, else None."""
    if not text:
        return None
    for strategy in strategies:
        data = strategy(text)
        if data is not None:
            return data
    return None


def extract_llm_text(result: object) -> str:
    content = getattr(result, "content", result)
    if isinstance(content, list):
        parts = []
        for item in content:
            if isinstance(item, dict):
                parts.append(str(item.get("text") or item.get("content") or ""))
            else:
                parts.append(str(item))
        return "".join(parts)
    if content is None:
        return ""
    return str(content)


class StructuredJsonExtractor:
    """Ask the chat model for a JSON object and normalize it onto a field list."""

    def __init__(self, llm: BaseChatModel) -> None:
        self._llm = llm

    def ask(
        self,
        *,
        system_prompt: str,
        user_prompt: str,
        fields: Sequence[SchemaField],
        max_tokens: int,
    ) -> ExtractionOutcome:
        messages = [
            SystemMessage(content=system_prompt),
            HumanMessage(content=user_prompt),
        ]
        log_event(
            "completion_call",
            prompt_summary=summarize_text(user_prompt),
            max_tokens=max_tokens,
        )
        try:
            result = self._llm.bind(max_tokens=max_tokens).invoke(messages)
        except openai.APIStatusError as exc:
            detail = exc.response.text if exc.response is not None else str(exc)
            log_error_event(
                "completion_upstream_error",
                status=exc.status_code,
                detail=summarize_text(detail),
            )
            raise UpstreamError("OpenAI API error", detail=detail) from exc

        raw = extract_llm_text(result)
        if not raw.strip():
            raise UpstreamError(
                "Empty response from OpenAI",
                raw=getattr(result, "response_metadata", None) or {},
            )
        log_event("completion_raw", raw_summary=summarize_text(raw))

        parsed = extract_json_object(raw)
        if parsed is None:
            log_event("extraction_failed", raw_summary=summarize_text(raw))
            return ExtractionOutcome(raw=raw, warnings=[EXTRACTION_WARNING])
        return ExtractionOutcome(raw=raw, data=normalize_fields(parsed, fields))
