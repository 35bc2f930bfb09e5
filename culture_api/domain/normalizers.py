import math
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

_MONTH_DAY_RE = re.compile(r"^(0[1-9]|1[0-2])-(0[1-9]|[12]\d|3[01])$")
_HEX_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")

CONFIDENCE_LEVELS = ("low", "medium", "high")
MONTHS_PER_YEAR = 12

# 每个字段一个 coerce：返回 None 表示模型给的值不可用，改用默认值
Coercer = Callable[[Any], Any]


@dataclass(frozen=True)
class SchemaField:
    """One expected key of the model's JSON answer and how to normalize it."""

    name: str
    coerce: Coercer
    default: Any = None


def as_text(value: Any) -> Optional[str]:
    # 空字符串视为缺失
    if isinstance(value, str) and value.strip():
        return value
    return None


def as_month_day(value: Any) -> Optional[str]:
    text = as_text(value)
    if text is None:
        return None
    text = text.strip()
    return text if _MONTH_DAY_RE.match(text) else None


def as_hex_color(value: Any) -> Optional[str]:
    text = as_text(value)
    if text is None:
        return None
    text = text.strip()
    return text if _HEX_COLOR_RE.match(text) else None


def as_confidence(value: Any) -> Optional[str]:
    text = as_text(value)
    if text is None:
        return None
    key = text.strip().lower()
    return key if key in CONFIDENCE_LEVELS else None


def as_number(value: Any) -> Optional[float]:
    # bool 是 int 的子类，需要排除
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value):
        return value
    return None


def as_postal_code(value: Any) -> Optional[str]:
    number = as_number(value)
    if number is not None:
        # 75001.0 -> "75001"
        if isinstance(number, float) and number.is_integer():
            return str(int(number))
        return str(number)
    text = as_text(value)
    return text.strip() if text is not None else None


def as_monthly_series(value: Any) -> Optional[List[float]]:
    if not isinstance(value, list) or len(value) != MONTHS_PER_YEAR:
        return None
    series = [as_number(item) for item in value]
    if any(item is None for item in series):
        return None
    return series


def normalize_fields(
    payload: Dict[str, Any], fields: Sequence[SchemaField]
) -> Dict[str, Any]:
    """Coalesce the parsed object onto the field list, keeping schema order."""
    normalized: Dict[str, Any] = {}
    for field in fields:
        value = field.coerce(payload.get(field.name))
        normalized[field.name] = field.default if value is None else value
    return normalized
