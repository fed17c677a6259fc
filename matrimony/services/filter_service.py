"""
Filter Service - Translates search form state into backend query payloads.
Pure transformation: no I/O, never raises on malformed input.
"""
import re
from typing import Any, Dict, Mapping, NamedTuple, Optional, Union

from pydantic import BaseModel

from matrimony.config import settings
from matrimony.models import SearchMode


PLACEHOLDER_PREFIX = "SELECT_"
LEADING_INT = re.compile(r"\s*([+-]?\d+)")

QUICK_GENDER = {"BRIDE": "Female", "GROOM": "Male"}
ADVANCED_GENDER = {"WOMAN": "Female", "MAN": "Male"}

# (form field, payload field) pairs gated by is_valid_selection
QUICK_OPTIONAL_FIELDS = (
    ("religion", "religion"),
    ("caste", "caste"),
)
ADVANCED_OPTIONAL_FIELDS = (
    ("district", "district"),
    ("city", "city"),
    ("religion", "religion"),
    ("caste", "caste"),
    ("nativeDirection", "native_direction"),
    ("qualification", "education"),
    ("work", "occupation"),
    ("raasi", "raasi"),
    ("star", "star"),
    ("color", "complexion"),
    ("jewel", "jewel"),
)


class AgeRange(NamedTuple):
    age_from: str
    age_to: str


def is_valid_selection(value: Any) -> bool:
    """True when the value is a real selection, not empty and not a placeholder."""
    if value is None:
        return False
    text = str(value).strip()
    if not text:
        return False
    return not text.startswith(PLACEHOLDER_PREFIX)


def _parse_age(value: Any, default: int) -> int:
    """Leading integer of the value ("25.5" -> 25), or default."""
    if value is None or isinstance(value, bool):
        return default
    match = LEADING_INT.match(str(value))
    return int(match.group(1)) if match else default


def _clamp_age(age: int) -> int:
    return max(settings.MIN_AGE, min(settings.MAX_AGE, age))


def normalize_age_range(age_from: Any, age_to: Any) -> AgeRange:
    """
    Sanitize an age range.

    Unparseable bounds default to the minimum/maximum age, both bounds are
    clamped to the allowed interval, and an inverted range is swapped.

    Args:
        age_from: Lower bound (int or numeric string)
        age_to: Upper bound (int or numeric string)

    Returns:
        AgeRange of string bounds
    """
    low = _clamp_age(_parse_age(age_from, settings.MIN_AGE))
    high = _clamp_age(_parse_age(age_to, settings.MAX_AGE))
    if low > high:
        low, high = high, low
    return AgeRange(str(low), str(high))


def _as_filter_dict(filters: Union[Mapping[str, Any], BaseModel, None]) -> Dict[str, Any]:
    """Accept form models or plain mappings keyed by form field names."""
    if isinstance(filters, BaseModel):
        return filters.model_dump(by_alias=True)
    if isinstance(filters, Mapping):
        return dict(filters)
    return {}


def _add_optional_fields(payload: Dict[str, str], filters: Dict[str, Any], fields) -> None:
    for form_key, payload_key in fields:
        value = filters.get(form_key)
        if is_valid_selection(value):
            payload[payload_key] = str(value)


def build_quick_payload(filters: Dict[str, Any], limit: int) -> Dict[str, str]:
    """Quick search: gender, minimum age, fixed upper age, religion and caste."""
    looking_for = str(filters.get("lookingFor") or "BRIDE").strip().upper()
    age = _clamp_age(_parse_age(filters.get("age"), settings.MIN_AGE))

    payload = {
        "gender": QUICK_GENDER.get(looking_for, "Female"),
        "age_from": str(age),
        "age_to": str(settings.QUICK_SEARCH_AGE_TO),
    }
    _add_optional_fields(payload, filters, QUICK_OPTIONAL_FIELDS)
    payload["limit"] = str(limit)
    return payload


def build_advanced_payload(filters: Dict[str, Any], limit: int) -> Dict[str, str]:
    """Advanced search: normalized age range plus every selected optional field."""
    seeking = str(filters.get("seeking") or "WOMAN").strip().upper()
    age_range = normalize_age_range(filters.get("ageFrom"), filters.get("ageTo"))

    payload = {
        "gender": ADVANCED_GENDER.get(seeking, "Female"),
        "age_from": age_range.age_from,
        "age_to": age_range.age_to,
    }

    search_id = filters.get("searchId")
    if is_valid_selection(search_id):
        payload["profile_id"] = str(search_id).strip()

    _add_optional_fields(payload, filters, ADVANCED_OPTIONAL_FIELDS)
    payload["limit"] = str(limit)
    return payload


def build_payload(
    mode: Union[SearchMode, str],
    filters: Union[Mapping[str, Any], BaseModel, None],
    limit: Optional[int] = None,
) -> Dict[str, str]:
    """
    Build the outbound search payload for either search mode.

    Args:
        mode: "normal" (quick) or "advanced"
        filters: Form state keyed by form field names
        limit: Result cap, defaults to the configured search limit

    Returns:
        Flat mapping of backend field names to string values
    """
    if limit is None:
        limit = settings.SEARCH_RESULT_LIMIT
    data = _as_filter_dict(filters)

    mode_value = mode.value if isinstance(mode, SearchMode) else str(mode).lower()
    if mode_value == SearchMode.ADVANCED.value:
        return build_advanced_payload(data, limit)
    return build_quick_payload(data, limit)
