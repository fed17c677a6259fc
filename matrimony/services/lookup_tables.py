"""
Lookup Tables - Static code-to-label maps for coded profile fields.
Tables are built once at import time and exposed read-only.
"""
from types import MappingProxyType
from typing import Any, Mapping


RELIGION_MAP: Mapping[str, str] = MappingProxyType({
    "1": "Hindu",
    "2": "Christian",
    "3": "Muslim",
    "4": "Other",
})

CASTE_MAP: Mapping[str, str] = MappingProxyType({
    "1": "Nadar",
    "2": "Other",
})

EDUCATION_MAP: Mapping[str, str] = MappingProxyType({
    "1": "B.E",
    "2": "M.E",
    "3": "B.Tech",
    "4": "M.Tech",
    "5": "MBBS",
    "6": "MD",
    "7": "BDS",
    "8": "B.Sc",
    "9": "M.Sc",
    "10": "B.Com",
    "11": "M.Com",
    "12": "B.A",
    "13": "M.A",
    "14": "MBA",
    "15": "MCA",
    "16": "PhD",
    "17": "Diploma",
    "18": "HSC",
    "19": "SSLC",
    "20": "Degree",
    "21": "Other",
})

OCCUPATION_MAP: Mapping[str, str] = MappingProxyType({
    "1": "Software Engineer",
    "2": "Government",
    "3": "Doctor",
    "4": "Teacher",
    "5": "Banker",
    "6": "Business",
    "18": "Private Sector",
    "20": "Employee",
    "21": "Self Employed",
})

LOCATION_MAP: Mapping[str, str] = MappingProxyType({
    "1": "Chennai",
    "2": "Madurai",
    "3": "Coimbatore",
    "4": "Trichy",
    "5": "Salem",
    "6": "Tirunelveli",
    "7": "Thoothukudi",
    "26": "Thoothukudi",
})


def _is_integer_code(value: str) -> bool:
    try:
        int(value)
    except ValueError:
        return False
    return True


def get_label(table: Mapping[str, str], code: Any, fallback: str = "") -> str:
    """
    Translate a coded field value into its human-readable label.

    Non-numeric values are already labels and pass through untouched.
    Unmapped numeric codes resolve to the fallback, or to the code itself
    when no fallback is given.

    Args:
        table: One of the lookup tables
        code: Raw backend value
        fallback: Value for missing codes

    Returns:
        Label string
    """
    if not code:
        return fallback

    text = code if isinstance(code, str) else str(code)
    key = text.strip()
    if not _is_integer_code(key):
        return text

    if key in table:
        return table[key]

    return fallback or key
