from typing import Any, List, Optional


def clean_optional(value: Any) -> Optional[str]:
    """Return a stripped string, or None for missing/blank values."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def split_list(value: Any) -> List[str]:
    """Coerce a stored list column (list or comma-separated string) to a list of trimmed strings."""
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple, set, frozenset)):
        items = value
    else:
        return []
    out = []
    for item in items:
        if item is None:
            continue
        text = str(item).strip()
        if text:
            out.append(text)
    return out


def lower_all(values) -> List[str]:
    return [v.strip().lower() for v in values]


def leading_segment(location: str) -> str:
    """Text before the first comma, trimmed (e.g. city part of 'Cebu, PH')."""
    return location.split(",", 1)[0].strip()
