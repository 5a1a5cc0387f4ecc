from typing import Any, Dict, List, Tuple

from .facets import ExperienceLevel

CANDIDATE_STR_FIELDS = [
    "location",
    "experience_level",
    "bio",
    "preferred_role",
    "availability",
]
CANDIDATE_LIST_FIELDS = ["skills", "technical_skills", "soft_skills", "work_type"]

JOB_REQUIRED_STR_FIELDS = ["title"]
JOB_STR_FIELDS = [
    "location",
    "experience_level",
    "description",
    "work_type",
    "availability",
    "status",
]
JOB_LIST_FIELDS = ["required_skills"]


class InvalidRecordError(ValueError):
    """Raised when a candidate or job record fails validation."""

    def __init__(self, kind: str, errors: List[str]):
        self.kind = kind
        self.errors = errors
        super().__init__(f"Invalid {kind} record: " + "; ".join(errors))


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def _is_number(v: Any) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def _check_strings(data: Dict[str, Any], fields: List[str], errors: List[str]) -> None:
    for f in fields:
        if data.get(f) is not None and not isinstance(data[f], str):
            errors.append(f"Field '{f}' must be a string if provided")


def _check_lists(data: Dict[str, Any], fields: List[str], errors: List[str]) -> None:
    for f in fields:
        v = data.get(f)
        if v is None or isinstance(v, str):
            continue
        if not isinstance(v, (list, tuple)):
            errors.append(f"Field '{f}' must be a list or comma-separated string")
        elif not all(isinstance(item, str) for item in v):
            errors.append(f"Field '{f}' must contain only strings")


def _check_salary(data: Dict[str, Any], errors: List[str]) -> None:
    low = data.get("salary_min")
    high = data.get("salary_max")
    for name, v in (("salary_min", low), ("salary_max", high)):
        if v is None:
            continue
        if not _is_number(v):
            errors.append(f"Field '{name}' must be a number")
        elif v < 0:
            errors.append(f"Field '{name}' must be non-negative")
    if _is_number(low) and _is_number(high) and low > high:
        errors.append("Field 'salary_min' must not exceed 'salary_max'")


def _check_level(data: Dict[str, Any], errors: List[str]) -> None:
    level = data.get("experience_level")
    if isinstance(level, str) and level.strip() and ExperienceLevel.parse(level) is None:
        known = ", ".join(m.name.lower() for m in ExperienceLevel)
        errors.append(f"Field 'experience_level' must be one of: {known}")


def validate_candidate_record(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    Unknown experience levels are tolerated here; the scorer skips them.
    """
    if not isinstance(data, dict):
        return ["Candidate record must be an object"]
    errors: List[str] = []
    _check_strings(data, CANDIDATE_STR_FIELDS, errors)
    _check_lists(data, CANDIDATE_LIST_FIELDS, errors)
    _check_salary(data, errors)
    return errors


def validate_job_record(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    """
    if not isinstance(data, dict):
        return ["Job record must be an object"]
    errors: List[str] = []

    for f in JOB_REQUIRED_STR_FIELDS:
        if f not in data:
            errors.append(f"Missing required field: {f}")
        elif not _is_non_empty_str(data[f]):
            errors.append(f"Field '{f}' must be a non-empty string")

    _check_strings(data, JOB_STR_FIELDS, errors)
    _check_lists(data, JOB_LIST_FIELDS, errors)
    _check_salary(data, errors)
    return errors


def validate_candidate_record_strict(data: Dict[str, Any]) -> Tuple[bool, List[str]]:
    """Like validate_candidate_record, but unknown experience levels are errors too."""
    errors = validate_candidate_record(data)
    if isinstance(data, dict):
        _check_level(data, errors)
    return (not errors, errors)


def validate_job_record_strict(data: Dict[str, Any]) -> Tuple[bool, List[str]]:
    """Like validate_job_record, but unknown experience levels are errors too."""
    errors = validate_job_record(data)
    if isinstance(data, dict):
        _check_level(data, errors)
    return (not errors, errors)


def require_valid_candidate(data: Dict[str, Any]) -> Dict[str, Any]:
    errors = validate_candidate_record(data)
    if errors:
        raise InvalidRecordError("candidate", errors)
    return data


def require_valid_job(data: Dict[str, Any]) -> Dict[str, Any]:
    errors = validate_job_record(data)
    if errors:
        raise InvalidRecordError("job", errors)
    return data
