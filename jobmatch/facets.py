"""
Read-only snapshots of the candidate and job fields used for scoring.

Facets are built from caller-supplied rows right before scoring and thrown
away afterwards. Nullable columns map to ``None``; list columns map to tuples.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Optional, Tuple

from .normalize import clean_optional, split_list


class ExperienceLevel(IntEnum):
    ENTRY = 0
    JUNIOR = 1
    MID = 2
    SENIOR = 3
    LEAD = 4
    EXECUTIVE = 5

    @classmethod
    def parse(cls, value: Any) -> Optional["ExperienceLevel"]:
        """Case-insensitive lookup; None for missing or unrecognized values."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        return cls.__members__.get(value.strip().upper())


@dataclass(frozen=True)
class SalaryRange:
    min: Optional[float] = None
    max: Optional[float] = None

    @property
    def complete(self) -> bool:
        return self.min is not None and self.max is not None


@dataclass(frozen=True)
class CandidateFacet:
    location: Optional[str] = None
    experience_level: Optional[str] = None
    skills: Tuple[str, ...] = ()
    bio: Optional[str] = None
    preferred_role: Optional[str] = None
    work_type: Tuple[str, ...] = ()
    salary_range: Optional[SalaryRange] = None
    availability: Optional[str] = None


@dataclass(frozen=True)
class JobFacet:
    title: str = ""
    location: Optional[str] = None
    experience_level: Optional[str] = None
    required_skills: Tuple[str, ...] = ()
    description: Optional[str] = None
    work_type: Optional[str] = None
    salary_range: Optional[SalaryRange] = None
    availability: Optional[str] = None


def _salary(record: Dict[str, Any]) -> Optional[SalaryRange]:
    low = record.get("salary_min")
    high = record.get("salary_max")
    if low is None and high is None:
        return None
    return SalaryRange(
        min=float(low) if low is not None else None,
        max=float(high) if high is not None else None,
    )


def candidate_from_record(record: Dict[str, Any]) -> CandidateFacet:
    """Build a CandidateFacet from a profile row.

    ``skills``, ``technical_skills`` and ``soft_skills`` are merged in that
    order; each may be a list or a comma-separated string.
    """
    skills = []
    for column in ("skills", "technical_skills", "soft_skills"):
        skills.extend(split_list(record.get(column)))
    return CandidateFacet(
        location=clean_optional(record.get("location")),
        experience_level=clean_optional(record.get("experience_level")),
        skills=tuple(skills),
        bio=clean_optional(record.get("bio")),
        preferred_role=clean_optional(record.get("preferred_role")),
        work_type=tuple(split_list(record.get("work_type"))),
        salary_range=_salary(record),
        availability=clean_optional(record.get("availability")),
    )


def job_from_record(record: Dict[str, Any]) -> JobFacet:
    """Build a JobFacet from a job posting row."""
    return JobFacet(
        title=clean_optional(record.get("title")) or "",
        location=clean_optional(record.get("location")),
        experience_level=clean_optional(record.get("experience_level")),
        required_skills=tuple(split_list(record.get("required_skills"))),
        description=clean_optional(record.get("description")),
        work_type=clean_optional(record.get("work_type")),
        salary_range=_salary(record),
        availability=clean_optional(record.get("availability")),
    )
