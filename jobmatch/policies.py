"""
The two rubrics used by the application.

HR candidate ranking: four weighted criteria totalling 100 points. A criterion
with missing input is left out of the denominator.

Job-seeker job matching: five yes/no criteria. Every criterion counts towards
the denominator whether or not its data is present, so the divisor is always 5.
"""

from typing import Dict, Optional

from .facets import CandidateFacet, ExperienceLevel, JobFacet
from .keywords import extract_keywords
from .normalize import leading_segment, lower_all
from .scoring import Criterion, DenominatorPolicy, MatchScorer, ScoreResult, ScoringPolicy

SALARY_TOLERANCE = 0.1

# Ordinal distance -> share of the 25 experience points
_EXPERIENCE_STEPS = {0: 25, 1: 20, 2: 10}


class UnknownPolicyError(KeyError):
    pass


# --- HR candidate-ranking criteria ---

def location_match(candidate: CandidateFacet, job: JobFacet) -> Optional[float]:
    if not candidate.location or not job.location:
        return None
    mine = candidate.location.strip().lower()
    theirs = job.location.strip().lower()
    if mine == theirs:
        return 1.0
    if mine in theirs or theirs in mine:
        return 15 / 20
    if leading_segment(mine) == leading_segment(theirs):
        return 10 / 20
    return 0.0


def experience_match(candidate: CandidateFacet, job: JobFacet) -> Optional[float]:
    mine = ExperienceLevel.parse(candidate.experience_level)
    theirs = ExperienceLevel.parse(job.experience_level)
    if mine is None or theirs is None:
        return None
    return _EXPERIENCE_STEPS.get(abs(mine - theirs), 0) / 25


def skills_overlap(candidate: CandidateFacet, job: JobFacet) -> Optional[float]:
    required = [s for s in lower_all(job.required_skills) if s]
    if not required:
        return None
    have = [s for s in lower_all(candidate.skills) if s]
    matched = [
        skill for skill in required
        if any(skill in mine or mine in skill for mine in have)
    ]
    return len(matched) / len(required)


def bio_keywords(candidate: CandidateFacet, job: JobFacet) -> Optional[float]:
    if not candidate.bio or not job.description:
        return None
    keywords = extract_keywords(f"{job.description} {job.title or ''}")
    if not keywords:
        return 0.0
    bio = candidate.bio.lower()
    found = sum(1 for word in keywords if word in bio)
    return found / len(keywords)


HR_POLICY = ScoringPolicy(
    name="hr",
    criteria=(
        Criterion("location", 20, location_match),
        Criterion("experience", 25, experience_match),
        Criterion("skills", 35, skills_overlap),
        Criterion("keywords", 20, bio_keywords),
    ),
    denominator=DenominatorPolicy.SKIP_IF_MISSING,
    round_points=True,
)


# --- Job-seeker job-matching criteria ---
# Each returns None when its data is absent; the policy still counts it.

def any_required_skill(candidate: CandidateFacet, job: JobFacet) -> Optional[float]:
    required = lower_all(job.required_skills)
    if not required or not candidate.skills:
        return None
    have = set(lower_all(candidate.skills))
    return 1.0 if any(skill in have for skill in required) else 0.0


def preferred_role(candidate: CandidateFacet, job: JobFacet) -> Optional[float]:
    role = (candidate.preferred_role or "").strip().lower()
    title = (job.title or "").strip().lower()
    if not role or not title:
        return None
    return 1.0 if role in title or title in role else 0.0


def work_type_overlap(candidate: CandidateFacet, job: JobFacet) -> Optional[float]:
    tags = [t for t in lower_all(candidate.work_type) if t]
    if not tags or not job.work_type:
        return None
    offered = job.work_type.lower()
    return 1.0 if any(tag in offered for tag in tags) else 0.0


def salary_within_range(candidate: CandidateFacet, job: JobFacet) -> Optional[float]:
    mine, theirs = candidate.salary_range, job.salary_range
    if mine is None or theirs is None:
        return None
    # a zero bound means "not stated"
    if not all((mine.min, mine.max, theirs.min, theirs.max)):
        return None
    within = (
        theirs.min >= mine.min * (1 - SALARY_TOLERANCE)
        and theirs.max <= mine.max * (1 + SALARY_TOLERANCE)
    )
    return 1.0 if within else 0.0


def same_availability(candidate: CandidateFacet, job: JobFacet) -> Optional[float]:
    if not candidate.availability or not job.availability:
        return None
    return 1.0 if candidate.availability.lower() == job.availability.lower() else 0.0


SEEKER_POLICY = ScoringPolicy(
    name="seeker",
    criteria=(
        Criterion("skills", 1, any_required_skill),
        Criterion("role", 1, preferred_role),
        Criterion("work_type", 1, work_type_overlap),
        Criterion("salary", 1, salary_within_range),
        Criterion("availability", 1, same_availability),
    ),
    denominator=DenominatorPolicy.ALWAYS_COUNT,
)


POLICIES: Dict[str, ScoringPolicy] = {
    HR_POLICY.name: HR_POLICY,
    SEEKER_POLICY.name: SEEKER_POLICY,
}


def get_policy(name: str) -> ScoringPolicy:
    try:
        return POLICIES[name.strip().lower()]
    except KeyError:
        raise UnknownPolicyError(f"Unknown scoring policy: {name!r} (expected one of {sorted(POLICIES)})")


_hr_scorer = MatchScorer(HR_POLICY)
_seeker_scorer = MatchScorer(SEEKER_POLICY)


def score_candidate_for_job(candidate: CandidateFacet, job: JobFacet) -> ScoreResult:
    """HR view: how well does this candidate fit the posting's requirements."""
    return _hr_scorer.score(candidate, job)


def score_job_for_seeker(candidate: CandidateFacet, job: JobFacet) -> ScoreResult:
    """Seeker view: how well does this posting fit the candidate's stated preferences."""
    return _seeker_scorer.score(candidate, job)
