"""
Match scoring engine.

Responsibilities:
- Evaluate an ordered list of weighted criteria for one (candidate, job) pair.
- Apply the policy's denominator rule to criteria that lack input data.
- Emit the final percentage together with a per-criterion breakdown.

Non-Responsibilities:
- No database access.
- No input validation (see schema.py).

Invariant:
Given identical inputs, scoring always returns the same result, and the
percent is always within [0, 100].
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from .facets import CandidateFacet, JobFacet

log = logging.getLogger("jobmatch.scoring")

# (candidate, job) -> earned fraction in [0, 1], or None when not applicable
Evaluator = Callable[[CandidateFacet, JobFacet], Optional[float]]


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 away from zero for positive values."""
    return int(math.floor(value + 0.5))


class DenominatorPolicy(Enum):
    ALWAYS_COUNT = "always_count"
    SKIP_IF_MISSING = "skip_if_missing"


@dataclass(frozen=True)
class Criterion:
    name: str
    weight: float
    evaluate: Evaluator


@dataclass(frozen=True)
class CriterionScore:
    earned: float
    possible: float
    applicable: bool


@dataclass(frozen=True)
class ScoringPolicy:
    """
    A named rubric.

    ``round_points`` rounds each criterion's earned points to an integer
    before they are summed.
    """

    name: str
    criteria: Tuple[Criterion, ...]
    denominator: DenominatorPolicy
    round_points: bool = False

    @property
    def max_points(self) -> float:
        return sum(c.weight for c in self.criteria)


@dataclass(frozen=True)
class ScoreResult:
    percent: int
    earned: float
    possible: float
    policy: str
    breakdown: Dict[str, CriterionScore] = field(default_factory=dict)

    @property
    def skipped(self) -> Tuple[str, ...]:
        return tuple(name for name, s in self.breakdown.items() if not s.applicable)

    def as_dict(self) -> dict:
        return {
            "percent": self.percent,
            "policy": self.policy,
            "earned": self.earned,
            "possible": self.possible,
            "breakdown": {
                name: {"earned": s.earned, "possible": s.possible, "applicable": s.applicable}
                for name, s in self.breakdown.items()
            },
        }


class MatchScorer:
    """Stateless scorer bound to one ScoringPolicy. Safe to share across threads."""

    def __init__(self, policy: ScoringPolicy):
        self.policy = policy

    def _criterion_score(self, criterion: Criterion, fraction: Optional[float]) -> CriterionScore:
        if fraction is None:
            possible = criterion.weight if self.policy.denominator is DenominatorPolicy.ALWAYS_COUNT else 0
            return CriterionScore(earned=0, possible=possible, applicable=False)

        fraction = min(1.0, max(0.0, fraction))
        earned = fraction * criterion.weight
        if self.policy.round_points:
            earned = round_half_up(earned)
        return CriterionScore(earned=earned, possible=criterion.weight, applicable=True)

    def score(self, candidate: CandidateFacet, job: JobFacet) -> ScoreResult:
        breakdown: Dict[str, CriterionScore] = {}
        earned = 0.0
        possible = 0.0

        for criterion in self.policy.criteria:
            result = self._criterion_score(criterion, criterion.evaluate(candidate, job))
            breakdown[criterion.name] = result
            earned += result.earned
            possible += result.possible

        percent = 0
        if possible > 0:
            percent = round_half_up((earned / possible) * 100)
        percent = max(0, min(100, percent))

        score = ScoreResult(
            percent=percent,
            earned=earned,
            possible=possible,
            policy=self.policy.name,
            breakdown=breakdown,
        )

        log.debug(
            "Scored pair | policy=%s job=%r percent=%d earned=%g possible=%g",
            self.policy.name, job.title, percent, earned, possible,
        )
        return score

    def percent(self, candidate: CandidateFacet, job: JobFacet) -> int:
        return self.score(candidate, job).percent
