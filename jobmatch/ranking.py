"""Score and order lists of candidates or postings."""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional

from .facets import CandidateFacet, JobFacet
from .logger import get_logger
from .policies import score_candidate_for_job, score_job_for_seeker
from .scoring import ScoreResult

HIGH_MATCH = 70
MEDIUM_MATCH = 40


@dataclass(frozen=True)
class RankedMatch:
    item: Any
    result: ScoreResult
    index: int = 0  # position in the input sequence

    @property
    def percent(self) -> int:
        return self.result.percent

    @property
    def band(self) -> str:
        return match_band(self.result.percent)


def match_band(percent: int) -> str:
    """Bucket a percent into the high/medium/low bands shown next to list items."""
    if percent >= HIGH_MATCH:
        return "high"
    if percent >= MEDIUM_MATCH:
        return "medium"
    return "low"


def _rank(
    items: List[Any],
    score_one: Callable[[Any], ScoreResult],
    min_percent: Optional[int],
    workers: int,
) -> List[RankedMatch]:
    if workers > 1 and len(items) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            results = list(pool.map(score_one, items))
    else:
        results = [score_one(item) for item in items]

    logger = get_logger()
    for result in results:
        logger.record_score(result.policy, result.skipped)

    ranked = [
        RankedMatch(item, result, index)
        for index, (item, result) in enumerate(zip(items, results))
    ]
    if min_percent is not None:
        ranked = [r for r in ranked if r.percent >= min_percent]
    ranked.sort(key=lambda r: r.percent, reverse=True)
    return ranked


def rank_candidates(
    job: JobFacet,
    candidates: Iterable[CandidateFacet],
    min_percent: Optional[int] = None,
    workers: int = 1,
) -> List[RankedMatch]:
    """Order candidates for one posting using the HR rubric, best first."""
    items = list(candidates)
    ranked = _rank(items, lambda c: score_candidate_for_job(c, job), min_percent, workers)
    get_logger().info(
        "Ranked candidates",
        job=job.title,
        candidates=len(items),
        kept=len(ranked),
    )
    return ranked


def rank_jobs(
    candidate: CandidateFacet,
    jobs: Iterable[JobFacet],
    min_percent: Optional[int] = None,
    workers: int = 1,
) -> List[RankedMatch]:
    """Order postings for one job seeker using the seeker rubric, best first."""
    items = list(jobs)
    ranked = _rank(items, lambda j: score_job_for_seeker(candidate, j), min_percent, workers)
    get_logger().info("Ranked jobs", jobs=len(items), kept=len(ranked))
    return ranked
