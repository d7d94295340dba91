"""Nutritional match scoring and ranking."""

import logging
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from coach_nutrition.domain.errors import InvalidQueryError
from coach_nutrition.domain.matching import (
    DIMENSIONS,
    RECOMMENDATION_WEIGHTS,
    CandidateItem,
    MatchQuery,
    MatchResult,
    NutritionalProfile,
    ScoreBreakdown,
    WeightTable,
)

_logger = logging.getLogger(__name__)


def validate_query(target: NutritionalProfile, tolerance: float) -> None:
    """Raise InvalidQueryError unless tolerance is in (0, 1] and calories > 0."""
    if not 0 < tolerance <= 1:
        raise InvalidQueryError(f"Tolerance must be in (0, 1], got {tolerance}")
    if not target.calories > 0:
        raise InvalidQueryError(
            f"Target calories must be positive, got {target.calories}"
        )


def calorie_window(
    target: NutritionalProfile, tolerance: float, *, integer_bounds: bool = False
) -> tuple[float, float]:
    """Return the inclusive calorie admission window for a target."""
    lower = target.calories * (1 - tolerance)
    upper = target.calories * (1 + tolerance)
    if integer_bounds:
        return math.floor(lower), math.ceil(upper)
    return lower, upper


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up."""
    return math.floor(value + 0.5)


def _at_most(value: float, limit: float) -> bool:
    return value <= limit or math.isclose(value, limit)


def _in_window(value: float, lower: float, upper: float) -> bool:
    return _at_most(lower, value) and _at_most(value, upper)


@dataclass
class MatchScorer:
    """Ranks candidate items against a target nutritional profile.

    Calories gate admission; every dimension present on both sides then adds
    ``(1 - deviation) * weight`` when its own deviation is within tolerance.
    Instances hold no per-call state and may be shared across requests.
    """

    weights: WeightTable = field(default_factory=lambda: RECOMMENDATION_WEIGHTS)

    def filter_by_tolerance(
        self,
        target: NutritionalProfile,
        tolerance: float,
        candidates: Iterable[CandidateItem],
        required_tags: Iterable[str] = (),
    ) -> list[CandidateItem]:
        """Return candidates inside the calorie window carrying every required tag."""
        validate_query(target, tolerance)
        lower, upper = calorie_window(target, tolerance)
        required = frozenset(required_tags)
        return [
            candidate
            for candidate in candidates
            if _in_window(candidate.profile.calories, lower, upper)
            and required <= candidate.tags
        ]

    def score(
        self,
        target: NutritionalProfile,
        candidate: CandidateItem,
        tolerance: float,
    ) -> ScoreBreakdown:
        """Score one candidate; dimensions outside tolerance contribute nothing."""
        total = 0.0
        matched = 0
        for dimension in DIMENSIONS:
            target_value = target.value(dimension)
            candidate_value = candidate.profile.value(dimension)
            if target_value is None or candidate_value is None or target_value <= 0:
                continue
            deviation = abs(candidate_value - target_value) / target_value
            if _at_most(deviation, tolerance):
                total += (1 - deviation) * self.weights.weight(dimension)
                matched += 1
        total += self.weights.popularity_bonus(candidate.popularity)
        return ScoreBreakdown(score=total, matched_factors=matched)

    def rank(
        self,
        query: MatchQuery,
        candidates: Sequence[CandidateItem],
        limit: int | None = None,
    ) -> list[MatchResult]:
        """Filter, score and order candidates, best first."""
        if limit is not None and limit < 0:
            raise InvalidQueryError(f"Limit must be non-negative, got {limit}")
        admitted = self.filter_by_tolerance(
            query.target, query.tolerance, candidates, query.required_tags
        )
        results = []
        for candidate in admitted:
            breakdown = self.score(query.target, candidate, query.tolerance)
            if breakdown.matched_factors == 0:
                continue
            results.append(
                MatchResult(
                    item=candidate,
                    score=breakdown.score,
                    matched_factors=breakdown.matched_factors,
                )
            )
        # sorted() stays stable under reverse=True, so input order breaks ties.
        ranked = sorted(
            results,
            key=lambda result: (
                result.score,
                result.matched_factors,
                result.item.popularity,
            ),
            reverse=True,
        )
        _logger.debug(
            "Ranked candidates: total=%s admitted=%s matched=%s",
            len(candidates),
            len(admitted),
            len(ranked),
        )
        if limit is not None:
            return ranked[:limit]
        return ranked
