"""Result ordering: score descending, nearer first among near-equal scores."""

from functools import cmp_to_key

from destinations.models.search import ScoredResult

DEFAULT_TIE_EPSILON = 0.01


def rank_results(
    results: list[ScoredResult],
    tie_epsilon: float = DEFAULT_TIE_EPSILON,
    max_results: int | None = None,
) -> list[ScoredResult]:
    """Sort by overall score descending and truncate.

    Scores within ``tie_epsilon`` of each other are treated as equal and
    ordered by distance from the search center, closest first.
    """

    def _compare(a: ScoredResult, b: ScoredResult) -> int:
        diff = b.overall_score - a.overall_score
        if abs(diff) > tie_epsilon:
            return 1 if diff > 0 else -1
        if a.location.distance != b.location.distance:
            return -1 if a.location.distance < b.location.distance else 1
        return 0

    ranked = sorted(results, key=cmp_to_key(_compare))
    if max_results is not None:
        ranked = ranked[:max_results]
    return ranked
