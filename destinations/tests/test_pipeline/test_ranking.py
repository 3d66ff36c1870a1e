"""Tests for result ordering."""

from destinations.models.search import ScoredResult
from destinations.pipeline.ranking import rank_results
from destinations.tests.builders import make_day, make_place, make_series


def _result(place_id: str, score: float, distance: float) -> ScoredResult:
    return ScoredResult(
        location=make_place(place_id, place_id, distance),
        weather_forecast=make_series(place_id, [make_day()]),
        overall_score=score,
    )


class TestRankResults:
    def test_score_descending(self):
        ranked = rank_results([_result("a", 50, 1), _result("b", 80, 9), _result("c", 65, 5)])
        assert [r.location.id for r in ranked] == ["b", "c", "a"]

    def test_near_ties_prefer_closer(self):
        ranked = rank_results(
            [_result("far", 80.005, 15.0), _result("near", 80.0, 2.0), _result("low", 60.0, 1.0)]
        )
        assert [r.location.id for r in ranked] == ["near", "far", "low"]

    def test_real_difference_beats_distance(self):
        ranked = rank_results([_result("near", 79.0, 1.0), _result("far", 80.0, 50.0)])
        assert [r.location.id for r in ranked] == ["far", "near"]

    def test_truncation(self):
        results = [_result(str(i), float(i), 1.0) for i in range(10)]
        ranked = rank_results(results, max_results=3)
        assert [r.overall_score for r in ranked] == [9.0, 8.0, 7.0]

    def test_empty(self):
        assert rank_results([]) == []
