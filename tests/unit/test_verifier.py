# tests/unit/test_verifier.py

import pytest

from guiderep.credibility.verifier import (
    RULE_COVERAGE,
    RULE_METRIC_AVERAGE,
    RULE_MIN_TOTAL_RATINGS,
    RULE_OVERALL_AVERAGE,
    VerificationEvaluator,
    fixed_point_average,
    format_fixed_point,
)
from guiderep.models.schema import Guide


def make_guide(total_ratings, expertise, help, recommend, feedback_count=1):
    return Guide(
        identity="alice",
        feedback_count=feedback_count,
        total_ratings=total_ratings,
        total_expertise=expertise,
        total_help=help,
        total_recommend=recommend,
    )


class TestFixedPoint:
    """Test integer fixed-point helpers."""

    def test_exact_average(self):
        assert fixed_point_average(30, 10) == 3000
        assert fixed_point_average(45, 10) == 4500

    def test_floor_division(self):
        assert fixed_point_average(10, 3) == 3333
        assert fixed_point_average(20, 3) == 6666  # floored, not rounded

    def test_zero_count_rejected(self):
        with pytest.raises(ValueError):
            fixed_point_average(5, 0)

    def test_format(self):
        assert format_fixed_point(3333) == "3.333"
        assert format_fixed_point(4000) == "4.000"
        assert format_fixed_point(5) == "0.005"


class TestVerificationPolicy:
    """Test the ordered verification rules."""

    @pytest.fixture
    def evaluator(self):
        return VerificationEvaluator()

    def test_too_few_ratings(self, evaluator):
        guide = make_guide(9, 45, 45, 45)
        report = evaluator.evaluate(guide, [9])

        assert report.verified is False
        assert report.failed_rule == RULE_MIN_TOTAL_RATINGS
        # Averages are still reported for explanation
        assert report.avg_expertise == 5000

    def test_no_ratings_has_no_averages(self, evaluator):
        report = evaluator.evaluate(make_guide(0, 0, 0, 0), [0, 0])

        assert report.verified is False
        assert report.avg_overall is None
        assert report.unrated_feedback == 2

    def test_coverage_rule(self, evaluator):
        guide = make_guide(10, 50, 50, 50, feedback_count=2)
        report = evaluator.evaluate(guide, [10, 0])

        assert report.verified is False
        assert report.failed_rule == RULE_COVERAGE
        assert report.covered is False

    def test_all_perfect_scores_verify(self, evaluator):
        report = evaluator.evaluate(make_guide(10, 50, 50, 50), [10])

        assert report.verified is True
        assert report.failed_rule is None
        assert report.avg_overall == 5000

    def test_inclusive_boundaries(self, evaluator):
        # expertise exactly 3.000, overall exactly 4.000
        report = evaluator.evaluate(make_guide(10, 30, 45, 45), [10])

        assert report.avg_expertise == 3000
        assert report.avg_overall == 4000
        assert report.verified is True

    def test_metric_below_floor(self, evaluator):
        # overall is high but help averages 2.900
        report = evaluator.evaluate(make_guide(10, 50, 29, 50), [10])

        assert report.verified is False
        assert report.failed_rule == RULE_METRIC_AVERAGE

    def test_overall_below_floor(self, evaluator):
        report = evaluator.evaluate(make_guide(10, 39, 39, 39), [10])

        assert report.avg_overall == 3900
        assert report.verified is False
        assert report.failed_rule == RULE_OVERALL_AVERAGE

    def test_floor_division_decides_metric_boundary(self, evaluator):
        # 3002 / 1001 = 2.99900..., floored to 2999 (rounding would give 3000)
        guide = make_guide(1001, 3002, 5005, 5005)
        report = evaluator.evaluate(guide, [1001])

        assert report.avg_expertise == 2999
        assert report.verified is False
        assert report.failed_rule == RULE_METRIC_AVERAGE

    def test_floor_division_decides_overall_boundary(self, evaluator):
        # 12011 * 1000 / 3003 = 3999.66..., floored to 3999
        guide = make_guide(1001, 4004, 4004, 4003)
        report = evaluator.evaluate(guide, [1001])

        assert report.avg_overall == 3999
        assert report.failed_rule == RULE_OVERALL_AVERAGE

        guide = make_guide(1001, 4004, 4004, 4004)
        assert evaluator.is_verified(guide, [1001]) is True

    def test_decision_is_deterministic(self, evaluator):
        guide = make_guide(12, 44, 50, 41)
        first = evaluator.evaluate(guide, [5, 7])
        second = evaluator.evaluate(guide.model_copy(), [5, 7])
        assert first == second

    def test_custom_thresholds(self):
        evaluator = VerificationEvaluator(
            min_total_ratings=2, min_metric_average=2000, min_overall_average=2500
        )
        assert evaluator.is_verified(make_guide(2, 4, 6, 6), [2]) is True
        assert evaluator.is_verified(make_guide(1, 5, 5, 5), [1]) is False
