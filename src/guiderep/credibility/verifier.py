# src/guiderep/credibility/verifier.py

import logging
from typing import Optional, Sequence

from pydantic import BaseModel

from guiderep.models.schema import Guide

logger = logging.getLogger(__name__)

FIXED_POINT_SCALE = 1000
MIN_TOTAL_RATINGS = 10
MIN_METRIC_AVERAGE = 3000  # 3.000
MIN_OVERALL_AVERAGE = 4000  # 4.000

RULE_MIN_TOTAL_RATINGS = "min_total_ratings"
RULE_COVERAGE = "coverage"
RULE_METRIC_AVERAGE = "metric_average"
RULE_OVERALL_AVERAGE = "overall_average"


def fixed_point_average(total: int, count: int, scale: int = FIXED_POINT_SCALE) -> int:
    """
    Average of count terms summing to total, scaled by scale and floored.

    Examples:
        >>> fixed_point_average(37, 10)
        3700
        >>> fixed_point_average(10, 3)
        3333
    """
    if count <= 0:
        raise ValueError("count must be positive")
    return (total * scale) // count


def format_fixed_point(value: int, scale: int = FIXED_POINT_SCALE) -> str:
    """Render a fixed-point value as a decimal string, e.g. 3333 -> '3.333'."""
    width = len(str(scale)) - 1
    return f"{value // scale}.{value % scale:0{width}d}"


class VerificationReport(BaseModel):
    """Outcome of one evaluation, with the inputs that drove it."""

    identity: str
    total_ratings: int
    unrated_feedback: int
    avg_expertise: Optional[int] = None
    avg_help: Optional[int] = None
    avg_recommend: Optional[int] = None
    avg_overall: Optional[int] = None
    verified: bool
    failed_rule: Optional[str] = None

    @property
    def covered(self) -> bool:
        return self.unrated_feedback == 0

    class Config:
        frozen = True


class VerificationEvaluator:
    """
    Decides whether a guide is verified from its rating aggregates.

    The decision is recomputed from scratch on every call and depends only on
    the guide's totals and the rating count of each of its feedback entries.
    All averages are integers scaled by `scale` using floor division.
    """

    def __init__(
        self,
        min_total_ratings: int = MIN_TOTAL_RATINGS,
        min_metric_average: int = MIN_METRIC_AVERAGE,
        min_overall_average: int = MIN_OVERALL_AVERAGE,
        scale: int = FIXED_POINT_SCALE,
    ):
        """
        Initialize evaluator with configurable thresholds.

        Args:
            min_total_ratings: Ratings required before a guide can be verified
            min_metric_average: Per-metric average floor (scaled, inclusive)
            min_overall_average: Overall average floor (scaled, inclusive)
            scale: Fixed-point scale factor
        """
        self.min_total_ratings = min_total_ratings
        self.min_metric_average = min_metric_average
        self.min_overall_average = min_overall_average
        self.scale = scale

    def evaluate(self, guide: Guide, rating_counts: Sequence[int]) -> VerificationReport:
        """
        Evaluate the verification policy for one guide.

        Args:
            guide: Guide record with current totals
            rating_counts: Number of ratings on each feedback entry the guide authored

        Returns:
            VerificationReport whose `verified` field is the decision.
        """
        total = guide.total_ratings
        unrated = sum(1 for c in rating_counts if c == 0)

        averages = {}
        if total > 0:
            averages = {
                "avg_expertise": fixed_point_average(guide.total_expertise, total, self.scale),
                "avg_help": fixed_point_average(guide.total_help, total, self.scale),
                "avg_recommend": fixed_point_average(guide.total_recommend, total, self.scale),
                "avg_overall": fixed_point_average(
                    guide.total_expertise + guide.total_help + guide.total_recommend,
                    total * 3,
                    self.scale,
                ),
            }

        failed_rule = self._first_failed_rule(total, unrated, averages)
        report = VerificationReport(
            identity=guide.identity,
            total_ratings=total,
            unrated_feedback=unrated,
            verified=failed_rule is None,
            failed_rule=failed_rule,
            **averages,
        )
        logger.debug(
            f"Evaluated {guide.identity}: verified={report.verified} "
            f"rule={report.failed_rule} ratings={total} unrated={unrated}"
        )
        return report

    def is_verified(self, guide: Guide, rating_counts: Sequence[int]) -> bool:
        return self.evaluate(guide, rating_counts).verified

    def _first_failed_rule(self, total: int, unrated: int, averages: dict) -> Optional[str]:
        """Apply the policy rules in order; None means every rule passed."""
        if total < self.min_total_ratings:
            return RULE_MIN_TOTAL_RATINGS

        # Every authored entry must carry at least one rating
        if unrated > 0:
            return RULE_COVERAGE

        if not all(
            averages[key] >= self.min_metric_average
            for key in ("avg_expertise", "avg_help", "avg_recommend")
        ):
            return RULE_METRIC_AVERAGE

        if averages["avg_overall"] < self.min_overall_average:
            return RULE_OVERALL_AVERAGE

        return None
