# src/guiderep/credibility/__init__.py

"""
Rating aggregation and verification policy for GuideRep.
Turns peer ratings into running totals and a verified/unverified decision.
"""

from .aggregator import RatingAggregator, RatingOutcome
from .verifier import (
    VerificationEvaluator,
    VerificationReport,
    fixed_point_average,
    format_fixed_point,
)

__all__ = [
    "RatingAggregator",
    "RatingOutcome",
    "VerificationEvaluator",
    "VerificationReport",
    "fixed_point_average",
    "format_fixed_point",
]
