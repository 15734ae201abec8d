# src/guiderep/credibility/aggregator.py

import logging
from typing import Any, Optional

from pydantic import BaseModel

from guiderep.credibility.verifier import VerificationEvaluator, VerificationReport
from guiderep.errors import (
    DuplicateRating,
    InvalidScoreRange,
    SelfRatingForbidden,
    VerifiedGuideOnly,
)
from guiderep.feedback.store import FeedbackStore
from guiderep.models.schema import Rating
from guiderep.registry.guides import GuideRegistry
from guiderep.rewards.issuer import RewardIssuer

logger = logging.getLogger(__name__)


class RatingOutcome(BaseModel):
    """Everything that changed as the result of one accepted rating."""

    feedback_id: int
    author: str
    rating: Rating
    was_verified: bool
    report: VerificationReport
    reward: int = 0
    rewarded: bool = False

    @property
    def is_verified(self) -> bool:
        return self.report.verified

    @property
    def status_changed(self) -> bool:
        return self.was_verified != self.report.verified

    @property
    def promoted(self) -> bool:
        return not self.was_verified and self.report.verified

    class Config:
        frozen = True


class RatingAggregator:
    """
    Validates ratings, records them and keeps author totals in step.

    All preconditions are checked before anything is written, so a rejected
    rating leaves the store, the registry and the reward balances untouched.
    """

    def __init__(
        self,
        registry: GuideRegistry,
        store: FeedbackStore,
        evaluator: VerificationEvaluator,
        issuer: Optional[RewardIssuer] = None,
        min_score: int = 1,
        max_score: int = 5,
    ):
        """
        Args:
            registry: Guide records (raters and authors)
            store: Feedback log holding the rated entries
            evaluator: Verification policy re-run after every rating
            issuer: Reward issuer credited on each promotion (optional)
            min_score: Lowest accepted score component
            max_score: Highest accepted score component
        """
        self.registry = registry
        self.store = store
        self.evaluator = evaluator
        self.issuer = issuer
        self.min_score = min_score
        self.max_score = max_score

    def rate(
        self,
        feedback_id: int,
        rater: str,
        expertise: int,
        help: int,
        recommend: int,
    ) -> RatingOutcome:
        """
        Record a rating from a verified guide on someone else's feedback.

        Raises:
            VerifiedGuideOnly: rater is not currently verified
            InvalidFeedbackId: feedback_id is out of range
            InvalidScoreRange: a component lies outside [min_score, max_score]
            SelfRatingForbidden: rater authored the feedback
            DuplicateRating: rater already rated this feedback
        """
        if not self.registry.is_verified(rater):
            raise VerifiedGuideOnly(rater)

        entry = self.store.get(feedback_id)

        self._check_score("expertise", expertise)
        self._check_score("help", help)
        self._check_score("recommend", recommend)

        if rater == entry.author:
            raise SelfRatingForbidden(rater, feedback_id)
        if entry.has_rated(rater):
            raise DuplicateRating(rater, feedback_id)

        rating = Rating(rater=rater, expertise=expertise, help=help, recommend=recommend)

        # Preconditions hold; apply every mutation
        self.store.record_rating(feedback_id, rating)
        author = self.registry.ensure(entry.author)
        author.total_expertise += expertise
        author.total_help += help
        author.total_recommend += recommend
        author.total_ratings += 1
        logger.debug(
            f"{rater} rated feedback {feedback_id} by {entry.author}: "
            f"{expertise}/{help}/{recommend} (total ratings {author.total_ratings})"
        )

        was_verified = author.is_verified
        report = self.evaluator.evaluate(author, self.store.rating_counts(author.identity))
        author.is_verified = report.verified

        reward = 0
        rewarded = False
        if was_verified != report.verified:
            logger.info(
                f"Guide {author.identity} verification changed: "
                f"{was_verified} -> {report.verified}"
            )
            if report.verified and self.issuer is not None:
                credited = self.issuer.credit(author.identity)
                if credited is not None:
                    reward = credited
                    rewarded = True

        return RatingOutcome(
            feedback_id=feedback_id,
            author=author.identity,
            rating=rating,
            was_verified=was_verified,
            report=report,
            reward=reward,
            rewarded=rewarded,
        )

    def _check_score(self, field: str, value: Any) -> None:
        if (
            isinstance(value, bool)
            or not isinstance(value, int)
            or not self.min_score <= value <= self.max_score
        ):
            raise InvalidScoreRange(field, value, self.min_score, self.max_score)
