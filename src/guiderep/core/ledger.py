# src/guiderep/core/ledger.py

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, List, Optional, Tuple

from guiderep.core.config import GuideRepConfig
from guiderep.credibility.aggregator import RatingAggregator, RatingOutcome
from guiderep.credibility.verifier import VerificationEvaluator, VerificationReport
from guiderep.errors import ReputationError, Unauthorized
from guiderep.events.journal import EventJournal
from guiderep.events.schema import (
    Event,
    FeedbackRated,
    FeedbackSubmitted,
    GuideRegistered,
    GuideStatusChanged,
    RewardIssued,
)
from guiderep.feedback.store import FeedbackStore
from guiderep.models.schema import FeedbackSummary, Guide, GuideStatus, Rating
from guiderep.registry.guides import GuideRegistry
from guiderep.rewards.issuer import RewardIssuer

logger = logging.getLogger(__name__)


class ReputationLedger:
    """
    Guide reputation ledger.

    Owns the guide registry, the feedback log and reward balances, and is the
    only way to change them. Each operation runs under one coarse lock and is
    all-or-nothing: a rejected operation raises a ReputationError, changes no
    state and publishes no events.
    """

    def __init__(
        self,
        config: Optional[GuideRepConfig] = None,
        journal: Optional[EventJournal] = None,
    ):
        """
        Initialize the ledger.

        Args:
            config: Validated GuideRep configuration (default: built-in defaults)
            journal: Event journal to publish notifications to
        """
        self.config = config or GuideRepConfig()
        self.journal = journal or EventJournal(ledger_name=self.config.ledger_name)
        self._lock = threading.RLock()

        verification = self.config.verification
        self.registry = GuideRegistry()
        self.store = FeedbackStore(self.registry)
        self.evaluator = VerificationEvaluator(
            min_total_ratings=verification.min_total_ratings,
            min_metric_average=verification.min_metric_average,
            min_overall_average=verification.min_overall_average,
            scale=verification.scale,
        )
        self.issuer = RewardIssuer(
            amount=self.config.rewards.amount,
            single_lifetime_reward=self.config.rewards.single_lifetime_reward,
        )
        self.aggregator = RatingAggregator(
            registry=self.registry,
            store=self.store,
            evaluator=self.evaluator,
            issuer=self.issuer,
            min_score=verification.min_score,
            max_score=verification.max_score,
        )
        self._admins = set(self.config.admin.identities)

        for identity in self.config.admin.genesis_verified:
            self.seed_verified_guide(identity)

    @contextmanager
    def _operation(self, name: str) -> Iterator[None]:
        with self._lock:
            try:
                yield
            except ReputationError as e:
                logger.warning(f"{name} rejected: {e}")
                raise

    # Mutating operations

    def register(self, identity: str) -> Guide:
        """
        Register a guide with a zeroed record.

        Raises:
            InvalidIdentity: If identity is blank
            AlreadyRegistered: If the guide is verified or has submitted feedback
        """
        with self._operation("register"):
            guide = self.registry.register(identity)
            self.journal.publish([GuideRegistered(identity=guide.identity)])
            return guide.model_copy(deep=True)

    def seed_verified_guide(self, identity: str) -> Guide:
        """Register a genesis guide that is verified from the start."""
        with self._operation("seed_verified_guide"):
            guide = self.registry.seed_verified(identity)
            self.journal.publish([GuideRegistered(identity=guide.identity)])
            return guide.model_copy(deep=True)

    def submit_feedback(
        self, author: str, content: str, timestamp: Optional[int] = None
    ) -> int:
        """
        Append feedback authored by an unverified guide.

        Returns:
            Zero-based feedback id.

        Raises:
            VerifiedCannotSubmit: If author is currently verified
            InvalidIdentity: If author is blank
            InvalidFeedback: If content or timestamp is malformed
        """
        with self._operation("submit_feedback"):
            feedback_id = self.store.submit(author, content, timestamp)
            self.journal.publish(
                [FeedbackSubmitted(feedback_id=feedback_id, author=author, content=content)]
            )
            return feedback_id

    def rate_feedback(
        self,
        feedback_id: int,
        rater: str,
        expertise: int,
        help: int,
        recommend: int,
    ) -> RatingOutcome:
        """
        Rate a feedback entry and re-evaluate its author's verification.

        Raises:
            VerifiedGuideOnly, InvalidFeedbackId, InvalidScoreRange,
            SelfRatingForbidden, DuplicateRating
        """
        with self._operation("rate_feedback"):
            outcome = self.aggregator.rate(feedback_id, rater, expertise, help, recommend)
            self.journal.publish(self._rating_events(outcome))
            return outcome

    def set_match_count(self, caller: str, identity: str, count: int) -> Guide:
        """
        Overwrite a guide's match count. Admin only; verification is unaffected.

        Raises:
            Unauthorized: If caller is not a configured admin
            InvalidMatchCount: If count is not a non-negative integer
        """
        with self._operation("set_match_count"):
            if caller not in self._admins:
                raise Unauthorized(caller, "set_match_count")
            guide = self.registry.set_match_count(identity, count)
            logger.info(f"Match count for {identity} set to {count} by {caller}")
            return guide.model_copy(deep=True)

    def _rating_events(self, outcome: RatingOutcome) -> List[Event]:
        rating = outcome.rating
        events: List[Event] = [
            FeedbackRated(
                feedback_id=outcome.feedback_id,
                author=outcome.author,
                rater=rating.rater,
                expertise=rating.expertise,
                help=rating.help,
                recommend=rating.recommend,
            )
        ]
        if outcome.status_changed:
            events.append(
                GuideStatusChanged(identity=outcome.author, verified=outcome.is_verified)
            )
        if outcome.rewarded:
            events.append(RewardIssued(identity=outcome.author, amount=outcome.reward))
        return events

    # Queries

    def guide_status(self, identity: str) -> GuideStatus:
        with self._lock:
            guide = self.registry.get(identity)
            if guide is None:
                return GuideStatus.IN_PROGRESS
            return guide.status(self.config.verification.min_total_ratings)

    def guide(self, identity: str) -> Optional[Guide]:
        with self._lock:
            return self.registry.snapshot(identity)

    def guides(self) -> List[str]:
        with self._lock:
            return self.registry.identities()

    def is_admin(self, identity: str) -> bool:
        return identity in self._admins

    def feedback(self, feedback_id: int) -> FeedbackSummary:
        """
        Raises:
            InvalidFeedbackId: If feedback_id is out of range
        """
        with self._lock:
            return self.store.summary(feedback_id)

    def feedback_count(self) -> int:
        with self._lock:
            return self.store.count()

    def feedback_ratings(self, feedback_id: int) -> Tuple[Rating, ...]:
        with self._lock:
            return self.store.ratings(feedback_id)

    def feedback_by_author(self, author: str) -> List[int]:
        with self._lock:
            return self.store.ids_by_author(author)

    def verification_report(self, identity: str) -> Optional[VerificationReport]:
        """Explain the current policy decision for a guide without changing it."""
        with self._lock:
            guide = self.registry.get(identity)
            if guide is None:
                return None
            return self.evaluator.evaluate(guide, self.store.rating_counts(identity))

    def balance_of(self, identity: str) -> int:
        with self._lock:
            return self.issuer.balance_of(identity)

    def rewards_issued(self, identity: str) -> int:
        with self._lock:
            return self.issuer.rewards_issued(identity)
