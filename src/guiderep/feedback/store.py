# src/guiderep/feedback/store.py

import logging
import time
from collections import defaultdict
from typing import Dict, List, Optional, Tuple

from pydantic import ValidationError

from guiderep.errors import (
    InvalidFeedback,
    InvalidFeedbackId,
    InvalidIdentity,
    VerifiedCannotSubmit,
)
from guiderep.models.schema import FeedbackEntry, FeedbackSummary, Rating
from guiderep.registry.guides import GuideRegistry

logger = logging.getLogger(__name__)


class FeedbackStore:
    """
    Append-only ordered log of feedback entries.

    A feedback id is the zero-based position of the entry in the log; ids are
    never reused. Entries are only ever changed by appending ratings.
    """

    def __init__(self, registry: GuideRegistry):
        """
        Args:
            registry: Guide registry whose feedback counters this store maintains
        """
        self.registry = registry
        self._entries: List[FeedbackEntry] = []
        self._by_author: Dict[str, List[int]] = defaultdict(list)

    def submit(
        self, author: str, content: str, timestamp: Optional[int] = None
    ) -> int:
        """
        Append a feedback entry authored by an unverified guide.

        Args:
            author: Authoring guide identity (record is created if missing)
            content: Opaque feedback text
            timestamp: Unix timestamp in seconds (default: now)

        Returns:
            The new feedback id.

        Raises:
            VerifiedCannotSubmit: If author is currently verified
            InvalidIdentity: If author is blank
            InvalidFeedback: If content is not text or timestamp is not a
                non-negative integer
        """
        if self.registry.is_verified(author):
            raise VerifiedCannotSubmit(author)

        if timestamp is None:
            timestamp = int(time.time())

        # Validate the entry before touching any state
        try:
            entry = FeedbackEntry(
                feedback_id=len(self._entries),
                author=author,
                content=content,
                timestamp=timestamp,
            )
        except ValidationError as e:
            problems = [
                (err["loc"][0] if err["loc"] else "entry", err["msg"])
                for err in e.errors()
            ]
            if any(field == "author" for field, _ in problems):
                raise InvalidIdentity(author) from None
            raise InvalidFeedback(
                author, "; ".join(f"{field}: {msg}" for field, msg in problems)
            ) from None

        guide = self.registry.ensure(author)
        self._entries.append(entry)
        self._by_author[author].append(entry.feedback_id)
        guide.feedback_count += 1

        logger.info(f"Feedback {entry.feedback_id} submitted by {author}")
        return entry.feedback_id

    def get(self, feedback_id: int) -> FeedbackEntry:
        """
        Return the live entry for feedback_id.

        Raises:
            InvalidFeedbackId: If feedback_id is not a valid position
        """
        if (
            isinstance(feedback_id, bool)
            or not isinstance(feedback_id, int)
            or not 0 <= feedback_id < len(self._entries)
        ):
            raise InvalidFeedbackId(feedback_id, len(self._entries))
        return self._entries[feedback_id]

    def record_rating(self, feedback_id: int, rating: Rating) -> FeedbackEntry:
        """Append an already validated rating to an entry."""
        entry = self.get(feedback_id)
        entry.append_rating(rating)
        return entry

    def summary(self, feedback_id: int) -> FeedbackSummary:
        entry = self.get(feedback_id)
        return FeedbackSummary(
            feedback_id=entry.feedback_id,
            author=entry.author,
            content=entry.content,
            rating_count=entry.rating_count,
            timestamp=entry.timestamp,
        )

    def ratings(self, feedback_id: int) -> Tuple[Rating, ...]:
        return tuple(self.get(feedback_id).ratings)

    def ids_by_author(self, author: str) -> List[int]:
        return list(self._by_author.get(author, []))

    def rating_counts(self, author: str) -> List[int]:
        """Number of ratings on each feedback entry authored by author."""
        return [self._entries[i].rating_count for i in self._by_author.get(author, [])]

    def count(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
