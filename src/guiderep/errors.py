# src/guiderep/errors.py

"""
Failures raised by ledger operations.

Every error is a precondition violation detected before any state change,
so a caught error always means the operation had no effect.
"""

from typing import Any, Optional


class ReputationError(Exception):
    """Base class for all rejected ledger operations."""

    def __init__(self, message: str, identity: Optional[str] = None):
        super().__init__(message)
        self.identity = identity


class AlreadyRegistered(ReputationError):
    def __init__(self, identity: str):
        super().__init__(f"Guide {identity} is already registered", identity)


class VerifiedCannotSubmit(ReputationError):
    def __init__(self, identity: str):
        super().__init__(
            f"Guide {identity} is verified and cannot submit feedback", identity
        )


class VerifiedGuideOnly(ReputationError):
    def __init__(self, identity: str):
        super().__init__(f"Only verified guides may rate; {identity} is not", identity)


class Unauthorized(ReputationError):
    def __init__(self, identity: str, action: str = "this operation"):
        super().__init__(f"{identity} is not authorized to perform {action}", identity)
        self.action = action


class SelfRatingForbidden(ReputationError):
    def __init__(self, identity: str, feedback_id: int):
        super().__init__(
            f"Guide {identity} cannot rate its own feedback {feedback_id}", identity
        )
        self.feedback_id = feedback_id


class DuplicateRating(ReputationError):
    def __init__(self, identity: str, feedback_id: int):
        super().__init__(f"Guide {identity} already rated feedback {feedback_id}", identity)
        self.feedback_id = feedback_id


class InvalidFeedbackId(ReputationError, ValueError):
    def __init__(self, feedback_id: Any, count: int):
        super().__init__(
            f"Feedback id {feedback_id!r} out of range (have {count} entries)"
        )
        self.feedback_id = feedback_id
        self.count = count


class InvalidScoreRange(ReputationError, ValueError):
    def __init__(self, field: str, value: Any, low: int = 1, high: int = 5):
        super().__init__(f"{field} must be an integer in [{low}, {high}], got {value!r}")
        self.field = field
        self.value = value


class InvalidMatchCount(ReputationError, ValueError):
    def __init__(self, identity: str, count: Any):
        super().__init__(
            f"Match count must be a non-negative integer, got {count!r}", identity
        )
        self.count = count


class InvalidIdentity(ReputationError, ValueError):
    def __init__(self, identity: Any):
        super().__init__(f"Guide identity must not be empty, got {identity!r}")
        self.value = identity


class InvalidFeedback(ReputationError, ValueError):
    def __init__(self, author: str, reason: str):
        super().__init__(f"Invalid feedback from {author}: {reason}", author)
        self.reason = reason
