# src/guiderep/models/schema.py
from enum import Enum
from typing import List, Set, Tuple
from pydantic import BaseModel, Field, PrivateAttr, field_validator


class GuideStatus(str, Enum):
    IN_PROGRESS = "In progress"
    ALMOST = "Almost"
    FORMAL_GUIDE = "Formal Guide"


def _validate_identity(v: str) -> str:
    if not isinstance(v, str) or not v.strip():
        raise ValueError("identity must not be empty")
    return v


class Guide(BaseModel):
    identity: str = Field(..., description="Opaque account reference")
    feedback_count: int = Field(default=0, ge=0, description="Feedback entries authored")
    match_count: int = Field(default=0, ge=0, description="Externally administered counter")
    is_verified: bool = Field(default=False, description="Current verification state")
    total_expertise: int = Field(default=0, ge=0)
    total_help: int = Field(default=0, ge=0)
    total_recommend: int = Field(default=0, ge=0)
    total_ratings: int = Field(default=0, ge=0, description="Ratings received")

    @field_validator("identity")
    @classmethod
    def validate_identity(cls, v: str) -> str:
        return _validate_identity(v)

    @property
    def has_activity(self) -> bool:
        return self.feedback_count > 0

    def status(self, min_total_ratings: int = 10) -> GuideStatus:
        """Human-readable status derived from is_verified and total_ratings."""
        if self.is_verified:
            return GuideStatus.FORMAL_GUIDE
        if self.total_ratings >= min_total_ratings:
            return GuideStatus.ALMOST
        return GuideStatus.IN_PROGRESS


class Rating(BaseModel):
    rater: str = Field(..., description="Identity of the rating guide")
    expertise: int = Field(..., ge=1, le=5)
    help: int = Field(..., ge=1, le=5)
    recommend: int = Field(..., ge=1, le=5)

    @field_validator("rater")
    @classmethod
    def validate_rater(cls, v: str) -> str:
        return _validate_identity(v)

    @property
    def total(self) -> int:
        return self.expertise + self.help + self.recommend

    class Config:
        frozen = True


class FeedbackEntry(BaseModel):
    feedback_id: int = Field(..., ge=0, description="Zero-based insertion index")
    author: str = Field(..., description="Identity of the authoring guide")
    content: str = Field(default="", description="Opaque feedback text")
    timestamp: int = Field(..., ge=0, description="Unix timestamp (seconds)")
    ratings: List[Rating] = Field(default_factory=list)

    _raters: Set[str] = PrivateAttr(default_factory=set)

    @field_validator("author")
    @classmethod
    def validate_author(cls, v: str) -> str:
        return _validate_identity(v)

    @property
    def rating_count(self) -> int:
        return len(self.ratings)

    def has_rated(self, rater: str) -> bool:
        return rater in self._raters

    def append_rating(self, rating: Rating) -> None:
        if rating.rater in self._raters:
            raise ValueError(f"{rating.rater} already rated feedback {self.feedback_id}")
        self.ratings.append(rating)
        self._raters.add(rating.rater)


class FeedbackSummary(BaseModel):
    """Read-only view of a feedback entry returned by queries."""

    feedback_id: int
    author: str
    content: str
    rating_count: int
    timestamp: int

    def as_tuple(self) -> Tuple[str, str, int, int]:
        return (self.author, self.content, self.rating_count, self.timestamp)

    class Config:
        frozen = True
