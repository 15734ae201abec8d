# src/guiderep/events/schema.py
from enum import Enum
from typing import Union

from pydantic import BaseModel, Field


class EventKind(str, Enum):
    GUIDE_REGISTERED = "guide_registered"
    GUIDE_STATUS_CHANGED = "guide_status_changed"
    FEEDBACK_SUBMITTED = "feedback_submitted"
    FEEDBACK_RATED = "feedback_rated"
    REWARD_ISSUED = "reward_issued"


class LedgerEvent(BaseModel):
    kind: EventKind
    sequence: int = Field(default=0, ge=0, description="Position in the journal")

    class Config:
        frozen = True


class GuideRegistered(LedgerEvent):
    kind: EventKind = EventKind.GUIDE_REGISTERED
    identity: str


class GuideStatusChanged(LedgerEvent):
    kind: EventKind = EventKind.GUIDE_STATUS_CHANGED
    identity: str
    verified: bool


class FeedbackSubmitted(LedgerEvent):
    kind: EventKind = EventKind.FEEDBACK_SUBMITTED
    feedback_id: int
    author: str
    content: str


class FeedbackRated(LedgerEvent):
    kind: EventKind = EventKind.FEEDBACK_RATED
    feedback_id: int
    author: str
    rater: str
    expertise: int
    help: int
    recommend: int


class RewardIssued(LedgerEvent):
    kind: EventKind = EventKind.REWARD_ISSUED
    identity: str
    amount: int


Event = Union[
    GuideRegistered,
    GuideStatusChanged,
    FeedbackSubmitted,
    FeedbackRated,
    RewardIssued,
]
