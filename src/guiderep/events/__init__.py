# src/guiderep/events/__init__.py

"""
Notifications for GuideRep.
Event models and the journal that records and dispatches them.
"""

from .journal import EventJournal
from .schema import (
    Event,
    EventKind,
    FeedbackRated,
    FeedbackSubmitted,
    GuideRegistered,
    GuideStatusChanged,
    LedgerEvent,
    RewardIssued,
)

__all__ = [
    "EventJournal",
    "Event",
    "EventKind",
    "LedgerEvent",
    "GuideRegistered",
    "GuideStatusChanged",
    "FeedbackSubmitted",
    "FeedbackRated",
    "RewardIssued",
]
