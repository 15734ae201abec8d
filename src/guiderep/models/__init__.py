# src/guiderep/models/__init__.py

"""
Data model for GuideRep.
Guides, feedback entries and the ratings attached to them.
"""

from .schema import FeedbackEntry, FeedbackSummary, Guide, GuideStatus, Rating

__all__ = [
    "Guide",
    "GuideStatus",
    "Rating",
    "FeedbackEntry",
    "FeedbackSummary",
]
