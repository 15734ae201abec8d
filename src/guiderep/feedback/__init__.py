# src/guiderep/feedback/__init__.py

"""
Feedback log for GuideRep.
Stores feedback entries in submission order along with their ratings.
"""

from .store import FeedbackStore

__all__ = ["FeedbackStore"]
