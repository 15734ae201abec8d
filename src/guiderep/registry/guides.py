# src/guiderep/registry/guides.py

import logging
from typing import Dict, List, Optional

from pydantic import ValidationError

from guiderep.errors import AlreadyRegistered, InvalidIdentity, InvalidMatchCount
from guiderep.models.schema import Guide

logger = logging.getLogger(__name__)


def new_guide(identity: str) -> Guide:
    """Build a zeroed Guide record, raising InvalidIdentity for a blank identity."""
    try:
        return Guide(identity=identity)
    except ValidationError:
        raise InvalidIdentity(identity) from None


class GuideRegistry:
    """
    Owns one Guide record per identity.

    Records are never deleted. Callers outside the core only ever see copies
    (see snapshot()), the live records are mutated by the feedback store and
    the rating aggregator.
    """

    def __init__(self):
        self._guides: Dict[str, Guide] = {}

    def register(self, identity: str) -> Guide:
        """
        Create a zeroed Guide record.

        A pristine record (unverified, no feedback) may be registered again and
        is replaced by a fresh one.

        Raises:
            InvalidIdentity: If identity is not a non-blank string
            AlreadyRegistered: If the existing record is verified or has activity
        """
        guide = new_guide(identity)
        existing = self._guides.get(guide.identity)
        if existing is not None and (existing.is_verified or existing.has_activity):
            raise AlreadyRegistered(guide.identity)

        self._guides[guide.identity] = guide
        logger.info(f"Registered guide {guide.identity}")
        return guide

    def seed_verified(self, identity: str) -> Guide:
        """Register a genesis guide that starts out verified."""
        guide = self.register(identity)
        guide.is_verified = True
        logger.info(f"Seeded verified guide {guide.identity}")
        return guide

    def ensure(self, identity: str) -> Guide:
        """Return the live record for identity, creating a zeroed one if needed."""
        guide = self._guides.get(identity)
        if guide is None:
            guide = new_guide(identity)
            self._guides[guide.identity] = guide
            logger.debug(f"Auto-initialized guide record for {guide.identity}")
        return guide

    def get(self, identity: str) -> Optional[Guide]:
        return self._guides.get(identity)

    def snapshot(self, identity: str) -> Optional[Guide]:
        guide = self._guides.get(identity)
        return guide.model_copy(deep=True) if guide is not None else None

    def is_verified(self, identity: str) -> bool:
        guide = self._guides.get(identity)
        return guide is not None and guide.is_verified

    def set_match_count(self, identity: str, count: int) -> Guide:
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise InvalidMatchCount(identity, count)
        guide = self.ensure(identity)
        guide.match_count = count
        return guide

    def identities(self) -> List[str]:
        return list(self._guides)

    def __contains__(self, identity: object) -> bool:
        return identity in self._guides

    def __len__(self) -> int:
        return len(self._guides)
