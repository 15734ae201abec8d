# tests/conftest.py

import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from guiderep.core.config import AdminConfig, GuideRepConfig
from guiderep.core.ledger import ReputationLedger

MENTORS = [f"mentor{i:02d}" for i in range(20)]


@pytest.fixture
def config():
    """Configuration with one admin and twenty verified genesis raters."""
    return GuideRepConfig(
        admin=AdminConfig(identities=["admin"], genesis_verified=MENTORS)
    )


@pytest.fixture
def ledger(config):
    return ReputationLedger(config=config)


@pytest.fixture
def mentors():
    return list(MENTORS)


def _rate_many(ledger, feedback_id, raters, scores):
    """Rate feedback_id once per rater with the same (expertise, help, recommend)."""
    return [ledger.rate_feedback(feedback_id, rater, *scores) for rater in raters]


@pytest.fixture
def rate_many():
    return _rate_many
