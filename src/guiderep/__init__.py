# src/guiderep/__init__.py

"""
GuideRep - Guide Reputation Ledger
Peer-rated feedback, rating aggregation and verification for guides.
"""

__version__ = "0.1.0"
__author__ = "GuideRep Development Team"

# No direct exports from root; subpackages are accessed explicitly
# e.g., from guiderep.core import ReputationLedger
