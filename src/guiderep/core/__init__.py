# src/guiderep/core/__init__.py

"""
Core orchestration for GuideRep.
Manages configuration, the reputation ledger and operation replay.
"""

from .config import GuideRepConfig, load_config
from .ledger import ReputationLedger
from .replay import Operation, OperationResult, load_operations, replay_operations

__all__ = [
    "GuideRepConfig",
    "load_config",
    "ReputationLedger",
    "Operation",
    "OperationResult",
    "load_operations",
    "replay_operations",
]
