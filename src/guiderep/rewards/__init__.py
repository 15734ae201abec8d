# src/guiderep/rewards/__init__.py

from .issuer import DEFAULT_REWARD_AMOUNT, RewardIssuer

__all__ = [
    "RewardIssuer",
    "DEFAULT_REWARD_AMOUNT",
]
