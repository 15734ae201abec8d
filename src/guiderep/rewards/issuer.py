# src/guiderep/rewards/issuer.py

import logging
from collections import defaultdict
from typing import Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_REWARD_AMOUNT = 100


class RewardIssuer:
    """
    Credits a fixed token reward to a guide's balance.

    Called once for every unverified -> verified transition. A guide that
    loses and regains verification is rewarded again unless
    single_lifetime_reward is enabled.
    """

    def __init__(
        self,
        amount: int = DEFAULT_REWARD_AMOUNT,
        single_lifetime_reward: bool = False,
    ):
        if amount < 0:
            raise ValueError("Reward amount must not be negative")
        self.amount = amount
        self.single_lifetime_reward = single_lifetime_reward
        self._balances: Dict[str, int] = defaultdict(int)
        self._issued: Dict[str, int] = defaultdict(int)

    def credit(self, identity: str, amount: Optional[int] = None) -> Optional[int]:
        """
        Credit a reward to identity.

        Args:
            identity: Guide receiving the reward
            amount: Override for the configured reward amount

        Returns:
            The amount credited, which may be 0, or None when the lifetime
            cap suppressed the reward.
        """
        if self.single_lifetime_reward and self._issued.get(identity, 0) > 0:
            logger.info(f"Reward for {identity} suppressed: lifetime reward already issued")
            return None

        amount = self.amount if amount is None else amount
        self._balances[identity] += amount
        self._issued[identity] += 1
        logger.info(
            f"Issued reward of {amount} to {identity} "
            f"(reward #{self._issued[identity]}, balance {self._balances[identity]})"
        )
        return amount

    def balance_of(self, identity: str) -> int:
        return self._balances.get(identity, 0)

    def rewards_issued(self, identity: str) -> int:
        return self._issued.get(identity, 0)

    @property
    def total_issued(self) -> int:
        return sum(self._balances.values())
