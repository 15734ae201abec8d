# src/guiderep/core/config.py

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

logger = logging.getLogger(__name__)

_TRUTHY = ("true", "1", "yes")


class VerificationConfig(BaseModel):
    min_total_ratings: int = Field(default=10, ge=1)
    min_metric_average: int = Field(default=3000, ge=1)
    min_overall_average: int = Field(default=4000, ge=1)
    scale: int = Field(default=1000, ge=1)
    min_score: int = Field(default=1, ge=1, le=5)
    max_score: int = Field(default=5, ge=1, le=5)

    @model_validator(mode="after")
    def check_score_range(self) -> "VerificationConfig":
        if self.min_score > self.max_score:
            raise ValueError("min_score must not exceed max_score")
        return self


class RewardConfig(BaseModel):
    amount: int = Field(default=100, ge=0)
    single_lifetime_reward: bool = False


class AdminConfig(BaseModel):
    identities: list[str] = Field(default_factory=list)
    genesis_verified: list[str] = Field(default_factory=list)

    @field_validator("identities", "genesis_verified")
    @classmethod
    def strip_blank(cls, v: list[str]) -> list[str]:
        # Order-preserving, duplicates dropped
        return list(dict.fromkeys(item.strip() for item in v if item and item.strip()))


class GuideRepConfig(BaseModel):
    """
    Main configuration model for GuideRep.
    """

    verification: VerificationConfig = Field(default_factory=VerificationConfig)
    rewards: RewardConfig = Field(default_factory=RewardConfig)
    admin: AdminConfig = Field(default_factory=AdminConfig)
    ledger_name: str = "guiderep"

    @field_validator("rewards", mode="before")
    @classmethod
    def load_rewards_from_env(cls, v: Any) -> Dict[str, Any]:
        """Override reward settings with environment variables if present."""
        if isinstance(v, BaseModel):
            v = v.model_dump()
        if not isinstance(v, dict):
            v = {}

        if "GUIDEREP_REWARD_AMOUNT" in os.environ:
            v["amount"] = int(os.environ["GUIDEREP_REWARD_AMOUNT"])
        if "GUIDEREP_SINGLE_LIFETIME_REWARD" in os.environ:
            v["single_lifetime_reward"] = (
                os.environ["GUIDEREP_SINGLE_LIFETIME_REWARD"].lower() in _TRUTHY
            )
        return v

    @field_validator("admin", mode="before")
    @classmethod
    def load_admins_from_env(cls, v: Any) -> Dict[str, Any]:
        if isinstance(v, BaseModel):
            v = v.model_dump()
        if not isinstance(v, dict):
            v = {}

        if "GUIDEREP_ADMINS" in os.environ:
            v["identities"] = os.environ["GUIDEREP_ADMINS"].split(",")
        return v

    @field_validator("verification", mode="before")
    @classmethod
    def load_verification_from_env(cls, v: Any) -> Dict[str, Any]:
        if isinstance(v, BaseModel):
            v = v.model_dump()
        if not isinstance(v, dict):
            v = {}

        if "GUIDEREP_MIN_TOTAL_RATINGS" in os.environ:
            v["min_total_ratings"] = int(os.environ["GUIDEREP_MIN_TOTAL_RATINGS"])
        return v

    class Config:
        validate_default = True


def load_config(config_path: Optional[Union[str, Path]] = None) -> GuideRepConfig:
    """
    Load GuideRep configuration from YAML file.

    Args:
        config_path: Path to config.yaml (default: ./config/config.yaml)

    Returns:
        Validated GuideRepConfig instance.
    """
    if config_path is None:
        config_path = Path("config") / "config.yaml"
    else:
        config_path = Path(config_path)

    config_data = {}
    if config_path.exists():
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config_data = yaml.safe_load(f) or {}
            logger.info(f"Loaded configuration from {config_path}")
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load config file {config_path}: {e}")
    else:
        logger.info(f"Config file not found at {config_path}, using defaults")

    # Create config instance (env vars override file)
    config = GuideRepConfig(**config_data)

    logger.debug("GuideRep configuration loaded with settings:")
    logger.debug(
        f"  Verification: min_ratings={config.verification.min_total_ratings}, "
        f"metric>={config.verification.min_metric_average}, "
        f"overall>={config.verification.min_overall_average}"
    )
    logger.debug(
        f"  Rewards: amount={config.rewards.amount}, "
        f"single_lifetime={config.rewards.single_lifetime_reward}"
    )
    logger.debug(f"  Admins: {len(config.admin.identities)} configured")

    return config
