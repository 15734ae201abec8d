# tests/unit/test_config.py

import pytest
from pydantic import ValidationError

from guiderep.core.config import GuideRepConfig, VerificationConfig, load_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "GUIDEREP_REWARD_AMOUNT",
        "GUIDEREP_SINGLE_LIFETIME_REWARD",
        "GUIDEREP_ADMINS",
        "GUIDEREP_MIN_TOTAL_RATINGS",
    ):
        monkeypatch.delenv(name, raising=False)


class TestConfigDefaults:
    """Test built-in defaults."""

    def test_defaults(self):
        config = GuideRepConfig()
        assert config.verification.min_total_ratings == 10
        assert config.verification.min_metric_average == 3000
        assert config.verification.min_overall_average == 4000
        assert config.rewards.amount == 100
        assert config.rewards.single_lifetime_reward is False
        assert config.admin.identities == []

    def test_missing_file_uses_defaults(self, tmp_path):
        config = load_config(tmp_path / "missing.yaml")
        assert config.verification.scale == 1000


class TestConfigLoading:
    """Test YAML loading and environment overrides."""

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "rewards:\n"
            "  amount: 250\n"
            "admin:\n"
            "  identities: [root, ' ops ']\n"
            "  genesis_verified: [mentor]\n"
            "verification:\n"
            "  min_total_ratings: 5\n",
            encoding="utf-8",
        )
        config = load_config(path)

        assert config.rewards.amount == 250
        assert config.admin.identities == ["root", "ops"]
        assert config.admin.genesis_verified == ["mentor"]
        assert config.verification.min_total_ratings == 5

    def test_malformed_yaml_falls_back_to_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("rewards: [unclosed\n", encoding="utf-8")
        config = load_config(path)
        assert config.rewards.amount == 100

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "config.yaml"
        path.write_text("rewards:\n  amount: 250\n", encoding="utf-8")
        monkeypatch.setenv("GUIDEREP_REWARD_AMOUNT", "7")
        monkeypatch.setenv("GUIDEREP_SINGLE_LIFETIME_REWARD", "yes")
        monkeypatch.setenv("GUIDEREP_ADMINS", "root,ops")
        monkeypatch.setenv("GUIDEREP_MIN_TOTAL_RATINGS", "3")

        config = load_config(path)
        assert config.rewards.amount == 7
        assert config.rewards.single_lifetime_reward is True
        assert config.admin.identities == ["root", "ops"]
        assert config.verification.min_total_ratings == 3


class TestConfigValidation:
    """Test rejected settings."""

    def test_score_range_must_be_ordered(self):
        with pytest.raises(ValidationError):
            VerificationConfig(min_score=4, max_score=2)

    def test_score_range_within_rating_bounds(self):
        with pytest.raises(ValidationError):
            VerificationConfig(max_score=10)

    def test_min_total_ratings_positive(self):
        with pytest.raises(ValidationError):
            GuideRepConfig(verification={"min_total_ratings": 0})

    def test_negative_reward_rejected(self):
        with pytest.raises(ValidationError):
            GuideRepConfig(rewards={"amount": -5})

    @pytest.mark.parametrize("field", ["min_metric_average", "min_overall_average"])
    def test_average_thresholds_positive(self, field):
        with pytest.raises(ValidationError):
            VerificationConfig(**{field: 0})
        assert getattr(VerificationConfig(**{field: 1}), field) == 1

    def test_zero_reward_allowed(self):
        assert GuideRepConfig(rewards={"amount": 0}).rewards.amount == 0
