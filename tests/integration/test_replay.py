# tests/integration/test_replay.py

import json

import pytest

from guiderep.core.config import AdminConfig, GuideRepConfig, RewardConfig
from guiderep.core.ledger import ReputationLedger
from guiderep.core.replay import (
    Operation,
    load_operations,
    replay_operations,
)
from guiderep.errors import DuplicateRating
from guiderep.models.schema import GuideStatus


@pytest.fixture
def operations_file(tmp_path, mentors):
    ops = [
        {"op": "register", "identity": "alice"},
        {"op": "submit", "author": "alice", "content": "Sunrise at the ridge", "timestamp": 1700000000},
    ]
    ops += [
        {"op": "rate", "feedback_id": 0, "rater": m, "expertise": 5, "help": 4, "recommend": 5}
        for m in mentors[:10]
    ]
    ops += [
        {"op": "rate", "feedback_id": 0, "rater": mentors[0], "expertise": 1, "help": 1, "recommend": 1},
        {"op": "set_match_count", "caller": "admin", "identity": "alice", "count": 2},
        {"op": "set_match_count", "caller": "alice", "identity": "alice", "count": 9},
    ]
    path = tmp_path / "ops.json"
    path.write_text(json.dumps(ops), encoding="utf-8")
    return path


class TestLoadOperations:
    """Test parsing of operations files."""

    def test_load(self, operations_file):
        operations = load_operations(operations_file)
        assert len(operations) == 15
        assert operations[0].op == "register"
        assert operations[2].feedback_id == 0

    def test_missing_fields(self, tmp_path):
        path = tmp_path / "ops.json"
        path.write_text(json.dumps([{"op": "rate", "feedback_id": 0}]), encoding="utf-8")
        with pytest.raises(ValueError, match="index 0"):
            load_operations(path)

    def test_unknown_operation(self, tmp_path):
        path = tmp_path / "ops.json"
        path.write_text(json.dumps([{"op": "delete", "identity": "alice"}]), encoding="utf-8")
        with pytest.raises(ValueError):
            load_operations(path)

    def test_not_a_list(self, tmp_path):
        path = tmp_path / "ops.json"
        path.write_text(json.dumps({"op": "register"}), encoding="utf-8")
        with pytest.raises(ValueError, match="JSON list"):
            load_operations(path)

    def test_operation_requires_fields(self):
        with pytest.raises(ValueError, match="missing: author"):
            Operation(op="submit", content="tip")


class TestReplay:
    """Test applying operations to a ledger."""

    def test_replay_records_results(self, ledger, operations_file):
        results = replay_operations(ledger, load_operations(operations_file))

        assert [r.ok for r in results].count(False) == 2
        assert results[1].value == 0
        assert results[11].value["verified"] is True
        assert results[11].value["reward"] == 100
        assert results[12].error == "DuplicateRating"
        assert results[14].error == "Unauthorized"

        assert ledger.guide_status("alice") == GuideStatus.FORMAL_GUIDE
        assert ledger.guide("alice").match_count == 2
        assert ledger.balance_of("alice") == 100

    def test_replay_stop_on_error(self, ledger, operations_file):
        with pytest.raises(DuplicateRating):
            replay_operations(ledger, load_operations(operations_file), stop_on_error=True)
        assert ledger.guide("alice").match_count == 0

    def test_results_are_json_serializable(self, ledger, operations_file, tmp_path):
        results = replay_operations(ledger, load_operations(operations_file))
        payload = json.dumps([r.model_dump(mode="json") for r in results])
        assert "DuplicateRating" in payload

        log_path = ledger.journal.generate_event_log(tmp_path / "events.json")
        with open(log_path, encoding="utf-8") as f:
            manifest = json.load(f)
        assert manifest["event_summary"]["by_kind"]["reward_issued"] == 1

    def test_submit_without_timestamp(self):
        ledger = ReputationLedger()
        results = replay_operations(
            ledger, [Operation(op="submit", author="bob", content="no time")]
        )
        assert results[0].ok is True
        assert ledger.feedback(0).timestamp > 0

    def test_malformed_entries_do_not_abort_replay(self, ledger):
        operations = [
            Operation(op="register", identity="alice"),
            Operation(op="register", identity="   "),
            Operation(op="register", identity="bob"),
            Operation(op="submit", author="  ", content="tip", timestamp=5),
            Operation(op="submit", author="bob", content="tip", timestamp=5),
        ]
        results = replay_operations(ledger, operations)

        assert [r.ok for r in results] == [True, False, True, False, True]
        assert results[1].error == "InvalidIdentity"
        assert results[3].error == "InvalidIdentity"
        assert "alice" in ledger.guides()
        assert "bob" in ledger.guides()
        assert ledger.feedback_count() == 1

    def test_zero_reward_is_reported(self, mentors):
        config = GuideRepConfig(
            admin=AdminConfig(genesis_verified=mentors),
            rewards=RewardConfig(amount=0),
        )
        ledger = ReputationLedger(config=config)
        operations = [Operation(op="submit", author="alice", content="tip", timestamp=1)]
        operations += [
            Operation(op="rate", feedback_id=0, rater=m, expertise=5, help=5, recommend=5)
            for m in mentors[:10]
        ]
        results = replay_operations(ledger, operations)

        assert results[-1].value["verified"] is True
        assert results[-1].value["rewarded"] is True
        assert results[-1].value["reward"] == 0
