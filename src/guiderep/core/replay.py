# src/guiderep/core/replay.py

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Literal, Optional, Union

from pydantic import BaseModel, Field, model_validator

from guiderep.core.ledger import ReputationLedger
from guiderep.credibility.aggregator import RatingOutcome
from guiderep.errors import ReputationError
from guiderep.models.schema import Guide

logger = logging.getLogger(__name__)

OpName = Literal["register", "submit", "rate", "set_match_count"]

# Fields each operation needs in addition to "op"
REQUIRED_FIELDS: Dict[str, tuple] = {
    "register": ("identity",),
    "submit": ("author", "content"),
    "rate": ("feedback_id", "rater", "expertise", "help", "recommend"),
    "set_match_count": ("caller", "identity", "count"),
}


class Operation(BaseModel):
    """One entry of an operations file."""

    op: OpName
    identity: Optional[str] = None
    author: Optional[str] = None
    content: Optional[str] = None
    timestamp: Optional[int] = Field(default=None, ge=0)
    feedback_id: Optional[int] = None
    rater: Optional[str] = None
    expertise: Optional[int] = None
    help: Optional[int] = None
    recommend: Optional[int] = None
    caller: Optional[str] = None
    count: Optional[int] = None

    @model_validator(mode="after")
    def check_required_fields(self) -> "Operation":
        missing = [f for f in REQUIRED_FIELDS[self.op] if getattr(self, f) is None]
        if missing:
            raise ValueError(f"'{self.op}' operation is missing: {', '.join(missing)}")
        return self


class OperationResult(BaseModel):
    index: int
    op: str
    ok: bool
    value: Any = None
    error: Optional[str] = None
    message: Optional[str] = None


def load_operations(input_path: Union[str, Path]) -> List[Operation]:
    """
    Load operations from a JSON file holding a list of objects.

    Raises:
        ValueError: If the file is not a JSON list or an entry is invalid
    """
    with open(input_path, "r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, list):
        raise ValueError(f"{input_path} must contain a JSON list of operations")

    operations = []
    for i, item in enumerate(raw):
        try:
            operations.append(Operation(**item))
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid operation at index {i}: {e}") from e

    logger.info(f"Loaded {len(operations)} operations from {input_path}")
    return operations


def apply_operation(ledger: ReputationLedger, operation: Operation) -> Any:
    """Apply a single operation and return a JSON-friendly result value."""
    if operation.op == "register":
        return _guide_to_dict(ledger.register(operation.identity))
    if operation.op == "submit":
        return ledger.submit_feedback(
            operation.author, operation.content, operation.timestamp
        )
    if operation.op == "rate":
        return _outcome_to_dict(
            ledger.rate_feedback(
                operation.feedback_id,
                operation.rater,
                operation.expertise,
                operation.help,
                operation.recommend,
            )
        )
    if operation.op == "set_match_count":
        return _guide_to_dict(
            ledger.set_match_count(operation.caller, operation.identity, operation.count)
        )
    raise ValueError(f"Unsupported operation: {operation.op}")


def replay_operations(
    ledger: ReputationLedger,
    operations: Iterable[Operation],
    stop_on_error: bool = False,
) -> List[OperationResult]:
    """
    Apply operations in order and collect one result per operation.

    Args:
        ledger: Ledger to apply the operations to
        operations: Operations in the order they should be applied
        stop_on_error: Re-raise the first rejected operation instead of recording it

    Returns:
        List of OperationResult, one per applied operation.
    """
    results = []
    for index, operation in enumerate(operations):
        try:
            value = apply_operation(ledger, operation)
            results.append(
                OperationResult(index=index, op=operation.op, ok=True, value=value)
            )
        except ReputationError as e:
            if stop_on_error:
                raise
            results.append(
                OperationResult(
                    index=index,
                    op=operation.op,
                    ok=False,
                    error=type(e).__name__,
                    message=str(e),
                )
            )

    rejected = sum(1 for r in results if not r.ok)
    logger.info(f"Replayed {len(results)} operations ({rejected} rejected)")
    return results


def _guide_to_dict(guide: Guide) -> Dict[str, Any]:
    return guide.model_dump()


def _outcome_to_dict(outcome: RatingOutcome) -> Dict[str, Any]:
    return {
        "feedback_id": outcome.feedback_id,
        "author": outcome.author,
        "verified": outcome.is_verified,
        "status_changed": outcome.status_changed,
        "reward": outcome.reward,
        "rewarded": outcome.rewarded,
        "failed_rule": outcome.report.failed_rule,
    }
