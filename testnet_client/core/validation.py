# testnet_client/core/validation.py
"""Pre-flight validation of load test specs and workflow requests."""

import math
from dataclasses import dataclass, replace
from typing import Iterable, Optional

from testnet_client.core.durations import parse_duration_seconds
from testnet_client.core.errors import (
    DuplicateMessageTypeError,
    InvalidChainConfigError,
    InvalidDurationError,
    InvalidWeightError,
    MissingFieldError,
    ValidationError,
    WeightSumError,
)
from testnet_client.core.models import LoadTestSpec, Message, MsgType, TestnetWorkflowRequest


WEIGHT_SUM_TOLERANCE = 0.001


@dataclass(frozen=True)
class ValidationResult:
    error: Optional[ValidationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error


# -------------------------
# Message rules
# -------------------------

def _check_weight_sum(msgs: Iterable[Message]) -> None:
    msgs = list(msgs)
    if not msgs:
        return

    total = math.fsum(msg.weight or 0.0 for msg in msgs)
    if not math.isclose(total, 1.0, rel_tol=0.0, abs_tol=WEIGHT_SUM_TOLERANCE):
        raise WeightSumError(total)


def _check_unique_types(msgs: Iterable[Message]) -> None:
    seen = set()
    for msg in msgs:
        key = msg.type_key()
        if key in seen:
            contained = ""
            if msg.type == MsgType.MSG_ARR and msg.contained_type:
                contained = msg.contained_type.value
            raise DuplicateMessageTypeError(msg.type.value, contained)
        seen.add(key)


def _check_weight(msg: Message) -> None:
    if not (0 < msg.weight <= 1):
        raise InvalidWeightError(msg.weight)


def _check_type_fields(msg: Message) -> None:
    if msg.type == MsgType.MSG_ARR:
        if msg.contained_type is None or msg.contained_type == MsgType.MSG_ARR:
            raise MissingFieldError(
                "contained_type",
                "MsgArr type requires a Contained Type other than MsgArr",
            )
        if not msg.num_msgs or msg.num_msgs <= 0:
            raise MissingFieldError(
                "num_msgs",
                "MsgArr type requires a positive Number of Messages",
            )

    if msg.type == MsgType.MSG_MULTI_SEND:
        if msg.num_of_recipients is not None and msg.num_of_recipients <= 0:
            raise MissingFieldError(
                "num_of_recipients",
                "MsgMultiSend requires a positive Number of Recipients",
            )


# -------------------------
# Load test spec
# -------------------------

def validate_load_test_spec(spec: LoadTestSpec) -> ValidationResult:
    """
    Check a spec before it is saved or submitted. First failure wins:

    1. weights of a non-empty message list sum to 1.0 (+/- 0.001)
    2. no duplicate (type, contained type) pairs
    3. every weight is in (0, 1]
    4. MsgArr carries a contained type and a positive message count
    """
    try:
        _check_weight_sum(spec.msgs)
        _check_unique_types(spec.msgs)
        for msg in spec.msgs:
            _check_weight(msg)
        for msg in spec.msgs:
            _check_type_fields(msg)
    except ValidationError as e:
        return ValidationResult(error=e)
    return ValidationResult()


def validate_new_message(spec: LoadTestSpec, msg: Message) -> ValidationResult:
    """Check a message about to be added to a spec that is still being edited."""
    try:
        _check_unique_types([*spec.msgs, msg])
        _check_weight(msg)
        _check_type_fields(msg)
    except ValidationError as e:
        return ValidationResult(error=e)
    return ValidationResult()


def add_message(spec: LoadTestSpec, msg: Message) -> LoadTestSpec:
    """Return a copy of spec with msg appended. The input is not modified."""
    validate_new_message(spec, msg).raise_for_error()
    return replace(spec, msgs=[*spec.msgs, msg])


def normalize_for_submission(spec: LoadTestSpec) -> LoadTestSpec:
    """Clear the timeout of ordered specs. Returns a fresh copy."""
    if spec.unordered_txs:
        return replace(spec, msgs=list(spec.msgs))
    return replace(spec, msgs=list(spec.msgs), tx_timeout="")


class LoadTestValidator:
    @staticmethod
    def validate(spec: LoadTestSpec) -> ValidationResult:
        return validate_load_test_spec(spec)

    @staticmethod
    def check(spec: LoadTestSpec) -> LoadTestSpec:
        """Validate, raise on failure, and return the submission-ready copy."""
        validate_load_test_spec(spec).raise_for_error()
        return normalize_for_submission(spec)


# -------------------------
# Workflow request
# -------------------------

def validate_workflow_request(request: TestnetWorkflowRequest) -> None:
    """
    Enforce submission invariants on a workflow request.

    Raises:
        MissingFieldError: Duration missing on a non-long-running testnet
        InvalidDurationError: Duration of a non-long-running testnet is not
            a positive whole number of seconds
        InvalidChainConfigError: Bad node/validator counts or peer wiring
        LoadTestValidationError: Embedded load test spec rejected
    """
    # -------------------------
    # Duration
    # -------------------------
    # Long-running testnets ignore the duration, so it is not checked
    if not request.long_running_testnet:
        if not request.testnet_duration:
            raise MissingFieldError(
                "testnet_duration",
                "testnet_duration is required unless the testnet is long-running",
            )

        try:
            seconds = parse_duration_seconds(request.testnet_duration)
        except ValueError:
            raise InvalidDurationError("testnet_duration", request.testnet_duration)

        # 0 is the wire's "no duration"
        if not seconds:
            raise InvalidDurationError("testnet_duration", request.testnet_duration)

    # -------------------------
    # Topology
    # -------------------------
    cfg = request.chain_config

    if cfg.num_of_nodes < 0:
        raise InvalidChainConfigError("num_of_nodes must not be negative")

    if cfg.num_of_validators < 1:
        raise InvalidChainConfigError("num_of_validators must be at least 1")

    for region in cfg.region_configs:
        if region.num_of_nodes < 0 or region.num_of_validators < 0:
            raise InvalidChainConfigError(
                f"region {region.name} has a negative node or validator count"
            )

    if not (cfg.set_seed_node or cfg.set_persistent_peers):
        raise InvalidChainConfigError(
            "at least one of set_seed_node or set_persistent_peers must be enabled"
        )

    # -------------------------
    # Load test
    # -------------------------
    if request.load_test_spec is not None:
        validate_load_test_spec(request.load_test_spec).raise_for_error()
