#tests\test_validation.py

"""Test load test and workflow request validation."""

from dataclasses import replace

import pytest

from testnet_client.core.errors import (
    DuplicateMessageTypeError,
    InvalidChainConfigError,
    InvalidDurationError,
    InvalidWeightError,
    MissingFieldError,
    WeightSumError,
)
from testnet_client.core.models import LoadTestSpec, Message, MsgType, RegionConfig
from testnet_client.core.validation import (
    LoadTestValidator,
    add_message,
    normalize_for_submission,
    validate_load_test_spec,
    validate_workflow_request,
)


def spec_with(*msgs):
    return LoadTestSpec(name="t", msgs=list(msgs))


class TestWeightSum:
    """Test rule 1: weights sum to 1.0."""

    def test_exact_sum_accepted(self):
        """Test 0.6 + 0.4 passes."""
        result = LoadTestValidator.validate(spec_with(
            Message(type=MsgType.MSG_SEND, weight=0.6),
            Message(type=MsgType.MSG_MULTI_SEND, weight=0.4, num_of_recipients=3),
        ))

        assert result.ok

    def test_short_sum_rejected(self):
        """Test 0.6 + 0.3 fails with the computed sum."""
        result = LoadTestValidator.validate(spec_with(
            Message(type=MsgType.MSG_SEND, weight=0.6),
            Message(type=MsgType.MSG_MULTI_SEND, weight=0.3),
        ))

        assert isinstance(result.error, WeightSumError)
        assert result.error.total == pytest.approx(0.9)
        assert "Current: 0.90" in str(result.error)

    def test_within_tolerance(self):
        """Test floating point drift under 0.001 is accepted."""
        msgs = [
            Message(type=MsgType.MSG_SEND, weight=0.3333),
            Message(type=MsgType.MSG_MULTI_SEND, weight=0.3333),
            Message(type=MsgType.MSG_CREATE_CONTRACT, weight=0.3333),
        ]

        assert validate_load_test_spec(spec_with(*msgs)).ok

    def test_empty_spec_accepted(self):
        """Test an empty message list skips the sum check."""
        assert validate_load_test_spec(spec_with()).ok

    def test_sum_checked_before_duplicates(self):
        """Test rule order: sum failure wins over duplicates."""
        result = validate_load_test_spec(spec_with(
            Message(type=MsgType.MSG_SEND, weight=0.5),
            Message(type=MsgType.MSG_SEND, weight=0.4),
        ))

        assert isinstance(result.error, WeightSumError)

    def test_evm_messages_held_to_sum(self):
        """Test EVM message types follow the same weight sum rule."""
        result = validate_load_test_spec(spec_with(
            Message(type=MsgType.MSG_CREATE_CONTRACT, weight=0.5, num_msgs=10),
        ))

        assert isinstance(result.error, WeightSumError)


class TestDuplicateTypes:
    """Test rule 2: unique (type, contained type)."""

    def test_duplicate_msg_arr_rejected(self):
        """Test two MsgArr/MsgSend entries fail."""
        result = validate_load_test_spec(spec_with(
            Message(type=MsgType.MSG_ARR, weight=0.5, num_msgs=2, contained_type=MsgType.MSG_SEND),
            Message(type=MsgType.MSG_ARR, weight=0.5, num_msgs=3, contained_type=MsgType.MSG_SEND),
        ))

        assert isinstance(result.error, DuplicateMessageTypeError)
        assert result.error.msg_type == "MsgArr"
        assert result.error.contained_type == "MsgSend"

    def test_msg_arr_with_different_contained_accepted(self):
        """Test MsgArr/MsgSend and MsgArr/MsgMultiSend coexist."""
        result = validate_load_test_spec(spec_with(
            Message(type=MsgType.MSG_ARR, weight=0.5, num_msgs=2, contained_type=MsgType.MSG_SEND),
            Message(type=MsgType.MSG_ARR, weight=0.5, num_msgs=2, contained_type=MsgType.MSG_MULTI_SEND),
        ))

        assert result.ok

    def test_contained_type_ignored_for_other_types(self):
        """Test contained type does not distinguish non-MsgArr messages."""
        result = validate_load_test_spec(spec_with(
            Message(type=MsgType.MSG_SEND, weight=0.5, contained_type=MsgType.MSG_SEND),
            Message(type=MsgType.MSG_SEND, weight=0.5, contained_type=MsgType.MSG_MULTI_SEND),
        ))

        assert isinstance(result.error, DuplicateMessageTypeError)
        assert str(result.error) == "Duplicate message type: MsgSend"


class TestMessageFields:
    """Test rules 3 and 4: weight range and type-specific fields."""

    def test_zero_weight_rejected(self):
        """Test a zero weight fails even when the sum is 1.0."""
        result = validate_load_test_spec(spec_with(
            Message(type=MsgType.MSG_SEND, weight=1.0),
            Message(type=MsgType.MSG_MULTI_SEND, weight=0.0),
        ))

        assert isinstance(result.error, InvalidWeightError)
        assert result.error.weight == 0.0

    def test_msg_arr_without_contained_type(self):
        """Test MsgArr needs a contained type."""
        result = validate_load_test_spec(spec_with(
            Message(type=MsgType.MSG_ARR, weight=1.0, num_msgs=5),
        ))

        assert isinstance(result.error, MissingFieldError)
        assert result.error.field == "contained_type"

    def test_msg_arr_containing_msg_arr(self):
        """Test MsgArr may not contain MsgArr."""
        result = validate_load_test_spec(spec_with(
            Message(type=MsgType.MSG_ARR, weight=1.0, num_msgs=5, contained_type=MsgType.MSG_ARR),
        ))

        assert isinstance(result.error, MissingFieldError)

    def test_msg_arr_without_count(self):
        """Test MsgArr needs a positive message count."""
        result = validate_load_test_spec(spec_with(
            Message(type=MsgType.MSG_ARR, weight=1.0, num_msgs=0, contained_type=MsgType.MSG_SEND),
        ))

        assert isinstance(result.error, MissingFieldError)
        assert result.error.field == "num_msgs"

    def test_multi_send_non_positive_recipients(self):
        """Test an explicit non-positive recipient count fails."""
        result = validate_load_test_spec(spec_with(
            Message(type=MsgType.MSG_MULTI_SEND, weight=1.0, num_of_recipients=0),
        ))

        assert isinstance(result.error, MissingFieldError)
        assert result.error.field == "num_of_recipients"

    def test_check_raises(self):
        """Test check() raises the first failure."""
        with pytest.raises(WeightSumError):
            LoadTestValidator.check(spec_with(Message(type=MsgType.MSG_SEND, weight=0.2)))


class TestAddMessage:
    """Test adding messages to a spec under edit."""

    def test_returns_new_spec(self):
        """Test the input spec is not modified."""
        spec = spec_with(Message(type=MsgType.MSG_SEND, weight=0.5))

        updated = add_message(spec, Message(type=MsgType.MSG_MULTI_SEND, weight=0.5))

        assert len(spec.msgs) == 1
        assert [m.type for m in updated.msgs] == [MsgType.MSG_SEND, MsgType.MSG_MULTI_SEND]

    def test_duplicate_rejected(self):
        """Test adding an existing type fails."""
        spec = spec_with(Message(type=MsgType.MSG_SEND, weight=0.5))

        with pytest.raises(DuplicateMessageTypeError):
            add_message(spec, Message(type=MsgType.MSG_SEND, weight=0.2))

    def test_weight_out_of_range_rejected(self):
        """Test a weight above 1 fails."""
        with pytest.raises(InvalidWeightError):
            add_message(spec_with(), Message(type=MsgType.MSG_SEND, weight=1.5))

    def test_partial_sum_allowed(self):
        """Test weights need not sum to 1.0 while editing."""
        spec = add_message(spec_with(), Message(type=MsgType.MSG_SEND, weight=0.3))

        assert spec.msgs[0].weight == 0.3


class TestNormalization:
    """Test submission-time timeout clearing."""

    def test_ordered_timeout_cleared(self):
        """Test tx_timeout is cleared when unordered_txs is false."""
        spec = LoadTestSpec(unordered_txs=False, tx_timeout="45s")

        normalized = normalize_for_submission(spec)

        assert normalized.tx_timeout == ""
        assert spec.tx_timeout == "45s"

    def test_unordered_timeout_kept(self):
        """Test tx_timeout survives for unordered specs."""
        spec = LoadTestSpec(unordered_txs=True, tx_timeout="45s")

        assert normalize_for_submission(spec).tx_timeout == "45s"


class TestWorkflowRequestValidation:
    """Test request-level submission invariants."""

    def test_valid_request(self, workflow_request):
        """Test the sample request passes."""
        validate_workflow_request(workflow_request)

    def test_missing_duration(self, workflow_request):
        """Test duration is required for non-long-running testnets."""
        with pytest.raises(MissingFieldError) as exc:
            validate_workflow_request(replace(workflow_request, testnet_duration=""))

        assert exc.value.field == "testnet_duration"

    def test_long_running_needs_no_duration(self, workflow_request):
        """Test long-running testnets skip the duration requirement."""
        validate_workflow_request(
            replace(workflow_request, long_running_testnet=True, testnet_duration="")
        )

    def test_bad_duration(self, workflow_request):
        """Test an unparseable duration fails."""
        with pytest.raises(InvalidDurationError):
            validate_workflow_request(replace(workflow_request, testnet_duration="two hours"))

    @pytest.mark.parametrize("duration", ["500ms", "0s", "0"])
    def test_sub_second_or_zero_duration(self, workflow_request, duration):
        """Test a duration that would be sent as 0 seconds fails."""
        with pytest.raises(InvalidDurationError):
            validate_workflow_request(replace(workflow_request, testnet_duration=duration))

    def test_long_running_ignores_bad_duration(self, workflow_request):
        """Test long-running testnets don't parse the duration."""
        validate_workflow_request(
            replace(workflow_request, long_running_testnet=True, testnet_duration="whenever")
        )

    def test_no_validators(self, workflow_request):
        """Test at least one validator is required."""
        cfg = replace(workflow_request.chain_config, num_of_validators=0)

        with pytest.raises(InvalidChainConfigError):
            validate_workflow_request(replace(workflow_request, chain_config=cfg))

    def test_no_peer_wiring(self, workflow_request):
        """Test one of the peer-wiring flags must be set."""
        cfg = replace(workflow_request.chain_config, set_seed_node=False, set_persistent_peers=False)

        with pytest.raises(InvalidChainConfigError):
            validate_workflow_request(replace(workflow_request, chain_config=cfg))

    def test_negative_region_count(self, workflow_request):
        """Test region counts must be non-negative."""
        cfg = replace(
            workflow_request.chain_config,
            region_configs=[RegionConfig(name="ams3", num_of_nodes=-1)],
        )

        with pytest.raises(InvalidChainConfigError):
            validate_workflow_request(replace(workflow_request, chain_config=cfg))

    def test_embedded_spec_validated(self, workflow_request):
        """Test the load test spec is checked as part of the request."""
        spec = spec_with(Message(type=MsgType.MSG_SEND, weight=0.5))

        with pytest.raises(WeightSumError):
            validate_workflow_request(replace(workflow_request, load_test_spec=spec))
