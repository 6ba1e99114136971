# testnet_client/codecs/workflow.py
"""
Workflow request codec.

Composes the chain config, load test and genesis codecs into full
create-request, status and acknowledgement conversions.
"""

import logging
from dataclasses import replace
from typing import Optional

from testnet_client.codecs import chain_config as chain_config_codec
from testnet_client.codecs import load_test as load_test_codec
from testnet_client.core.durations import format_duration, parse_duration_seconds
from testnet_client.core.errors import SerializationError
from testnet_client.core.models import (
    DEFAULT_NUM_WALLETS,
    ChainConfig,
    Node,
    RunnerType,
    TestnetWorkflowRequest,
    Wallet,
    WalletBundle,
    WorkflowResponse,
    WorkflowState,
    WorkflowStatus,
    WorkflowSummary,
)
from testnet_client.core.schemas import (
    WireCreateWorkflowRequest,
    WireNode,
    WireWalletInfo,
    WireWorkflow,
    WireWorkflowResponse,
    WireWorkflowSummary,
)
from testnet_client.core.validation import normalize_for_submission

logger = logging.getLogger(__name__)


# ============================================
# DOMAIN -> WIRE
# ============================================

def _encode_duration(req: TestnetWorkflowRequest) -> int:
    try:
        seconds = parse_duration_seconds(req.testnet_duration)
    except ValueError as e:
        if req.long_running_testnet:
            # Ignored by the service for long-running testnets
            logger.warning(f"Ignoring testnet_duration of long-running testnet: {e}")
            return 0
        raise SerializationError(f"Cannot encode testnet_duration: {e}") from e
    return seconds or 0


def to_wire(req: TestnetWorkflowRequest) -> WireCreateWorkflowRequest:
    """
    Build the create-workflow wire request.

    The load test spec's EVM flag always follows the request's, and its
    timeout is cleared when transactions are ordered.

    Raises:
        SerializationError: If any nested value can't be encoded
    """
    wire_load_test = None
    if req.load_test_spec is not None:
        spec = replace(
            normalize_for_submission(req.load_test_spec),
            is_evm_chain=req.is_evm_chain,
        )
        wire_load_test = load_test_codec.to_wire(spec)

    return WireCreateWorkflowRequest.build(
        repo=req.repo,
        sha=req.sha,
        is_evm_chain=req.is_evm_chain,
        chain_config=chain_config_codec.to_wire(req.chain_config),
        runner_type=req.runner_type.value,
        load_test_spec=wire_load_test,
        long_running_testnet=req.long_running_testnet,
        launch_load_balancer=req.launch_load_balancer,
        testnet_duration=_encode_duration(req),
        num_wallets=req.num_wallets,
        cosmos_sdk_sha=req.cosmos_sdk_sha,
        cometbft_sha=req.cometbft_sha,
        catalyst_version=req.catalyst_version,
        provider_config=dict(req.provider_config),
    )


# ============================================
# WIRE -> DOMAIN
# ============================================

def _parse_runner_type(value: str) -> RunnerType:
    try:
        return RunnerType(value)
    except ValueError:
        logger.warning(f"Unknown runner type {value!r}, assuming {RunnerType.DOCKER.value}")
        return RunnerType.DOCKER


def request_from_wire(wire: WireCreateWorkflowRequest) -> TestnetWorkflowRequest:
    """Rebuild a domain request from an echoed or stored wire config."""
    if wire.chain_config is not None:
        chain_config = chain_config_codec.from_wire(wire.chain_config)
    else:
        chain_config = ChainConfig(name="", image="")

    load_test_spec = None
    if wire.load_test_spec is not None:
        load_test_spec = load_test_codec.from_wire(wire.load_test_spec)

    return TestnetWorkflowRequest(
        repo=wire.repo,
        sha=wire.sha,
        chain_config=chain_config,
        runner_type=_parse_runner_type(wire.runner_type),
        is_evm_chain=wire.is_evm_chain,
        load_test_spec=load_test_spec,
        long_running_testnet=wire.long_running_testnet,
        launch_load_balancer=wire.launch_load_balancer,
        testnet_duration=format_duration(wire.testnet_duration) if wire.testnet_duration else "",
        num_wallets=wire.num_wallets or DEFAULT_NUM_WALLETS,
        cosmos_sdk_sha=wire.cosmos_sdk_sha or None,
        cometbft_sha=wire.cometbft_sha or None,
        catalyst_version=wire.catalyst_version or None,
        provider_config=dict(wire.provider_config),
    )


def node_from_wire(wire: WireNode) -> Node:
    return Node(
        name=wire.name,
        address=wire.address,
        rpc=wire.rpc,
        lcd=wire.lcd,
        grpc=wire.grpc,
        metrics=wire.metrics,
    )


def pair_wallets(wire: Optional[WireWalletInfo]) -> Optional[WalletBundle]:
    """
    Pair user addresses with mnemonics by position.

    Addresses without a mnemonic get an empty one; surplus mnemonics are
    ignored. Never fails.
    """
    if wire is None:
        return None

    mnemonics = wire.user_mnemonics
    users = [
        Wallet(address=address, mnemonic=mnemonics[i] if i < len(mnemonics) else "")
        for i, address in enumerate(wire.user_addresses)
    ]

    return WalletBundle(
        faucet=Wallet(address=wire.faucet_address, mnemonic=wire.faucet_mnemonic),
        users=users,
    )


def from_wire(resp: WireWorkflow) -> WorkflowStatus:
    """Convert a get-workflow response into a status projection."""
    config = request_from_wire(resp.config) if resp.config is not None else None

    load_test_spec = None
    if resp.load_test_spec is not None:
        load_test_spec = load_test_codec.from_wire(resp.load_test_spec)

    return WorkflowStatus(
        workflow_id=resp.workflow_id,
        state=WorkflowState.parse(resp.status),
        nodes=[node_from_wire(n) for n in resp.nodes],
        validators=[node_from_wire(n) for n in resp.validators],
        load_balancers=[node_from_wire(n) for n in resp.load_balancers],
        monitoring=dict(resp.monitoring),
        wallets=pair_wallets(resp.wallets),
        config=config,
        load_test_spec=load_test_spec,
        provider=resp.provider,
        start_time=resp.start_time,
        end_time=resp.end_time,
    )


def response_from_wire(resp: WireWorkflowResponse) -> WorkflowResponse:
    return WorkflowResponse(
        workflow_id=resp.workflow_id,
        status=resp.status,
        data=dict(resp.data),
    )


def summary_from_wire(wire: WireWorkflowSummary) -> WorkflowSummary:
    return WorkflowSummary(
        workflow_id=wire.workflow_id,
        state=WorkflowState.parse(wire.status),
        start_time=wire.start_time,
        repo=wire.repo,
        sha=wire.sha,
    )
