#tests\conftest.py

"""Pytest configuration and fixtures."""

import pytest
from unittest.mock import Mock

import requests

from testnet_client.core.models import (
    ChainConfig,
    GenesisModification,
    LoadTestSpec,
    Message,
    MsgType,
    RegionConfig,
    RunnerType,
    TestnetWorkflowRequest,
)
from testnet_client.rpc.client import IronbirdRpcClient
from testnet_client.rpc.config import ClientSettings


@pytest.fixture
def chain_config():
    """Create a sample chain config."""
    return ChainConfig(
        name="stake",
        image="ghcr.io/cosmos/simapp:v0.50",
        num_of_nodes=4,
        num_of_validators=3,
        genesis_modifications=[
            GenesisModification(key="app_state.staking.params.bond_denom", value="atest"),
            GenesisModification(key="consensus.params.block.max_gas", value=75000000),
        ],
        region_configs=[
            RegionConfig(name="nyc1", num_of_nodes=2, num_of_validators=2),
            RegionConfig(name="sfo3", num_of_nodes=2, num_of_validators=1),
        ],
        app_config={"minimum-gas-prices": "0.025atest", "pruning": "nothing"},
        consensus_config={"consensus": {"timeout_commit": "2s"}},
        set_seed_node=True,
    )


@pytest.fixture
def load_test_spec():
    """Create a valid two-message load test spec."""
    return LoadTestSpec(
        name="basic-load",
        description="send mix",
        chain_id="stake-1",
        num_of_blocks=100,
        num_of_txs=500,
        msgs=[
            Message(type=MsgType.MSG_SEND, weight=0.6),
            Message(type=MsgType.MSG_MULTI_SEND, weight=0.4, num_of_recipients=3),
        ],
    )


@pytest.fixture
def workflow_request(chain_config, load_test_spec):
    """Create a submittable workflow request."""
    return TestnetWorkflowRequest(
        repo="cosmos-sdk",
        sha="a1b2c3d",
        chain_config=chain_config,
        runner_type=RunnerType.DIGITAL_OCEAN,
        load_test_spec=load_test_spec,
        testnet_duration="2h",
    )


@pytest.fixture
def settings():
    """Client settings pointing at a fake endpoint."""
    return ClientSettings(grpc_address="http://ironbird.test:9007", request_timeout_seconds=5)


@pytest.fixture
def session():
    """Mocked HTTP session; no network access."""
    return Mock(spec=requests.Session)


@pytest.fixture
def rpc_client(settings, session):
    """RPC client over the mocked session."""
    return IronbirdRpcClient(settings=settings, session=session)


@pytest.fixture
def make_response():
    """Factory for fake requests.Response objects."""
    return _make_response


def _make_response(status_code=200, payload=None, text=""):
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.text = text
    response.reason = ""
    if payload is None:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        response.json.return_value = payload
    return response
