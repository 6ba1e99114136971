# testnet_client/core/models.py
"""Domain models for testnet workflows, load tests and templates."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from testnet_client.core.json_value import JsonObject


DEFAULT_NUM_WALLETS = 2500


# ============================================
# ENUMS
# ============================================

class RunnerType(Enum):
    """Where the testnet is provisioned."""
    DOCKER = "Docker"
    DIGITAL_OCEAN = "DigitalOcean"


class MsgType(Enum):
    """Load test message types."""
    MSG_SEND = "MsgSend"
    MSG_MULTI_SEND = "MsgMultiSend"
    MSG_ARR = "MsgArr"

    # EVM
    MSG_CREATE_CONTRACT = "MsgCreateContract"
    MSG_WRITE_TO = "MsgWriteTo"
    MSG_CROSS_CONTRACT_CALL = "MsgCrossContractCall"
    MSG_CALL_DATA_BLAST = "MsgCallDataBlast"
    MSG_NATIVE_TRANSFER_ERC20 = "MsgNativeTransferERC20"


class WorkflowState(Enum):
    """Workflow status as reported by the provisioning service."""
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELED = "canceled"
    TERMINATED = "terminated"
    TIMED_OUT = "timed_out"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Optional[str]) -> "WorkflowState":
        if not value:
            return cls.UNKNOWN
        try:
            return cls(value.lower())
        except ValueError:
            return cls.UNKNOWN

    def is_terminal(self) -> bool:
        return self in (
            WorkflowState.COMPLETED,
            WorkflowState.FAILED,
            WorkflowState.CANCELED,
            WorkflowState.TERMINATED,
            WorkflowState.TIMED_OUT,
        )


# ============================================
# CHAIN CONFIG
# ============================================

@dataclass
class GenesisModification:
    """Dotted-path override applied to genesis state."""
    key: str
    value: Any  # any JSON value


@dataclass
class RegionConfig:
    """Node/validator allocation for one region."""
    name: str
    num_of_nodes: int = 0
    num_of_validators: int = 0


@dataclass
class ChainConfig:
    name: str
    image: str
    num_of_nodes: int = 0
    num_of_validators: int = 0
    version: Optional[str] = None

    genesis_modifications: List[GenesisModification] = field(default_factory=list)
    region_configs: List[RegionConfig] = field(default_factory=list)

    # Free-form node config blobs
    app_config: Optional[JsonObject] = None
    consensus_config: Optional[JsonObject] = None
    client_config: Optional[JsonObject] = None

    set_seed_node: bool = False
    set_persistent_peers: bool = False


# ============================================
# LOAD TEST
# ============================================

@dataclass
class Message:
    """One entry of the load test message mix."""
    type: MsgType
    weight: float
    num_msgs: Optional[int] = None
    contained_type: Optional[MsgType] = None
    num_of_recipients: Optional[int] = None

    def type_key(self) -> str:
        """Uniqueness key within a spec. Contained type only counts for MsgArr."""
        if self.type == MsgType.MSG_ARR:
            contained = self.contained_type.value if self.contained_type else ""
            return f"{self.type.value}-{contained}"
        return self.type.value


@dataclass
class LoadTestSpec:
    name: str = ""
    description: str = ""
    chain_id: str = ""
    num_of_blocks: int = 0
    num_of_txs: int = 0
    msgs: List[Message] = field(default_factory=list)
    unordered_txs: bool = False
    tx_timeout: str = ""  # only meaningful when unordered_txs is set
    is_evm_chain: bool = False
    gas_denom: str = ""
    bech32_prefix: str = ""


# ============================================
# WORKFLOW REQUEST
# ============================================

@dataclass
class TestnetWorkflowRequest:
    """Unit of submission for a testnet workflow."""
    repo: str
    sha: str
    chain_config: ChainConfig
    runner_type: RunnerType = RunnerType.DOCKER
    is_evm_chain: bool = False

    load_test_spec: Optional[LoadTestSpec] = None

    long_running_testnet: bool = False
    launch_load_balancer: bool = False
    testnet_duration: str = ""
    num_wallets: int = DEFAULT_NUM_WALLETS

    # Version overrides
    cosmos_sdk_sha: Optional[str] = None
    cometbft_sha: Optional[str] = None
    catalyst_version: Optional[str] = None

    provider_config: Dict[str, str] = field(default_factory=dict)


# ============================================
# WORKFLOW STATUS
# ============================================

@dataclass
class Node:
    name: str
    address: str = ""
    rpc: str = ""
    lcd: str = ""
    grpc: str = ""
    metrics: str = ""


@dataclass
class Wallet:
    address: str
    mnemonic: str = ""


@dataclass
class WalletBundle:
    """Faucet wallet plus user wallets of a provisioned network."""
    faucet: Wallet
    users: List[Wallet] = field(default_factory=list)


@dataclass
class WorkflowStatus:
    """Read-only projection of a running or finished workflow."""
    workflow_id: str
    state: WorkflowState

    nodes: List[Node] = field(default_factory=list)
    validators: List[Node] = field(default_factory=list)
    load_balancers: List[Node] = field(default_factory=list)
    monitoring: Dict[str, str] = field(default_factory=dict)

    wallets: Optional[WalletBundle] = None

    # Originating request, for clone/replay
    config: Optional[TestnetWorkflowRequest] = None
    load_test_spec: Optional[LoadTestSpec] = None

    provider: str = ""
    start_time: str = ""
    end_time: str = ""


@dataclass
class WorkflowResponse:
    """Acknowledgement returned by create/cancel/signal/run calls."""
    workflow_id: str
    status: str
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class WorkflowSummary:
    workflow_id: str
    state: WorkflowState
    start_time: str = ""
    repo: str = ""
    sha: str = ""


# ============================================
# TEMPLATES
# ============================================

@dataclass
class WorkflowTemplate:
    """Named, reusable workflow request."""
    template_id: str
    config: TestnetWorkflowRequest
    description: str = ""
    created_at: str = ""
    created_by: str = ""
    run_count: int = 0


@dataclass
class WorkflowTemplateSummary:
    template_id: str
    description: str = ""
    created_at: str = ""
    run_count: int = 0


@dataclass
class TemplateExecution:
    """Request to run a stored template against a commit."""
    template_id: str
    sha: str
    run_name: Optional[str] = None


@dataclass
class TemplateRun:
    """One recorded execution of a template."""
    run_id: str
    workflow_id: str
    template_id: str
    sha: str = ""
    run_name: str = ""
    state: WorkflowState = WorkflowState.UNKNOWN
    started_at: str = ""
    completed_at: str = ""
    monitoring_links: Dict[str, str] = field(default_factory=dict)
    provider: str = ""
