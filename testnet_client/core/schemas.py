"""Pydantic wire schemas exchanged with the provisioning service."""

from typing import Annotated, Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from testnet_client.core.errors import SerializationError
from testnet_client.core.external_shapes import adapt_load_test_message, adapt_load_test_spec


INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1
UINT64_MAX = 2 ** 64 - 1

# 64-bit integers travel as JSON strings, as in protobuf JSON mapping
Int64 = Annotated[
    int,
    Field(ge=INT64_MIN, le=INT64_MAX),
    PlainSerializer(str, return_type=str, when_used="json"),
]
UInt64 = Annotated[
    int,
    Field(ge=0, le=UINT64_MAX),
    PlainSerializer(str, return_type=str, when_used="json"),
]
Int32 = Annotated[int, Field(ge=INT32_MIN, le=INT32_MAX)]


class WireModel(BaseModel):
    """Base wire schema: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @classmethod
    def build(cls, **fields):
        """Construct from snake_case fields, reporting range errors as SerializationError."""
        try:
            return cls(**fields)
        except ValidationError as e:
            raise SerializationError(f"Cannot encode {cls.__name__}: {e}") from e

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ============================================
# Chain Config
# ============================================

class WireGenesisKV(WireModel):
    key: str = ""
    value: str = ""


class WireRegionConfig(WireModel):
    name: str = ""
    num_of_nodes: UInt64 = 0
    num_of_validators: UInt64 = 0


class WireChainConfig(WireModel):
    name: str = ""
    image: str = ""
    version: Optional[str] = None
    num_of_nodes: UInt64 = 0
    num_of_validators: UInt64 = 0
    genesis_modifications: List[WireGenesisKV] = Field(default_factory=list)
    region_configs: List[WireRegionConfig] = Field(default_factory=list)

    # JSON documents embedded in strings
    custom_app_config: Optional[str] = None
    custom_consensus_config: Optional[str] = None
    custom_client_config: Optional[str] = None

    set_seed_node: bool = False
    set_persistent_peers: bool = False


# ============================================
# Load Test
# ============================================

class WireLoadTestMsg(WireModel):
    type: str = ""
    weight: float = 0.0
    num_msgs: Int32 = 0
    contained_type: str = ""
    num_of_recipients: Int32 = 0

    @model_validator(mode="before")
    @classmethod
    def _adapt_external_shape(cls, data: Any) -> Any:
        return adapt_load_test_message(data)


class WireLoadTestSpec(WireModel):
    name: str = ""
    description: str = ""
    chain_id: str = ""
    num_of_txs: Int32 = 0
    num_of_blocks: Int32 = 0
    msgs: List[WireLoadTestMsg] = Field(default_factory=list)
    unordered_txs: bool = False
    tx_timeout: Optional[Int64] = None  # seconds
    is_evm_chain: bool = False
    gas_denom: str = ""
    bech32_prefix: str = ""

    @model_validator(mode="before")
    @classmethod
    def _adapt_external_shape(cls, data: Any) -> Any:
        # Specs from shared links or stored templates may use other casings
        return adapt_load_test_spec(data)


# ============================================
# Workflow
# ============================================

class WireCreateWorkflowRequest(WireModel):
    repo: str = ""
    sha: str = ""
    is_evm_chain: bool = False
    chain_config: Optional[WireChainConfig] = None
    runner_type: str = ""
    load_test_spec: Optional[WireLoadTestSpec] = None
    long_running_testnet: bool = False
    launch_load_balancer: bool = False
    testnet_duration: Int64 = 0  # seconds
    num_wallets: Int32 = 0
    cosmos_sdk_sha: Optional[str] = None
    cometbft_sha: Optional[str] = None
    catalyst_version: Optional[str] = None
    provider_config: Dict[str, str] = Field(default_factory=dict)


class WireWorkflowResponse(WireModel):
    workflow_id: str = ""
    status: str = ""
    data: Dict[str, Any] = Field(default_factory=dict)


class WireNode(WireModel):
    name: str = ""
    address: str = ""
    rpc: str = ""
    lcd: str = ""
    grpc: str = ""
    metrics: str = ""


class WireWalletInfo(WireModel):
    faucet_address: str = ""
    faucet_mnemonic: str = ""
    user_addresses: List[str] = Field(default_factory=list)
    user_mnemonics: List[str] = Field(default_factory=list)


class WireWorkflow(WireModel):
    workflow_id: str = ""
    status: str = ""
    nodes: List[WireNode] = Field(default_factory=list)
    validators: List[WireNode] = Field(default_factory=list)
    load_balancers: List[WireNode] = Field(default_factory=list)
    monitoring: Dict[str, str] = Field(default_factory=dict)
    wallets: Optional[WireWalletInfo] = None
    config: Optional[WireCreateWorkflowRequest] = None
    load_test_spec: Optional[WireLoadTestSpec] = None
    provider: str = ""
    start_time: str = ""
    end_time: str = ""


class WireWorkflowSummary(WireModel):
    workflow_id: str = ""
    status: str = ""
    start_time: str = ""
    repo: str = ""
    sha: str = ""


class WireWorkflowListResponse(WireModel):
    workflows: List[WireWorkflowSummary] = Field(default_factory=list)
    count: Int32 = 0


class WireGetWorkflowRequest(WireModel):
    workflow_id: str


class WireListWorkflowsRequest(WireModel):
    limit: Int32 = 100
    offset: Int32 = 0


class WireCancelWorkflowRequest(WireModel):
    workflow_id: str


class WireSignalWorkflowRequest(WireModel):
    workflow_id: str
    signal_name: str


class WireRunLoadTestRequest(WireModel):
    workflow_id: str
    load_test_spec: WireLoadTestSpec


# ============================================
# Templates
# ============================================

class WireCreateWorkflowTemplateRequest(WireModel):
    id: str
    description: str = ""
    template_config: WireCreateWorkflowRequest


class WireUpdateWorkflowTemplateRequest(WireCreateWorkflowTemplateRequest):
    pass


class WireWorkflowTemplate(WireModel):
    id: str = ""
    description: str = ""
    template_config: Optional[WireCreateWorkflowRequest] = None
    created_at: str = ""
    created_by: str = ""
    run_count: Int32 = 0


class WireWorkflowTemplateResponse(WireModel):
    id: str = ""


class WireWorkflowTemplateSummary(WireModel):
    id: str = ""
    description: str = ""
    created_at: str = ""
    run_count: Int32 = 0


class WireWorkflowTemplateListResponse(WireModel):
    templates: List[WireWorkflowTemplateSummary] = Field(default_factory=list)
    count: Int32 = 0


class WireTemplateIdRequest(WireModel):
    """Get/delete requests carry only the template id."""
    id: str


class WireListWorkflowTemplatesRequest(WireModel):
    limit: Int32 = 50
    offset: Int32 = 0


class WireExecuteWorkflowTemplateRequest(WireModel):
    id: str
    sha: str
    run_name: str = ""


class WireGetTemplateRunHistoryRequest(WireModel):
    id: str
    limit: Int32 = 50
    offset: Int32 = 0


class WireTemplateRun(WireModel):
    run_id: str = ""
    workflow_id: str = ""
    template_id: str = ""
    sha: str = ""
    run_name: str = ""
    status: str = ""
    started_at: str = ""
    completed_at: str = ""
    monitoring_links: Dict[str, str] = Field(default_factory=dict)
    provider: str = ""


class WireTemplateRunHistoryResponse(WireModel):
    runs: List[WireTemplateRun] = Field(default_factory=list)
    count: Int32 = 0
