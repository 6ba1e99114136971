# testnet_client/codecs/chain_config.py
"""Chain topology/config codec."""

import logging
from typing import List, Optional, Tuple

from testnet_client.codecs import genesis
from testnet_client.core.json_value import JsonObject, ParseWarning, dump_json, parse_json_object
from testnet_client.core.models import ChainConfig, RegionConfig
from testnet_client.core.schemas import WireChainConfig, WireRegionConfig

logger = logging.getLogger(__name__)


# Domain attribute -> wire field
CONFIG_BLOBS = (
    ("app_config", "custom_app_config"),
    ("consensus_config", "custom_consensus_config"),
    ("client_config", "custom_client_config"),
)


def _encode_blob(blob: Optional[JsonObject], field: str) -> Optional[str]:
    if blob is None:
        return None
    return dump_json(blob, field=field)


def to_wire(cfg: ChainConfig) -> WireChainConfig:
    """
    Convert a chain config to its wire shape.

    Absent config blobs are omitted from the wire.

    Raises:
        SerializationError: If a blob or genesis value can't be serialized,
            or a count doesn't fit the wire's unsigned 64-bit range
    """
    blobs = {
        wire_field: _encode_blob(getattr(cfg, attr), wire_field)
        for attr, wire_field in CONFIG_BLOBS
    }

    return WireChainConfig.build(
        name=cfg.name,
        image=cfg.image,
        version=cfg.version,
        num_of_nodes=cfg.num_of_nodes,
        num_of_validators=cfg.num_of_validators,
        genesis_modifications=genesis.encode(cfg.genesis_modifications),
        region_configs=[
            WireRegionConfig.build(
                name=rc.name,
                num_of_nodes=rc.num_of_nodes,
                num_of_validators=rc.num_of_validators,
            )
            for rc in cfg.region_configs
        ],
        set_seed_node=cfg.set_seed_node,
        set_persistent_peers=cfg.set_persistent_peers,
        **blobs,
    )


def from_wire_with_warnings(wire: WireChainConfig) -> Tuple[ChainConfig, List[ParseWarning]]:
    """
    Convert a wire chain config back, returning blob parse warnings.

    A blob that fails to parse comes back as None; nothing is raised.
    """
    warnings: List[ParseWarning] = []
    blobs = {}
    for attr, wire_field in CONFIG_BLOBS:
        result = parse_json_object(getattr(wire, wire_field), wire_field)
        if result.warning:
            warnings.append(result.warning)
        blobs[attr] = result.value

    cfg = ChainConfig(
        name=wire.name,
        image=wire.image,
        version=wire.version or None,
        num_of_nodes=wire.num_of_nodes or 0,
        num_of_validators=wire.num_of_validators or 0,
        genesis_modifications=genesis.decode(wire.genesis_modifications),
        region_configs=[
            RegionConfig(
                name=rc.name,
                num_of_nodes=rc.num_of_nodes or 0,
                num_of_validators=rc.num_of_validators or 0,
            )
            for rc in wire.region_configs
        ],
        set_seed_node=wire.set_seed_node,
        set_persistent_peers=wire.set_persistent_peers,
        **blobs,
    )
    return cfg, warnings


def from_wire(wire: WireChainConfig) -> ChainConfig:
    """Convert a wire chain config back, logging blob parse warnings."""
    cfg, warnings = from_wire_with_warnings(wire)
    for warning in warnings:
        logger.warning(f"[chain {wire.name}] {warning}")
    return cfg
