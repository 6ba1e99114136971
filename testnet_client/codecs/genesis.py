# testnet_client/codecs/genesis.py
"""Genesis modification codec: arbitrary JSON values <-> string wire values."""

import json
import logging
from typing import Iterable, List

from testnet_client.core.json_value import JsonKind, dump_json, json_kind
from testnet_client.core.models import GenesisModification
from testnet_client.core.schemas import WireGenesisKV

logger = logging.getLogger(__name__)


def encode_genesis_value(key: str, value) -> str:
    """
    Strings pass through unchanged, everything else is JSON-serialized.

    Raises:
        SerializationError: If the value has no JSON representation
    """
    if json_kind(value) is JsonKind.STRING:
        return value
    return dump_json(value, field=f"genesis value for {key!r}")


def decode_genesis_value(key: str, raw: str):
    """Parse a wire value as JSON, or return it unchanged if it isn't JSON."""
    try:
        return json.loads(raw)
    except ValueError:
        # Bare tokens such as "atest" are legitimate values
        logger.debug(f"Genesis value for {key} is not JSON, keeping raw string")
        return raw


def encode(mods: Iterable[GenesisModification]) -> List[WireGenesisKV]:
    """Encode modifications in order. Duplicate keys are kept."""
    return [
        WireGenesisKV(key=mod.key, value=encode_genesis_value(mod.key, mod.value))
        for mod in mods
    ]


def decode(wire: Iterable[WireGenesisKV]) -> List[GenesisModification]:
    """Decode modifications in order. Never raises on unparseable values."""
    return [
        GenesisModification(key=kv.key, value=decode_genesis_value(kv.key, kv.value))
        for kv in wire
    ]
