# testnet_client/core/external_shapes.py
"""
Adapters from known external load test spec shapes to the wire schema.

Specs arrive from shared links, stored templates and YAML exports in
upper-camel (Go struct field names) or snake_case (YAML/form) casing. Each
shape has an explicit key table mapping onto the canonical lower-camel wire
names. Canonical keys always win over translated ones; fields nobody
supplies fall back to the schema's zero defaults.
"""

from collections.abc import Mapping
from typing import Any, Dict, Tuple

from testnet_client.core.durations import parse_duration_seconds


SPEC_SHAPES: Tuple[Tuple[str, Dict[str, str]], ...] = (
    ("upper_camel", {
        "Name": "name",
        "Description": "description",
        "ChainID": "chainId",
        "ChainId": "chainId",
        "NumOfTxs": "numOfTxs",
        "NumOfBlocks": "numOfBlocks",
        "Msgs": "msgs",
        "UnorderedTxs": "unorderedTxs",
        "TxTimeout": "txTimeout",
        "IsEvmChain": "isEvmChain",
        "GasDenom": "gasDenom",
        "Bech32Prefix": "bech32Prefix",
    }),
    ("snake_case", {
        "chain_id": "chainId",
        "num_of_txs": "numOfTxs",
        "num_of_blocks": "numOfBlocks",
        "unordered_txs": "unorderedTxs",
        "tx_timeout": "txTimeout",
        "is_evm_chain": "isEvmChain",
        "gas_denom": "gasDenom",
        "bech32_prefix": "bech32Prefix",
    }),
)

MESSAGE_SHAPES: Tuple[Tuple[str, Dict[str, str]], ...] = (
    ("upper_camel", {
        "Type": "type",
        "Weight": "weight",
        "NumMsgs": "numMsgs",
        "ContainedType": "containedType",
        "NumOfRecipients": "numOfRecipients",
    }),
    ("snake_case", {
        "num_msgs": "numMsgs",
        "contained_type": "containedType",
        "num_of_recipients": "numOfRecipients",
    }),
)

SPEC_FIELDS = frozenset(
    ["name", "description", "msgs"]
    + [canonical for _, table in SPEC_SHAPES for canonical in table.values()]
)
MESSAGE_FIELDS = frozenset(
    canonical for _, table in MESSAGE_SHAPES for canonical in table.values()
)


def _adapt(data: Mapping, canonical_fields: frozenset, shapes) -> Dict[str, Any]:
    adapted: Dict[str, Any] = {}

    for key, value in data.items():
        if key in canonical_fields and value is not None:
            adapted[key] = value

    for _, table in shapes:
        for external_key, canonical in table.items():
            if canonical in adapted:
                continue
            value = data.get(external_key)
            if value is not None:
                adapted[canonical] = value

    return adapted


def _coerce_timeout(value: Any) -> Any:
    # Form/YAML shapes carry the timeout as a duration string
    if isinstance(value, str):
        return parse_duration_seconds(value)
    return value


def adapt_load_test_message(data: Any) -> Any:
    """Rename a message mapping's keys onto the wire schema."""
    if not isinstance(data, Mapping):
        return data
    return _adapt(data, MESSAGE_FIELDS, MESSAGE_SHAPES)


def adapt_load_test_spec(data: Any) -> Any:
    """
    Rename a spec mapping's keys onto the wire schema.

    Non-mapping input (already-built models) passes through untouched.

    Raises:
        ValueError: If a string timeout is not a duration
    """
    if not isinstance(data, Mapping):
        return data

    adapted = _adapt(data, SPEC_FIELDS, SPEC_SHAPES)

    if "txTimeout" in adapted:
        timeout = _coerce_timeout(adapted["txTimeout"])
        if timeout is None:
            del adapted["txTimeout"]
        else:
            adapted["txTimeout"] = timeout

    return adapted
