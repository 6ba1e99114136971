# testnet_client/core/json_value.py
"""JSON value variant used for genesis values and free-form config blobs."""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar

from pydantic import JsonValue

from testnet_client.core.errors import SerializationError


T = TypeVar("T")

JsonObject = Dict[str, JsonValue]


class JsonKind(Enum):
    """Tag of a JSON value."""
    STRING = "string"
    NUMBER = "number"
    BOOL = "bool"
    ARRAY = "array"
    OBJECT = "object"
    NULL = "null"


def json_kind(value: Any) -> JsonKind:
    """
    Classify a value into its JSON variant.

    bool is checked before int since bool subclasses int.

    Raises:
        SerializationError: If the value has no JSON representation
    """
    if value is None:
        return JsonKind.NULL
    if isinstance(value, str):
        return JsonKind.STRING
    if isinstance(value, bool):
        return JsonKind.BOOL
    if isinstance(value, (int, float)):
        return JsonKind.NUMBER
    if isinstance(value, (list, tuple)):
        return JsonKind.ARRAY
    if isinstance(value, dict):
        return JsonKind.OBJECT
    raise SerializationError(
        f"Value of type {type(value).__name__} is not JSON-serializable"
    )


def dump_json(value: Any, field: str = "value") -> str:
    """
    Serialize a JSON value compactly.

    Raises:
        SerializationError: On cyclic structures, NaN/Infinity or
            non-JSON types anywhere in the value
    """
    json_kind(value)
    try:
        return json.dumps(value, separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Cannot serialize {field}: {e}") from e


# ============================================
# DECODE RESULTS
# ============================================

@dataclass(frozen=True)
class ParseWarning:
    """A wire string that could not be decoded as JSON."""
    field: str
    raw: str
    reason: str

    def __str__(self) -> str:
        return f"Failed to parse {self.field} JSON: {self.reason}"


@dataclass(frozen=True)
class DecodeResult(Generic[T]):
    """Decoded value plus the warning produced while decoding, if any."""
    value: Optional[T]
    warning: Optional[ParseWarning] = None

    @property
    def ok(self) -> bool:
        return self.warning is None


def parse_json_object(raw: Optional[str], field: str) -> DecodeResult[JsonObject]:
    """
    Parse a config blob that must hold a JSON object.

    Empty or missing input is absent without a warning. Invalid JSON or a
    non-object document is absent with a warning.
    """
    if not raw:
        return DecodeResult(value=None)

    try:
        parsed = json.loads(raw)
    except ValueError as e:
        return DecodeResult(value=None, warning=ParseWarning(field=field, raw=raw, reason=str(e)))

    if not isinstance(parsed, dict):
        return DecodeResult(
            value=None,
            warning=ParseWarning(
                field=field,
                raw=raw,
                reason=f"expected a JSON object, got {json_kind(parsed).value}",
            ),
        )

    return DecodeResult(value=parsed)
