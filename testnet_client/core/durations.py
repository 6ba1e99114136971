# testnet_client/core/durations.py
"""Compact duration strings ("90s", "1h30m", "45") <-> whole seconds."""

import re
from decimal import Decimal
from typing import Optional


_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(ms|h|m|s)")
_BARE_NUMBER = re.compile(r"\d+")

_UNIT_SECONDS = {
    "h": Decimal(3600),
    "m": Decimal(60),
    "s": Decimal(1),
    "ms": Decimal("0.001"),
}


def parse_duration_seconds(value: Optional[str]) -> Optional[int]:
    """
    Parse a duration string into whole seconds.

    A bare integer is taken as seconds. Returns None for empty input.

    Raises:
        ValueError: If the string is not a duration, or is not a whole
            number of seconds ("500ms", "1.5s")
    """
    if value is None:
        return None

    text = value.strip()
    if not text:
        return None

    if _BARE_NUMBER.fullmatch(text):
        return int(text)

    position = 0
    total = Decimal(0)
    for match in _DURATION_PART.finditer(text):
        if match.start() != position:
            break
        total += Decimal(match.group(1)) * _UNIT_SECONDS[match.group(2)]
        position = match.end()

    if position == 0 or position != len(text):
        raise ValueError(f"invalid duration {value!r}")

    if total != total.to_integral_value():
        raise ValueError(f"duration {value!r} is not a whole number of seconds")

    return int(total)


def format_duration(seconds: int) -> str:
    """Format whole seconds compactly, e.g. 5400 -> "1h30m"."""
    if seconds <= 0:
        return "0s"

    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)

    parts = []
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")
    if secs:
        parts.append(f"{secs}s")
    return "".join(parts)
