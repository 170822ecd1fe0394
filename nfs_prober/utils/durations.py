"""
Duration string parsing.

Accepts the same syntax as the command line flags: a sequence of
decimal numbers, each with an optional fraction and a unit suffix, such as
"250ms", "1.5h" or "1m30s". Valid units are "ns", "us" (or "µs"), "ms",
"s", "m" and "h".
"""

import re

from ..core.exceptions import ConfigError

_UNIT_SECONDS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

_COMPONENT = re.compile(r"(\d+\.?\d*|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


def parse_duration(value: str) -> float:
    """Parse a duration string into seconds. Raises ConfigError on bad input."""
    if value is None:
        raise ConfigError("duration is missing")

    text = str(value).strip()
    if not text:
        raise ConfigError("duration is empty")

    sign = 1.0
    if text[0] in "+-":
        sign = -1.0 if text[0] == "-" else 1.0
        text = text[1:]

    if text == "0":
        return 0.0

    total = 0.0
    position = 0
    while position < len(text):
        match = _COMPONENT.match(text, position)
        if not match:
            raise ConfigError(f"invalid duration {value!r}")
        total += float(match.group(1)) * _UNIT_SECONDS[match.group(2)]
        position = match.end()

    if position == 0:
        raise ConfigError(f"invalid duration {value!r}")

    return sign * total


def parse_positive_duration(value: str, name: str) -> float:
    seconds = parse_duration(value)
    if seconds <= 0:
        raise ConfigError(f"{name} must be greater than zero, got {value!r}")
    return seconds
