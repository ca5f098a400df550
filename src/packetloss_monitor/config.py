from __future__ import annotations

import argparse
import os
import re
import sys
from dataclasses import dataclass
from typing import Optional, Sequence


class ConfigurationError(Exception):
    """Raised when the monitor cannot start with the given settings."""


# Probe targets (hostnames or IPs)
ENDPOINTS: list[str] = [
    # Search engines
    "google.com",
    "bing.com",
    "yahoo.com",
    "duckduckgo.com",
    # Tech companies
    "microsoft.com",
    "apple.com",
    "amazon.com",
    "aws.amazon.com",
    # Public DNS servers
    "1.1.1.1",  # Cloudflare DNS
    "8.8.8.8",  # Google DNS
    "9.9.9.9",  # Quad9 DNS
    "208.67.222.222",  # OpenDNS
    # Languages
    "python.org",
    "go.dev",
    "ruby-lang.org",
    # Niche sites
    "myanimelist.net",
]

# Sampling settings
TICK_INTERVAL_SECONDS = 0.5  # one probe per tick
PING_TIMEOUT_MS = 500  # passed through to the ping command

# Number of most recent outcomes the live loss rate is computed over
DEFAULT_WINDOW_CAPACITY = 1000

# Final verdict threshold (percent)
HEALTHY_LOSS_PCT = 3.0

# Logging
LOG_LEVEL = os.getenv("PACKETLOSS_LOG_LEVEL", "WARNING")

# Emoji/status mapping
EMOJI_RUNNING = "🔄"
EMOJI_STOPPED = "⏹️"
EMOJI_REPORT = "📋"
EMOJI_HEALTHY = "✅"
EMOJI_DEGRADED = "⚠️"


@dataclass(frozen=True)
class RunSettings:
    timeout_seconds: Optional[int] = None  # None: run until cancelled
    window_capacity: int = DEFAULT_WINDOW_CAPACITY
    tick_interval: float = TICK_INTERVAL_SECONDS
    ping_timeout_ms: int = PING_TIMEOUT_MS


_INT_PREFIX_RE = re.compile(r"\s*([+-]?\d+)")


def _lenient_int(value: Optional[str]) -> Optional[int]:
    """Leading integer of ``value`` ("1.5" -> 1, "30s" -> 30), or None."""
    if value is None:
        return None
    match = _INT_PREFIX_RE.match(value)
    return int(match.group(1)) if match else None


def parse_args(argv: Optional[Sequence[str]] = None) -> RunSettings:
    """Build run settings from the two optional positional arguments.

    Values that are missing or do not start with an integer fall back to
    their defaults instead of aborting: no deadline, and a window of
    DEFAULT_WINDOW_CAPACITY. There are no flags, so dash-prefixed values are
    read as values and anything past the second argument is ignored. Range
    checks happen where the values are used.
    """
    if argv is None:
        argv = sys.argv[1:]
    parser = argparse.ArgumentParser(
        prog="packetloss",
        add_help=False,
        description="Continuously sample packet loss against public endpoints.",
    )
    parser.add_argument(
        "timeout_seconds",
        nargs="?",
        help="Stop after this many seconds (default: run until Ctrl+C)",
    )
    parser.add_argument(
        "window_capacity",
        nargs="?",
        help=f"Number of recent probes the loss rate covers (default: {DEFAULT_WINDOW_CAPACITY})",
    )
    # "--" makes argparse treat every token as positional.
    args, _ignored = parser.parse_known_args(["--", *argv])

    capacity = _lenient_int(args.window_capacity)
    return RunSettings(
        timeout_seconds=_lenient_int(args.timeout_seconds),
        window_capacity=DEFAULT_WINDOW_CAPACITY if capacity is None else capacity,
    )
