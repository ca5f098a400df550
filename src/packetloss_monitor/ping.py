from __future__ import annotations

import asyncio
import contextlib
import math
import re
import shutil
import sys
from dataclasses import dataclass
from typing import Awaitable, Callable, NamedTuple, Optional

# "time=14.2 ms" (ping) or "64 bytes, 9.81 ms" (fping)
PING_RTT_RE = re.compile(r"(?:time[=<]|bytes, )([0-9]*\.?[0-9]+) ?ms")

# Extra time the process gets to start up and exit on top of its own wait.
PROCESS_GRACE_SECONDS = 0.5


@dataclass(frozen=True)
class PingResult:
    host: str
    ok: bool
    rtt_ms: Optional[float] = None
    error: Optional[str] = None


# Anything that can test reachability of one address.
Prober = Callable[[str], Awaitable[PingResult]]


class PingCommand(NamedTuple):
    argv: list[str]
    wait_seconds: float  # how long the command itself waits for a reply


def build_ping_command(host: str, timeout_ms: int) -> PingCommand:
    """Command line for a single echo request to ``host``.

    Windows ping takes its wait in milliseconds. On other platforms fping is
    preferred because it accepts a millisecond timeout as well; plain ping
    only takes whole seconds there, so the timeout is rounded up.
    """
    if sys.platform.startswith("win"):
        return PingCommand(["ping", "-n", "1", "-w", str(timeout_ms), host], timeout_ms / 1000)
    if shutil.which("fping"):
        return PingCommand(["fping", "-c", "1", "-t", str(timeout_ms), host], timeout_ms / 1000)
    wait = max(1, math.ceil(timeout_ms / 1000))
    # -n : numeric output (avoid DNS reverse lookups slowing us)
    return PingCommand(["ping", "-n", "-c", "1", "-W", str(wait), host], float(wait))


def parse_rtt_ms(output: str) -> Optional[float]:
    match = PING_RTT_RE.search(output)
    return float(match.group(1)) if match else None


async def ping_host(host: str, timeout_ms: int) -> PingResult:
    """Ping a host once using the system ping utility.

    Raises OSError if the command cannot be launched. A process that outlives
    its own wait plus PROCESS_GRACE_SECONDS is killed and reaped, and the
    attempt counts as a timeout.
    """
    cmd = build_ping_command(host, timeout_ms)
    proc = await asyncio.create_subprocess_exec(
        *cmd.argv,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.STDOUT,
    )
    try:
        out_bytes = await asyncio.wait_for(
            proc.communicate(), timeout=cmd.wait_seconds + PROCESS_GRACE_SECONDS
        )
    except asyncio.TimeoutError:
        with contextlib.suppress(ProcessLookupError):
            proc.kill()
        await proc.wait()
        return PingResult(host, False, None, "timeout")

    stdout = out_bytes[0].decode(errors="replace")
    if proc.returncode == 0:
        return PingResult(host, True, parse_rtt_ms(stdout), None)
    if "100% packet loss" in stdout or "100% loss" in stdout:
        return PingResult(host, False, None, "timeout")
    return PingResult(host, False, None, "unreachable")


def make_prober(timeout_ms: int) -> Prober:
    async def _probe(host: str) -> PingResult:
        return await ping_host(host, timeout_ms)

    return _probe
