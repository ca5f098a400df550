from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, NamedTuple, Optional

from .config import ConfigurationError


class EndpointStats(NamedTuple):
    address: str
    total: int
    failed: int
    avg_rtt_ms: Optional[float] = None


@dataclass
class Endpoint:
    address: str
    total_probes: int = field(default=0, compare=False)
    failed_probes: int = field(default=0, compare=False)
    rtt_total_ms: float = field(default=0.0, compare=False)
    rtt_samples: int = field(default=0, compare=False)

    def record_result(self, ok: bool, rtt_ms: Optional[float] = None):
        # Counters cover the whole run; they are never windowed.
        self.total_probes += 1
        if not ok:
            self.failed_probes += 1
        elif rtt_ms is not None:
            self.rtt_total_ms += rtt_ms
            self.rtt_samples += 1

    def avg_rtt_ms(self) -> Optional[float]:
        if not self.rtt_samples:
            return None
        return self.rtt_total_ms / self.rtt_samples

    def stats(self) -> EndpointStats:
        return EndpointStats(
            self.address, self.total_probes, self.failed_probes, self.avg_rtt_ms()
        )


class EndpointRegistry:
    """Fixed catalog of probe targets, in the order they were configured."""

    def __init__(self, addresses: Iterable[str]):
        endpoints = [Endpoint(address) for address in addresses]
        if not endpoints:
            raise ConfigurationError("endpoint catalog is empty")
        seen: set[str] = set()
        for ep in endpoints:
            if ep.address in seen:
                raise ConfigurationError(f"duplicate endpoint: {ep.address}")
            seen.add(ep.address)
        self._endpoints = endpoints

    @property
    def endpoints(self) -> list[Endpoint]:
        return self._endpoints

    def __len__(self) -> int:
        return len(self._endpoints)

    def __iter__(self) -> Iterator[Endpoint]:
        return iter(self._endpoints)

    def snapshot(self) -> list[EndpointStats]:
        return [ep.stats() for ep in self._endpoints]
