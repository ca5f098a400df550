from __future__ import annotations

import asyncio
import enum
import logging
import time
from typing import Callable, Optional

from .cancel import register_stop_handler
from .endpoints import EndpointRegistry
from .probe import ProbeExecutor
from .reporter import Reporter
from .selector import EndpointSelector
from .window import SlidingWindow

logger = logging.getLogger(__name__)

StopRegistrar = Callable[[Callable[[], None]], Callable[[], None]]


class Clock:
    """Monotonic time source; swapped for a fake in tests."""

    def now(self) -> float:
        return time.monotonic()

    async def sleep(self, seconds: float):
        await asyncio.sleep(seconds)


class SamplerState(enum.Enum):
    RUNNING = "running"
    STOP_REQUESTED = "stop_requested"
    TERMINATED = "terminated"


class Sampler:
    """Probes one endpoint per tick until stopped or out of time.

    A stop request only flips the state; the loop notices it at the start of
    the next tick, so a probe that is already running finishes and its outcome
    is recorded. The final report is emitted exactly once on every way out of
    :meth:`run`, including errors raised by the reporter.
    """

    def __init__(
        self,
        registry: EndpointRegistry,
        window: SlidingWindow,
        executor: ProbeExecutor,
        reporter: Reporter,
        *,
        selector: Optional[EndpointSelector] = None,
        clock: Optional[Clock] = None,
        tick_interval: float = 0.5,
        timeout_seconds: Optional[float] = None,
        stop_registrar: StopRegistrar = register_stop_handler,
    ):
        self.registry = registry
        self.window = window
        self.executor = executor
        self.reporter = reporter
        self.selector = selector or EndpointSelector()
        self.clock = clock or Clock()
        self.tick_interval = tick_interval
        self.timeout_seconds = timeout_seconds
        self._stop_registrar = stop_registrar
        self.state = SamplerState.RUNNING
        self.ticks = 0

    def request_stop(self):
        if self.state is SamplerState.RUNNING:
            self.state = SamplerState.STOP_REQUESTED
            logger.info("stop requested after %d ticks", self.ticks)

    def _on_stop_signal(self):
        if self.state is SamplerState.RUNNING:
            self.reporter.report_stopping()
        self.request_stop()

    async def _tick(self):
        endpoint = self.selector.select(self.registry.endpoints)
        ok = await self.executor.probe(endpoint)
        self.window.push(ok)
        self.ticks += 1
        self.reporter.report_progress(
            self.window.failed, self.window.size, self.window.capacity
        )

    async def run(self) -> SamplerState:
        if self.state is SamplerState.TERMINATED:
            raise RuntimeError("sampler has already terminated")

        unregister: Callable[[], None] = lambda: None
        try:
            unregister = self._stop_registrar(self._on_stop_signal)
            deadline: Optional[float] = None
            if self.timeout_seconds is not None:
                deadline = self.clock.now() + self.timeout_seconds
            logger.info(
                "sampling %d endpoints every %.2fs (window=%d, deadline=%s)",
                len(self.registry),
                self.tick_interval,
                self.window.capacity,
                "none" if deadline is None else f"{self.timeout_seconds}s",
            )
            while self.state is SamplerState.RUNNING:
                tick_start = self.clock.now()
                if deadline is not None and tick_start >= deadline:
                    logger.info("deadline reached after %d ticks", self.ticks)
                    break
                await self._tick()
                # Subtract probe latency so the cadence stays near nominal.
                elapsed = self.clock.now() - tick_start
                await self.clock.sleep(max(0.0, self.tick_interval - elapsed))
        finally:
            unregister()
            self.state = SamplerState.TERMINATED
            self.reporter.report_final(
                self.registry.snapshot(), self.window.failed, self.window.size
            )
        return self.state
