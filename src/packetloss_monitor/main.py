from __future__ import annotations

import asyncio
import logging
import sys
from typing import Optional, Sequence

from . import config
from .endpoints import EndpointRegistry
from .logging_config import setup_logging
from .ping import make_prober
from .probe import ProbeExecutor
from .reporter import ConsoleReporter
from .sampler import Sampler
from .window import SlidingWindow

logger = logging.getLogger(__name__)


def build_sampler(settings: config.RunSettings) -> Sampler:
    """Wire the monitor together; raises ConfigurationError on bad settings."""
    registry = EndpointRegistry(config.ENDPOINTS)
    window = SlidingWindow(settings.window_capacity)
    return Sampler(
        registry,
        window,
        ProbeExecutor(make_prober(settings.ping_timeout_ms)),
        ConsoleReporter(window.capacity),
        tick_interval=settings.tick_interval,
        timeout_seconds=settings.timeout_seconds,
    )


async def main_async(settings: config.RunSettings):
    """The main asynchronous entry point of the application."""
    sampler = build_sampler(settings)
    await sampler.run()


def main(argv: Optional[Sequence[str]] = None) -> int:
    settings = config.parse_args(argv)
    try:
        setup_logging()
    except ValueError:
        setup_logging("WARNING")
        logger.warning("unknown log level %r, using WARNING", config.LOG_LEVEL)
    try:
        asyncio.run(main_async(settings))
    except config.ConfigurationError as exc:
        logger.error("invalid configuration: %s", exc)
        return 1
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
