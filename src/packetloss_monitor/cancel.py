from __future__ import annotations

import asyncio
import logging
import signal
from typing import Callable, Optional, Sequence

logger = logging.getLogger(__name__)

STOP_SIGNALS: tuple[signal.Signals, ...] = (signal.SIGINT, signal.SIGTERM)


def register_stop_handler(
    handler: Callable[[], None],
    loop: Optional[asyncio.AbstractEventLoop] = None,
    signals: Sequence[signal.Signals] = STOP_SIGNALS,
) -> Callable[[], None]:
    """Call ``handler`` when the process is asked to stop.

    Returns a function that removes the handler again. It restores whatever
    was installed before and may be called more than once.
    """
    loop = loop or asyncio.get_running_loop()
    via_loop: list[signal.Signals] = []
    previous: dict[signal.Signals, object] = {}

    def unregister():
        while via_loop:
            loop.remove_signal_handler(via_loop.pop())
        while previous:
            sig, old = previous.popitem()
            signal.signal(sig, old if old is not None else signal.SIG_DFL)  # type: ignore[arg-type]
        logger.debug("stop handler removed")

    try:
        for sig in signals:
            try:
                loop.add_signal_handler(sig, handler)
                via_loop.append(sig)
            except NotImplementedError:  # Windows
                previous[sig] = signal.signal(sig, lambda s, f: loop.call_soon_threadsafe(handler))
    except BaseException:
        # Leave no signal half-installed.
        unregister()
        raise
    return unregister
