from __future__ import annotations

import logging
from typing import Optional

from .endpoints import Endpoint
from .ping import Prober

logger = logging.getLogger(__name__)


class ProbeExecutor:
    """Runs one probe against an endpoint and folds every failure into False."""

    def __init__(self, prober: Prober):
        self._prober = prober

    async def probe(self, endpoint: Endpoint) -> bool:
        rtt_ms: Optional[float] = None
        try:
            result = await self._prober(endpoint.address)
            ok = bool(result.ok)
            if ok:
                rtt_ms = result.rtt_ms
            else:
                logger.debug("probe to %s failed: %s", endpoint.address, result.error)
        except Exception as exc:
            # Launch failures and prober bugs are network loss as far as the
            # statistics are concerned.
            logger.debug("probe to %s raised %r", endpoint.address, exc)
            ok = False
        endpoint.record_result(ok, rtt_ms)
        return ok
