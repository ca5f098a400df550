from __future__ import annotations

import random
from typing import Optional, Sequence

from .endpoints import Endpoint


class EndpointSelector:
    """Picks a random endpoint per tick, never the same one twice in a row."""

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()
        self.last_selected: Optional[str] = None

    def select(self, catalog: Sequence[Endpoint]) -> Endpoint:
        endpoint = self._rng.choice(catalog)
        # A single-entry catalog has nothing else to offer.
        if len(catalog) > 1:
            while endpoint.address == self.last_selected:
                endpoint = self._rng.choice(catalog)
        self.last_selected = endpoint.address
        return endpoint
