from __future__ import annotations

from typing import Optional, Protocol, Sequence

from rich import box
from rich.console import Console
from rich.live import Live
from rich.table import Table
from rich.text import Text

from . import config
from .endpoints import EndpointStats

console = Console()


class Reporter(Protocol):
    def report_progress(self, failed: int, size: int, capacity: int) -> None: ...

    def report_final(
        self, stats: Sequence[EndpointStats], failed: int, size: int
    ) -> None: ...

    def report_stopping(self) -> None: ...


def format_pct(failed: int, size: int) -> str:
    if not size:
        return "0.00"
    return f"{failed / size * 100:.2f}"


def format_counts(failed: int, size: int, capacity: int) -> str:
    """Zero-pad both counts to the width of the capacity so the line keeps its shape."""
    width = len(str(capacity))
    return f"{failed:0{width}d}/{size:0{width}d}"


def loss_line(failed: int, size: int, capacity: int) -> str:
    return f"Packetloss rate ({format_counts(failed, size, capacity)}): {format_pct(failed, size)}%"


def build_table(stats: Sequence[EndpointStats]) -> Table:
    table = Table(
        title=f"{config.EMOJI_REPORT} Websites pinged",
        box=box.MINIMAL_DOUBLE_HEAD,
        title_justify="left",
    )
    table.add_column("Host", style="bold")
    table.add_column("Pings", justify="right")
    table.add_column("Failed", justify="right")
    table.add_column("Loss %", justify="right")
    table.add_column("Avg RTT (ms)", justify="right")
    for st in stats:
        table.add_row(
            st.address,
            str(st.total),
            str(st.failed),
            format_pct(st.failed, st.total),
            "-" if st.avg_rtt_ms is None else f"{st.avg_rtt_ms:.1f}",
        )
    return table


class ConsoleReporter:
    """Single live status line while sampling, a table at the end."""

    def __init__(self, capacity: int, out: Optional[Console] = None):
        self.capacity = capacity
        self.console = out or console
        self._live: Optional[Live] = None

    def _render(self, failed: int, size: int) -> Text:
        return Text(f"{config.EMOJI_RUNNING} {loss_line(failed, size, self.capacity)}")

    def report_progress(self, failed: int, size: int, capacity: int):
        self.capacity = capacity
        if self._live is None:
            self._live = Live(
                self._render(failed, size),
                console=self.console,
                transient=True,
                auto_refresh=False,
            )
            self._live.start()
        self._live.update(self._render(failed, size), refresh=True)

    def report_stopping(self):
        self.console.print(f"{config.EMOJI_STOPPED}  Exiting packetloss monitor.")

    def report_final(self, stats: Sequence[EndpointStats], failed: int, size: int):
        if self._live is not None:
            self._live.stop()
            self._live = None
        self.console.print(build_table(stats))
        pct = failed / size * 100 if size else 0.0
        emoji = config.EMOJI_HEALTHY if pct < config.HEALTHY_LOSS_PCT else config.EMOJI_DEGRADED
        self.console.print(f"{emoji} {loss_line(failed, size, self.capacity)}")
