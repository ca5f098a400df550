import io

import pytest
from rich.console import Console

from packetloss_monitor import config
from packetloss_monitor.config import RunSettings, parse_args
from packetloss_monitor.endpoints import EndpointStats
from packetloss_monitor.reporter import ConsoleReporter, format_counts, format_pct, loss_line


def test_defaults_without_arguments():
    assert parse_args([]) == RunSettings(None, config.DEFAULT_WINDOW_CAPACITY)


def test_positional_arguments():
    settings = parse_args(["30", "200"])
    assert settings.timeout_seconds == 30
    assert settings.window_capacity == 200
    assert settings.tick_interval == config.TICK_INTERVAL_SECONDS
    assert settings.ping_timeout_ms == config.PING_TIMEOUT_MS


@pytest.mark.parametrize(
    "argv,expected",
    [
        (["abc"], RunSettings(None, 1000)),
        (["10", "lots"], RunSettings(10, 1000)),
        (["", "50"], RunSettings(None, 50)),
        (["0"], RunSettings(0, 1000)),
        (["5", "-3"], RunSettings(5, -3)),
        (["-x"], RunSettings(None, 1000)),
        (["--5"], RunSettings(None, 1000)),
        (["-x", "50"], RunSettings(None, 50)),
        (["10", "100", "extra"], RunSettings(10, 100)),
        (["1.5"], RunSettings(1, 1000)),
        (["30s", " 64"], RunSettings(30, 64)),
        (["-h"], RunSettings(None, 1000)),
    ],
)
def test_unparsable_values_fall_back(argv, expected):
    assert parse_args(argv) == expected


def test_format_helpers():
    assert format_pct(0, 0) == "0.00"
    assert format_pct(1, 3) == "33.33"
    assert format_counts(7, 42, 1000) == "0007/0042"
    assert loss_line(2, 3, 10) == "Packetloss rate (02/03): 66.67%"


def make_reporter(capacity=100):
    buf = io.StringIO()
    out = Console(file=buf, width=100, force_terminal=False, color_system=None)
    return ConsoleReporter(capacity, out), buf


def test_final_report_lists_endpoints_and_verdict():
    reporter, buf = make_reporter()
    reporter.report_progress(1, 4, 100)
    reporter.report_final(
        [EndpointStats("8.8.8.8", 3, 1, 14.25), EndpointStats("python.org", 1, 0)], 1, 4
    )
    text = buf.getvalue()
    assert "8.8.8.8" in text
    assert "python.org" in text
    assert "33.33" in text
    assert "14.2" in text
    assert "Avg RTT" in text
    assert f"{config.EMOJI_DEGRADED} Packetloss rate (001/004): 25.00%" in text


def test_final_report_healthy_with_no_data():
    reporter, buf = make_reporter(capacity=1000)
    reporter.report_final([EndpointStats("1.1.1.1", 0, 0)], 0, 0)
    assert f"{config.EMOJI_HEALTHY} Packetloss rate (0000/0000): 0.00%" in buf.getvalue()


def test_stopping_notice():
    reporter, buf = make_reporter()
    reporter.report_stopping()
    assert "Exiting packetloss monitor." in buf.getvalue()
