import pytest
from hypothesis import given, settings, strategies as st

from packetloss_monitor.config import ConfigurationError
from packetloss_monitor.window import SlidingWindow


def test_empty_window_has_no_loss_rate():
    w = SlidingWindow(5)
    assert w.size == 0
    assert w.failed == 0
    assert w.loss_rate() is None


def test_oldest_outcome_is_evicted():
    w = SlidingWindow(3)
    for ok in [True, False, False, True]:
        w.push(ok)
    assert list(w) == [False, False, True]
    assert w.failed == 2
    assert w.size == 3
    assert w.loss_rate() == pytest.approx(2 / 3)


def test_failure_ages_out():
    w = SlidingWindow(10)
    w.push(False)
    for _ in range(10):
        w.push(True)
    assert w.failed == 0
    assert w.size == 10
    assert w.loss_rate() == 0.0


@pytest.mark.parametrize("capacity", [0, -1, 2.5, "10", True])
def test_invalid_capacity_rejected(capacity):
    with pytest.raises(ConfigurationError):
        SlidingWindow(capacity)


def test_capacity_one_tracks_latest():
    w = SlidingWindow(1)
    w.push(False)
    assert w.loss_rate() == 1.0
    w.push(True)
    assert list(w) == [True]
    assert w.failed == 0


@settings(max_examples=200)
@given(
    capacity=st.integers(min_value=1, max_value=20),
    outcomes=st.lists(st.booleans(), max_size=80),
)
def test_window_bound_and_failure_count(capacity, outcomes):
    w = SlidingWindow(capacity)
    for i, ok in enumerate(outcomes, start=1):
        w.push(ok)
        assert w.size == min(i, capacity)
        # shadow count of failures currently resident
        expected = outcomes[max(0, i - capacity):i]
        assert list(w) == expected
        assert w.failed == expected.count(False)
        assert 0 <= w.failed <= w.size <= w.capacity
