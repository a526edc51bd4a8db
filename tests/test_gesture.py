import numpy as np
import pytest

from gesture.locator import HandLocator, InvalidTrackingSample, PlayerHand
from gesture.types import BodySample, HandState
from gesture.utils import GestureTracker

O, C, L, U = HandState.OPEN, HandState.CLOSED, HandState.LASSO, HandState.UNKNOWN


def run(tracker, samples):
    return [tracker.update(s) for s in samples]


def test_open_then_closed_fires_once():
    t = GestureTracker()
    assert run(t, [O, O, C, C, C]) == [False, False, True, False, False]
    assert t.state.has_opened is False


def test_closed_without_open_never_fires():
    t = GestureTracker()
    assert run(t, [C, C, C]) == [False, False, False]


def test_reopen_rearms():
    t = GestureTracker()
    assert run(t, [O, C, O, C]) == [False, True, False, True]


def test_fire_count_matches_open_preceded_closed_runs():
    rng = np.random.default_rng(1234)
    for _ in range(50):
        seq = [O if v else C for v in rng.integers(0, 2, size=60)]
        expected = sum(1 for i in range(1, len(seq)) if seq[i] == C and seq[i - 1] == O)
        assert sum(run(GestureTracker(), seq)) == expected


def test_lasso_keeps_latch_by_default():
    t = GestureTracker()
    assert run(t, [O, L, U, C]) == [False, False, False, True]


def test_lasso_clears_latch_when_configured():
    t = GestureTracker(clear_latch_on_other=True)
    assert run(t, [O, L, C]) == [False, False, False]


def test_reset():
    t = GestureTracker()
    t.update(O)
    t.reset()
    assert t.update(C) is False


SL, SR = (100.0, 100.0), (200.0, 100.0)


def test_locate_left_hand_region():
    pos = HandLocator().locate(SL, SR, (70.0, 100.0), use_left=True)
    assert pos.x == pytest.approx(300.0)
    assert pos.y == pytest.approx(300.0)


def test_locate_right_hand_region():
    pos = HandLocator().locate(SL, SR, (230.0, 100.0), use_left=False)
    assert pos.x == pytest.approx(300.0)
    assert pos.y == pytest.approx(300.0)


def test_locate_is_not_clamped():
    pos = HandLocator().locate(SL, SR, (-100.0, 300.0), use_left=True)
    assert pos.x < 0
    assert pos.y > 600


def test_region_origin():
    origin, side = HandLocator().hand_region(SL, SR, use_left=True)
    assert origin == pytest.approx([-30.0, 0.0])
    assert side == pytest.approx(200.0)


@pytest.mark.parametrize("sl, sr, hand", [
    ((100.0, 100.0), (100.0, 100.0), (50.0, 50.0)),
    (None, SR, (50.0, 50.0)),
    (SL, SR, None),
])
def test_locate_rejects_bad_samples(sl, sr, hand):
    with pytest.raises(InvalidTrackingSample):
        HandLocator().locate(sl, sr, hand, use_left=True)


def test_player_hand_keeps_last_position_on_bad_sample():
    p = PlayerHand()
    good = BodySample(1, SL, SR, hand_left=(70.0, 100.0), hand_left_state=O)
    assert p.update(good, use_left=True) is False
    last = p.position
    assert (last.x, last.y) == pytest.approx((300.0, 300.0))

    bad = BodySample(1, SL, SL, hand_left=(0.0, 0.0), hand_left_state=C)
    # the gesture still counts even though the position is unusable
    assert p.update(bad, use_left=True) is True
    assert p.position == last
