import numpy as np

from config import GameConfig
from game.score_store import ScoreStore
from game.session import GameLoopScheduler
from gesture_invaders import build_parser


def test_cadence_help_says_score_table_wins():
    text = build_parser().format_help()
    assert "--cadence" in text
    assert "does not change gameplay" in " ".join(text.split())


def test_cadence_flag_is_replaced_on_first_tick(tmp_path):
    args = build_parser().parse_args(["--cadence", "20"])
    sched = GameLoopScheduler(GameConfig(initial_cadence=args.cadence),
                              ScoreStore(str(tmp_path / "hs.txt")), np.random.default_rng(1))
    assert sched.session.spawn_cadence_frames == 20
    sched.step(True)
    sched.step(False)
    assert sched.session.ticks_until_next_cycle == 60
