import argparse
import logging

from config import (
    GameConfig, GRID_ROWS, GRID_COLS, INITIAL_CADENCE, INITIAL_MAX_SPAWNS,
    KILL_SCORE, GAME_OVER_HOLD, HIGH_SCORE_PATH, SHOW_CAMERA,
)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Shoot descending invaders with your hand.")
    ap.add_argument("--rows", type=int, default=GRID_ROWS, help=f"Grid rows (default: {GRID_ROWS})")
    ap.add_argument("--cols", type=int, default=GRID_COLS, help=f"Grid columns (default: {GRID_COLS})")
    ap.add_argument("--cadence", type=int, default=INITIAL_CADENCE,
                    help=f"Frames per move cycle before the first difficulty evaluation "
                         f"(default: {INITIAL_CADENCE}). The score table replaces it with 60 on "
                         f"the first playing tick, so it does not change gameplay.")
    ap.add_argument("--max-spawns", type=int, default=INITIAL_MAX_SPAWNS,
                    help=f"Initial max invaders per spawn (default: {INITIAL_MAX_SPAWNS})")
    ap.add_argument("--kill-score", type=int, default=KILL_SCORE,
                    help=f"Points per invader (default: {KILL_SCORE})")
    ap.add_argument("--game-over-hold", type=int, default=GAME_OVER_HOLD,
                    help=f"Frames the game-over screen is held (default: {GAME_OVER_HOLD})")
    ap.add_argument("--high-score-file", default=HIGH_SCORE_PATH,
                    help=f"High score file (default: {HIGH_SCORE_PATH})")
    ap.add_argument("--right-hand", action="store_true", help="Play with the right hand")
    ap.add_argument("--lasso-clears-latch", action="store_true",
                    help="A lasso/unknown hand sample cancels a pending open hand")
    ap.add_argument("--seed", type=int, default=None, help="Seed for invader spawns")
    ap.add_argument("--camera", type=int, default=None, help="Camera index (default: auto)")
    ap.add_argument("--no-camera-window", action="store_true", help="Hide the camera preview")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return ap


def main(argv=None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(name)s] %(message)s",
    )

    try:
        config = GameConfig(
            rows=args.rows,
            cols=args.cols,
            initial_cadence=args.cadence,
            initial_max_spawns=args.max_spawns,
            kill_score=args.kill_score,
            game_over_hold=args.game_over_hold,
            use_left_hand=not args.right_hand,
            clear_latch_on_other=args.lasso_clears_latch,
            high_score_path=args.high_score_file,
            seed=args.seed,
        )
    except ValueError as e:
        ap.error(str(e))

    # pygame/mediapipe are only needed once we actually run
    from game.invaders import run_game

    run_game(config, camera_index=args.camera, show_camera=SHOW_CAMERA and not args.no_camera_window)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
