# config.py
from dataclasses import dataclass
from typing import Optional

# Camera: these indices are tried in order
CAM_INDEX_CANDIDATES = [0, 1, 2]

# Camera backends, tried in order (cv2 attribute name, None = default)
CAP_BACKENDS = [
    ("DSHOW", "CAP_DSHOW"),
    ("MSMF", "CAP_MSMF"),
    ("DEFAULT", None),
]

CAM_W, CAM_H = 640, 360

SHOW_CAMERA = True            # True: show the camera preview (Q closes it, tracking keeps running)

# MediaPipe Holistic
MODEL_COMPLEXITY = 1
MIN_DETECTION_CONFIDENCE = 0.5
MIN_TRACKING_CONFIDENCE = 0.5

FRAME_QUEUE_SIZE = 8          # sensor frames buffered between worker and game loop
WORKER_JOIN_TIMEOUT = 2.0     # seconds to wait for camera release on shutdown
JOINT_MIN_VISIBILITY = 0.3   # pose joints below this count as missing

# Grid
GRID_ROWS, GRID_COLS = 7, 7
GRID_PX = 600                 # virtual hand region and on-screen grid are both 600 x 600
PANEL_W = 520
WIN_W, WIN_H = GRID_PX + PANEL_W, GRID_PX + 60

# Gameplay
INITIAL_CADENCE = 80          # frames between move cycles before the first difficulty band kicks in
INITIAL_MAX_SPAWNS = 3
KILL_SCORE = 10
GAME_OVER_HOLD = 80           # ~2.7s at 30 fps
USE_LEFT_HAND = True

HIGH_SCORE_PATH = "highscore.txt"

RENDER_FPS = 60


@dataclass
class GameConfig:
    rows: int = GRID_ROWS
    cols: int = GRID_COLS
    initial_cadence: int = INITIAL_CADENCE
    initial_max_spawns: int = INITIAL_MAX_SPAWNS
    kill_score: int = KILL_SCORE
    game_over_hold: int = GAME_OVER_HOLD
    use_left_hand: bool = USE_LEFT_HAND
    clear_latch_on_other: bool = False
    high_score_path: str = HIGH_SCORE_PATH
    seed: Optional[int] = None

    def __post_init__(self):
        if self.rows < 1 or self.cols < 1:
            raise ValueError(f"grid must be at least 1x1, got {self.rows}x{self.cols}")
        if self.initial_cadence < 0:
            raise ValueError("initial cadence must be >= 0")
        if self.initial_max_spawns < 1:
            raise ValueError("max spawns must be >= 1")
        if self.game_over_hold < 1:
            raise ValueError("game-over hold must be >= 1 tick")
