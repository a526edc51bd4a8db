# game/session.py
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

import numpy as np

from config import GameConfig, GRID_PX
from game.grid import GridModel
from game.rules import CollisionResolver, DifficultyController
from game.score_store import ScoreStore
from gesture.locator import HandLocator, PlayerHand
from gesture.types import NormalizedHandPosition, SensorFrame
from gesture.utils import GestureTracker

logger = logging.getLogger(__name__)

PLAYER_ONE, PLAYER_TWO = 1, 2

INVASION_BANNER = "INVASION!"

INTRO_TEXT = (
    "Shoot the oncoming invaders\n"
    "before they reach the bottom!\n\n"
    "Move your {side} hand to navigate.\n\n"
    "Close your hand to shoot directly\n"
    "in front.\n\n"
)


class Phase(Enum):
    NOT_STARTED = "not_started"
    PLAYING = "playing"
    GAME_OVER_PENDING = "game_over_pending"
    GAME_OVER_HELD = "game_over_held"


@dataclass
class GameSession:
    grid: GridModel
    difficulty: DifficultyController
    high_score: int = 0
    score: int = 0
    phase: Phase = Phase.NOT_STARTED
    game_over_countdown: int = 0
    # -1: previous cycle consumed, next tick reloads and spawns
    ticks_until_next_cycle: int = -1
    status_text: str = ""

    @property
    def started(self) -> bool:
        return self.phase is not Phase.NOT_STARTED

    @property
    def is_over(self) -> bool:
        return self.phase in (Phase.GAME_OVER_PENDING, Phase.GAME_OVER_HELD)

    @property
    def spawn_cadence_frames(self) -> int:
        return self.difficulty.cadence

    @property
    def max_simultaneous_spawns(self) -> int:
        return self.difficulty.max_spawns


@dataclass(frozen=True)
class RenderSnapshot:
    cells: Tuple[Tuple[str, ...], ...]
    instruction_text: str
    status_text: str
    score: int
    high_score: int
    phase: Phase
    hand: NormalizedHandPosition


class GameLoopScheduler:
    """
    Per-frame state machine. One call to ``tick`` per sensor frame; the
    spawn/move cadence is counted in frames, never wall-clock time.
    """

    def __init__(self, config: Optional[GameConfig] = None, store: Optional[ScoreStore] = None,
                 rng: Optional[np.random.Generator] = None):
        self.config = config or GameConfig()
        self.store = store or ScoreStore(self.config.high_score_path)
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)
        self.resolver = CollisionResolver(GRID_PX, self.config.kill_score)

        locator = HandLocator(GRID_PX)
        self.players: Dict[int, PlayerHand] = {
            slot: PlayerHand(tracker=GestureTracker(self.config.clear_latch_on_other), locator=locator)
            for slot in (PLAYER_ONE, PLAYER_TWO)
        }
        self.session = self._new_session()
        self._snapshot = self._render()

    def _new_session(self) -> GameSession:
        return GameSession(
            grid=GridModel(self.config.rows, self.config.cols),
            difficulty=DifficultyController(self.config.initial_cadence, self.config.initial_max_spawns),
            high_score=self.store.load(),
        )

    # ---- tracking ids ----

    def assign_tracking_id(self, slot: int, body_id: int):
        if slot not in self.players:
            raise ValueError(f"unknown player slot {slot}")
        player = self.players[slot]
        if player.tracking_id != body_id:
            player.tracker.reset()
        player.tracking_id = body_id
        logger.info(f"player {slot} -> body {body_id}")

    def _allocate_players(self, frame: SensorFrame):
        present = {b.tracking_id for b in frame.bodies}
        for slot, player in self.players.items():
            if player.assigned and player.tracking_id not in present:
                logger.info(f"player {slot} lost body {player.tracking_id}")
                player.release()

        taken = {p.tracking_id for p in self.players.values() if p.assigned}
        for body in frame.bodies:
            if body.tracking_id == 0 or body.tracking_id in taken:
                continue
            # at most one allocation per frame
            if not self.players[PLAYER_ONE].assigned:
                self.assign_tracking_id(PLAYER_ONE, body.tracking_id)
                break
            if not self.players[PLAYER_TWO].assigned:
                self.assign_tracking_id(PLAYER_TWO, body.tracking_id)
                break

    @property
    def hand(self) -> NormalizedHandPosition:
        return self.players[PLAYER_ONE].position

    # ---- per-frame entry points ----

    def tick(self, frame: Optional[SensorFrame]) -> RenderSnapshot:
        """Feeds one sensor frame. Frames without player one's body leave state untouched."""
        if frame is None or not frame.bodies:
            return self._snapshot

        self._allocate_players(frame)

        fired = False
        for slot, player in self.players.items():
            if not player.assigned:
                continue
            body = frame.body(player.tracking_id)
            if body is None:
                continue
            hit = player.update(body, self.config.use_left_hand)
            if slot == PLAYER_ONE:
                fired = hit

        p1 = self.players[PLAYER_ONE]
        if not p1.assigned or frame.body(p1.tracking_id) is None:
            return self._snapshot
        return self.step(fired)

    def step(self, fired: bool) -> RenderSnapshot:
        """Advances the game one tick given player one's fire event."""
        s = self.session

        if s.phase is Phase.NOT_STARTED:
            if fired:
                s.phase = Phase.PLAYING
                logger.info("game started")
        elif s.phase is Phase.GAME_OVER_HELD:
            if fired:
                self.reset_game()
        elif s.phase is Phase.GAME_OVER_PENDING:
            self._count_down_game_over()
        else:
            self._play(fired)

        self._snapshot = self._render()
        return self._snapshot

    def _play(self, fired: bool):
        s = self.session
        s.score += self.resolver.resolve(self.hand, fired, s.grid)
        s.difficulty.evaluate(s.score)

        if s.grid.has_invader_at_bottom():
            s.phase = Phase.GAME_OVER_PENDING
            s.game_over_countdown = self.config.game_over_hold
            logger.info(f"game over, final score {s.score}")
            self.store.record(s.score, s.high_score)
            self._count_down_game_over()
            return

        self._advance_cycle()

    def _advance_cycle(self):
        s = self.session
        if s.ticks_until_next_cycle > 0:
            s.ticks_until_next_cycle -= 1
        elif s.ticks_until_next_cycle == 0:
            s.grid.shift_down()
            s.ticks_until_next_cycle -= 1
        else:
            s.ticks_until_next_cycle = s.spawn_cadence_frames
            count = int(self.rng.integers(1, s.max_simultaneous_spawns + 1))
            cols = s.grid.spawn(count, self.rng)
            logger.debug(f"spawned {count} invaders at columns {cols}")

    def _count_down_game_over(self):
        s = self.session
        if not s.grid.has_invader_at_bottom():
            return
        s.game_over_countdown = max(0, s.game_over_countdown - 1)
        if s.game_over_countdown == 0:
            s.phase = Phase.GAME_OVER_HELD

    def reset_game(self, banner: str = ""):
        """Fresh session; ``banner`` is shown only for the New Game button path."""
        s = self.session
        if s.phase is Phase.PLAYING:
            self.store.record(s.score, s.high_score)
        self.session = self._new_session()
        self.session.status_text = banner
        for player in self.players.values():
            player.tracker.reset()
        logger.info(f"game reset, high score {self.session.high_score}")
        self._snapshot = self._render()

    def close(self):
        s = self.session
        if s.phase is Phase.PLAYING:
            self.store.record(s.score, s.high_score)

    # ---- presentation ----

    @property
    def snapshot(self) -> RenderSnapshot:
        return self._snapshot

    def instruction_text(self) -> str:
        s = self.session
        intro = INTRO_TEXT.format(side="left" if self.config.use_left_hand else "right")
        if s.phase is Phase.NOT_STARTED:
            return intro + f"Now close your hand to start!\n\nHighest score: {s.high_score}"
        if s.is_over:
            return (
                "GAME OVER!\n\nGreat job!\n\n"
                f"Your final score is {s.score}.\n\n"
                "Close your hand to start a new game."
            )
        return intro + f"Score: {s.score}"

    def _render(self) -> RenderSnapshot:
        s = self.session
        return RenderSnapshot(
            cells=s.grid.asset_keys(),
            instruction_text=self.instruction_text(),
            status_text=s.status_text,
            score=s.score,
            high_score=s.high_score,
            phase=s.phase,
            hand=self.hand,
        )
