# gesture/utils.py
from dataclasses import dataclass, field
import numpy as np

from gesture.types import GestureEdgeState, HandState


@dataclass
class GestureTracker:
    """Open -> Closed edge detector. One fire per genuine open-then-close."""

    clear_latch_on_other: bool = False
    state: GestureEdgeState = field(default_factory=GestureEdgeState)

    def update(self, hand_state: HandState) -> bool:
        """Returns True on the single tick where an opened hand closes."""
        s = self.state
        if hand_state == HandState.OPEN:
            s.has_opened = True
            s.is_closed_edge = False
        elif hand_state == HandState.CLOSED:
            # holding a closed hand never re-fires
            s.is_closed_edge = s.has_opened
            s.has_opened = False
        else:
            s.is_closed_edge = False
            if self.clear_latch_on_other:
                s.has_opened = False
        return s.is_closed_edge

    def reset(self):
        self.state = GestureEdgeState()


def lm_xy(lm, w, h):
    return np.array([lm.x * w, lm.y * h], dtype=np.float64)

def dist(a, b) -> float:
    return float(np.linalg.norm(np.asarray(a, dtype=np.float64) - np.asarray(b, dtype=np.float64)))
