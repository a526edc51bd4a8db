# gesture/types.py
from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional, Tuple

Point2 = Tuple[float, float]


class HandState(IntEnum):
    # same numbering as the skeletal tracking SDK
    UNKNOWN = 0
    NOT_TRACKED = 1
    OPEN = 2
    CLOSED = 3
    LASSO = 4


@dataclass
class GestureEdgeState:
    has_opened: bool = False
    is_closed_edge: bool = False


@dataclass(frozen=True)
class NormalizedHandPosition:
    """Hand location inside the 600 x 600 player region. May fall outside it."""

    x: float
    y: float


@dataclass(frozen=True)
class BodySample:
    tracking_id: int
    shoulder_left: Optional[Point2] = None
    shoulder_right: Optional[Point2] = None
    hand_left: Optional[Point2] = None
    hand_right: Optional[Point2] = None
    hand_left_state: HandState = HandState.UNKNOWN
    hand_right_state: HandState = HandState.UNKNOWN

    def hand(self, use_left: bool) -> Tuple[Optional[Point2], HandState]:
        if use_left:
            return self.hand_left, self.hand_left_state
        return self.hand_right, self.hand_right_state


@dataclass
class SensorFrame:
    bodies: List[BodySample] = field(default_factory=list)
    timestamp: float = 0.0

    def body(self, tracking_id: int) -> Optional[BodySample]:
        for b in self.bodies:
            if b.tracking_id == tracking_id:
                return b
        return None


@dataclass
class SensorStatus:
    label: str = "INIT"
    body_seen: bool = False
    cam_info: str = ""
