# gesture/locator.py
import logging
from dataclasses import dataclass, field
from typing import Optional, Tuple

import numpy as np

from config import GRID_PX
from gesture.types import BodySample, NormalizedHandPosition, Point2
from gesture.utils import GestureTracker, dist

logger = logging.getLogger(__name__)

# Region origin offsets, in shoulder widths, from the anchor shoulder.
# Asymmetric on purpose: the camera view is mirrored.
LEFT_REGION_OFFSET = (1.3, 1.0)
RIGHT_REGION_OFFSET = (0.7, 1.0)
REGION_SCALE = 2.0

MIN_SHOULDER_WIDTH = 1e-6


class InvalidTrackingSample(ValueError):
    pass


class HandLocator:
    """
    Maps a display-space hand joint into a player-relative square region
    whose side is two shoulder widths, scaled to ``region_px``.
    """

    def __init__(self, region_px: float = GRID_PX):
        self.region_px = float(region_px)

    def hand_region(self, shoulder_left: Optional[Point2], shoulder_right: Optional[Point2],
                    use_left: bool) -> Tuple[np.ndarray, float]:
        """Returns (origin, side) of the calibration square in display space."""
        if shoulder_left is None or shoulder_right is None:
            raise InvalidTrackingSample("missing shoulder joint")

        scale = dist(shoulder_left, shoulder_right)
        if not np.isfinite(scale) or scale < MIN_SHOULDER_WIDTH:
            raise InvalidTrackingSample(f"degenerate shoulder width {scale!r}")

        if use_left:
            anchor, offset = shoulder_left, LEFT_REGION_OFFSET
        else:
            anchor, offset = shoulder_right, RIGHT_REGION_OFFSET
        origin = np.asarray(anchor, dtype=np.float64) - np.asarray(offset) * scale
        return origin, REGION_SCALE * scale

    def locate(self, shoulder_left: Optional[Point2], shoulder_right: Optional[Point2],
               hand: Optional[Point2], use_left: bool) -> NormalizedHandPosition:
        if hand is None:
            raise InvalidTrackingSample("missing hand joint")
        origin, side = self.hand_region(shoulder_left, shoulder_right, use_left)
        # no clamping: leaving the region is a legitimate reading
        x, y = (np.asarray(hand, dtype=np.float64) - origin) / side * self.region_px
        return NormalizedHandPosition(float(x), float(y))


@dataclass
class PlayerHand:
    """Per-player gesture latch and last-known hand position."""

    tracker: GestureTracker = field(default_factory=GestureTracker)
    locator: HandLocator = field(default_factory=HandLocator)
    tracking_id: int = 0
    position: NormalizedHandPosition = NormalizedHandPosition(0.0, 0.0)

    @property
    def assigned(self) -> bool:
        return self.tracking_id != 0

    def update(self, body: BodySample, use_left: bool) -> bool:
        joint, hand_state = body.hand(use_left)
        fired = self.tracker.update(hand_state)
        try:
            self.position = self.locator.locate(body.shoulder_left, body.shoulder_right, joint, use_left)
        except InvalidTrackingSample as e:
            logger.debug(f"body {body.tracking_id}: keeping last position ({e})")
        return fired

    def release(self):
        self.tracking_id = 0
        self.tracker.reset()
