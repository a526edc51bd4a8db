# gesture/landmarks.py
from typing import Optional, Tuple

from config import JOINT_MIN_VISIBILITY
from gesture.locator import HandLocator, InvalidTrackingSample
from gesture.types import BodySample, HandState
from gesture.utils import lm_xy

# MediaPipe landmark indices (hand: 21 points, pose: 33 points)
INDEX_FINGER_PIP, INDEX_FINGER_TIP = 6, 8
MIDDLE_FINGER_PIP, MIDDLE_FINGER_TIP = 10, 12
RING_FINGER_PIP, RING_FINGER_TIP = 14, 16
PINKY_PIP, PINKY_TIP = 18, 20

LEFT_SHOULDER, RIGHT_SHOULDER = 11, 12
LEFT_WRIST, RIGHT_WRIST = 15, 16

# single-person pose model, so the one body always gets the same id
BODY_TRACKING_ID = 1


def fingers_extended(landmarks, w, h):
    """
    Four-finger extension check (rule of thumb: tip.y < pip.y)
    """
    ext = {}
    for name, tip, pip in [
        ("index", INDEX_FINGER_TIP, INDEX_FINGER_PIP),
        ("middle", MIDDLE_FINGER_TIP, MIDDLE_FINGER_PIP),
        ("ring", RING_FINGER_TIP, RING_FINGER_PIP),
        ("pinky", PINKY_TIP, PINKY_PIP),
    ]:
        ext[name] = bool(lm_xy(landmarks[tip], w, h)[1] < lm_xy(landmarks[pip], w, h)[1])  # smaller y is higher up
    return ext

def classify_hand(hand_landmarks, w, h) -> HandState:
    if hand_landmarks is None:
        return HandState.NOT_TRACKED
    ext = fingers_extended(hand_landmarks.landmark, w, h)
    n = sum(ext.values())
    if n == 4:
        return HandState.OPEN
    if n == 0:
        return HandState.CLOSED
    # two fingers out, like the sensor's lasso pose
    if ext["index"] and ext["middle"] and not ext["ring"] and not ext["pinky"]:
        return HandState.LASSO
    return HandState.UNKNOWN

def pose_joint(pose_landmarks, idx, w, h):
    """Joint in mirrored display space: the player's left is on the left of the image."""
    lm = pose_landmarks.landmark[idx]
    if lm.visibility < JOINT_MIN_VISIBILITY:
        return None
    x, y = lm_xy(lm, w, h)
    return float(w - x), float(y)

def body_from_results(results, w, h) -> Optional[BodySample]:
    if results.pose_landmarks is None:
        return None
    pose = results.pose_landmarks
    # Holistic left/right are the subject's own sides, same as the skeletal SDK
    return BodySample(
        tracking_id=BODY_TRACKING_ID,
        shoulder_left=pose_joint(pose, LEFT_SHOULDER, w, h),
        shoulder_right=pose_joint(pose, RIGHT_SHOULDER, w, h),
        hand_left=pose_joint(pose, LEFT_WRIST, w, h),
        hand_right=pose_joint(pose, RIGHT_WRIST, w, h),
        hand_left_state=classify_hand(results.left_hand_landmarks, w, h),
        hand_right_state=classify_hand(results.right_hand_landmarks, w, h),
    )

def region_rect(body: Optional[BodySample], locator: HandLocator,
                use_left: bool) -> Optional[Tuple[Tuple[int, int], Tuple[int, int]]]:
    """Corners of the calibration square for the mirrored preview, or None."""
    if body is None:
        return None
    try:
        origin, side = locator.hand_region(body.shoulder_left, body.shoulder_right, use_left)
    except InvalidTrackingSample:
        return None
    x0, y0 = int(round(origin[0])), int(round(origin[1]))
    return (x0, y0), (int(round(origin[0] + side)), int(round(origin[1] + side)))
