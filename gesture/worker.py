# gesture/worker.py
import logging
import queue
import time
import threading
from typing import Optional

import cv2
import mediapipe as mp

from config import (
    SHOW_CAMERA, FRAME_QUEUE_SIZE, USE_LEFT_HAND, GRID_PX, WORKER_JOIN_TIMEOUT,
    MODEL_COMPLEXITY, MIN_DETECTION_CONFIDENCE, MIN_TRACKING_CONFIDENCE,
)
from gesture.types import SensorFrame, SensorStatus
from gesture.camera import try_open_camera
from gesture.landmarks import body_from_results, region_rect
from gesture.locator import HandLocator

logger = logging.getLogger(__name__)

PREVIEW_WINDOW = "Camera (press Q to close this window)"
REGION_COLOR = (0, 200, 255)


class SensorWorker(threading.Thread):
    """
    Reads camera frames, runs MediaPipe Holistic and pushes one SensorFrame
    per camera frame onto ``frames``. The game loop consumes them in order.
    """

    def __init__(self, status: SensorStatus, camera_index: Optional[int] = None,
                 show_camera: bool = SHOW_CAMERA, use_left_hand: bool = USE_LEFT_HAND):
        super().__init__(daemon=True)
        self.status = status
        self.frames: "queue.Queue[SensorFrame]" = queue.Queue(maxsize=FRAME_QUEUE_SIZE)
        self._stop_event = threading.Event()
        self.lock = threading.Lock()
        self.camera_index = camera_index
        self.show_camera = show_camera
        self.use_left_hand = use_left_hand
        self.locator = HandLocator(GRID_PX)

    def stop(self):
        self._stop_event.set()

    def shutdown(self, timeout: float = WORKER_JOIN_TIMEOUT) -> bool:
        """Stop and wait for the camera to be released. False if the thread is still running."""
        self.stop()
        if self.is_alive():
            self.join(timeout=timeout)
        return not self.is_alive()

    def _publish(self, frame: SensorFrame):
        try:
            self.frames.put_nowait(frame)
        except queue.Full:
            # drop the oldest frame; the game loop is behind
            try:
                self.frames.get_nowait()
            except queue.Empty:
                pass
            self.frames.put_nowait(frame)

    def _set_status(self, label: str, body_seen: bool = False):
        with self.lock:
            self.status.label = label
            self.status.body_seen = body_seen

    def run(self):
        try:
            indices = [self.camera_index] if self.camera_index is not None else None
            cap, cam_info = try_open_camera(indices)
            with self.lock:
                self.status.cam_info = cam_info

            if cap is None:
                self._set_status("CAMERA_OPEN_FAILED")
                logger.warning("CAMERA_OPEN_FAILED. Close apps using the camera or try another index.")
                return

            logger.info(f"Opened: {cam_info}")

            mp_holistic = mp.solutions.holistic
            holistic = mp_holistic.Holistic(
                static_image_mode=False,
                model_complexity=MODEL_COMPLEXITY,
                min_detection_confidence=MIN_DETECTION_CONFIDENCE,
                min_tracking_confidence=MIN_TRACKING_CONFIDENCE,
            )
            drawer = mp.solutions.drawing_utils

            while not self._stop_event.is_set():
                ok, frame = cap.read()
                if not ok:
                    self._set_status("CAMERA_READ_FAILED")
                    time.sleep(0.01)
                    continue

                h, w = frame.shape[:2]
                rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
                results = holistic.process(rgb)

                # joints come back already mirrored into display space
                body = body_from_results(results, w, h)
                bodies = [body] if body is not None else []
                self._publish(SensorFrame(bodies=bodies, timestamp=time.time()))

                if body is None:
                    label = "NO_BODY"
                else:
                    label = f"L={body.hand_left_state.name} R={body.hand_right_state.name}"
                self._set_status(label, body is not None)

                if self.show_camera:
                    if results.pose_landmarks is not None:
                        drawer.draw_landmarks(frame, results.pose_landmarks, mp_holistic.POSE_CONNECTIONS)
                    for hand in (results.left_hand_landmarks, results.right_hand_landmarks):
                        if hand is not None:
                            drawer.draw_landmarks(frame, hand, mp_holistic.HAND_CONNECTIONS)
                    # preview shares the mirrored display space of the joints
                    frame = cv2.flip(frame, 1)
                    rect = region_rect(body, self.locator, self.use_left_hand)
                    if rect is not None:
                        cv2.rectangle(frame, rect[0], rect[1], REGION_COLOR, 2)
                    cv2.putText(frame, f"{cam_info}", (10, 24), cv2.FONT_HERSHEY_SIMPLEX, 0.7, (0, 255, 0), 2)
                    cv2.putText(frame, label, (10, 52), cv2.FONT_HERSHEY_SIMPLEX, 0.9, (0, 255, 0), 2)
                    cv2.imshow(PREVIEW_WINDOW, frame)
                    k = cv2.waitKey(1) & 0xFF
                    if k in (ord('q'), ord('Q')):
                        cv2.destroyWindow(PREVIEW_WINDOW)
                        self.show_camera = False

            holistic.close()
            cap.release()
            cv2.destroyAllWindows()

        except Exception:
            self._set_status("WORKER_EXCEPTION")
            logger.exception("sensor worker crashed")
