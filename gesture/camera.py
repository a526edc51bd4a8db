# gesture/camera.py
from typing import List, Optional, Tuple
import cv2

from config import CAM_INDEX_CANDIDATES, CAP_BACKENDS, CAM_W, CAM_H

def try_open_camera(indices: Optional[List[int]] = None) -> Tuple[Optional[cv2.VideoCapture], str]:
    """
    Tries each camera index with each backend; returns the capture and a description.
    """
    for idx in indices or CAM_INDEX_CANDIDATES:
        for name, attr in CAP_BACKENDS:
            if attr is None:
                cap = cv2.VideoCapture(idx)
            elif hasattr(cv2, attr):
                cap = cv2.VideoCapture(idx, getattr(cv2, attr))
            else:
                continue

            if cap is not None and cap.isOpened():
                cap.set(cv2.CAP_PROP_FRAME_WIDTH, CAM_W)
                cap.set(cv2.CAP_PROP_FRAME_HEIGHT, CAM_H)
                info = f"CAM idx={idx}, backend={name}"
                return cap, info

            if cap is not None:
                cap.release()

    return None, "CAMERA_OPEN_FAILED"
