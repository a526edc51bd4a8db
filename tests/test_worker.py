import threading
from types import SimpleNamespace

import pytest

pytest.importorskip("cv2")
pytest.importorskip("mediapipe")

from gesture import worker as worker_mod  # noqa: E402
from gesture.types import SensorStatus  # noqa: E402


class FakeCapture:
    def __init__(self):
        self.reading = threading.Event()
        self.released = False

    def read(self):
        self.reading.set()
        return False, None

    def release(self):
        self.released = True


class FakeHolistic:
    instances = []

    def __init__(self, **kwargs):
        self.closed = False
        FakeHolistic.instances.append(self)

    def close(self):
        self.closed = True


@pytest.fixture
def capture(monkeypatch):
    cap = FakeCapture()
    FakeHolistic.instances.clear()
    monkeypatch.setattr(worker_mod, "try_open_camera", lambda indices: (cap, "fake camera"))
    monkeypatch.setattr(worker_mod, "mp", SimpleNamespace(solutions=SimpleNamespace(
        holistic=SimpleNamespace(Holistic=FakeHolistic),
        drawing_utils=None,
    )))
    monkeypatch.setattr(worker_mod.cv2, "destroyAllWindows", lambda: None)
    return cap


def test_shutdown_releases_camera(capture):
    status = SensorStatus()
    w = worker_mod.SensorWorker(status, show_camera=False)
    w.start()
    assert capture.reading.wait(2.0)

    assert w.shutdown(timeout=2.0)
    assert not w.is_alive()
    assert capture.released
    assert FakeHolistic.instances[0].closed
    assert status.label == "CAMERA_READ_FAILED"


def test_shutdown_before_start_is_harmless(capture):
    w = worker_mod.SensorWorker(SensorStatus(), show_camera=False)
    assert w.shutdown(timeout=0.1)
    assert not capture.released
