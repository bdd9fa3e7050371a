# conftest.py
import sys
import types
from pathlib import Path

import numpy as np
import pytest

# Ensure the repository root (which contains `islready/`) is on sys.path
ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(ROOT))

from islready.config import VerifyConfig  # noqa: E402
from islready.readiness import ReadinessChecker, StaticRegistry  # noqa: E402


class FakeCapture:
    """Stands in for cv2.VideoCapture."""

    def __init__(self, opened=True, frame_ok=True, shape=(480, 640, 3)):
        self.opened = opened
        self.frame_ok = frame_ok
        self.shape = shape
        self.released = False

    def isOpened(self):
        return self.opened

    def read(self):
        if not self.frame_ok:
            return False, None
        return True, np.zeros(self.shape, dtype=np.uint8)

    def release(self):
        self.released = True


class FakeResponse:
    def __init__(self, status_code=200, headers=None):
        self.status_code = status_code
        self.headers = headers or {}


class FakeHttp:
    """Stands in for requests.Session; records HEAD calls."""

    def __init__(self, status_code=200, headers=None, exc=None):
        self.response = FakeResponse(status_code, headers)
        self.exc = exc
        self.calls = []

    def head(self, url, timeout=None, allow_redirects=False):
        self.calls.append((url, timeout, allow_redirects))
        if self.exc is not None:
            raise self.exc
        return self.response


def fake_runtime(providers=("CPUExecutionProvider",), version="1.18.0"):
    return types.SimpleNamespace(__version__=version, get_available_providers=lambda: list(providers))


@pytest.fixture
def registry():
    return StaticRegistry({
        "onnxruntime": fake_runtime(),
        "mediapipe.solutions.hands": types.SimpleNamespace(Hands=object),
    })


@pytest.fixture
def make_checker(registry):
    def _make(capture=None, http=None, camera_factory=None, **kwargs):
        capture = capture or FakeCapture()
        cfg = kwargs.pop("config", VerifyConfig(model_url="http://test/isl_model.onnx"))
        return ReadinessChecker(
            cfg,
            registry=kwargs.pop("registry", registry),
            camera_factory=camera_factory or (lambda index: capture),
            http=http or FakeHttp(headers={"content-length": "123456"}),
            **kwargs,
        )
    return _make
