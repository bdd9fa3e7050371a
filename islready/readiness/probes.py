# islready/readiness/probes.py
"""
Individual readiness probes.

Every probe returns a ProbeResult and leaves printing to the report layer.
The blocking probes (camera, model artifact) are plain functions here; the
checker schedules them on an executor with a timeout.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, List, Optional
from urllib.parse import urlparse

import numpy as np
import requests

from ..features import FEATURE_SIZE, as_landmark_array, synthetic_landmarks, translation_origin
from .registry import CapabilityRegistry

logger = logging.getLogger(__name__)

ERROR = "error"
WARNING = "warning"

INFERENCE_RUNTIME = "inference_runtime"
LANDMARK_DETECTOR = "landmark_detector"
CAMERA = "camera"
EXECUTION_BACKEND = "execution_backend"
MODEL_ARTIFACT = "model_artifact"
FEATURE_SELF_TEST = "feature_self_test"

PROBE_ORDER = (
    INFERENCE_RUNTIME,
    LANDMARK_DETECTOR,
    CAMERA,
    EXECUTION_BACKEND,
    MODEL_ARTIFACT,
    FEATURE_SELF_TEST,
)


@dataclass(frozen=True)
class ProbeResult:
    name: str
    passed: bool
    detail: str
    severity: str = ERROR   # "warning" failures do not fail the report

    @property
    def fatal(self) -> bool:
        return not self.passed and self.severity == ERROR

    def to_dict(self) -> dict:
        return {"name": self.name, "passed": self.passed, "detail": self.detail, "severity": self.severity}


def _providers(handle: Any) -> List[str]:
    get = getattr(handle, "get_available_providers", None)
    return list(get()) if callable(get) else []


# ---------- capability probes ----------

def probe_inference_runtime(registry: CapabilityRegistry, module: str) -> ProbeResult:
    cap = registry.lookup(module)
    if not cap.present:
        return ProbeResult(INFERENCE_RUNTIME, False, f"{module} not found")
    version = getattr(cap.handle, "__version__", "unknown version")
    detail = f"{module} {version} loaded"
    providers = _providers(cap.handle)
    if providers:
        detail += f" (providers: {', '.join(providers)})"
    return ProbeResult(INFERENCE_RUNTIME, True, detail)


def probe_landmark_detector(registry: CapabilityRegistry, module: str) -> ProbeResult:
    cap = registry.lookup(module)
    if not cap.present:
        return ProbeResult(LANDMARK_DETECTOR, False,
                           f"{module} not found (might be scoped differently)", severity=WARNING)
    return ProbeResult(LANDMARK_DETECTOR, True, f"{module} loaded", severity=WARNING)


def probe_execution_backend(registry: CapabilityRegistry, runtime_module: str, provider: str) -> ProbeResult:
    cap = registry.lookup(runtime_module)
    if not cap.present:
        return ProbeResult(EXECUTION_BACKEND, False, f"{provider} not supported ({runtime_module} unavailable)")
    if not callable(getattr(cap.handle, "get_available_providers", None)):
        return ProbeResult(EXECUTION_BACKEND, False,
                           f"{provider} not supported ({runtime_module} does not report execution providers)")
    providers = _providers(cap.handle)
    if provider not in providers:
        available = ", ".join(providers) or "none"
        return ProbeResult(EXECUTION_BACKEND, False, f"{provider} not supported (available: {available})")
    return ProbeResult(EXECUTION_BACKEND, True, f"{provider} supported")


# ---------- blocking probes (run on an executor) ----------

def probe_camera(camera_factory: Callable[[int], Any], index: int) -> ProbeResult:
    """Open the capture device (video only), grab one frame, release it."""
    cap = camera_factory(index)
    try:
        if not cap.isOpened():
            return ProbeResult(CAMERA, False,
                               f"camera index {index} could not be opened (access denied or device busy)")
        ok, frame = cap.read()
        if not ok or frame is None:
            return ProbeResult(CAMERA, False, f"camera index {index} opened but returned no frame")
        h, w = frame.shape[:2]
        return ProbeResult(CAMERA, True, f"camera access granted ({w}x{h})")
    finally:
        cap.release()


def probe_model_artifact(http: Any, url: str, timeout: float) -> ProbeResult:
    """Metadata-only check: HEAD for http(s) URLs, stat() for local paths."""
    parsed = urlparse(url)
    if parsed.scheme in ("http", "https"):
        try:
            resp = http.head(url, timeout=timeout, allow_redirects=True)
        except requests.RequestException as e:
            return ProbeResult(MODEL_ARTIFACT, False, f"error fetching model: {e}")
        if not 200 <= resp.status_code < 300:
            return ProbeResult(MODEL_ARTIFACT, False, f"model file not found (status: {resp.status_code})")
        return ProbeResult(MODEL_ARTIFACT, True, _size_detail(resp.headers.get("content-length")))

    if parsed.scheme in ("", "file") or len(parsed.scheme) == 1:  # 1-letter scheme: Windows drive
        path = Path(parsed.path if parsed.scheme == "file" else url)
        if not path.is_file():
            return ProbeResult(MODEL_ARTIFACT, False, f"model file not found at {path}")
        return ProbeResult(MODEL_ARTIFACT, True, _size_detail(os.stat(path).st_size))

    return ProbeResult(MODEL_ARTIFACT, False, f"unsupported URL scheme '{parsed.scheme}' in {url}")


def _size_detail(size: Optional[Any]) -> str:
    if size is None:
        return "model file accessible (size unknown)"
    return f"model file accessible ({size} bytes)"


# ---------- self-test ----------

def probe_feature_self_test(extractor: Callable[[Any], Any]) -> ProbeResult:
    landmarks = synthetic_landmarks()
    out = np.asarray(extractor(landmarks))
    if out.shape != (FEATURE_SIZE,):
        return ProbeResult(FEATURE_SELF_TEST, False, f"output shape {out.shape}, expected ({FEATURE_SIZE},)")
    if out.dtype != np.float32:
        return ProbeResult(FEATURE_SELF_TEST, False, f"output dtype {out.dtype}, expected float32")

    min_x, min_y = translation_origin(as_landmark_array(landmarks))
    head = [round(float(v), 4) for v in out.reshape(-1)[:6]]
    return ProbeResult(
        FEATURE_SELF_TEST, True,
        f"output length {out.size} ({out.dtype}); first 6 values {head}; "
        f"min X {min_x:.3f} | min Y {min_y:.3f}",
    )
