# islready/readiness/checker.py
from __future__ import annotations

import asyncio
import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple

import cv2
import requests

from ..config import VerifyConfig
from ..features import extract
from . import probes
from .probes import ProbeResult
from .registry import CapabilityRegistry, ModuleRegistry

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReadinessReport:
    results: Tuple[ProbeResult, ...]

    @property
    def ok(self) -> bool:
        """True when no error-severity probe failed (warnings allowed)."""
        return not any(r.fatal for r in self.results)

    @property
    def failures(self) -> List[ProbeResult]:
        return [r for r in self.results if r.fatal]

    @property
    def warnings(self) -> List[ProbeResult]:
        return [r for r in self.results if not r.passed and not r.fatal]

    def get(self, name: str) -> ProbeResult:
        for r in self.results:
            if r.name == name:
                return r
        raise KeyError(name)

    def to_dict(self) -> dict:
        return {"ok": self.ok, "probes": [r.to_dict() for r in self.results]}


class ReadinessChecker:
    """
    Runs every readiness probe once and collects the results.

    Probes are independent: all of them are started together, each failure
    (exception, timeout, missing capability) becomes a failed ProbeResult, and
    nothing is retried. Call verify() again for a fresh report.

    Anything that may block (module imports, camera open, HEAD request) runs on
    its own daemon thread, so a probe that never returns is abandoned after
    its timeout and does not hold the process open.
    """

    def __init__(
        self,
        config: Optional[VerifyConfig] = None,
        registry: Optional[CapabilityRegistry] = None,
        camera_factory: Optional[Callable[[int], Any]] = None,
        http: Optional[Any] = None,
        extractor: Callable[[Any], Any] = extract,
    ) -> None:
        self.cfg = config or VerifyConfig()
        self.registry = registry or ModuleRegistry()
        self.camera_factory = camera_factory or cv2.VideoCapture
        self.http = http   # None -> a requests.Session per verify run
        self.extractor = extractor

    def verify(self) -> ReadinessReport:
        return asyncio.run(self.verify_async())

    async def verify_async(self) -> ReadinessReport:
        cfg = self.cfg
        http = self.http if self.http is not None else requests.Session()
        try:
            results = await asyncio.gather(
                self._run_blocking(probes.INFERENCE_RUNTIME, probes.ERROR, cfg.import_timeout,
                                   probes.probe_inference_runtime, self.registry, cfg.runtime_module),
                self._run_blocking(probes.LANDMARK_DETECTOR, probes.WARNING, cfg.import_timeout,
                                   probes.probe_landmark_detector, self.registry, cfg.detector_module),
                self._run_blocking(probes.CAMERA, probes.ERROR, cfg.camera_timeout,
                                   probes.probe_camera, self.camera_factory, cfg.camera_index),
                self._run_blocking(probes.EXECUTION_BACKEND, probes.ERROR, cfg.import_timeout,
                                   probes.probe_execution_backend, self.registry,
                                   cfg.runtime_module, cfg.execution_provider),
                self._run_blocking(probes.MODEL_ARTIFACT, probes.ERROR, cfg.request_timeout,
                                   probes.probe_model_artifact, http, cfg.model_url, cfg.request_timeout),
                self._run_sync(probes.FEATURE_SELF_TEST, probes.ERROR,
                               probes.probe_feature_self_test, self.extractor),
            )
        finally:
            if http is not self.http:
                http.close()

        report = ReadinessReport(results=tuple(results))
        LOGGER.debug("Readiness: ok=%s failures=%d warnings=%d",
                     report.ok, len(report.failures), len(report.warnings))
        return report

    # ---------- internals ----------

    async def _run_sync(self, name: str, severity: str, fn: Callable[..., ProbeResult], *args) -> ProbeResult:
        try:
            return fn(*args)
        except Exception as e:
            return _failed(name, severity, e)

    async def _run_blocking(
        self, name: str, severity: str, timeout: float, fn: Callable[..., ProbeResult], *args
    ) -> ProbeResult:
        try:
            return await asyncio.wait_for(_in_daemon_thread(name, fn, *args), timeout)
        except asyncio.TimeoutError:
            return ProbeResult(name, False, f"timed out after {timeout:.1f}s", severity=severity)
        except Exception as e:
            return _failed(name, severity, e)


def _in_daemon_thread(name: str, fn: Callable[..., ProbeResult], *args) -> "asyncio.Future[ProbeResult]":
    """Start fn(*args) on a daemon thread now; the returned future gets its outcome."""
    loop = asyncio.get_running_loop()
    fut: asyncio.Future = loop.create_future()

    def _settle(outcome: Any, failed: bool) -> None:
        if fut.done():   # cancelled by a timeout
            return
        if failed:
            fut.set_exception(outcome)
        else:
            fut.set_result(outcome)

    def _target() -> None:
        try:
            outcome, failed = fn(*args), False
        except Exception as e:
            outcome, failed = e, True
        try:
            loop.call_soon_threadsafe(_settle, outcome, failed)
        except RuntimeError:
            LOGGER.debug("Probe %s finished after verification ended; result dropped", name)

    threading.Thread(target=_target, name=f"islready-{name}", daemon=True).start()
    return fut


def _failed(name: str, severity: str, exc: BaseException) -> ProbeResult:
    LOGGER.debug("Probe %s raised", name, exc_info=exc)
    return ProbeResult(name, False, f"{type(exc).__name__}: {exc}", severity=severity)
