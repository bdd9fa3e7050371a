# islready/readiness/report.py
from __future__ import annotations

import json
import logging
from typing import List, Optional

from .checker import ReadinessReport
from .probes import ProbeResult

logger = logging.getLogger(__name__)

TITLES = {
    "inference_runtime": "Checking inference runtime",
    "landmark_detector": "Checking hand landmark detector",
    "camera": "Checking camera access",
    "execution_backend": "Checking execution backend support",
    "model_artifact": "Checking model file",
    "feature_self_test": "Testing preprocessing logic",
}

RULE = "=" * 37


def _marker(r: ProbeResult) -> str:
    if r.passed:
        return "✅"
    return "❌" if r.fatal else "⚠️"


def format_report(report: ReadinessReport) -> List[str]:
    """One section per probe, in probe order, framed by a banner and a summary."""
    lines = ["🔍 ISL Model Integration Verification", RULE]
    for i, r in enumerate(report.results, start=1):
        lines.append(f"{i}. {TITLES.get(r.name, r.name)}...")
        lines.append(f"   {_marker(r)} {r.detail}")
    lines.append(RULE)
    if report.ok:
        lines.append("✅ Verification complete: pipeline ready")
        if report.warnings:
            lines.append(f"⚠️ {len(report.warnings)} warning(s), see above")
        lines.append("📝 Next: start the translator and sign in front of the camera")
    else:
        names = ", ".join(r.name for r in report.failures)
        lines.append(f"❌ Verification failed: {names}")
    lines.append(RULE)
    return lines


def log_report(report: ReadinessReport, log: Optional[logging.Logger] = None) -> None:
    """Emit format_report lines; probe lines carry their own level."""
    log = log or logger
    lines = format_report(report)
    n = len(report.results)
    head, body, tail = lines[:2], lines[2:2 + 2 * n], lines[2 + 2 * n:]

    for line in head:
        log.info(line)
    for r, title, detail in zip(report.results, body[::2], body[1::2]):
        log.info(title)
        log.log(_level(r), detail)
    for line in tail:
        log.log(logging.INFO if report.ok else logging.ERROR, line)


def _level(r: ProbeResult) -> int:
    if r.passed:
        return logging.INFO
    return logging.ERROR if r.fatal else logging.WARNING


def report_to_json(report: ReadinessReport, indent: Optional[int] = 2) -> str:
    return json.dumps(report.to_dict(), indent=indent, ensure_ascii=False)
