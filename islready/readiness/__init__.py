# islready/readiness/__init__.py

from .checker import ReadinessChecker, ReadinessReport
from .probes import PROBE_ORDER, ProbeResult
from .registry import Capability, CapabilityRegistry, ModuleRegistry, StaticRegistry
from .report import format_report, log_report, report_to_json

__all__ = [
    "ReadinessChecker",
    "ReadinessReport",
    "PROBE_ORDER",
    "ProbeResult",
    "Capability",
    "CapabilityRegistry",
    "ModuleRegistry",
    "StaticRegistry",
    "format_report",
    "log_report",
    "report_to_json",
]
