# islready/__init__.py
from .config import VerifyConfig, load_config
from .features import FEATURE_SIZE, Landmark, extract
from .readiness import ReadinessChecker, ReadinessReport

__version__ = "0.1.0"

__all__ = [
    "VerifyConfig",
    "load_config",
    "FEATURE_SIZE",
    "Landmark",
    "extract",
    "ReadinessChecker",
    "ReadinessReport",
]
