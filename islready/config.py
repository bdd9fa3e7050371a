# islready/config.py
from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_MODEL_URL = "http://localhost:5173/isl_model.onnx"


@dataclass(frozen=True)
class VerifyConfig:
    model_url: str = DEFAULT_MODEL_URL
    camera_index: int = 0
    runtime_module: str = "onnxruntime"
    detector_module: str = "mediapipe.solutions.hands"
    execution_provider: str = "CPUExecutionProvider"
    request_timeout: float = 5.0   # seconds, HEAD on the model artifact
    camera_timeout: float = 10.0   # seconds, includes any OS permission prompt
    import_timeout: float = 30.0   # seconds, first import of runtime/detector modules

    def with_overrides(self, **overrides: Any) -> "VerifyConfig":
        """Copy with the given fields replaced; None values are ignored."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


_CASTS = {
    "model_url": str,
    "camera_index": int,
    "runtime_module": str,
    "detector_module": str,
    "execution_provider": str,
    "request_timeout": float,
    "camera_timeout": float,
    "import_timeout": float,
}


def config_from_dict(section: Optional[Dict[str, Any]]) -> VerifyConfig:
    """Build a VerifyConfig from the `readiness` mapping of a YAML file."""
    section = section or {}
    if not isinstance(section, dict):
        raise ValueError(f"'readiness' must be a mapping, got {type(section).__name__}")

    known = {f.name for f in fields(VerifyConfig)}
    unknown = sorted(set(section) - known)
    if unknown:
        raise ValueError(f"Unknown readiness config keys: {', '.join(unknown)}")

    values = {}
    for key, raw in section.items():
        try:
            values[key] = _CASTS[key](raw)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid value for '{key}': {raw!r}") from e
    return VerifyConfig(**values)


def load_config(path: Path | str) -> VerifyConfig:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config not found at {path}")
    with open(path, "r", encoding="utf-8") as f:
        try:
            cfg = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Malformed YAML in {path}: {e}") from e
    if not isinstance(cfg, dict):
        raise ValueError(f"Top-level YAML in {path} must be a mapping")

    config = config_from_dict(cfg.get("readiness"))
    logger.info("Loaded readiness config from %s (model_url=%s camera=%d)",
                path, config.model_url, config.camera_index)
    return config
