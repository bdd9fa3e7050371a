# islready/readiness/registry.py
"""
Capability lookup for the readiness probes.

The checker never touches globals or sys.modules directly; it asks a registry
for a handle by name. ModuleRegistry resolves names by importing them,
StaticRegistry serves a fixed mapping (tests, embedding apps that already hold
the handles).
"""
from __future__ import annotations

import importlib
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Capability:
    name: str
    handle: Optional[Any] = None
    reason: str = ""   # why the handle is missing, if it is

    @property
    def present(self) -> bool:
        return self.handle is not None


class CapabilityRegistry(ABC):
    @abstractmethod
    def lookup(self, name: str) -> Capability: pass


class ModuleRegistry(CapabilityRegistry):
    """Resolves capabilities as importable modules (e.g. 'onnxruntime')."""

    def __init__(self) -> None:
        self._cache: Dict[str, Capability] = {}

    def lookup(self, name: str) -> Capability:
        if name in self._cache:
            return self._cache[name]
        try:
            cap = Capability(name=name, handle=importlib.import_module(name))
        except ImportError as e:
            logger.debug("Capability %s unavailable: %s", name, e)
            cap = Capability(name=name, reason=str(e))
        self._cache[name] = cap
        return cap


class StaticRegistry(CapabilityRegistry):
    def __init__(self, handles: Optional[Mapping[str, Any]] = None) -> None:
        self._handles = dict(handles or {})

    def lookup(self, name: str) -> Capability:
        return Capability(name=name, handle=self._handles.get(name))
