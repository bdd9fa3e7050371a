# islready/features/landmark_features.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Tuple

import numpy as np

N_LANDMARKS = 21
FEATURE_SIZE = N_LANDMARKS * 2  # x,y per joint


@dataclass(frozen=True)
class Landmark:
    """Single 2D hand keypoint in normalized image coords (x,y nominally in [0,1])."""
    x: float
    y: float


def as_landmark_array(landmarks: Any) -> np.ndarray:
    """
    Coerce detector output into a (21,2) float64 array.

    Accepts:
      - a sequence of objects exposing .x / .y (Landmark, MediaPipe NormalizedLandmark)
      - a sequence of {"x": ..., "y": ...} mappings
      - an array-like of shape (21,2) or (21,3); z is dropped
    """
    items = list(landmarks)
    if len(items) != N_LANDMARKS:
        raise ValueError(f"Expected {N_LANDMARKS} landmarks, got {len(items)}")
    try:
        if hasattr(items[0], "x"):
            pts = np.array([[lm.x, lm.y] for lm in items], dtype=np.float64)
        elif isinstance(items[0], Mapping):
            pts = np.array([[lm["x"], lm["y"]] for lm in items], dtype=np.float64)
        else:
            pts = np.asarray(items, dtype=np.float64)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Landmarks must be 21 x/y points: {e!r}") from e

    if pts.ndim != 2 or pts.shape[1] not in (2, 3):
        raise ValueError(f"Expected (21,2) or (21,3) landmarks, got {pts.shape}")
    pts = pts[:, :2]

    if not np.all(np.isfinite(pts)):
        raise ValueError("Landmark coordinates must be finite")
    return pts


def mirror_landmarks(pts: np.ndarray) -> np.ndarray:
    """Horizontal flip (x -> 1 - x); y is untouched."""
    mirrored = pts.copy()
    mirrored[:, 0] = 1.0 - mirrored[:, 0]
    return mirrored


def translation_origin(pts: np.ndarray) -> Tuple[float, float]:
    """(minX, minY) of the mirrored landmark set."""
    mirrored = mirror_landmarks(pts)
    return float(mirrored[:, 0].min()), float(mirrored[:, 1].min())


def extract(landmarks: Any) -> np.ndarray:
    """
    Build the 42-float feature vector the ISL classifier was trained on:
      - mirror x (front camera view vs. training convention)
      - translate so the hand's bounding box starts at the origin
      - flatten interleaved as [x0, y0, x1, y1, ..., x20, y20]
    No scale normalization is applied: hand size stays in the signal.

    Args:
        landmarks: 21 points, see as_landmark_array for accepted forms
    Returns:
        (42,) float32 array, every value >= 0
    Raises:
        ValueError: wrong landmark count or non-finite coordinates
    """
    pts = as_landmark_array(landmarks)
    mirrored = mirror_landmarks(pts)
    shifted = mirrored - mirrored.min(axis=0)
    return shifted.reshape(-1).astype(np.float32)


def synthetic_landmarks(start: float = 0.5, step: float = 0.01) -> List[Landmark]:
    """Deterministic diagonal hand: x = y = start + step * i for i in 0..20."""
    return [Landmark(x=start + step * i, y=start + step * i) for i in range(N_LANDMARKS)]
