# islready/features/__init__.py

from .landmark_features import (
    FEATURE_SIZE,
    N_LANDMARKS,
    Landmark,
    as_landmark_array,
    extract,
    mirror_landmarks,
    synthetic_landmarks,
    translation_origin,
)

__all__ = [
    "FEATURE_SIZE",
    "N_LANDMARKS",
    "Landmark",
    "as_landmark_array",
    "extract",
    "mirror_landmarks",
    "synthetic_landmarks",
    "translation_origin",
]
