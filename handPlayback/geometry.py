"""
Geometry helpers for drawing a hand frame.

These are pure functions over Frame values so the viewer stays a thin layer
of GL calls on top of them.
"""

from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from .enums import BONE_PAIRS, CENTER_JOINTS
from .protocol import Frame

# Camera distance as a multiple of the largest bounding-box side
FIT_DISTANCE_FACTOR = 2.2
# Eye offset direction (scaled by distance) used when fitting the view
FIT_EYE_DIRECTION = np.array([0.35, 0.8, 0.6])
# Zoom limits for the orbit camera, in metres
MIN_CAMERA_DISTANCE = 0.05
MAX_CAMERA_DISTANCE = 20.0


def joint_positions(frame: Optional[Frame]) -> Dict[str, np.ndarray]:
    """Map joint name -> [x, y, z] array (later duplicates win)"""
    if frame is None:
        return {}
    return {j.name: np.array(j.pos, dtype=float) for j in frame.joints}


def bone_segments(frame: Optional[Frame],
                  pairs: Sequence[Tuple[str, str]] = BONE_PAIRS) -> List[Tuple[np.ndarray, np.ndarray]]:
    """Line segments for every bone whose two joints are present in the frame"""
    positions = joint_positions(frame)
    segments = []
    for a, b in pairs:
        va = positions.get(a)
        vb = positions.get(b)
        if va is not None and vb is not None:
            segments.append((va.copy(), vb.copy()))
    return segments


def view_center(frame: Optional[Frame]) -> np.ndarray:
    """Mean of the wrist joints present in the frame, or the origin when none are tracked"""
    positions = joint_positions(frame)
    candidates = [positions[n] for n in CENTER_JOINTS if n in positions]
    if not candidates:
        return np.zeros(3)
    return np.mean(candidates, axis=0)


def fit_view(frame: Optional[Frame]) -> Optional[Tuple[np.ndarray, np.ndarray]]:
    """
    Compute a camera pose that frames all joints of a frame.

    Returns:
        (eye, center) arrays, or None when the frame has no joints
    """
    if frame is None or not frame.joints:
        return None
    points = np.array([j.pos for j in frame.joints], dtype=float)
    lo = points.min(axis=0)
    hi = points.max(axis=0)
    center = (lo + hi) / 2.0
    max_dim = float(np.max(hi - lo))
    distance = max_dim * FIT_DISTANCE_FACTOR
    eye = center + distance * FIT_EYE_DIRECTION
    return eye, center


def orbit_from_eye(eye: np.ndarray, center: np.ndarray) -> Tuple[float, float, float]:
    """
    Convert an eye/center pair into orbit camera parameters.

    Returns:
        (distance, azimuth_deg, elevation_deg) matching the viewer's spherical camera
    """
    offset = np.asarray(eye, dtype=float) - np.asarray(center, dtype=float)
    distance = float(np.linalg.norm(offset))
    if distance < 1e-9:
        return 0.0, 0.0, 0.0
    azimuth = float(np.degrees(np.arctan2(offset[0], offset[2])))
    elevation = float(np.degrees(np.arcsin(np.clip(offset[1] / distance, -1.0, 1.0))))
    return distance, azimuth, elevation


def clamp_distance(distance: float) -> float:
    return max(MIN_CAMERA_DISTANCE, min(MAX_CAMERA_DISTANCE, distance))
