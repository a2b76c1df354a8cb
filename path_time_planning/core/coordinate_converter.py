"""Coordinate helpers between Cartesian and reference-line (SL) frames.

The SL frame is defined along a reference line, where:
- s: longitudinal distance along the line
- l: lateral offset from the line, positive to the left
"""

from typing import Tuple, Union

import numpy as np

from .data_structures import PathPoint


def normalize_angle(angle: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """Normalize angle to [-pi, pi] range.

    Args:
        angle: Input angle in radians

    Returns:
        Normalized angle in [-pi, pi]
    """
    two_pi = 2.0 * np.pi
    n = np.round(angle / two_pi)
    a = angle - n * two_pi

    # 3*pi maps to -pi, pi stays pi
    if np.isscalar(a):
        if abs(a + np.pi) < 1e-9 and angle > 0:
            return -np.pi
        return float(a)

    mask = (np.abs(a + np.pi) < 1e-9) & (angle > 0)
    if np.any(mask):
        a[mask] = -np.pi
    return a


def lerp(x0: float, t0: float, x1: float, t1: float, t: float) -> float:
    """Linear interpolation of x between (t0, x0) and (t1, x1)."""
    if abs(t1 - t0) <= 1e-10:
        return x0
    r = (t - t0) / (t1 - t0)
    return x0 + r * (x1 - x0)


def slerp(a0: float, t0: float, a1: float, t1: float, t: float) -> float:
    """Interpolate an angle along the shortest arc between a0 and a1."""
    if abs(t1 - t0) <= 1e-10:
        return normalize_angle(a0)
    d = normalize_angle(a1 - a0)
    r = (t - t0) / (t1 - t0)
    return normalize_angle(a0 + d * r)


def cartesian_to_sl(ref_point: PathPoint, x: float, y: float) -> Tuple[float, float]:
    """Express (x, y) in the SL frame of a matched reference point.

    Args:
        ref_point: Reference point nearest to (x, y)
        x, y: Position in global coordinates

    Returns:
        s: Longitudinal coordinate
        l: Signed lateral offset, positive to the left of the line
    """
    dx = x - ref_point.x
    dy = y - ref_point.y
    cos_theta_r = np.cos(ref_point.theta)
    sin_theta_r = np.sin(ref_point.theta)

    # Along-track residual corrects s when the match is not exactly orthogonal
    s = ref_point.s + cos_theta_r * dx + sin_theta_r * dy
    l = cos_theta_r * dy - sin_theta_r * dx
    return float(s), float(l)
