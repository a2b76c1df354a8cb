"""Matching of positions to a discretized reference line."""

import bisect
from typing import Sequence

import numpy as np

from ..core.coordinate_converter import lerp, slerp
from ..core.data_structures import PathPoint


def interpolate_path_point(p0: PathPoint, p1: PathPoint, s: float) -> PathPoint:
    """Interpolate between two reference points at arc length s.

    Position and curvature are interpolated linearly, heading along the
    shortest arc. s outside [p0.s, p1.s] extrapolates.
    """
    return PathPoint(
        x=lerp(p0.x, p0.s, p1.x, p1.s, s),
        y=lerp(p0.y, p0.s, p1.y, p1.s, s),
        theta=slerp(p0.theta, p0.s, p1.theta, p1.s, s),
        kappa=lerp(p0.kappa, p0.s, p1.kappa, p1.s, s),
        dkappa=lerp(p0.dkappa, p0.s, p1.dkappa, p1.s, s),
        s=s,
    )


def match_to_reference_line_by_s(reference_points: Sequence[PathPoint], s: float) -> PathPoint:
    """Find the reference point at arc length s.

    Args:
        reference_points: Discretized reference line, ordered by s
        s: Arc length to match

    Returns:
        Interpolated point; the first/last point when s is outside the line
    """
    if len(reference_points) == 0:
        raise ValueError("Cannot match against an empty reference line")

    if s <= reference_points[0].s:
        return reference_points[0]
    if s >= reference_points[-1].s:
        return reference_points[-1]

    s_values = [p.s for p in reference_points]
    index = bisect.bisect_left(s_values, s)
    return interpolate_path_point(reference_points[index - 1], reference_points[index], s)


def match_to_reference_line_by_xy(
    reference_points: Sequence[PathPoint],
    x: float,
    y: float
) -> PathPoint:
    """Find the projection of (x, y) onto the reference line.

    The nearest sample is located first, then the position is projected onto
    the segment towards its neighbour.

    Args:
        reference_points: Discretized reference line, ordered by s
        x, y: Position in global coordinates

    Returns:
        Projected point on the reference line
    """
    n = len(reference_points)
    if n == 0:
        raise ValueError("Cannot match against an empty reference line")

    xy = np.array([[p.x, p.y] for p in reference_points])
    distances = np.hypot(xy[:, 0] - x, xy[:, 1] - y)
    index_min = int(np.argmin(distances))

    index_start = index_min if index_min == 0 else index_min - 1
    index_end = index_min if index_min + 1 == n else index_min + 1
    if index_start == index_end:
        return reference_points[index_start]

    return find_projection_point(reference_points[index_start], reference_points[index_end], x, y)


def find_projection_point(p0: PathPoint, p1: PathPoint, x: float, y: float) -> PathPoint:
    """Project (x, y) onto the line through p0 and p1."""
    v0 = np.array([x - p0.x, y - p0.y])
    v1 = np.array([p1.x - p0.x, p1.y - p0.y])
    v1_norm = np.linalg.norm(v1)
    if v1_norm < 1e-10:
        return p0
    delta_s = float(np.dot(v0, v1) / v1_norm)
    return interpolate_path_point(p0, p1, p0.s + delta_s)
