"""Reference line built from discretized path points.

Waypoints are smoothed with cubic splines parameterized by arc length
(natural boundary conditions), then discretized at a fixed resolution.
"""

from typing import List, Sequence, Tuple

import numpy as np
from loguru import logger
from scipy.interpolate import CubicSpline

from ..core.coordinate_converter import cartesian_to_sl
from ..core.data_structures import PathPoint, SLBoundary
from ..core.errors import InvalidGeometryError
from ..core.geometry import Box2d
from .reference_line_matcher import match_to_reference_line_by_s, match_to_reference_line_by_xy


class ReferenceLine:
    """Discretized reference line with SL projection.

    Args:
        reference_points: Path points ordered by strictly increasing s
    """

    def __init__(self, reference_points: Sequence[PathPoint]):
        if len(reference_points) < 2:
            raise InvalidGeometryError(
                f"Reference line needs at least 2 points, got {len(reference_points)}"
            )
        s_values = np.array([p.s for p in reference_points])
        if np.any(np.diff(s_values) <= 0):
            raise InvalidGeometryError("Reference point s values must be strictly increasing")

        self._points: List[PathPoint] = list(reference_points)

    @classmethod
    def from_waypoints(
        cls,
        x: Sequence[float],
        y: Sequence[float],
        resolution: float = 0.5
    ) -> 'ReferenceLine':
        """Create a smooth reference line through waypoints.

        Args:
            x: X coordinates of waypoints
            y: Y coordinates of waypoints
            resolution: Distance between discretized points [m]

        Returns:
            ReferenceLine sampled every `resolution` metres
        """
        x = np.asarray(x, dtype=float)
        y = np.asarray(y, dtype=float)
        if x.shape != y.shape or x.ndim != 1:
            raise ValueError(f"Waypoint arrays must be 1-D with equal length, got {x.shape} and {y.shape}")
        if len(x) < 2:
            raise InvalidGeometryError(f"Need at least 2 waypoints, got {len(x)}")
        if resolution <= 0:
            raise ValueError(f"resolution must be positive, got {resolution}")

        ds = np.hypot(np.diff(x), np.diff(y))
        if np.any(ds <= 0):
            raise InvalidGeometryError("Consecutive waypoints must be distinct")
        s_knots = np.concatenate([[0.0], np.cumsum(ds)])

        sx = CubicSpline(s_knots, x, bc_type='natural')
        sy = CubicSpline(s_knots, y, bc_type='natural')

        s = np.arange(0.0, s_knots[-1], resolution)
        if s_knots[-1] - s[-1] > 1e-6:
            s = np.append(s, s_knots[-1])

        dx, dy = sx(s, 1), sy(s, 1)
        ddx, ddy = sx(s, 2), sy(s, 2)
        dddx, dddy = sx(s, 3), sy(s, 3)

        theta = np.arctan2(dy, dx)
        a = dx * ddy - dy * ddx
        b = dx * dddy - dy * dddx
        c = dx * ddx + dy * ddy
        d = dx * dx + dy * dy
        kappa = a / d ** 1.5
        dkappa = (b * d - 3.0 * a * c) / (d * d * d)

        points = [
            PathPoint(x=float(px), y=float(py), theta=float(pt), kappa=float(pk),
                      dkappa=float(pdk), s=float(ps))
            for px, py, pt, pk, pdk, ps in zip(sx(s), sy(s), theta, kappa, dkappa, s)
        ]
        logger.debug(f"Reference line created with {len(points)} points, length={s_knots[-1]:.1f}m")
        return cls(points)

    @property
    def reference_points(self) -> List[PathPoint]:
        return list(self._points)

    @property
    def length(self) -> float:
        return self._points[-1].s - self._points[0].s

    def get_reference_point(self, s: float) -> PathPoint:
        """Reference point at arc length s, clamped to the line ends."""
        return match_to_reference_line_by_s(self._points, s)

    def xy_to_sl(self, x: float, y: float) -> Tuple[float, float]:
        """Project a Cartesian position onto the reference line.

        Positions beyond either end extrapolate along the end segments, so s
        may be negative or exceed the line length.
        """
        matched = match_to_reference_line_by_xy(self._points, x, y)
        return cartesian_to_sl(matched, x, y)

    def get_sl_boundary(self, box: Box2d) -> SLBoundary:
        """SL extent of a box: min/max s and l over its corners."""
        sl = np.array([self.xy_to_sl(cx, cy) for cx, cy in box.corners()])
        return SLBoundary(
            start_s=float(np.min(sl[:, 0])),
            end_s=float(np.max(sl[:, 0])),
            start_l=float(np.min(sl[:, 1])),
            end_l=float(np.max(sl[:, 1])),
        )
