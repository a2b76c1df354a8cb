"""Interfaces of the collaborators consumed by the path-time neighborhood.

Any object providing these methods can be handed to the builder; the
concrete implementations live in ``prediction.obstacle`` and
``planning.reference_line``.
"""

from typing import Protocol, Tuple

from .data_structures import SLBoundary, TrajectoryPoint
from .geometry import Box2d


class TrajectorySource(Protocol):
    """Predicted motion of a single obstacle."""

    @property
    def id(self) -> str:
        ...

    def has_trajectory(self) -> bool:
        ...

    def get_point_at_time(self, relative_time: float) -> TrajectoryPoint:
        ...

    def get_bounding_box(self, point: TrajectoryPoint) -> Box2d:
        ...

    def perception_velocity(self) -> Tuple[float, float]:
        ...


class ReferenceCurveProjector(Protocol):
    """Projection of shapes onto the reference line."""

    def get_sl_boundary(self, box: Box2d) -> SLBoundary:
        ...
