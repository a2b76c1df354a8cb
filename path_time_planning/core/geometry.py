"""Oriented bounding box used to represent obstacle footprints."""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Box2d:
    """Rectangle centred at (center_x, center_y), rotated by heading.

    Attributes:
        center_x: X coordinate of the centre [m]
        center_y: Y coordinate of the centre [m]
        heading: Direction of the length axis [rad]
        length: Extent along the heading [m]
        width: Extent perpendicular to the heading [m]
    """
    center_x: float
    center_y: float
    heading: float
    length: float
    width: float

    def __post_init__(self):
        if self.length < 0 or self.width < 0:
            raise ValueError(
                f"Box dimensions must be non-negative, got length={self.length}, width={self.width}"
            )

    @property
    def half_length(self) -> float:
        return 0.5 * self.length

    @property
    def half_width(self) -> float:
        return 0.5 * self.width

    def corners(self) -> np.ndarray:
        """Corner coordinates [4, 2], counter-clockwise from front-left."""
        cos_h = np.cos(self.heading)
        sin_h = np.sin(self.heading)
        # Local offsets (along heading, across heading)
        local = np.array([
            [self.half_length, self.half_width],
            [-self.half_length, self.half_width],
            [-self.half_length, -self.half_width],
            [self.half_length, -self.half_width],
        ])
        rotation = np.array([[cos_h, -sin_h], [sin_h, cos_h]])
        return local @ rotation.T + np.array([self.center_x, self.center_y])
