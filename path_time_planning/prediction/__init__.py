"""Obstacle trajectory sources."""

from .obstacle import Obstacle

__all__ = ['Obstacle']
