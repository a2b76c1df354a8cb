"""Path planning module."""

from .reference_line import ReferenceLine
from .reference_line_matcher import match_to_reference_line_by_s, match_to_reference_line_by_xy
from .path_time_neighborhood import PathTimeNeighborhood, is_in_region_of_interest, speed_on_reference_line

__all__ = [
    'ReferenceLine',
    'match_to_reference_line_by_s',
    'match_to_reference_line_by_xy',
    'PathTimeNeighborhood',
    'is_in_region_of_interest',
    'speed_on_reference_line',
]
