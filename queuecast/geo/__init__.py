"""
Geospatial calculations for location-based estimates.

Key components:
- distance: Haversine distance, bearing, destination, midpoint and bounding box
- travel_time: Travel time estimation between locations
"""

from .distance import (
    calculate_bearing,
    calculate_destination,
    calculate_distance,
    calculate_midpoint,
    convert_distance,
    distance_matrix,
    find_nearest_point,
    find_points_within_radius,
    format_distance,
    get_bounding_box,
    is_within_radius,
    normalize_longitude,
    to_coordinates,
)
from .travel_time import estimate_arrival_time, estimate_travel_time, get_traffic_factor

__all__ = [
    "calculate_bearing",
    "calculate_destination",
    "calculate_distance",
    "calculate_midpoint",
    "convert_distance",
    "distance_matrix",
    "find_nearest_point",
    "find_points_within_radius",
    "format_distance",
    "get_bounding_box",
    "is_within_radius",
    "normalize_longitude",
    "to_coordinates",
    "estimate_arrival_time",
    "estimate_travel_time",
    "get_traffic_factor",
]
