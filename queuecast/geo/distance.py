"""
Great-circle calculations between geographic coordinates.

This module provides functions for distances, bearings, destination points,
midpoints and bounding boxes on a spherical Earth (radius 6371 km), using the
Haversine formula. Longitudes returned for points are normalized to
(-180, 180].
"""

import logging
import math
from typing import List, Mapping, Sequence, Tuple, Union

import numpy as np

from ..enums import DistanceUnit
from ..exceptions import InvalidArgumentError, UnsupportedDistanceUnitError
from ..utils.converters import to_enum
from ..values import BoundingBox, Coordinates
from .constants import (
    EARTH_RADIUS_KM,
    FEET_PER_MILE,
    KM_TO_UNIT,
    METERS_PER_KILOMETER,
    METERS_PER_UNIT,
)

logger = logging.getLogger(__name__)

PointLike = Union[Coordinates, Tuple[float, float], Mapping[str, float]]


def to_coordinates(point: PointLike) -> Coordinates:
    """
    Coerce a point to Coordinates.

    Args:
        point: Either a Coordinates, a (latitude, longitude) tuple, or a
               mapping with 'lat'/'lng' or 'latitude'/'longitude' keys

    Returns:
        Coordinates for the point
    """
    if isinstance(point, Coordinates):
        return point

    if isinstance(point, Mapping):
        lat = point["lat"] if "lat" in point else point["latitude"]
        if "lng" in point:
            lng = point["lng"]
        elif "longitude" in point:
            lng = point["longitude"]
        else:
            lng = point["lon"]
        return Coordinates(float(lat), float(lng))

    lat, lng = point
    return Coordinates(float(lat), float(lng))


def _unit(unit) -> str:
    return to_enum(DistanceUnit, unit, UnsupportedDistanceUnitError).value


def normalize_longitude(lng: float) -> float:
    """Wrap a longitude in degrees into (-180, 180]."""
    normalized = (lng + 540.0) % 360.0 - 180.0
    if normalized == -180.0:
        return 180.0
    return normalized


def haversine(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate the great circle distance between two points
    on the earth using the Haversine formula.

    Args:
        lat1: Latitude of point 1 (in degrees)
        lon1: Longitude of point 1 (in degrees)
        lat2: Latitude of point 2 (in degrees)
        lon2: Longitude of point 2 (in degrees)

    Returns:
        Distance in kilometers between the two points
    """
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)

    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(dlon / 2) ** 2
    )
    # Rounding can push a a hair above 1 for antipodal points
    a = min(1.0, a)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def calculate_distance(
    coord1: PointLike, coord2: PointLike, unit: Union[DistanceUnit, str] = "km"
) -> float:
    """
    Calculate the distance between two geographic points.

    Args:
        coord1: First point
        coord2: Second point
        unit: Unit of the result ('km', 'm', 'mi' or 'ft')

    Returns:
        Distance between the points in the requested unit
    """
    unit = _unit(unit)
    point1 = to_coordinates(coord1)
    point2 = to_coordinates(coord2)

    distance_km = haversine(point1.lat, point1.lng, point2.lat, point2.lng)
    return distance_km * KM_TO_UNIT[unit]


def is_within_radius(
    point: PointLike,
    center: PointLike,
    radius: float,
    unit: Union[DistanceUnit, str] = "km",
) -> bool:
    """Check whether ``point`` lies within ``radius`` (inclusive) of ``center``."""
    return calculate_distance(point, center, unit) <= radius


def convert_distance(
    value: float,
    from_unit: Union[DistanceUnit, str],
    to_unit: Union[DistanceUnit, str],
) -> float:
    """
    Convert a distance between units, using meters as the common pivot.
    """
    from_unit = _unit(from_unit)
    to_unit = _unit(to_unit)

    if from_unit == to_unit:
        return value

    meters = value * METERS_PER_UNIT[from_unit]
    return meters / METERS_PER_UNIT[to_unit]


def get_bounding_box(
    center: PointLike, radius: float, unit: Union[DistanceUnit, str] = "km"
) -> BoundingBox:
    """
    Calculate a bounding box around a center point.

    The longitude span uses the planar secant approximation at the center's
    latitude, so the box is a cheap pre-filter rather than an exact boundary.
    When the circle reaches a pole the box covers every longitude.

    Args:
        center: Center point
        radius: Radius around the center
        unit: Unit of the radius

    Returns:
        BoundingBox with min/max lat/lng values in degrees
    """
    center = to_coordinates(center)
    radius_km = convert_distance(radius, unit, "km")

    # Angular distance in radians
    angular = radius_km / EARTH_RADIUS_KM

    lat = math.radians(center.lat)
    min_lat = math.degrees(lat - angular)
    max_lat = math.degrees(lat + angular)

    if min_lat <= -90.0 or max_lat >= 90.0:
        return BoundingBox(
            min_lat=max(min_lat, -90.0),
            max_lat=min(max_lat, 90.0),
            min_lng=-180.0,
            max_lng=180.0,
        )

    delta_lng = math.degrees(angular / math.cos(lat))
    if delta_lng >= 180.0:
        return BoundingBox(min_lat=min_lat, max_lat=max_lat, min_lng=-180.0, max_lng=180.0)

    return BoundingBox(
        min_lat=min_lat,
        max_lat=max_lat,
        min_lng=normalize_longitude(center.lng - delta_lng),
        max_lng=normalize_longitude(center.lng + delta_lng),
    )


def calculate_bearing(start: PointLike, end: PointLike) -> float:
    """
    Calculate the initial bearing (forward azimuth) from one point to another.

    Returns:
        Bearing in degrees clockwise from north, in [0, 360)
    """
    start = to_coordinates(start)
    end = to_coordinates(end)

    start_lat = math.radians(start.lat)
    end_lat = math.radians(end.lat)
    delta_lng = math.radians(end.lng - start.lng)

    y = math.sin(delta_lng) * math.cos(end_lat)
    x = math.cos(start_lat) * math.sin(end_lat) - math.sin(start_lat) * math.cos(
        end_lat
    ) * math.cos(delta_lng)

    bearing = math.degrees(math.atan2(y, x))
    return (bearing + 360.0) % 360.0


def calculate_destination(
    start: PointLike,
    distance: float,
    bearing: float,
    unit: Union[DistanceUnit, str] = "km",
) -> Coordinates:
    """
    Calculate the point reached by travelling ``distance`` from ``start``
    along the great circle with initial ``bearing`` (degrees from north).
    """
    start = to_coordinates(start)
    distance_km = convert_distance(distance, unit, "km")

    lat1 = math.radians(start.lat)
    lng1 = math.radians(start.lng)
    bearing_rad = math.radians(bearing)
    angular = distance_km / EARTH_RADIUS_KM

    lat2 = math.asin(
        math.sin(lat1) * math.cos(angular)
        + math.cos(lat1) * math.sin(angular) * math.cos(bearing_rad)
    )
    lng2 = lng1 + math.atan2(
        math.sin(bearing_rad) * math.sin(angular) * math.cos(lat1),
        math.cos(angular) - math.sin(lat1) * math.sin(lat2),
    )

    return Coordinates(math.degrees(lat2), normalize_longitude(math.degrees(lng2)))


def calculate_midpoint(coord1: PointLike, coord2: PointLike) -> Coordinates:
    """Calculate the great-circle midpoint between two points."""
    point1 = to_coordinates(coord1)
    point2 = to_coordinates(coord2)

    lat1 = math.radians(point1.lat)
    lng1 = math.radians(point1.lng)
    lat2 = math.radians(point2.lat)
    delta_lng = math.radians(point2.lng - point1.lng)

    bx = math.cos(lat2) * math.cos(delta_lng)
    by = math.cos(lat2) * math.sin(delta_lng)

    lat3 = math.atan2(
        math.sin(lat1) + math.sin(lat2),
        math.sqrt((math.cos(lat1) + bx) ** 2 + by**2),
    )
    lng3 = lng1 + math.atan2(by, math.cos(lat1) + bx)

    return Coordinates(math.degrees(lat3), normalize_longitude(math.degrees(lng3)))


def format_distance(distance: float, unit: Union[DistanceUnit, str] = "m") -> str:
    """
    Format a distance as a short string, e.g. "500 m" or "1.2 km".

    Meters switch to kilometers from 1000 m and feet switch to miles from
    5280 ft. Whole numbers are shown without decimals, anything else with one.
    """
    unit = _unit(unit)
    value = distance

    if unit == "m" and distance >= METERS_PER_KILOMETER:
        value = distance / METERS_PER_KILOMETER
        unit = "km"
    elif unit == "ft" and distance >= FEET_PER_MILE:
        value = distance / FEET_PER_MILE
        unit = "mi"

    if float(value).is_integer():
        formatted = str(int(value))
    else:
        formatted = f"{value:.1f}"

    return f"{formatted} {unit}"


def distance_matrix(
    points: Sequence[PointLike], unit: Union[DistanceUnit, str] = "km"
) -> np.ndarray:
    """
    Calculate a matrix of distances between multiple geographic points.

    Returns:
        NumPy array where matrix[i][j] is the distance between points[i]
        and points[j] in the requested unit
    """
    unit = _unit(unit)
    n = len(points)
    if n == 0:
        return np.zeros((0, 0))

    coords = np.radians(
        np.array([to_coordinates(point).as_tuple() for point in points], dtype=float)
    )
    lat = coords[:, 0][:, np.newaxis]
    lng = coords[:, 1][:, np.newaxis]

    dlat = lat.T - lat
    dlng = lng.T - lng

    a = np.sin(dlat / 2) ** 2 + np.cos(lat) * np.cos(lat.T) * np.sin(dlng / 2) ** 2
    a = np.clip(a, 0.0, 1.0)
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))

    matrix = EARTH_RADIUS_KM * c * KM_TO_UNIT[unit]
    np.fill_diagonal(matrix, 0.0)

    return matrix


def find_nearest_point(
    target: PointLike,
    points: Sequence[PointLike],
    unit: Union[DistanceUnit, str] = "km",
) -> Tuple[int, float]:
    """
    Find the nearest point to a target from a list of points.

    Returns:
        Tuple of (index of nearest point, distance to that point)
    """
    if not points:
        raise InvalidArgumentError("Points list cannot be empty")

    min_dist = float("inf")
    min_idx = -1

    for i, point in enumerate(points):
        dist = calculate_distance(target, point, unit)
        if dist < min_dist:
            min_dist = dist
            min_idx = i

    return min_idx, min_dist


def find_points_within_radius(
    center: PointLike,
    points: Sequence[PointLike],
    radius: float,
    unit: Union[DistanceUnit, str] = "km",
) -> List[Tuple[int, float]]:
    """
    Find all points within a given radius of a center point.

    Candidates are first pre-filtered with the bounding box, then checked
    with the exact haversine distance. At high latitudes the planar box can
    clip points sitting right on the east/west edge of the circle.

    Returns:
        List of tuples (index of point, distance), sorted by distance
    """
    box = get_bounding_box(center, radius, unit)
    results = []

    for i, point in enumerate(points):
        coords = to_coordinates(point)
        if not box.contains(coords):
            continue

        dist = calculate_distance(center, coords, unit)
        if dist <= radius:
            results.append((i, dist))

    results.sort(key=lambda x: x[1])

    logger.debug(
        f"{len(results)} of {len(points)} points within {radius} {_unit(unit)}"
    )
    return results
