import math
from datetime import datetime, timedelta, timezone

from django.test import SimpleTestCase, override_settings

from queuecast.enums import TravelMode
from queuecast.exceptions import UnsupportedTravelModeError
from queuecast.geo.distance import calculate_distance
from queuecast.geo.travel_time import (
    estimate_arrival_time,
    estimate_travel_time,
    get_traffic_factor,
)

ORIGIN = (24.7136, 46.6753)
DESTINATION = (24.7743, 46.7386)


def expected_seconds(speed_kmh, factor=1.0):
    distance_km = calculate_distance(ORIGIN, DESTINATION)
    return math.ceil(distance_km / speed_kmh * factor * 3600)


class TrafficFactorTest(SimpleTestCase):
    def test_factors_by_hour(self):
        self.assertEqual(get_traffic_factor(6), 0.8)
        self.assertEqual(get_traffic_factor(8), 1.5)
        self.assertEqual(get_traffic_factor(12), 1.0)
        self.assertEqual(get_traffic_factor(17), 1.6)
        self.assertEqual(get_traffic_factor(20), 0.9)
        self.assertEqual(get_traffic_factor(3), 0.7)

    def test_unknown_hour(self):
        self.assertEqual(get_traffic_factor(None), 1.0)

    def test_hour_wraps(self):
        self.assertEqual(get_traffic_factor(24), get_traffic_factor(0))


class EstimateTravelTimeTest(SimpleTestCase):
    def test_walking(self):
        self.assertEqual(
            estimate_travel_time(ORIGIN, DESTINATION, "walking"), expected_seconds(5)
        )

    def test_default_mode_is_driving(self):
        self.assertEqual(
            estimate_travel_time(ORIGIN, DESTINATION),
            estimate_travel_time(ORIGIN, DESTINATION, TravelMode.DRIVING),
        )

    @override_settings(QUEUECAST={"DEFAULT_TRAVEL_MODE": "cycling"})
    def test_default_mode_from_settings(self):
        self.assertEqual(estimate_travel_time(ORIGIN, DESTINATION), expected_seconds(15))

    def test_rush_hour_slows_driving(self):
        rush = estimate_travel_time(ORIGIN, DESTINATION, "driving", hour_of_day=8)
        midday = estimate_travel_time(ORIGIN, DESTINATION, "driving", hour_of_day=12)

        self.assertEqual(rush, expected_seconds(40, 1.5))
        self.assertEqual(midday, expected_seconds(40))
        self.assertGreater(rush, midday)

    def test_traffic_ignored_for_walking(self):
        self.assertEqual(
            estimate_travel_time(ORIGIN, DESTINATION, "walking", hour_of_day=8),
            estimate_travel_time(ORIGIN, DESTINATION, "walking", hour_of_day=12),
        )

    def test_traffic_can_be_disabled(self):
        self.assertEqual(
            estimate_travel_time(
                ORIGIN, DESTINATION, "transit", hour_of_day=17, with_traffic=False
            ),
            expected_seconds(25),
        )

    def test_average_speed_override(self):
        self.assertEqual(
            estimate_travel_time(ORIGIN, DESTINATION, "walking", average_speed=10),
            expected_seconds(10),
        )

    def test_non_positive_average_speed_is_ignored(self):
        with self.assertLogs("queuecast.geo.travel_time", level="WARNING"):
            result = estimate_travel_time(
                ORIGIN, DESTINATION, "walking", average_speed=0
            )

        self.assertEqual(result, expected_seconds(5))

    def test_same_point(self):
        self.assertEqual(estimate_travel_time(ORIGIN, ORIGIN, "walking"), 0)

    def test_unsupported_mode(self):
        with self.assertRaises(UnsupportedTravelModeError):
            estimate_travel_time(ORIGIN, DESTINATION, "teleport")


class ArrivalTimeTest(SimpleTestCase):
    def test_arrival_uses_departure_hour(self):
        departure = datetime(2024, 3, 15, 8, 0, tzinfo=timezone.utc)

        arrival = estimate_arrival_time(ORIGIN, DESTINATION, departure, "driving")

        self.assertEqual(
            arrival - departure, timedelta(seconds=expected_seconds(40, 1.5))
        )

    @override_settings(TIME_ZONE="Asia/Riyadh")
    def test_arrival_uses_local_departure_hour(self):
        """05:00 UTC is the 08:00 rush hour in Riyadh"""
        departure = datetime(2024, 3, 15, 5, 0, tzinfo=timezone.utc)

        arrival = estimate_arrival_time(ORIGIN, DESTINATION, departure, "driving")

        self.assertEqual(
            arrival - departure, timedelta(seconds=expected_seconds(40, 1.5))
        )
