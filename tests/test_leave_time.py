from datetime import datetime, timedelta, timezone

from django.test import SimpleTestCase, override_settings

from queuecast.enums import Confidence
from queuecast.geo.travel_time import estimate_travel_time
from queuecast.queueing.leave_time import (
    calculate_buffer_time,
    calculate_leave_time_from_locations,
    calculate_recommended_leave_time,
)

NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


class BufferTimeTest(SimpleTestCase):
    def test_fraction_of_wait(self):
        self.assertEqual(calculate_buffer_time(3000), 600)

    def test_lower_bound(self):
        self.assertEqual(calculate_buffer_time(600), 300)

    def test_upper_bound(self):
        self.assertEqual(calculate_buffer_time(10000), 1800)

    def test_crossed_bounds_use_maximum(self):
        self.assertEqual(
            calculate_buffer_time(600, min_buffer_time=900, max_buffer_time=600), 600
        )

    @override_settings(QUEUECAST={"BUFFER_FRACTION": 0.5, "MIN_BUFFER_TIME": 0})
    def test_settings_override_defaults(self):
        self.assertEqual(calculate_buffer_time(600), 300)
        self.assertEqual(calculate_buffer_time(100), 50)


class RecommendedLeaveTimeTest(SimpleTestCase):
    def test_leave_later_for_long_wait(self):
        recommendation = calculate_recommended_leave_time(
            10, 300, 600, variance_service_time=0, current_time=NOW
        )

        self.assertEqual(recommendation.estimated_wait_time, 3000)
        self.assertEqual(recommendation.buffer_time, 600)
        self.assertEqual(recommendation.recommended_leave_in_seconds, 1800)
        self.assertEqual(recommendation.leave_at, NOW + timedelta(seconds=1800))
        self.assertEqual(recommendation.confidence, Confidence.HIGH)
        self.assertFalse(recommendation.should_leave_now)

    def test_deep_queue_with_long_travel(self):
        """Travel and buffer eat the whole wait, so leave now"""
        recommendation = calculate_recommended_leave_time(
            25, 60, 1200, variance_service_time=0, current_time=NOW
        )

        self.assertEqual(recommendation.recommended_leave_in_seconds, 0)
        self.assertEqual(recommendation.leave_at, NOW)
        self.assertEqual(recommendation.confidence, Confidence.LOW)
        self.assertTrue(recommendation.should_leave_now)

    def test_leave_in_is_never_negative(self):
        recommendation = calculate_recommended_leave_time(
            1, 60, 7200, variance_service_time=0, current_time=NOW
        )

        self.assertEqual(recommendation.recommended_leave_in_seconds, 0)

    def test_to_dict(self):
        data = calculate_recommended_leave_time(
            10, 300, 600, variance_service_time=0, current_time=NOW
        ).to_dict()

        self.assertEqual(data["leave_at"], "2024-03-15T12:30:00+00:00")
        self.assertEqual(data["confidence"], "high")
        self.assertFalse(data["should_leave_now"])


class LeaveTimeFromLocationsTest(SimpleTestCase):
    def test_uses_estimated_travel_time(self):
        origin = (24.7136, 46.6753)
        venue = {"lat": 24.7336, "lng": 46.6953}

        recommendation = calculate_leave_time_from_locations(
            20,
            300,
            origin,
            venue,
            travel_mode="walking",
            current_time=NOW,
            variance_service_time=0,
        )

        expected_travel = estimate_travel_time(
            origin, venue, travel_mode="walking", hour_of_day=12
        )
        self.assertEqual(recommendation.travel_time, expected_travel)
        self.assertEqual(recommendation.estimated_wait_time, 6000)
        self.assertEqual(recommendation.buffer_time, 1200)
        self.assertEqual(
            recommendation.recommended_leave_in_seconds,
            max(0, 6000 - expected_travel - 1200),
        )

    def test_traffic_uses_hour_of_current_time(self):
        origin = (24.7136, 46.6753)
        venue = (24.8136, 46.7753)
        rush_hour = NOW.replace(hour=8)

        recommendation = calculate_leave_time_from_locations(
            20,
            300,
            origin,
            venue,
            travel_mode="driving",
            current_time=rush_hour,
            variance_service_time=0,
        )

        self.assertEqual(
            recommendation.travel_time,
            estimate_travel_time(origin, venue, travel_mode="driving", hour_of_day=8),
        )

    @override_settings(TIME_ZONE="Asia/Riyadh")
    def test_traffic_uses_local_hour(self):
        origin = (24.7136, 46.6753)
        venue = (24.8136, 46.7753)
        local_rush_hour = datetime(2024, 3, 15, 5, 0, tzinfo=timezone.utc)

        recommendation = calculate_leave_time_from_locations(
            20,
            300,
            origin,
            venue,
            travel_mode="driving",
            current_time=local_rush_hour,
            variance_service_time=0,
        )

        self.assertEqual(
            recommendation.travel_time,
            estimate_travel_time(origin, venue, travel_mode="driving", hour_of_day=8),
        )
        self.assertNotEqual(
            recommendation.travel_time,
            estimate_travel_time(origin, venue, travel_mode="driving", hour_of_day=5),
        )
