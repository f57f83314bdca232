from django.test import SimpleTestCase, override_settings

from queuecast.enums import Confidence
from queuecast.queueing.wait_time import (
    adjust_for_no_show_probability,
    calculate_no_show_probability,
    calculate_optimal_servers,
    calculate_wait_time,
    confidence_for_position,
    estimate_served_in_time,
    estimate_time_until_position,
    estimate_wait,
)


class FixedRandom:
    """Random source that always returns the upper (or lower) bound."""

    def __init__(self, upper=True):
        self.upper = upper

    def uniform(self, a, b):
        return b if self.upper else a


class CalculateWaitTimeTest(SimpleTestCase):
    def test_zero_variance_is_exact(self):
        """Without variance the wait is position times service time"""
        self.assertEqual(calculate_wait_time(5, 60, 0), 300)
        self.assertEqual(calculate_wait_time(1, 45.5, 0), 46)

    def test_variance_uses_random_factor(self):
        self.assertEqual(calculate_wait_time(10, 60, 0.2, rng=FixedRandom()), 720)
        self.assertEqual(
            calculate_wait_time(10, 60, 0.2, rng=FixedRandom(upper=False)), 480
        )

    def test_default_variance_stays_in_range(self):
        for _ in range(50):
            wait = calculate_wait_time(5, 60)
            self.assertGreaterEqual(wait, 240)
            self.assertLessEqual(wait, 360)

    def test_never_negative(self):
        self.assertEqual(calculate_wait_time(0, 60, 0), 0)
        self.assertEqual(calculate_wait_time(-3, 60, 0), 0)

    @override_settings(QUEUECAST={"DEFAULT_VARIANCE": 0})
    def test_default_variance_from_settings(self):
        self.assertEqual(calculate_wait_time(7, 30), 210)

    def test_variance_not_clamped_by_default(self):
        self.assertEqual(calculate_wait_time(5, 60, 1.5, rng=FixedRandom()), 750)

    @override_settings(QUEUECAST={"CLAMP_VARIANCE": True})
    def test_variance_clamped_when_enabled(self):
        self.assertEqual(calculate_wait_time(5, 60, 1.5, rng=FixedRandom()), 600)


class TimeUntilPositionTest(SimpleTestCase):
    def test_positions_ahead(self):
        self.assertEqual(estimate_time_until_position(8, 5, 60), 180)
        self.assertEqual(estimate_time_until_position(5, 5, 60), 0)

    def test_target_behind_current_position(self):
        """A target further back than the current position is already passed"""
        self.assertEqual(estimate_time_until_position(5, 8, 60), 0)

    def test_non_positive_positions(self):
        self.assertEqual(estimate_time_until_position(0, 1, 60), 0)
        self.assertEqual(estimate_time_until_position(5, 0, 60), 0)


class NoShowTest(SimpleTestCase):
    def test_probability_from_history(self):
        self.assertEqual(calculate_no_show_probability(5, 20), 0.25)

    def test_probability_without_history(self):
        self.assertEqual(calculate_no_show_probability(0, 0), 0.0)
        self.assertEqual(calculate_no_show_probability(3, 0), 0.0)

    def test_probability_is_bounded(self):
        self.assertEqual(calculate_no_show_probability(30, 20), 1.0)

    def test_zero_probability_is_identity(self):
        self.assertEqual(adjust_for_no_show_probability(600, 0, 5), 600)

    def test_non_positive_position_is_identity(self):
        self.assertEqual(adjust_for_no_show_probability(600, 0.5, 0), 600)

    def test_adjustment_shortens_wait(self):
        adjusted = adjust_for_no_show_probability(600, 0.5, 100)
        self.assertLess(adjusted, 600)
        self.assertGreaterEqual(adjusted, 0)
        self.assertEqual(adjusted, 300)

    def test_adjustment_grows_with_position(self):
        near = adjust_for_no_show_probability(600, 0.5, 1)
        far = adjust_for_no_show_probability(600, 0.5, 20)
        self.assertGreater(near, far)

    def test_adjustment_never_negative(self):
        self.assertEqual(adjust_for_no_show_probability(600, 5, 100), 0)


class CapacityTest(SimpleTestCase):
    def test_served_in_time(self):
        self.assertEqual(estimate_served_in_time(3600, 300), 12)
        self.assertEqual(estimate_served_in_time(3600, 300, num_servers=2), 24)
        self.assertEqual(estimate_served_in_time(100, 300), 0)

    def test_served_in_time_without_service_time(self):
        self.assertEqual(estimate_served_in_time(3600, 0), 0)

    def test_optimal_servers(self):
        self.assertEqual(calculate_optimal_servers(30, 60, 300), 6)
        self.assertEqual(calculate_optimal_servers(31, 60, 300), 7)

    def test_optimal_servers_is_at_least_one(self):
        self.assertEqual(calculate_optimal_servers(0, 60, 300), 1)
        self.assertEqual(calculate_optimal_servers(10, 60, 0), 1)
        self.assertEqual(calculate_optimal_servers(10, 0, 300), 1)


class EstimateWaitTest(SimpleTestCase):
    def test_confidence_thresholds(self):
        self.assertEqual(confidence_for_position(1), Confidence.HIGH)
        self.assertEqual(confidence_for_position(10), Confidence.HIGH)
        self.assertEqual(confidence_for_position(11), Confidence.MEDIUM)
        self.assertEqual(confidence_for_position(20), Confidence.MEDIUM)
        self.assertEqual(confidence_for_position(21), Confidence.LOW)

    def test_estimate_range(self):
        estimate = estimate_wait(10, 60, variance_service_time=0, uncertainty=0.2)

        self.assertEqual(estimate.estimated_wait_time, 600)
        self.assertEqual(estimate.min_wait_time, 480)
        self.assertEqual(estimate.max_wait_time, 720)
        self.assertEqual(estimate.no_show_probability, 0.0)
        self.assertEqual(estimate.confidence, Confidence.HIGH)

    def test_estimate_applies_no_show_history(self):
        estimate = estimate_wait(
            10, 60, total_no_shows=1, total_entries=4, variance_service_time=0
        )

        self.assertEqual(estimate.no_show_probability, 0.25)
        self.assertEqual(estimate.estimated_wait_time, 505)

    def test_estimate_to_dict(self):
        data = estimate_wait(25, 60, variance_service_time=0).to_dict()

        self.assertEqual(data["position"], 25)
        self.assertEqual(data["estimated_wait_time"], 1500)
        self.assertEqual(data["confidence"], "low")

    @override_settings(QUEUECAST={"PREDICTION_UNCERTAINTY": 0.5})
    def test_uncertainty_from_settings(self):
        estimate = estimate_wait(10, 60, variance_service_time=0)

        self.assertEqual(estimate.min_wait_time, 300)
        self.assertEqual(estimate.max_wait_time, 900)
