from django.test import SimpleTestCase

from queuecast.enums import QueueEntryStatus
from queuecast.utils.queue_utils import (
    coerce_status,
    format_position,
    is_active_status,
    is_completed_status,
)


class FormatPositionTest(SimpleTestCase):
    def test_suffixes(self):
        self.assertEqual(format_position(1), "1st")
        self.assertEqual(format_position(2), "2nd")
        self.assertEqual(format_position(3), "3rd")
        self.assertEqual(format_position(4), "4th")
        self.assertEqual(format_position(21), "21st")
        self.assertEqual(format_position(102), "102nd")

    def test_teens_use_th(self):
        self.assertEqual(format_position(11), "11th")
        self.assertEqual(format_position(12), "12th")
        self.assertEqual(format_position(13), "13th")
        self.assertEqual(format_position(111), "111th")

    def test_front_of_queue(self):
        self.assertEqual(format_position(0), "Next")
        self.assertEqual(format_position(-1), "Next")


class StatusTest(SimpleTestCase):
    def test_active_statuses(self):
        self.assertTrue(is_active_status(QueueEntryStatus.WAITING))
        self.assertTrue(is_active_status("CALLED"))
        self.assertFalse(is_active_status("SERVED"))

    def test_completed_statuses(self):
        for status in ("SERVED", "NOSHOW", "CANCELLED"):
            self.assertTrue(is_completed_status(status))
        self.assertFalse(is_completed_status(QueueEntryStatus.WAITING))

    def test_unknown_status(self):
        self.assertFalse(is_active_status("LOST"))
        self.assertFalse(is_completed_status("LOST"))

    def test_coerce_status(self):
        self.assertEqual(coerce_status("NOSHOW"), QueueEntryStatus.NOSHOW)
        self.assertEqual(coerce_status(QueueEntryStatus.CALLED), QueueEntryStatus.CALLED)
        self.assertIsNone(coerce_status("LOST"))
