from django.test import SimpleTestCase, override_settings

from queuecast.conf import DEFAULTS, get_setting, resolve
from queuecast.exceptions import (
    InvalidArgumentError,
    QueuecastError,
    UnsupportedDistanceUnitError,
)


class SettingsTest(SimpleTestCase):
    def test_defaults(self):
        self.assertEqual(get_setting("MIN_BUFFER_TIME"), 300)
        self.assertEqual(get_setting("DEFAULT_TRAVEL_MODE"), "driving")
        self.assertFalse(get_setting("CLAMP_VARIANCE"))

    @override_settings(QUEUECAST={"MIN_BUFFER_TIME": 600})
    def test_override_only_named_keys(self):
        self.assertEqual(get_setting("MIN_BUFFER_TIME"), 600)
        self.assertEqual(get_setting("MAX_BUFFER_TIME"), DEFAULTS["MAX_BUFFER_TIME"])

    @override_settings(QUEUECAST=None)
    def test_missing_settings_dict(self):
        self.assertEqual(get_setting("NOTIFICATION_OFFSET"), 300)

    def test_unknown_setting(self):
        with self.assertRaises(KeyError):
            get_setting("NOT_A_SETTING")

    @override_settings(QUEUECAST={"BUFFER_FRACTION": 0.5})
    def test_explicit_value_wins(self):
        self.assertEqual(resolve(0.1, "BUFFER_FRACTION"), 0.1)
        self.assertEqual(resolve(None, "BUFFER_FRACTION"), 0.5)


class ExceptionTest(SimpleTestCase):
    def test_base_error(self):
        error = QueuecastError()

        self.assertEqual(str(error), "An error occurred")
        self.assertEqual(error.status_code, 500)
        self.assertEqual(
            error.to_dict(),
            {
                "message": "An error occurred",
                "status_code": 500,
                "code": "QueuecastError",
            },
        )

    def test_invalid_argument_is_value_error(self):
        error = InvalidArgumentError("bad")

        self.assertIsInstance(error, ValueError)
        self.assertEqual(error.status_code, 400)

    def test_unsupported_unit_details(self):
        error = UnsupportedDistanceUnitError("furlong")

        self.assertEqual(str(error), "Unsupported distance unit: furlong")
        self.assertEqual(
            error.to_dict(),
            {
                "message": "Unsupported distance unit: furlong",
                "status_code": 400,
                "code": "UnsupportedDistanceUnitError",
                "detail": {"unit": "furlong"},
            },
        )
