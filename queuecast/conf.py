"""
Settings for the Queuecast engine.

Projects override the defaults with a ``QUEUECAST`` dict in their Django
settings, for example::

    QUEUECAST = {
        "MIN_BUFFER_TIME": 10 * 60,
        "DEFAULT_TRAVEL_MODE": "walking",
    }

Explicit keyword arguments passed to an operation always win over settings.
"""

from django.conf import settings

DEFAULTS = {
    # Fractional spread applied to a wait estimate (0.2 = +/- 20%)
    "DEFAULT_VARIANCE": 0.2,
    # Clamp the variance fraction into [0, 1] before applying it
    "CLAMP_VARIANCE": False,
    # Leave time buffer as a fraction of the wait, bounded in seconds
    "BUFFER_FRACTION": 0.2,
    "MIN_BUFFER_TIME": 5 * 60,
    "MAX_BUFFER_TIME": 30 * 60,
    # Seconds added on top of travel time before the turn-soon notification
    "NOTIFICATION_OFFSET": 5 * 60,
    # +/- range reported around a wait estimate
    "PREDICTION_UNCERTAINTY": 0.2,
    # Travel time estimation
    "DEFAULT_TRAVEL_MODE": "driving",
    "APPLY_TRAFFIC": True,
}


def get_setting(name):
    """
    Return a Queuecast setting, falling back to the packaged default.

    Raises KeyError for names that are not Queuecast settings.
    """
    default = DEFAULTS[name]

    if not settings.configured:
        return default

    overrides = getattr(settings, "QUEUECAST", None) or {}
    return overrides.get(name, default)


def resolve(value, name):
    """Return ``value`` unless it is None, in which case read setting ``name``."""
    if value is None:
        return get_setting(name)
    return value
