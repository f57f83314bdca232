"""
Queuecast Enumerations

This module defines the closed enumerations used across the estimation
engine so that priority ordering, confidence thresholds and unit handling
stay exhaustive.
"""

from enum import Enum


class NotificationType(str, Enum):
    """Queue lifecycle events that produce a notification"""

    QUEUE_UPDATE = "QUEUE_UPDATE"
    POSITION_CHANGED = "POSITION_CHANGED"
    YOUR_TURN_SOON = "YOUR_TURN_SOON"
    YOUR_TURN_NOW = "YOUR_TURN_NOW"
    QUEUE_PAUSED = "QUEUE_PAUSED"
    QUEUE_RESUMED = "QUEUE_RESUMED"
    QUEUE_CLOSED = "QUEUE_CLOSED"
    APPOINTMENT_REMINDER = "APPOINTMENT_REMINDER"
    CUSTOM_MESSAGE = "CUSTOM_MESSAGE"


class NotificationPriority(str, Enum):
    """Delivery priority of a notification"""

    MAX = "max"
    HIGH = "high"
    DEFAULT = "default"


class Confidence(str, Enum):
    """Coarse reliability of a wait estimate"""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class QueueEntryStatus(str, Enum):
    """Status of a single party in a queue"""

    WAITING = "WAITING"
    CALLED = "CALLED"
    SERVED = "SERVED"
    NOSHOW = "NOSHOW"
    CANCELLED = "CANCELLED"


class QueueState(str, Enum):
    """Queue-level status changes that customers are told about"""

    PAUSED = "PAUSED"
    RESUMED = "RESUMED"
    CLOSED = "CLOSED"


class DistanceUnit(str, Enum):
    KILOMETERS = "km"
    METERS = "m"
    MILES = "mi"
    FEET = "ft"


class TimeUnit(str, Enum):
    MILLISECONDS = "milliseconds"
    SECONDS = "seconds"
    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"
    WEEKS = "weeks"


class CalendarPeriod(str, Enum):
    YEAR = "year"
    MONTH = "month"
    WEEK = "week"
    DAY = "day"
    HOUR = "hour"
    MINUTE = "minute"
    SECOND = "second"


class TravelMode(str, Enum):
    """How the customer gets to the venue"""

    WALKING = "walking"
    CYCLING = "cycling"
    DRIVING = "driving"
    TRANSIT = "transit"
