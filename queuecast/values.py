"""
Immutable value objects produced by the estimation engine.

Nothing here has identity or a lifecycle beyond the call that creates it;
persistence of queue entries and venues belongs to the host application.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Union

from .enums import Confidence, NotificationPriority, NotificationType


def _to_primitive(value: Any) -> Any:
    """Render enums and datetimes as JSON-ready values."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: _to_primitive(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_primitive(item) for item in value]
    return value


@dataclass(frozen=True)
class Coordinates:
    """A point on the sphere, in decimal degrees."""

    lat: float
    lng: float

    def as_tuple(self):
        return (self.lat, self.lng)


@dataclass(frozen=True)
class BoundingBox:
    """
    Rectangular lat/lng approximation of a circular search area.

    When the area crosses the antimeridian the box wraps and ``min_lng`` is
    greater than ``max_lng``.
    """

    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float

    @property
    def wraps_antimeridian(self) -> bool:
        return self.min_lng > self.max_lng

    def contains(self, point: Coordinates) -> bool:
        if not self.min_lat <= point.lat <= self.max_lat:
            return False
        if self.wraps_antimeridian:
            return point.lng >= self.min_lng or point.lng <= self.max_lng
        return self.min_lng <= point.lng <= self.max_lng


@dataclass(frozen=True)
class CompletionAssignment:
    """Projected service interval of one queue item, in seconds from now."""

    item: Any
    start_time: float
    end_time: float


@dataclass(frozen=True)
class WaitEstimate:
    """Wait estimate for one position, with its uncertainty range."""

    position: int
    estimated_wait_time: int
    min_wait_time: int
    max_wait_time: int
    no_show_probability: float
    confidence: Confidence

    def to_dict(self) -> Dict[str, Any]:
        return {
            "position": self.position,
            "estimated_wait_time": self.estimated_wait_time,
            "min_wait_time": self.min_wait_time,
            "max_wait_time": self.max_wait_time,
            "no_show_probability": self.no_show_probability,
            "confidence": self.confidence.value,
        }


@dataclass(frozen=True)
class LeaveTimeRecommendation:
    """When a customer should set off for the venue."""

    position: int
    estimated_wait_time: int
    travel_time: float
    buffer_time: int
    recommended_leave_in_seconds: float
    leave_at: datetime
    confidence: Confidence

    @property
    def should_leave_now(self) -> bool:
        return self.recommended_leave_in_seconds <= 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "position": self.position,
            "estimated_wait_time": self.estimated_wait_time,
            "travel_time": self.travel_time,
            "buffer_time": self.buffer_time,
            "recommended_leave_in_seconds": self.recommended_leave_in_seconds,
            "leave_at": self.leave_at.isoformat(),
            "confidence": self.confidence.value,
            "should_leave_now": self.should_leave_now,
        }


@dataclass(frozen=True)
class NotificationPayload:
    """Notification content handed to the delivery transport."""

    type: NotificationType
    title: str
    message: str
    data: Dict[str, Any] = field(default_factory=dict)
    priority: NotificationPriority = NotificationPriority.DEFAULT
    ttl: Optional[int] = None
    sound: Optional[Union[str, bool]] = None
    badge: Optional[int] = None
    channel_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload = {
            "type": self.type.value,
            "title": self.title,
            "message": self.message,
            "data": _to_primitive(self.data),
            "priority": self.priority.value,
        }

        # Optional delivery hints are only sent when set
        for key in ("ttl", "sound", "badge", "channel_id"):
            value = getattr(self, key)
            if value is not None:
                payload[key] = value

        return payload


@dataclass(frozen=True)
class ScheduledNotification:
    """A notification payload together with the moment it should fire."""

    fire_in_seconds: float
    fire_at: datetime
    payload: NotificationPayload

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fire_in_seconds": self.fire_in_seconds,
            "fire_at": self.fire_at.isoformat(),
            "payload": self.payload.to_dict(),
        }
