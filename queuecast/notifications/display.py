"""
Display helpers for queue statuses and notification lists.
"""

import logging
from collections import defaultdict
from datetime import timezone as dt_timezone
from typing import Dict, Iterable, List

from ..enums import NotificationPriority, NotificationType, QueueEntryStatus
from ..exceptions import InvalidArgumentError
from ..utils.queue_utils import coerce_status
from ..utils.time_utils import to_datetime
from ..values import NotificationPayload

logger = logging.getLogger(__name__)

STATUS_DISPLAY_TEXT = {
    QueueEntryStatus.WAITING: "Waiting",
    QueueEntryStatus.CALLED: "Called",
    QueueEntryStatus.SERVED: "Served",
    QueueEntryStatus.NOSHOW: "No Show",
    QueueEntryStatus.CANCELLED: "Cancelled",
}

STATUS_COLORS = {
    QueueEntryStatus.WAITING: "#3498db",  # Blue
    QueueEntryStatus.CALLED: "#f39c12",  # Orange
    QueueEntryStatus.SERVED: "#2ecc71",  # Green
    QueueEntryStatus.NOSHOW: "#e74c3c",  # Red
    QueueEntryStatus.CANCELLED: "#95a5a6",  # Gray
}

DEFAULT_STATUS_COLOR = "#7f8c8d"  # Dark gray

# Lower sorts first
PRIORITY_ORDER = {
    NotificationPriority.MAX: 0,
    NotificationPriority.HIGH: 1,
    NotificationPriority.DEFAULT: 2,
}


def get_status_display_text(status) -> str:
    """Human-readable label of a queue entry status; unknown values pass through."""
    known = coerce_status(status)
    if known is None:
        return str(status)
    return STATUS_DISPLAY_TEXT[known]


def get_status_color(status) -> str:
    """Hex color used to render a queue entry status."""
    return STATUS_COLORS.get(coerce_status(status), DEFAULT_STATUS_COLOR)


def group_notifications(
    notifications: Iterable[NotificationPayload],
) -> Dict[NotificationType, List[NotificationPayload]]:
    """Group notifications by type, keeping their order within each group."""
    groups = defaultdict(list)

    for notification in notifications:
        groups[notification.type].append(notification)

    return dict(groups)


def _embedded_timestamp(notification: NotificationPayload) -> float:
    value = notification.data.get("timestamp")
    if value is None:
        return 0.0

    try:
        moment = to_datetime(value)
    except InvalidArgumentError:
        logger.debug(f"Unreadable notification timestamp {value!r}, sorting as oldest")
        return 0.0

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=dt_timezone.utc)
    return moment.timestamp()


def sort_notifications(
    notifications: Iterable[NotificationPayload],
) -> List[NotificationPayload]:
    """
    Sort notifications by priority (max, high, default), then newest first.

    Notifications without a timestamp count as the oldest. The sort is
    stable.
    """
    return sorted(
        notifications,
        key=lambda n: (PRIORITY_ORDER[n.priority], -_embedded_timestamp(n)),
    )
