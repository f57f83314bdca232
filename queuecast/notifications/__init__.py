"""
Queue notifications.

Key components:
- payloads: Title, message and priority for each queue lifecycle event
- timing: When the turn-soon notification should fire
- display: Status labels and colors, grouping and sorting of notifications
"""

from .display import (
    get_status_color,
    get_status_display_text,
    group_notifications,
    sort_notifications,
)
from .payloads import (
    create_appointment_reminder,
    create_custom_notification,
    create_position_update_notification,
    create_queue_status_notification,
    create_your_turn_now_notification,
    create_your_turn_soon_notification,
)
from .timing import calculate_notification_time, plan_turn_soon_notification

__all__ = [
    "get_status_color",
    "get_status_display_text",
    "group_notifications",
    "sort_notifications",
    "create_appointment_reminder",
    "create_custom_notification",
    "create_position_update_notification",
    "create_queue_status_notification",
    "create_your_turn_now_notification",
    "create_your_turn_soon_notification",
    "calculate_notification_time",
    "plan_turn_soon_notification",
]
