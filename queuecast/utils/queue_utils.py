from ..enums import QueueEntryStatus

ACTIVE_STATUSES = frozenset({QueueEntryStatus.WAITING, QueueEntryStatus.CALLED})

COMPLETED_STATUSES = frozenset(
    {QueueEntryStatus.SERVED, QueueEntryStatus.NOSHOW, QueueEntryStatus.CANCELLED}
)


def coerce_status(status):
    """QueueEntryStatus for a raw value, or None when it is not a known status."""
    try:
        return QueueEntryStatus(status)
    except ValueError:
        return None


def is_active_status(status):
    """
    Whether a queue entry in this status is still waiting to be served.
    """
    return coerce_status(status) in ACTIVE_STATUSES


def is_completed_status(status):
    """
    Whether a queue entry in this status has left the queue.
    """
    return coerce_status(status) in COMPLETED_STATUSES


def format_position(position):
    """
    Format a queue position with appropriate suffix (1st, 2nd, 3rd, etc.)

    Zero or negative positions read as "Next".
    """
    if position <= 0:
        return "Next"

    if 10 <= position % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(position % 10, "th")

    return f"{position}{suffix}"

