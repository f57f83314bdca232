"""
Queueing calculations.

Key components:
- wait_time: Position-based wait estimates and no-show adjustment
- scheduler: Multi-server completion time projection
- leave_time: Recommended departure time for a queued customer
"""

from .leave_time import (
    calculate_buffer_time,
    calculate_leave_time_from_locations,
    calculate_recommended_leave_time,
)
from .scheduler import ByPosition, Unordered, calculate_completion_times
from .wait_time import (
    adjust_for_no_show_probability,
    calculate_no_show_probability,
    calculate_optimal_servers,
    calculate_wait_time,
    confidence_for_position,
    estimate_served_in_time,
    estimate_time_until_position,
    estimate_wait,
)

__all__ = [
    "calculate_buffer_time",
    "calculate_leave_time_from_locations",
    "calculate_recommended_leave_time",
    "ByPosition",
    "Unordered",
    "calculate_completion_times",
    "adjust_for_no_show_probability",
    "calculate_no_show_probability",
    "calculate_optimal_servers",
    "calculate_wait_time",
    "confidence_for_position",
    "estimate_served_in_time",
    "estimate_time_until_position",
    "estimate_wait",
]
