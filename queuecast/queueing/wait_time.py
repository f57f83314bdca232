"""
Wait Time Estimation

Turns a queue position and an average service time into a time-denominated
wait estimate.

Features:
1. Position-based wait time with optional random variance
2. Time until a given position is called
3. No-show probability from history and the matching wait adjustment
4. Throughput and staffing estimates for a server pool

All times are in seconds. Degenerate inputs (non-positive service time,
out-of-order positions, empty history) return a safe default instead of
raising.
"""

import logging
import math
import random
from typing import Optional

from ..conf import get_setting, resolve
from ..enums import Confidence
from ..utils.converters import clamp, round_half_up
from ..values import WaitEstimate

logger = logging.getLogger(__name__)

# Positions up to these bounds get a high / medium confidence label
HIGH_CONFIDENCE_MAX_POSITION = 10
MEDIUM_CONFIDENCE_MAX_POSITION = 20

# Number of positions over which no-shows reach most of their effect
NO_SHOW_DECAY_POSITIONS = 10


def _resolve_variance(variance_service_time: Optional[float]) -> float:
    variance = resolve(variance_service_time, "DEFAULT_VARIANCE")

    if get_setting("CLAMP_VARIANCE"):
        clamped = clamp(variance, 0.0, 1.0)
        if clamped != variance:
            logger.debug(f"Clamped service time variance {variance} to {clamped}")
        return clamped

    return variance


def calculate_wait_time(
    position: int,
    average_service_time: float,
    variance_service_time: Optional[float] = None,
    rng: Optional[random.Random] = None,
) -> int:
    """
    Calculate the estimated wait time for a position in the queue.

    Args:
        position: Current position in the queue
        average_service_time: Average service time per party in seconds
        variance_service_time: Fractional spread of the estimate (0 = exact).
            The estimate is multiplied by a factor drawn uniformly from
            [1 - variance, 1 + variance]. Defaults to the DEFAULT_VARIANCE
            setting (0.2).
        rng: Random source with a ``uniform(a, b)`` method. A fresh
            ``random.Random`` is used when omitted.

    Returns:
        Estimated wait time in whole seconds, never negative
    """
    wait_time = position * average_service_time
    variance = _resolve_variance(variance_service_time)

    if variance > 0:
        if rng is None:
            rng = random.Random()
        wait_time *= rng.uniform(1 - variance, 1 + variance)

    return max(0, round_half_up(wait_time))


def estimate_time_until_position(
    current_position: int, target_position: int, average_service_time: float
) -> int:
    """
    Estimate the time until the queue advances from ``current_position`` to
    ``target_position``.

    Returns 0 when either position is non-positive or the target lies behind
    the current position.
    """
    if (
        current_position <= 0
        or target_position <= 0
        or target_position > current_position
    ):
        return 0

    positions_ahead = current_position - target_position
    return round_half_up(positions_ahead * average_service_time)


def calculate_no_show_probability(total_no_shows: int, total_entries: int) -> float:
    """
    Probability that a queued party does not show up, from history.

    Returns a value in [0, 1]; 0 when there is no history.
    """
    if total_entries <= 0:
        return 0.0

    return clamp(total_no_shows / total_entries, 0.0, 1.0)


def adjust_for_no_show_probability(
    estimated_wait_time: float, no_show_probability: float, position: int
):
    """
    Shorten a wait estimate by the parties expected not to show up.

    The further back the position, the more no-shows ahead can be absorbed:
    the estimate is scaled by ``1 - p * (1 - exp(-position / 10))``.

    Returns the estimate unchanged when the probability or the position is
    not positive.
    """
    if no_show_probability <= 0 or position <= 0:
        return estimated_wait_time

    decay = 1 - math.exp(-position / NO_SHOW_DECAY_POSITIONS)
    adjustment_factor = 1 - no_show_probability * decay

    return max(0, round_half_up(estimated_wait_time * adjustment_factor))


def estimate_served_in_time(
    time_period: float, average_service_time: float, num_servers: int = 1
) -> int:
    """
    Estimate how many parties can be served in ``time_period`` seconds.
    """
    if average_service_time <= 0:
        return 0

    return math.floor(time_period * num_servers / average_service_time)


def calculate_optimal_servers(
    queue_length: int, average_service_time: float, target_wait_time: float
) -> int:
    """
    Calculate the number of servers needed to clear the queue within the
    target wait time.

    Always returns at least 1.
    """
    if average_service_time <= 0 or target_wait_time <= 0:
        return 1

    servers = math.ceil(queue_length * average_service_time / target_wait_time)
    return max(1, servers)


def confidence_for_position(position: int) -> Confidence:
    """
    Confidence label of an estimate, from queue depth alone.
    """
    if position > MEDIUM_CONFIDENCE_MAX_POSITION:
        return Confidence.LOW
    if position > HIGH_CONFIDENCE_MAX_POSITION:
        return Confidence.MEDIUM
    return Confidence.HIGH


def estimate_wait(
    position: int,
    average_service_time: float,
    total_no_shows: int = 0,
    total_entries: int = 0,
    variance_service_time: Optional[float] = None,
    uncertainty: Optional[float] = None,
    rng: Optional[random.Random] = None,
) -> WaitEstimate:
    """
    Estimate the wait for a position from the queue's current state and its
    no-show history.

    Args:
        position: Current position in the queue
        average_service_time: Average service time per party in seconds
        total_no_shows: Historical number of no-shows for the queue
        total_entries: Historical number of entries for the queue
        variance_service_time: See ``calculate_wait_time``
        uncertainty: Fractional range reported around the estimate
            (defaults to the PREDICTION_UNCERTAINTY setting)
        rng: Random source for the variance

    Returns:
        WaitEstimate with the adjusted estimate and its min/max range
    """
    uncertainty = resolve(uncertainty, "PREDICTION_UNCERTAINTY")

    raw_wait = calculate_wait_time(
        position, average_service_time, variance_service_time, rng=rng
    )
    no_show_probability = calculate_no_show_probability(total_no_shows, total_entries)
    wait = adjust_for_no_show_probability(raw_wait, no_show_probability, position)

    spread = max(0, round_half_up(wait * uncertainty))

    return WaitEstimate(
        position=position,
        estimated_wait_time=wait,
        min_wait_time=max(0, wait - spread),
        max_wait_time=wait + spread,
        no_show_probability=no_show_probability,
        confidence=confidence_for_position(position),
    )
