"""
Multi-server completion scheduling.

Projects when each party in a queue starts and finishes service when a pool
of servers works through the queue, by handing every party to the server
that frees up first. This is a greedy assignment: deterministic and cheap,
but not an optimal makespan.
"""

import heapq
import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Sequence, Union

from ..values import CompletionAssignment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Unordered:
    """Queue items served in the order given."""

    items: Sequence[Any]


@dataclass(frozen=True)
class ByPosition:
    """
    Queue items carrying a ``position``; served in ascending position order.

    The sort is stable, and items without a position go last.
    """

    items: Sequence[Any]


QueueData = Union[Unordered, ByPosition, Sequence[Any]]


def _field(item: Any, name: str, default: Any = None) -> Any:
    if isinstance(item, Mapping):
        return item.get(name, default)
    return getattr(item, name, default)


def _position_key(item: Any):
    position = _field(item, "position")
    if position is None:
        return (1, 0)
    return (0, position)


def order_items(queue: QueueData) -> List[Any]:
    """
    Return queue items in service order.

    A plain sequence is treated as ``Unordered``.
    """
    if isinstance(queue, ByPosition):
        return sorted(queue.items, key=_position_key)
    if isinstance(queue, Unordered):
        return list(queue.items)
    return list(queue)


def calculate_completion_times(
    queue: QueueData, num_servers: int = 1
) -> List[CompletionAssignment]:
    """
    Calculate the projected service interval of every item in a queue.

    Each server keeps the time at which it next becomes free, starting at 0.
    Items are taken in service order and given to the server that frees up
    first (lowest server index on ties).

    Args:
        queue: ``Unordered`` or ``ByPosition`` items; each item exposes a
            ``service_time`` in seconds, as an attribute or a mapping key
        num_servers: Size of the server pool; values below 1 count as 1

    Returns:
        One CompletionAssignment per item, in service order
    """
    items = order_items(queue)
    if not items:
        return []

    server_count = int(num_servers)
    if server_count < 1:
        logger.debug(f"Treating server pool of {num_servers} as a single server")
        server_count = 1

    # (next free time, server index) so ties go to the lowest index.
    # Servers beyond one per item would never be picked.
    servers = [(0, index) for index in range(min(server_count, len(items)))]
    heapq.heapify(servers)

    assignments = []
    for item in items:
        start_time, server_index = heapq.heappop(servers)
        end_time = start_time + _field(item, "service_time")
        heapq.heappush(servers, (end_time, server_index))

        assignments.append(
            CompletionAssignment(item=item, start_time=start_time, end_time=end_time)
        )

    return assignments
