"""
Queuecast wait-time estimation engine.

This package turns "position N, average service time T" into time-denominated
predictions for people waiting in a walk-in queue: how long they will wait,
when they should leave for the venue, and when to notify them that their turn
is coming up.

The package is organized into the following subpackages:
- geo: Great-circle distance, bearing and travel time calculations
- queueing: Wait time estimation, multi-server scheduling and leave time advice
- notifications: Notification payload builders and fire-time planning
- utils: Duration formatting and queue display helpers
"""

__version__ = "1.0.0"
