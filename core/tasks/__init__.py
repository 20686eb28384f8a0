"""
Core Tasks Module for FreelanceHub

This module provides reusable task implementations for:
- Outbox delivery (per-event dispatch, periodic sweep)
"""

from core.tasks.outbox_tasks import (
    dispatch_outbox_event,
    dispatch_pending_events,
)

__all__ = [
    'dispatch_outbox_event',
    'dispatch_pending_events',
]
