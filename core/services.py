"""
Core Services - shared result type for the service layer.

Services encapsulate business logic between views/serializers and models.
They raise the exceptions in ``core.exceptions`` for failures and return a
``ServiceResult`` on success. Side effects produced by an operation are
returned on ``ServiceResult.events`` so callers can inspect what was
queued for delivery.
"""

from dataclasses import dataclass, field
from typing import Any, List


@dataclass
class ServiceResult:
    """Base result class for service operations."""
    success: bool
    message: str = ''
    data: Any = None
    events: List[Any] = field(default_factory=list)
