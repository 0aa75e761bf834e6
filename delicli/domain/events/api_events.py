"""Domain Events related to API requests and resilience.

Examples include events for when requests are deferred by the throttle,
retried after an empty response, fail, or succeed.
"""

from dataclasses import dataclass, field
import time
from typing import Optional


@dataclass
class DomainEvent:
    """Base class for domain events."""
    pass


# --- Specific API Events ---

@dataclass
class RequestInitiated(DomainEvent):
    """Event triggered when a request is about to be sent."""
    url: str
    attempt_number: int
    timestamp: float = field(default_factory=time.time)


@dataclass
class RequestSucceeded(DomainEvent):
    """Event triggered when a non-empty body has been received."""
    url: str
    attempt_number: int
    latency_ms: float
    status_code: Optional[int] = None
    timestamp: float = field(default_factory=time.time)


@dataclass
class RequestFailed(DomainEvent):
    """Event triggered when a request fails definitively (throttled or retries exhausted)."""
    url: str
    error_type: str
    error_message: str
    status_code: Optional[int] = None
    timestamp: float = field(default_factory=time.time)


@dataclass
class RequestDeferred(DomainEvent):
    """Event triggered when a request is held back to respect the minimum spacing."""
    url: str
    wait_time_seconds: float
    timestamp: float = field(default_factory=time.time)


@dataclass
class RetryScheduled(DomainEvent):
    """Event triggered when an empty response is going to be retried."""
    url: str
    attempt_number: int
    status_code: Optional[int] = None
    timestamp: float = field(default_factory=time.time)
