"""
Error handling utilities for the Game Deals engine.

Failures in the catalog, exchange-rate and storefront lookups are recorded
here and then either re-raised or replaced by a fallback value. Nothing in
this module retries: the callers already have cached, static or sample
data to fall back on.
"""

import asyncio
import functools
import traceback
from collections import Counter, deque
from dataclasses import asdict, dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Callable, Deque, Dict, List, Optional

from .logging import get_logger


class CatalogError(Exception):
    """Raised when the deal catalog cannot be fetched or decoded."""

    def __init__(self, message: str, status: Optional[int] = None, url: Optional[str] = None):
        super().__init__(message)
        self.status = status
        self.url = url


class ErrorSeverity(Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Where a failure came from."""

    NETWORK = "network"
    CONFIGURATION = "configuration"
    PARSING = "parsing"
    CACHE = "cache"
    DATA_VALIDATION = "data_validation"
    EXTERNAL_SERVICE = "external_service"
    SYSTEM = "system"


@dataclass
class ErrorInfo:
    """One recorded failure."""

    timestamp: datetime
    component: str
    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    exception_type: str
    traceback: str
    context: Dict[str, Any]

    @property
    def key(self) -> str:
        """Counter key, ``component.category.severity``."""
        return f"{self.component}.{self.category.value}.{self.severity.value}"


def _format_traceback(exception: Optional[BaseException]) -> str:
    if exception is None:
        return ""
    return "".join(
        traceback.format_exception(type(exception), exception, exception.__traceback__)
    )


class ErrorTracker:
    """Bounded in-memory history of failures with per-key counters."""

    def __init__(self, max_errors: int = 1000):
        """
        Initialize the tracker.

        Args:
            max_errors: How many recent errors to keep; counters are unbounded
        """
        self.max_errors = max_errors
        self.errors: Deque[ErrorInfo] = deque(maxlen=max_errors)
        self.error_counts: Counter = Counter()
        self.logger = get_logger("error_tracker")

    def record_error(
        self,
        component: str,
        category: ErrorCategory,
        severity: ErrorSeverity,
        message: str,
        exception: Optional[Exception] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> ErrorInfo:
        """
        Record a failure and log it.

        Args:
            component: Logger-style component name, e.g. ``fx.service``
            category: Error category
            severity: Error severity
            message: Human-readable summary
            exception: The exception, when there is one
            context: Extra fields such as the page number or URL

        Returns:
            The stored ErrorInfo
        """
        error_info = ErrorInfo(
            timestamp=datetime.now(),
            component=component,
            category=category,
            severity=severity,
            message=message,
            exception_type=type(exception).__name__ if exception else "Unknown",
            traceback=_format_traceback(exception),
            context=context or {},
        )

        self.errors.append(error_info)
        self.error_counts[error_info.key] += 1

        self.logger.warning(
            f"Error recorded: {message}",
            extra={
                "component": component,
                "category": category.value,
                "severity": severity.value,
                "exception_type": error_info.exception_type,
                "context": error_info.context,
            },
        )
        return error_info

    def get_error_stats(self) -> Dict[str, Any]:
        """Totals, last-hour count and breakdowns by category and component."""
        last_hour = datetime.now() - timedelta(hours=1)
        by_category = Counter(e.category.value for e in self.errors)

        return {
            "total_errors": len(self.errors),
            "errors_last_hour": sum(1 for e in self.errors if e.timestamp >= last_hour),
            "error_counts": dict(self.error_counts),
            "category_breakdown": {
                category.value: by_category.get(category.value, 0)
                for category in ErrorCategory
            },
            "component_breakdown": dict(Counter(e.component for e in self.errors)),
        }

    def get_component_errors(self, component: str, limit: int = 10) -> List[ErrorInfo]:
        """Most recent errors for one component, oldest first."""
        return [e for e in self.errors if e.component == component][-limit:]


_error_tracker: Optional[ErrorTracker] = None


def get_error_tracker() -> ErrorTracker:
    """Process-wide error tracker."""
    global _error_tracker
    if _error_tracker is None:
        _error_tracker = ErrorTracker()
    return _error_tracker


def with_error_handling(
    component: str,
    category: ErrorCategory,
    severity: ErrorSeverity = ErrorSeverity.MEDIUM,
    fallback_value: Any = None,
    suppress_exceptions: bool = False,
):
    """
    Record failures of the wrapped function, sync or async.

    With ``suppress_exceptions`` the failure is logged and ``fallback_value``
    is returned; otherwise the original exception propagates after being
    recorded.

    Args:
        component: Component name used for tracking and logging
        category: Error category
        severity: Error severity
        fallback_value: Returned instead of raising when suppressing
        suppress_exceptions: Whether to swallow the exception
    """

    def decorator(func: Callable) -> Callable:
        def on_failure(error: Exception) -> Any:
            get_error_tracker().record_error(
                component=component,
                category=category,
                severity=severity,
                message=f"{func.__name__} failed: {error}",
                exception=error,
                context={"function": func.__qualname__},
            )
            if not suppress_exceptions:
                raise error
            get_logger(component).warning(
                f"Using fallback for {func.__name__}",
                extra={"error": str(error), "fallback": fallback_value},
            )
            return fallback_value

        if asyncio.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs):
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    return on_failure(e)

            return async_wrapper

        @functools.wraps(func)
        def sync_wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                return on_failure(e)

        return sync_wrapper

    return decorator


@dataclass
class DegradationState:
    """Why a component is serving fallback data."""

    reason: str
    fallback_behavior: str
    severity: str
    since: str = field(default_factory=lambda: datetime.now().isoformat())


class GracefulDegradation:
    """Tracks which components are currently serving fallback data."""

    def __init__(self):
        self.degraded_components: Dict[str, DegradationState] = {}
        self.logger = get_logger("graceful_degradation")

    def degrade_component(
        self,
        component: str,
        reason: str,
        fallback_behavior: str,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
    ) -> None:
        """
        Mark a component as degraded.

        Repeated calls keep the original ``since`` timestamp and only log
        the first transition.
        """
        existing = self.degraded_components.get(component)
        state = DegradationState(
            reason=reason,
            fallback_behavior=fallback_behavior,
            severity=severity.value,
        )
        if existing is not None:
            state.since = existing.since
        self.degraded_components[component] = state

        if existing is None:
            self.logger.warning(
                f"Component degraded: {component}",
                extra={"component": component, **asdict(state)},
            )

    def restore_component(self, component: str) -> None:
        """Clear the degraded mark, if any."""
        if self.degraded_components.pop(component, None) is not None:
            self.logger.info(f"Component restored: {component}")

    def is_degraded(self, component: str) -> bool:
        return component in self.degraded_components

    def get_all_degraded(self) -> Dict[str, Dict[str, Any]]:
        """Snapshot of degraded components as plain dicts."""
        return {name: asdict(state) for name, state in self.degraded_components.items()}


_degradation_manager: Optional[GracefulDegradation] = None


def get_degradation_manager() -> GracefulDegradation:
    """Process-wide degradation manager."""
    global _degradation_manager
    if _degradation_manager is None:
        _degradation_manager = GracefulDegradation()
    return _degradation_manager
