"""Metrics collection for the transport layer."""

from dataclasses import dataclass, field
from typing import ClassVar


@dataclass
class RequestMetrics:
    """Metrics for API requests.

    Singleton class that tracks request counts per endpoint and status,
    failures per error kind, pages fetched and time spent.
    """

    requests_total: dict[str, int] = field(default_factory=dict)
    responses_total: dict[int, int] = field(default_factory=dict)
    failures_total: dict[str, int] = field(default_factory=dict)
    pages_total: int = 0
    duration_ms_total: float = 0.0
    request_count: int = 0

    _instance: ClassVar["RequestMetrics | None"] = None

    @classmethod
    def get_instance(cls) -> "RequestMetrics":
        """Get singleton metrics instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset metrics (primarily for testing)."""
        cls._instance = None

    def record_request(
        self, endpoint: str, status_code: int, duration_ms: float
    ) -> None:
        """Record a request that received a response.

        Args:
            endpoint: Logical endpoint name.
            status_code: HTTP status code.
            duration_ms: Round trip in milliseconds.
        """
        self.requests_total[endpoint] = self.requests_total.get(endpoint, 0) + 1
        self.responses_total[status_code] = self.responses_total.get(status_code, 0) + 1
        self.duration_ms_total += duration_ms
        self.request_count += 1

    def record_failure(self, error_kind: str) -> None:
        """Record a failed request.

        Args:
            error_kind: Error class name, e.g. ``ForbiddenError``.
        """
        self.failures_total[error_kind] = self.failures_total.get(error_kind, 0) + 1

    def record_page(self) -> None:
        """Record a search page fetched by a pager."""
        self.pages_total += 1

    def to_dict(self) -> dict[str, int | float | dict[str, int] | dict[int, int]]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        return {
            "requests_total": dict(self.requests_total),
            "responses_total": dict(self.responses_total),
            "failures_total": dict(self.failures_total),
            "pages_total": self.pages_total,
            "duration_ms_total": self.duration_ms_total,
            "request_count": self.request_count,
        }

    @property
    def avg_duration_ms(self) -> float:
        """Average request duration in milliseconds."""
        if self.request_count == 0:
            return 0.0
        return self.duration_ms_total / self.request_count
