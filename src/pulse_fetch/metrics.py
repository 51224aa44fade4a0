"""Metrics tracking for scrape and crawl operations."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class RequestMetrics:
    """Metrics for a single operation."""

    url: str
    strategy: str
    operation: str
    timestamp: datetime
    success: bool
    elapsed_ms: float | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "strategy": self.strategy,
            "operation": self.operation,
            "timestamp": self.timestamp.isoformat(),
            "success": self.success,
            "elapsed_ms": self.elapsed_ms,
            "error": self.error,
        }


@dataclass
class StrategyStats:
    """Aggregate counters for one strategy."""

    total: int = 0
    successful: int = 0
    failed: int = 0
    total_elapsed_ms: float = 0.0

    def success_rate(self) -> float:
        if self.total == 0:
            return 0.0
        return (self.successful / self.total) * 100

    def average_ms(self) -> float:
        if self.total == 0:
            return 0.0
        return self.total_elapsed_ms / self.total


@dataclass
class ServerMetrics:
    """Global server metrics."""

    start_time: datetime = field(default_factory=datetime.now)
    total_requests: int = 0
    successful_requests: int = 0
    failed_requests: int = 0
    strategies: dict[str, StrategyStats] = field(default_factory=dict)
    recent_requests: deque[RequestMetrics] = field(default_factory=lambda: deque(maxlen=50))
    recent_errors: deque[RequestMetrics] = field(default_factory=lambda: deque(maxlen=20))

    def record_request(
        self,
        url: str,
        strategy: str,
        success: bool,
        operation: str = "scrape",
        elapsed_ms: float | None = None,
        error: str | None = None,
    ) -> None:
        """Record an operation in the metrics.

        Args:
            url: The URL or crawl id the operation targeted
            strategy: Backend strategy that handled it
            success: Whether the operation was successful
            operation: scrape, map, crawl_start, crawl_status or crawl_cancel
            elapsed_ms: Time taken in milliseconds
            error: Error message if failed
        """
        self.total_requests += 1
        if success:
            self.successful_requests += 1
        else:
            self.failed_requests += 1

        stats = self.strategies.setdefault(strategy, StrategyStats())
        stats.total += 1
        if success:
            stats.successful += 1
        else:
            stats.failed += 1
        if elapsed_ms is not None:
            stats.total_elapsed_ms += elapsed_ms

        metrics = RequestMetrics(
            url=url,
            strategy=strategy,
            operation=operation,
            timestamp=datetime.now(),
            success=success,
            elapsed_ms=elapsed_ms,
            error=error,
        )
        self.recent_requests.append(metrics)
        if not success:
            self.recent_errors.append(metrics)

    def get_uptime_seconds(self) -> float:
        """Get server uptime in seconds."""
        return (datetime.now() - self.start_time).total_seconds()

    def get_success_rate(self) -> float:
        """Get success rate as percentage."""
        if self.total_requests == 0:
            return 0.0
        return (self.successful_requests / self.total_requests) * 100

    def to_dict(self) -> dict[str, Any]:
        """Convert metrics to dictionary for JSON serialization."""
        uptime_seconds = self.get_uptime_seconds()

        return {
            "status": "healthy",
            "uptime": {
                "seconds": uptime_seconds,
                "formatted": self._format_uptime(uptime_seconds),
            },
            "start_time": self.start_time.isoformat(),
            "requests": {
                "total": self.total_requests,
                "successful": self.successful_requests,
                "failed": self.failed_requests,
                "success_rate": round(self.get_success_rate(), 2),
            },
            "strategies": {
                name: {
                    "total": stats.total,
                    "successful": stats.successful,
                    "failed": stats.failed,
                    "success_rate": round(stats.success_rate(), 2),
                    "average_ms": round(stats.average_ms(), 2),
                }
                for name, stats in self.strategies.items()
            },
            # Last 10, newest first
            "recent_requests": [r.to_dict() for r in list(self.recent_requests)[-10:][::-1]],
            "recent_errors": [r.to_dict() for r in list(self.recent_errors)[-10:][::-1]],
        }

    @staticmethod
    def _format_uptime(seconds: float) -> str:
        """Format uptime in human-readable format."""
        if seconds < 60:
            return f"{int(seconds)}s"
        elif seconds < 3600:
            return f"{int(seconds / 60)}m {int(seconds % 60)}s"
        elif seconds < 86400:
            return f"{int(seconds / 3600)}h {int((seconds % 3600) / 60)}m"
        else:
            return f"{int(seconds / 86400)}d {int((seconds % 86400) / 3600)}h"


# Global metrics instance
_metrics = ServerMetrics()


def get_metrics() -> ServerMetrics:
    """Get the global metrics instance."""
    return _metrics


def record_request(
    url: str,
    strategy: str,
    success: bool,
    operation: str = "scrape",
    elapsed_ms: float | None = None,
    error: str | None = None,
) -> None:
    """Record an operation in the global metrics."""
    _metrics.record_request(url, strategy, success, operation, elapsed_ms, error)


def reset_metrics() -> None:
    """Replace the global metrics with a fresh instance."""
    global _metrics
    _metrics = ServerMetrics()
