"""Tests for request metrics."""

from __future__ import annotations

from pulse_fetch.metrics import ServerMetrics, get_metrics, record_request


class TestServerMetrics:
    """Tests for ServerMetrics."""

    def test_empty(self) -> None:
        data = ServerMetrics().to_dict()

        assert data["requests"] == {"total": 0, "successful": 0, "failed": 0, "success_rate": 0.0}
        assert data["strategies"] == {}
        assert data["recent_requests"] == []

    def test_per_strategy_counters(self) -> None:
        metrics = ServerMetrics()
        metrics.record_request("https://a.example", "native", True, elapsed_ms=10.0)
        metrics.record_request("https://b.example", "native", False, elapsed_ms=30.0, error="HTTP 500: Error")
        metrics.record_request("job-1", "firecrawl", True, operation="crawl_status")

        data = metrics.to_dict()

        assert data["requests"]["total"] == 3
        assert data["requests"]["failed"] == 1
        assert data["strategies"]["native"] == {
            "total": 2,
            "successful": 1,
            "failed": 1,
            "success_rate": 50.0,
            "average_ms": 20.0,
        }
        assert data["strategies"]["firecrawl"]["successful"] == 1
        assert data["recent_requests"][0]["operation"] == "crawl_status"
        assert data["recent_errors"][0]["error"] == "HTTP 500: Error"

    def test_recent_requests_bounded(self) -> None:
        metrics = ServerMetrics()
        for i in range(60):
            metrics.record_request(f"https://example.com/{i}", "native", True)

        assert len(metrics.recent_requests) == 50
        assert len(metrics.to_dict()["recent_requests"]) == 10
        assert metrics.to_dict()["recent_requests"][0]["url"] == "https://example.com/59"

    def test_format_uptime(self) -> None:
        assert ServerMetrics._format_uptime(42) == "42s"
        assert ServerMetrics._format_uptime(125) == "2m 5s"
        assert ServerMetrics._format_uptime(7260) == "2h 1m"
        assert ServerMetrics._format_uptime(90000) == "1d 1h"


def test_global_record_request() -> None:
    record_request("https://example.com", "native", True)

    assert get_metrics().total_requests == 1
