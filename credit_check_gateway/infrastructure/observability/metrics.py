"""Prometheus metrics for monitoring tier mix, internal decisions and provider performance"""

from typing import Optional

from prometheus_client import Counter, Histogram

# Assessment metrics
assessment_counter = Counter(
    "credit_check_assessment_total",
    "Total credit report assessments",
    ["coarse_tier"],  # HIGH | MEDIUM | LOW
)

decision_status_counter = Counter(
    "credit_check_decision_total",
    "Internal decisions made for MEDIUM tier reports",
    ["status"],  # APPROVED | MANUAL_REVIEW | REJECTED
)

internal_score_histogram = Histogram(
    "credit_check_internal_score",
    "Distribution of clamped internal scores",
    buckets=[10, 20, 30, 40, 55, 70, 80, 90, 100],
)

# Report provider metrics
provider_latency_histogram = Histogram(
    "report_provider_latency_seconds",
    "Report provider response time",
    buckets=[0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 15.0],
)

provider_fetch_failures_counter = Counter(
    "report_provider_failures_total",
    "Failed report provider calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_assessment(coarse_tier: str, status: Optional[str], score: Optional[int]) -> None:
    """Record tier mix and, when present, the internal decision outcome"""
    assessment_counter.labels(coarse_tier=coarse_tier).inc()

    if status is not None:
        decision_status_counter.labels(status=status).inc()
    if score is not None:
        internal_score_histogram.observe(score)
