"""
Metrics definitions for the notifier.

This module defines Prometheus metrics for monitoring
the dedup gate.
"""

from prometheus_client import Counter

# 카운터 메트릭
notifications_sent = Counter(
    "notifier_sent_total",
    "Number of notifications delivered to all recipients",
    ["frequency"]
)

notifications_skipped = Counter(
    "notifier_skipped_total",
    "Number of notifications suppressed by the dedup record",
    ["frequency"]
)

delivery_failures = Counter(
    "notifier_delivery_failures_total",
    "Number of notifications aborted by a transport error"
)

store_errors = Counter(
    "notifier_store_errors_total",
    "Record store load/save failures",
    ["operation"]
)
