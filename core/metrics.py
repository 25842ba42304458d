"""
Prometheus metrics for the MacMan service.

HTTP metrics are recorded by MetricsMiddleware; business counters are
incremented by MetricsEventHandler from published domain events.
"""

from prometheus_client import Counter, Histogram

# HTTP metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
)

# License metrics
licenses_created_total = Counter(
    "macman_licenses_created_total",
    "Total licenses created",
    ["plan"],
)

licenses_deactivated_total = Counter(
    "macman_licenses_deactivated_total",
    "Total licenses deactivated",
)

license_validations_total = Counter(
    "macman_license_validations_total",
    "License validations by outcome",
    ["outcome"],
)

devices_activated_total = Counter(
    "macman_devices_activated_total",
    "Device slots claimed",
)

devices_deactivated_total = Counter(
    "macman_devices_deactivated_total",
    "Device slots released",
)

# Update metrics
releases_created_total = Counter(
    "macman_releases_created_total",
    "Releases published",
    ["release_type"],
)

update_checks_total = Counter(
    "macman_update_checks_total",
    "Update checks by result",
    ["update_available"],
)

update_downloads_total = Counter(
    "macman_update_downloads_total",
    "Update artifact downloads",
)

update_history_closed_total = Counter(
    "macman_update_history_closed_total",
    "Update history rows closed by status",
    ["status"],
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)
