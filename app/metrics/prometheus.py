# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Prometheus metrics: single source of truth for all metric objects.
Imported by services and middleware. Never instantiated in controllers.
"""

from prometheus_client import Counter, Histogram

# ── HTTP Metrics (used by middleware) ──
REQUEST_COUNT = Counter(
    "portal_requests_total",
    "Total HTTP requests to the developer portal",
    ["method", "endpoint", "status"],
)
REQUEST_LATENCY = Histogram(
    "portal_request_duration_seconds",
    "Request latency in seconds",
    ["method", "endpoint"],
)
HTTP_ERRORS = Counter(
    "portal_http_errors_total",
    "Total HTTP error responses",
    ["method", "endpoint", "status"],
)

# ── Business Metrics (updated by service layer only) ──
ASSIGNMENTS_CREATED = Counter(
    "portal_assignments_created_total",
    "Outage call assignments created",
    ["role"],
)
ASSIGNMENTS_REMOVED = Counter(
    "portal_assignments_removed_total",
    "Outage call assignments removed",
)
ASSIGNMENT_UPDATES = Counter(
    "portal_assignment_updates_total",
    "In-place assignment updates",
    ["field"],
)
BULK_ITEM_FAILURES = Counter(
    "portal_bulk_item_failures_total",
    "Per-item failures inside bulk assignment operations",
    ["operation", "error"],
)
METADATA_MERGES = Counter(
    "portal_metadata_merges_total",
    "Metadata partial merges applied",
    ["entity"],
)
OUTAGE_CALLS_CREATED = Counter(
    "portal_outage_calls_created_total",
    "Outage calls created",
    ["severity"],
)
