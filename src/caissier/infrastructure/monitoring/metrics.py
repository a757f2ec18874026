"""
Prometheus metrics collection.
"""

from prometheus_client import Counter, Histogram

# ============================================================
# HTTP Metrics
# ============================================================

http_requests_total = Counter(
    "caissier_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)

http_request_duration_seconds = Histogram(
    "caissier_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

http_errors_total = Counter(
    "caissier_http_errors_total",
    "Total HTTP errors",
    ["method", "endpoint", "error_type"],
)

# ============================================================
# Ledger Metrics
# ============================================================

ledger_requests_total = Counter(
    "caissier_ledger_requests_total",
    "Total ledger JSON-RPC requests",
    ["method", "outcome"],
)

ledger_request_duration_seconds = Histogram(
    "caissier_ledger_request_duration_seconds",
    "Ledger JSON-RPC request duration in seconds",
    ["method"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 15.0),
)

# ============================================================
# Business Metrics
# ============================================================

wallet_bindings_total = Counter(
    "caissier_wallet_bindings_total",
    "Wallet binding attempts",
    ["outcome"],
)

payments_reconciled_total = Counter(
    "caissier_payments_reconciled_total",
    "Payment submissions and refreshes by resulting status",
    ["operation", "status"],
)

session_events_total = Counter(
    "caissier_session_events_total",
    "Session token lifecycle events",
    ["event"],
)
