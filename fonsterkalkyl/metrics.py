# fonsterkalkyl/metrics.py
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST

# ---------------------------
# Price list metrics
# ---------------------------
PRICE_TABLE_LOADS = Counter(
    "price_table_loads_total",
    "Price tables published, by provenance",
    ["source"],
)

PRICE_TABLE_LOAD_FAILURES = Counter(
    "price_table_load_failures_total",
    "Failed price list operations",
    ["path"],  # fetch | cache | admin_fetch | admin_save
)

# ---------------------------
# Quote metrics
# ---------------------------
QUOTES_COMPUTED = Counter(
    "quotes_computed_total",
    "Quote computations",
    ["status"],  # ok | invalid
)

QUOTE_COMPUTE_LATENCY = Histogram(
    "quote_compute_duration_seconds",
    "Time spent pricing units and aggregating one quote",
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25],
)


def render_latest() -> bytes:
    return generate_latest()


__all__ = [
    "PRICE_TABLE_LOADS",
    "PRICE_TABLE_LOAD_FAILURES",
    "QUOTES_COMPUTED",
    "QUOTE_COMPUTE_LATENCY",
    "CONTENT_TYPE_LATEST",
    "render_latest",
]
