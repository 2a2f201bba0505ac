"""Prometheus metrics for sharing, generation and note persistence."""

from prometheus_client import Counter, Histogram

share_links_total = Counter(
    "share_links_total",
    "Share links created, by payload variant",
    ["payload"],
)

share_decodes_total = Counter(
    "share_decodes_total",
    "Share token decode attempts",
    ["outcome"],
)

generation_latency_ms = Histogram(
    "itinerary_generation_latency_ms",
    "Itinerary generation latency in milliseconds",
    ["source", "outcome"],
    buckets=[100, 500, 1000, 2000, 5000, 10000, 20000, 40000, 60000],
)

note_writes_total = Counter(
    "note_writes_total",
    "Day note writes, by the store that accepted them",
    ["target"],
)


def record_share_link(payload: str) -> None:
    """Count a created share link."""
    share_links_total.labels(payload=payload).inc()


def record_share_decode(outcome: str) -> None:
    """Count a share token decode attempt."""
    share_decodes_total.labels(outcome=outcome).inc()


def record_generation(source: str, outcome: str, latency_ms: float) -> None:
    """Record itinerary generation latency."""
    generation_latency_ms.labels(source=source, outcome=outcome).observe(latency_ms)


def record_note_write(target: str) -> None:
    """Count a day note write."""
    note_writes_total.labels(target=target).inc()
