"""
Prometheus metrics for Merchant API requests.

Defines module-level metric objects (singletons, thread-safe) recorded by
[Client][minercraft.client.client.Client] for every miner request. Exposition
is left to the embedding application (for example
``prometheus_client.start_http_server``); minercraft never opens a port.

Architecture:
    MINER_REQUESTS:                  Cumulative request outcomes per miner and endpoint.
    MINER_REQUEST_DURATION_SECONDS:  Histogram for request latency percentiles.
"""

from __future__ import annotations

from enum import StrEnum

from prometheus_client import Counter, Histogram


class RequestOutcome(StrEnum):
    """Values of the ``outcome`` label on ``MINER_REQUESTS``.

    ``TRANSPORT_ERROR`` is recorded by the fetcher. The remaining failure
    outcomes are recorded by the consumer after the response was decoded.
    """

    SUCCESS = "success"
    TRANSPORT_ERROR = "transport_error"
    PROTOCOL_ERROR = "protocol_error"
    SIGNATURE_ERROR = "signature_error"
    FEE_ERROR = "fee_error"


MINER_REQUESTS = Counter(
    "minercraft_miner_requests",
    "Merchant API requests by miner, endpoint and outcome",
    ["miner", "endpoint", "outcome"],
)

MINER_REQUEST_DURATION_SECONDS = Histogram(
    "minercraft_miner_request_duration_seconds",
    "Duration of a single Merchant API request in seconds",
    ["miner", "endpoint"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10, 30, 60),
)
