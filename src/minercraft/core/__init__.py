"""Core layer: exceptions, structured logging, metrics, and YAML loading.

Sits in the middle of the diamond DAG -- depends only on the standard library
and third-party packages, and is depended upon by
[minercraft.client][minercraft.client]. The ``mapi`` layer imports
[exceptions][minercraft.core.exceptions] only, which is dependency-free.

Attributes:
    MinercraftError: Root of the exception hierarchy.
        See [exceptions][minercraft.core.exceptions].
    Logger: Structured logger supporting key=value and JSON output modes.
        See [Logger][minercraft.core.logger.Logger].
    MINER_REQUESTS, MINER_REQUEST_DURATION_SECONDS: Prometheus metrics
        recorded per miner request.
    load_yaml: Safe YAML loading with ``yaml.safe_load()``.
        See [load_yaml()][minercraft.core.yaml.load_yaml].
"""

from .exceptions import (
    ConfigurationError,
    EmptyScheduleError,
    FeeCalculationError,
    FeeTypeNotFoundError,
    MalformedEnvelopeError,
    MalformedPayloadError,
    MinercraftError,
    ProtocolError,
    SignatureError,
    SignatureInvalidError,
    TransportError,
    UnrecognizedParameterError,
    VerifierError,
    ZeroFeeWarning,
)
from .logger import Logger, StructuredFormatter, format_kv_pairs
from .metrics import MINER_REQUEST_DURATION_SECONDS, MINER_REQUESTS, RequestOutcome
from .yaml import load_yaml


__all__ = [
    "MINER_REQUESTS",
    "MINER_REQUEST_DURATION_SECONDS",
    "ConfigurationError",
    "EmptyScheduleError",
    "FeeCalculationError",
    "FeeTypeNotFoundError",
    "Logger",
    "MalformedEnvelopeError",
    "MalformedPayloadError",
    "MinercraftError",
    "ProtocolError",
    "RequestOutcome",
    "SignatureError",
    "SignatureInvalidError",
    "StructuredFormatter",
    "TransportError",
    "UnrecognizedParameterError",
    "VerifierError",
    "ZeroFeeWarning",
    "format_kv_pairs",
    "load_yaml",
]
