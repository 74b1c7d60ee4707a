"""Pure frozen dataclasses and enums with zero I/O.

The models layer is the foundation of the diamond DAG. It has **no dependencies**
on any other minercraft package. Every model uses
``@dataclass(frozen=True, slots=True)`` for immutability, and all validation
happens in ``__post_init__`` so invalid instances never escape the constructor.

Merchant API payload models (fee quotes, transaction status) live in the
separate [minercraft.mapi][minercraft.mapi] package because they are
pydantic models decoded from untrusted wire data.

Attributes:
    Miner: Validated miner identity (name, base URL, optional auth token).
    FeeType: ``standard`` / ``data`` fee entry tags.
    FeeCategory: ``mining`` / ``relay`` rate selector.
    MinerName: Names of the miners in the default configuration.
    Endpoint: Merchant API endpoint paths.
    REFERENCE_TX_BYTES: Transaction size used to compare quotes.

See Also:
    [minercraft.models.miner][]: Miner URL validation.
    [minercraft.models.constants][]: Shared constants and enumerations.
"""

from .constants import (
    DEFAULT_MAX_RESPONSE_SIZE,
    DEFAULT_TIMEOUT,
    REFERENCE_TX_BYTES,
    Endpoint,
    FeeCategory,
    FeeType,
    MinerName,
)
from .miner import Miner


__all__ = [
    "DEFAULT_MAX_RESPONSE_SIZE",
    "DEFAULT_TIMEOUT",
    "REFERENCE_TX_BYTES",
    "Endpoint",
    "FeeCategory",
    "FeeType",
    "Miner",
    "MinerName",
]
