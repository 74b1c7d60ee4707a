r"""minercraft -- Merchant API client for fee quotes and transaction status.

Queries several independent Merchant API miners at once for their signed fee
schedules, verifies every response, and picks the cheapest one.

Architecture follows a **diamond DAG** dependency structure where imports
flow strictly downward:

```text
              client           Client facade: fan-out, selection, queries
             /   |   \
          core  mapi  utils    Infrastructure, protocol, and helpers
             \   |   /
              models           Pure frozen dataclasses (zero I/O)
```

Attributes:
    models: Miner identity, enums and constants. Zero I/O.
    core: Exceptions, logging, metrics, YAML loading.
    mapi: Signed envelope decoding and verification, fee and status payloads.
    utils: HTTP transport and signature verification.
    client: The [Client][minercraft.client.client.Client] facade.

Note:
    Top-level imports (``from minercraft import Client``) use lazy loading
    and resolve on first access.
"""

import importlib
from importlib.metadata import version as _get_version


__version__ = _get_version("minercraft")

__all__ = [
    "Client",
    "ClientConfig",
    "Envelope",
    "FeePayload",
    "FeeQuote",
    "Logger",
    "Miner",
    "MinerConfig",
    "MinercraftError",
    "TransactionStatus",
]

_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    "Logger": ("minercraft.core", "Logger"),
    "MinercraftError": ("minercraft.core", "MinercraftError"),
    "Miner": ("minercraft.models", "Miner"),
    "Envelope": ("minercraft.mapi", "Envelope"),
    "FeePayload": ("minercraft.mapi", "FeePayload"),
    "FeeQuote": ("minercraft.mapi", "FeeQuote"),
    "TransactionStatus": ("minercraft.mapi", "TransactionStatus"),
    "Client": ("minercraft.client", "Client"),
    "ClientConfig": ("minercraft.client", "ClientConfig"),
    "MinerConfig": ("minercraft.client", "MinerConfig"),
}


def __getattr__(name: str) -> object:
    if name in _LAZY_IMPORTS:
        module_path, attr_name = _LAZY_IMPORTS[name]
        module = importlib.import_module(module_path)
        value = getattr(module, attr_name)
        globals()[name] = value  # Cache for subsequent access
        return value
    raise AttributeError(f"module 'minercraft' has no attribute {name!r}")


def __dir__() -> list[str]:
    return __all__
