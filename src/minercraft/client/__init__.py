"""Merchant API client facade.

Top of the diamond DAG: combines [minercraft.core][minercraft.core],
[minercraft.mapi][minercraft.mapi] and [minercraft.utils][minercraft.utils]
into [Client][minercraft.client.client.Client].

Attributes:
    Client: Concurrent fee quote aggregation and single-miner queries.
    ClientConfig: Miner list and request limits.
    MinerConfig: One configured miner.
    select_best_quote: Pure lowest-fee reducer with first-wins tie-breaking.
"""

from .client import Client
from .configs import ClientConfig, MinerConfig
from .utils import MinerResponse, ScoredQuote, select_best_quote


__all__ = [
    "Client",
    "ClientConfig",
    "MinerConfig",
    "MinerResponse",
    "ScoredQuote",
    "select_best_quote",
]
