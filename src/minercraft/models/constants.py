"""Shared constants for the models layer.

Defines the fee enumerations, the well-known miner names, and the Merchant
API endpoint paths used across the ``mapi``, ``utils`` and ``client`` layers.
Placing them here avoids circular dependencies between those layers.

See Also:
    [minercraft.mapi.fee_quote][]: Uses [FeeType][minercraft.models.constants.FeeType]
        and [FeeCategory][minercraft.models.constants.FeeCategory] to select
        a rate from a fee schedule.
    [minercraft.client][]: Uses [Endpoint][minercraft.models.constants.Endpoint]
        to build request URLs.
"""

from __future__ import annotations

from enum import StrEnum


class FeeType(StrEnum):
    """Transaction category a fee rate applies to.

    Attributes:
        STANDARD: Rate for regular transaction bytes.
        DATA: Rate for data-carrier (``OP_RETURN``) bytes.
    """

    STANDARD = "standard"
    DATA = "data"


class FeeCategory(StrEnum):
    """Which of the two rates in a fee entry is charged.

    Attributes:
        MINING: Fee required for the miner to include the transaction in a block.
        RELAY: Fee required for the miner to relay the transaction to its mempool.
    """

    MINING = "mining"
    RELAY = "relay"


class MinerName(StrEnum):
    """Names of the miners shipped in the default configuration."""

    TAAL = "Taal"
    MEMPOOL = "Mempool"
    MATTERPOOL = "Matterpool"


class Endpoint(StrEnum):
    """Merchant API endpoint paths, relative to a miner's base URL.

    ``QUERY_TRANSACTION`` is a prefix: the transaction id is appended.
    """

    FEE_QUOTE = "/mapi/feeQuote"
    QUERY_TRANSACTION = "/mapi/tx/"


# Size used to make quotes with different byte denominators comparable
REFERENCE_TX_BYTES = 1000

DEFAULT_TIMEOUT = 30.0

# Upper bound on a single miner response body
DEFAULT_MAX_RESPONSE_SIZE = 1_048_576
