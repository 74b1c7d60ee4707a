"""
Transaction status payload returned by ``GET /mapi/tx/{txid}``.

The response uses the same signed envelope as a fee quote; only the payload
differs. Its ``returnResult`` is ``"success"`` when the miner knows the
transaction and ``"failure"`` otherwise, with ``resultDescription`` giving
the reason.
"""

from __future__ import annotations

import re
from typing import ClassVar

from pydantic import Field, StrictInt, StrictStr

from .base import BasePayload
from .envelope import SignedResponse


TX_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{64}$")

RETURN_RESULT_SUCCESS = "success"


class QueryPayload(BasePayload):
    """Decoded transaction status payload.

    Note:
        ``txid`` is the only all-lowercase key on the wire, so ``tx_id``
        carries an explicit alias.
    """

    api_version: StrictStr = ""
    timestamp: StrictStr = ""
    tx_id: StrictStr = Field(default="", alias="txid")
    return_result: StrictStr = ""
    result_description: StrictStr = ""
    block_hash: StrictStr = ""
    block_height: StrictInt = Field(default=0, ge=0)
    confirmations: StrictInt = Field(default=0, ge=0)
    miner_id: StrictStr = ""
    tx_second_mempool_expiry: StrictInt = 0

    @property
    def succeeded(self) -> bool:
        return self.return_result.lower() == RETURN_RESULT_SUCCESS


class TransactionStatus(SignedResponse):
    """Status of one transaction as reported by one miner.

    Attributes:
        query: Decoded status payload.
    """

    _PAYLOAD_FIELD: ClassVar[str] = "query"
    _PAYLOAD_MODEL: ClassVar[type[BasePayload]] = QueryPayload

    query: QueryPayload | None = None

    @property
    def confirmed(self) -> bool:
        """Whether the transaction is mined in a block."""
        return self.query is not None and self.query.confirmations > 0
