"""Merchant API protocol layer.

Decodes and verifies the signed JSON envelopes returned by miners and models
the payloads they carry. Nothing here performs I/O; bodies are fetched by
[minercraft.client][minercraft.client] through
[minercraft.utils.http][minercraft.utils.http].

Attributes:
    envelope: [Envelope][minercraft.mapi.envelope.Envelope] and the
        parse/verify pipeline shared by every response type.
    fee_quote: [FeePayload][minercraft.mapi.fee_quote.FeePayload],
        [compute_fee][minercraft.mapi.fee_quote.compute_fee] and
        [FeeQuote][minercraft.mapi.fee_quote.FeeQuote].
    query_transaction: [QueryPayload][minercraft.mapi.query_transaction.QueryPayload]
        and [TransactionStatus][minercraft.mapi.query_transaction.TransactionStatus].
"""

from .base import BasePayload
from .envelope import (
    Envelope,
    OpenedEnvelope,
    SignedResponse,
    escape_payload,
    open_envelope,
    parse_envelope,
    parse_payload,
    unescape_payload,
    verify_envelope,
)
from .fee_quote import (
    FeeAmount,
    FeePayload,
    FeeQuote,
    FeeSpec,
    compute_fee,
    validate_fee_parameters,
)
from .query_transaction import TX_ID_PATTERN, QueryPayload, TransactionStatus


__all__ = [
    "TX_ID_PATTERN",
    "BasePayload",
    "Envelope",
    "FeeAmount",
    "FeePayload",
    "FeeQuote",
    "FeeSpec",
    "OpenedEnvelope",
    "QueryPayload",
    "SignedResponse",
    "TransactionStatus",
    "compute_fee",
    "escape_payload",
    "open_envelope",
    "parse_envelope",
    "parse_payload",
    "unescape_payload",
    "validate_fee_parameters",
    "verify_envelope",
]
