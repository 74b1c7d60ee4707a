"""minercraft exception hierarchy.

Provides typed exceptions for every stage of a Merchant API query so callers
can tell which stage failed without parsing messages, and so ``except``
clauses never need to be broader than the stage they guard.

Exception hierarchy:

```text
MinercraftError (base -- never raised directly)
├── ConfigurationError          -- None miner, empty miner set, bad config/YAML
├── TransportError              -- non-200 status, network failure, timeout
├── ProtocolError               -- envelope/payload decoding failures
│   ├── MalformedEnvelopeError  -- outer JSON body is unusable
│   ├── MalformedPayloadError   -- inner payload document is unusable
│   └── EmptyScheduleError      -- payload missing or without fee entries
├── SignatureError              -- envelope authenticity failures
│   ├── SignatureInvalidError   -- signature does not match the payload
│   └── VerifierError           -- verifier could not run (bad key/sig encoding)
└── FeeCalculationError         -- fee schedule lookup failures
    ├── UnrecognizedParameterError -- unknown fee category/type or bad tx id
    └── FeeTypeNotFoundError    -- schedule has no entry for the fee type

ZeroFeeWarning (UserWarning)    -- computed fee was 0 and was raised to 1
```

Note:
    This module is dependency-free so the ``mapi`` protocol layer can raise
    these exceptions without importing anything else from ``core``.

See Also:
    [Client][minercraft.client.client.Client]: Raises every error in this
        hierarchy from its public query methods.
"""

from __future__ import annotations


class MinercraftError(Exception):
    """Base exception for all minercraft errors.

    Never raised directly -- always use a specific subclass.
    """


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class ConfigurationError(MinercraftError):
    """Invalid or missing configuration (YAML, env vars, miner set, arguments).

    See Also:
        [load_yaml()][minercraft.core.yaml.load_yaml]: YAML loading function
            whose output is validated into a
            [ClientConfig][minercraft.client.configs.ClientConfig].
    """


# ---------------------------------------------------------------------------
# Transport
# ---------------------------------------------------------------------------


class TransportError(MinercraftError):
    """A miner could not be reached or answered with an unexpected status.

    Attributes:
        miner: Name of the miner the request was sent to.
        reason: Transport-level failure description.
    """

    def __init__(self, miner: str, reason: str) -> None:
        super().__init__(f"request to miner {miner} failed: {reason}")
        self.miner = miner
        self.reason = reason


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------


class ProtocolError(MinercraftError):
    """Merchant API response decoding failure."""


class MalformedEnvelopeError(ProtocolError):
    """The outer JSON envelope is not well formed or lacks required fields."""


class MalformedPayloadError(ProtocolError):
    """The JSON document carried in the envelope payload is not well formed."""


class EmptyScheduleError(ProtocolError):
    """A response decoded cleanly but carried no usable payload or fees."""


# ---------------------------------------------------------------------------
# Signature
# ---------------------------------------------------------------------------


class SignatureError(MinercraftError):
    """Envelope authenticity could not be established."""


class SignatureInvalidError(SignatureError):
    """The signature does not match the payload and public key."""


class VerifierError(SignatureError):
    """The verifier failed to run, e.g. on a malformed key or signature encoding."""


# ---------------------------------------------------------------------------
# Fee calculation
# ---------------------------------------------------------------------------


class FeeCalculationError(MinercraftError):
    """A fee could not be computed from a schedule."""


class UnrecognizedParameterError(FeeCalculationError):
    """A fee category, fee type, or transaction id argument is not recognized."""


class FeeTypeNotFoundError(FeeCalculationError):
    """The schedule has no entry for the requested fee type.

    Attributes:
        fee_type: The fee type that was looked up.
        fee: Fallback fee of ``1`` for callers that choose to continue anyway.
    """

    def __init__(self, fee_type: str) -> None:
        super().__init__(f"feeType {fee_type} is not found in fees")
        self.fee_type = fee_type
        self.fee = 1


# ---------------------------------------------------------------------------
# Warnings
# ---------------------------------------------------------------------------


class ZeroFeeWarning(UserWarning):
    """The computed fee floored to zero; ``1`` was returned instead."""
