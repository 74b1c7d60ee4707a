"""
Fee quote payload, fee arithmetic, and the verified per-miner fee quote.

A miner's fee schedule lists one [FeeSpec][minercraft.mapi.fee_quote.FeeSpec]
per fee type (``standard`` for ordinary transaction bytes, ``data`` for
data-carrier bytes). Each entry holds a mining rate and a relay rate, each a
``satoshis`` per ``bytes`` pair.

[compute_fee][minercraft.mapi.fee_quote.compute_fee] prices a transaction
against a schedule using integer floor division. A result of zero is replaced
by one satoshi and reported with a
[ZeroFeeWarning][minercraft.core.exceptions.ZeroFeeWarning].

Examples:
    ```python
    payload = FeePayload.from_dict({
        "fees": [{
            "feeType": "standard",
            "miningFee": {"satoshis": 500, "bytes": 1000},
            "relayFee": {"satoshis": 250, "bytes": 1000},
        }],
    })
    payload.calculate_fee("mining", "standard", 1000)  # 500
    ```
"""

from __future__ import annotations

import warnings
from enum import StrEnum
from typing import ClassVar, TypeVar

from pydantic import Field, JsonValue, StrictInt, StrictStr

from minercraft.core.exceptions import (
    EmptyScheduleError,
    FeeTypeNotFoundError,
    UnrecognizedParameterError,
    ZeroFeeWarning,
)
from minercraft.models.constants import FeeCategory, FeeType

from .base import BasePayload
from .envelope import SignedResponse


_E = TypeVar("_E", bound=StrEnum)


# ---------------------------------------------------------------------------
# Payload
# ---------------------------------------------------------------------------


class FeeAmount(BasePayload):
    """A rate of ``satoshis`` per ``bytes`` transaction bytes."""

    satoshis: StrictInt = Field(ge=0)
    bytes: StrictInt = Field(gt=0)


class FeeSpec(BasePayload):
    """Mining and relay rates for one fee type."""

    fee_type: StrictStr
    mining_fee: FeeAmount
    relay_fee: FeeAmount

    def rate(self, category: FeeCategory) -> FeeAmount:
        """Return the rate for *category*."""
        return self.mining_fee if category is FeeCategory.MINING else self.relay_fee


class FeePayload(BasePayload):
    """Decoded fee quote payload.

    Entries in ``fees`` are kept in wire order. Duplicate fee types are
    tolerated; the first matching entry wins.
    """

    api_version: StrictStr = ""
    timestamp: StrictStr = ""
    expiry_time: StrictStr = ""
    miner_id: StrictStr = ""
    current_highest_block_hash: StrictStr = ""
    current_highest_block_height: StrictInt = Field(default=0, ge=0)
    miner_reputation: JsonValue = None
    fees: tuple[FeeSpec, ...] = ()

    def find_fee(self, fee_type: str) -> FeeSpec | None:
        """Return the first entry whose fee type equals *fee_type*, ignoring case."""
        wanted = fee_type.lower()
        for fee in self.fees:
            if fee.fee_type.lower() == wanted:
                return fee
        return None

    def calculate_fee(self, category: str, fee_type: str, tx_bytes: int) -> int:
        """Price *tx_bytes* bytes of *fee_type* at this schedule's *category* rate.

        See [compute_fee][minercraft.mapi.fee_quote.compute_fee].
        """
        return compute_fee(self, category, fee_type, tx_bytes)


# ---------------------------------------------------------------------------
# Fee arithmetic
# ---------------------------------------------------------------------------


def _recognize(value: object, kind: type[_E], label: str) -> _E:
    """Map *value* onto a member of *kind*, case-insensitively."""
    if isinstance(value, str):
        try:
            return kind(value.lower())
        except ValueError:
            pass
    raise UnrecognizedParameterError(f"{label} {value} is not recognized")


def validate_fee_parameters(category: str, fee_type: str) -> tuple[FeeCategory, FeeType]:
    """Normalize *category* and *fee_type* without touching any schedule.

    Raises:
        UnrecognizedParameterError: If either value is unknown.
    """
    return (
        _recognize(category, FeeCategory, "feeCategory"),
        _recognize(fee_type, FeeType, "feeType"),
    )


def compute_fee(schedule: FeePayload, category: str, fee_type: str, tx_bytes: int) -> int:
    """Compute the fee in satoshis for *tx_bytes* bytes under *schedule*.

    Both parameters are validated before the schedule is scanned.

    Args:
        schedule: Fee schedule to price against.
        category: ``"mining"`` or ``"relay"`` (any case).
        fee_type: ``"standard"`` or ``"data"`` (any case).
        tx_bytes: Transaction size in bytes.

    Returns:
        ``(satoshis * tx_bytes) // bytes`` of the matching rate, or ``1`` when
        that is zero.

    Raises:
        UnrecognizedParameterError: If *category* or *fee_type* is unknown, or
            *tx_bytes* is negative.
        FeeTypeNotFoundError: If the schedule has no entry for *fee_type*.

    Warns:
        ZeroFeeWarning: When the computed fee rounds down to zero.
    """
    rate_category, kind = validate_fee_parameters(category, fee_type)
    if isinstance(tx_bytes, bool) or not isinstance(tx_bytes, int) or tx_bytes < 0:
        raise UnrecognizedParameterError(f"txBytes {tx_bytes} must be a non-negative integer")

    fee = schedule.find_fee(kind)
    if fee is None:
        raise FeeTypeNotFoundError(fee_type)

    rate = fee.rate(rate_category)
    calculated = (rate.satoshis * tx_bytes) // rate.bytes
    if calculated == 0:
        warnings.warn(
            f"fee calculation was 0 for {kind} {rate_category} at {tx_bytes} bytes, charging 1",
            ZeroFeeWarning,
            stacklevel=2,
        )
        return 1
    return calculated


# ---------------------------------------------------------------------------
# Response
# ---------------------------------------------------------------------------


class FeeQuote(SignedResponse):
    """Fee quote from one miner: decoded schedule plus envelope and verification status.

    Attributes:
        quote: Decoded schedule, or ``None`` when the payload was empty.

    See Also:
        [Client.fee_quote][minercraft.client.client.Client.fee_quote]: Fetches one.
        [Client.best_quote][minercraft.client.client.Client.best_quote]: Picks the cheapest.
    """

    _PAYLOAD_FIELD: ClassVar[str] = "quote"
    _PAYLOAD_MODEL: ClassVar[type[BasePayload]] = FeePayload

    quote: FeePayload | None = None

    @property
    def has_fees(self) -> bool:
        return self.quote is not None and bool(self.quote.fees)

    def calculate_fee(self, category: str, fee_type: str, tx_bytes: int) -> int:
        """Price a transaction against this miner's schedule.

        Raises:
            EmptyScheduleError: If the miner returned no schedule.
        """
        if self.quote is None:
            raise EmptyScheduleError(f"miner {self.miner.name} returned an empty fee quote")
        return self.quote.calculate_fee(category, fee_type, tx_bytes)
