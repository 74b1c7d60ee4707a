"""Client utility types and pure helpers.

Nothing here performs I/O, so the selection rule can be tested without a
network or an event loop.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

from minercraft.core.exceptions import (
    FeeCalculationError,
    MinercraftError,
    SignatureError,
    TransportError,
)
from minercraft.core.metrics import RequestOutcome


if TYPE_CHECKING:
    from collections.abc import Iterable

    from minercraft.mapi import FeeQuote
    from minercraft.models import Miner
    from minercraft.utils.http import RequestResponse


class MinerResponse(NamedTuple):
    """Raw outcome of one fetch, tagged with the miner it was sent to."""

    miner: Miner
    response: RequestResponse


class ScoredQuote(NamedTuple):
    """A verified fee quote and its fee at the reference transaction size."""

    quote: FeeQuote
    fee: int


def select_best_quote(scored: Iterable[ScoredQuote]) -> ScoredQuote | None:
    """Return the candidate with the lowest fee.

    A candidate replaces the incumbent only when its fee is strictly lower,
    so among equal fees the first one in iteration order wins. Consuming
    *scored* lazily means an exception raised while producing a candidate
    aborts the selection.

    Returns:
        The best candidate, or ``None`` if *scored* is empty.
    """
    best: ScoredQuote | None = None
    for candidate in scored:
        if best is None or candidate.fee < best.fee:
            best = candidate
    return best


def outcome_for(error: MinercraftError) -> RequestOutcome:
    """Map an error onto the ``outcome`` metric label."""
    if isinstance(error, TransportError):
        return RequestOutcome.TRANSPORT_ERROR
    if isinstance(error, SignatureError):
        return RequestOutcome.SIGNATURE_ERROR
    if isinstance(error, FeeCalculationError):
        return RequestOutcome.FEE_ERROR
    return RequestOutcome.PROTOCOL_ERROR
