"""
Merchant API client: concurrent fee quote aggregation and single-miner queries.

[Client][minercraft.client.client.Client] fans a fee quote request out to
every configured miner at once, waits for all of them, then decodes, verifies
and prices each response in completion order and keeps the cheapest.

The aggregation is all-or-nothing: the first miner whose response cannot be
fetched, decoded, verified or priced aborts the whole call with that miner's
error. Responses are only examined after every request finished, so a slow
miner delays the result but a failing one never cancels the others.

Note:
    Each batch of requests runs under ``asyncio.shield``. Cancelling the
    caller stops it from waiting, while requests already in flight complete
    and the HTTP session closes cleanly.

See Also:
    [ClientConfig][minercraft.client.configs.ClientConfig]: Miner list,
        timeout and response size limit.
    [select_best_quote][minercraft.client.utils.select_best_quote]: The
        tie-breaking rule.
    [send_request][minercraft.utils.http.send_request]: Transport primitive
        that never raises.

Examples:
    ```python
    from minercraft import Client

    client = Client.from_yaml("config/minercraft.yaml")
    best = await client.best_quote("mining", "standard")
    print(best.miner.name, best.calculate_fee("mining", "standard", 250))
    ```
"""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING, Any, NoReturn, TypeVar

import aiohttp
from pydantic import ValidationError

from minercraft.core.exceptions import (
    ConfigurationError,
    EmptyScheduleError,
    FeeCalculationError,
    MinercraftError,
    TransportError,
    UnrecognizedParameterError,
)
from minercraft.core.logger import Logger
from minercraft.core.metrics import (
    MINER_REQUEST_DURATION_SECONDS,
    MINER_REQUESTS,
    RequestOutcome,
)
from minercraft.core.yaml import load_yaml
from minercraft.mapi import (
    TX_ID_PATTERN,
    FeeQuote,
    SignedResponse,
    TransactionStatus,
    validate_fee_parameters,
)
from minercraft.models import REFERENCE_TX_BYTES, Endpoint, Miner
from minercraft.utils.http import send_request
from minercraft.utils.signature import Verifier, verify_message_der

from .configs import ClientConfig
from .utils import MinerResponse, ScoredQuote, outcome_for, select_best_quote


if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence
    from pathlib import Path


_R = TypeVar("_R", bound=SignedResponse)


def _user_agent() -> str:
    from minercraft import __version__  # noqa: PLC0415

    return f"minercraft/{__version__}"


class Client:
    """Merchant API client over a fixed set of miners.

    The miner set is built once from the configuration and never changes;
    ``best_quote`` accepts an explicit ``miners`` override per call.

    Args:
        config: Client configuration. Defaults to
            [ClientConfig()][minercraft.client.configs.ClientConfig], i.e. the
            built-in miner list.
        verifier: Signature verifier, defaulting to
            [verify_message_der][minercraft.utils.signature.verify_message_der].
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        verifier: Verifier = verify_message_der,
    ) -> None:
        self._config = config or ClientConfig()
        self._miners = self._config.to_miners()
        self._verifier = verifier
        self._logger = Logger("client")

    # -------------------------------------------------------------------------
    # Factory Methods
    # -------------------------------------------------------------------------

    @classmethod
    def from_yaml(cls, config_path: str | Path, **kwargs: Any) -> Client:
        """Create a client from a YAML configuration file."""
        return cls.from_dict(load_yaml(config_path), **kwargs)

    @classmethod
    def from_dict(cls, data: dict[str, Any], **kwargs: Any) -> Client:
        """Create a client from a configuration dictionary.

        Raises:
            ConfigurationError: If *data* does not validate.
        """
        try:
            config = ClientConfig(**data)
        except ValidationError as e:
            raise ConfigurationError(f"invalid client configuration: {e}") from e
        return cls(config, **kwargs)

    # -------------------------------------------------------------------------
    # Registry
    # -------------------------------------------------------------------------

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def miners(self) -> tuple[Miner, ...]:
        """Configured miners, in configuration order."""
        return self._miners

    def miner_by_name(self, name: str) -> Miner | None:
        """Look up a configured miner by name, ignoring case."""
        wanted = name.lower()
        for miner in self._miners:
            if miner.name.lower() == wanted:
                return miner
        return None

    def _resolve(self, miner: Miner | str | None) -> Miner:
        if miner is None:
            raise ConfigurationError("miner is required")
        if isinstance(miner, Miner):
            return miner
        found = self.miner_by_name(miner)
        if found is None:
            raise ConfigurationError(f"miner {miner} is not configured")
        return found

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    async def best_quote(
        self,
        category: str,
        fee_type: str,
        *,
        miners: Sequence[Miner] | None = None,
    ) -> FeeQuote:
        """Return the cheapest verified fee quote across all miners.

        Quotes are compared by their *category*/*fee_type* fee for a
        ``REFERENCE_TX_BYTES`` transaction. Among equal fees the quote
        processed first wins; processing follows completion order, so ties
        may resolve differently between calls.

        Args:
            category: ``"mining"`` or ``"relay"`` (any case).
            fee_type: ``"standard"`` or ``"data"`` (any case).
            miners: Miners to query instead of the configured set.

        Raises:
            UnrecognizedParameterError: If *category* or *fee_type* is unknown.
            ConfigurationError: If there are no miners to query, or an entry of
                *miners* is not a [Miner][minercraft.models.miner.Miner].
            TransportError: If any miner could not be reached.
            ProtocolError: If any response could not be decoded or had no fees.
            SignatureError: If any response failed verification.
            FeeTypeNotFoundError: If any schedule lacks *fee_type*.
        """
        validate_fee_parameters(category, fee_type)
        targets = self._miners if miners is None else tuple(miners)
        if not targets:
            raise ConfigurationError("no miners configured")
        if not all(isinstance(m, Miner) for m in targets):
            raise ConfigurationError("miner is required")

        self._logger.info(
            "best_quote_started", miners=len(targets), category=category, fee_type=fee_type
        )
        results = await self._fetch_all(targets, Endpoint.FEE_QUOTE)

        def _scored() -> Iterator[ScoredQuote]:
            for result in results:
                yield self._score(result, category, fee_type)

        best = select_best_quote(_scored())
        if best is None:
            raise EmptyScheduleError("no fee quotes received")

        self._logger.info(
            "best_quote_selected",
            miner=best.quote.miner.name,
            fee=best.fee,
            validated=best.quote.validated,
        )
        return best.quote

    async def fee_quote(self, miner: Miner | str | None) -> FeeQuote:
        """Fetch and verify the fee quote of a single miner.

        Args:
            miner: A [Miner][minercraft.models.miner.Miner] or the name of a
                configured one.

        Raises:
            ConfigurationError: If *miner* is ``None`` or an unknown name.
            TransportError: If the miner could not be reached.
            ProtocolError: If the response could not be decoded or had no fees.
            SignatureError: If the response failed verification.
        """
        target = self._resolve(miner)
        (result,) = await self._fetch_all((target,), Endpoint.FEE_QUOTE)
        quote = self._open(result, FeeQuote, Endpoint.FEE_QUOTE)
        if not quote.has_fees:
            self._reject(result.miner, Endpoint.FEE_QUOTE, EmptyScheduleError("fee quote has no fees"))
        self._record(target, Endpoint.FEE_QUOTE, RequestOutcome.SUCCESS)
        return quote

    async def query_transaction(self, miner: Miner | str | None, tx_id: str) -> TransactionStatus:
        """Ask a single miner for the status of transaction *tx_id*.

        Raises:
            ConfigurationError: If *miner* is ``None`` or an unknown name.
            UnrecognizedParameterError: If *tx_id* is not 64 hex characters.
            TransportError: If the miner could not be reached.
            ProtocolError: If the response could not be decoded or was empty.
            SignatureError: If the response failed verification.
        """
        target = self._resolve(miner)
        if not isinstance(tx_id, str) or not TX_ID_PATTERN.match(tx_id):
            raise UnrecognizedParameterError(f"txId {tx_id} is not a 64 character hex string")

        (result,) = await self._fetch_all(
            (target,),
            f"{Endpoint.QUERY_TRANSACTION}{tx_id}",
            endpoint=Endpoint.QUERY_TRANSACTION,
        )
        status = self._open(result, TransactionStatus, Endpoint.QUERY_TRANSACTION)
        self._record(target, Endpoint.QUERY_TRANSACTION, RequestOutcome.SUCCESS)
        return status

    # -------------------------------------------------------------------------
    # Fan-out
    # -------------------------------------------------------------------------

    def _session(self) -> aiohttp.ClientSession:
        return aiohttp.ClientSession(headers={"User-Agent": _user_agent()})

    async def _fetch_all(
        self,
        targets: Sequence[Miner],
        path: str,
        *,
        endpoint: str | None = None,
    ) -> list[MinerResponse]:
        """Request *path* from every miner concurrently and return outcomes in completion order."""
        queue: asyncio.Queue[MinerResponse] = asyncio.Queue(maxsize=len(targets))

        async def _worker(session: aiohttp.ClientSession, miner: Miner) -> None:
            await queue.put(await self._fetch(session, miner, path, endpoint=endpoint))

        async def _batch() -> None:
            async with self._session() as session, asyncio.TaskGroup() as tg:
                for miner in targets:
                    tg.create_task(_worker(session, miner))

        await asyncio.shield(_batch())

        results: list[MinerResponse] = []
        while not queue.empty():
            results.append(queue.get_nowait())
        return results

    async def _fetch(
        self,
        session: aiohttp.ClientSession,
        miner: Miner,
        path: str,
        *,
        endpoint: str | None = None,
    ) -> MinerResponse:
        """Send one GET to *miner*; transport failures are returned, never raised."""
        label = endpoint or path
        start = time.monotonic()
        response = await send_request(
            session,
            "GET",
            miner.endpoint(path),
            token=miner.token,
            timeout=self._config.timeout,
            max_size=self._config.max_response_size,
        )
        MINER_REQUEST_DURATION_SECONDS.labels(miner=miner.name, endpoint=label).observe(
            time.monotonic() - start
        )
        if not response.success:
            self._record(miner, label, RequestOutcome.TRANSPORT_ERROR)
            self._logger.warning(
                "miner_request_failed",
                miner=miner.name,
                url=response.url,
                status=response.status_code,
                error=response.error,
            )
        return MinerResponse(miner=miner, response=response)

    # -------------------------------------------------------------------------
    # Response Processing
    # -------------------------------------------------------------------------

    def _open(self, result: MinerResponse, response_type: type[_R], endpoint: str) -> _R:
        """Decode and verify one fetched response.

        Raises:
            TransportError: If the fetch itself failed.
            EmptyScheduleError: If the payload was empty.
            ProtocolError, SignatureError: From decoding or verification.
        """
        miner, response = result
        if not response.success:
            raise TransportError(miner.name, response.error or "unknown error")

        try:
            opened = response_type.from_body(miner, response.body, self._verifier)
        except MinercraftError as e:
            self._reject(miner, endpoint, e)

        if opened.document is None:
            self._reject(miner, endpoint, EmptyScheduleError("response payload is empty"))
        return opened

    def _score(self, result: MinerResponse, category: str, fee_type: str) -> ScoredQuote:
        quote = self._open(result, FeeQuote, Endpoint.FEE_QUOTE)
        miner = quote.miner
        if not quote.has_fees:
            self._reject(miner, Endpoint.FEE_QUOTE, EmptyScheduleError("fee quote has no fees"))

        try:
            fee = quote.calculate_fee(category, fee_type, REFERENCE_TX_BYTES)
        except FeeCalculationError as e:
            self._reject(miner, Endpoint.FEE_QUOTE, e)

        self._record(miner, Endpoint.FEE_QUOTE, RequestOutcome.SUCCESS)
        self._logger.debug("quote_scored", miner=miner.name, fee=fee, validated=quote.validated)
        return ScoredQuote(quote=quote, fee=fee)

    def _reject(self, miner: Miner, endpoint: str, error: MinercraftError) -> NoReturn:
        """Record and raise *error* for *miner*, naming the miner on the exception."""
        self._record(miner, endpoint, outcome_for(error))
        self._logger.warning(
            "miner_response_rejected",
            miner=miner.name,
            error=str(error),
            error_type=type(error).__name__,
        )
        error.add_note(f"miner: {miner.name}")
        raise error

    @staticmethod
    def _record(miner: Miner, endpoint: str, outcome: RequestOutcome) -> None:
        MINER_REQUESTS.labels(miner=miner.name, endpoint=endpoint, outcome=outcome).inc()
