"""HTTP transport for Merchant API requests.

Provides [send_request][minercraft.utils.http.send_request], the single
request primitive used for every miner query, and a bounded body reader
that refuses oversized responses before they are fully buffered.

Note:
    This module sits in the ``utils`` layer and depends only on stdlib and
    ``aiohttp``. It never raises on transport failures: the outcome of every
    request, good or bad, is returned as a
    [RequestResponse][minercraft.utils.http.RequestResponse] so that one
    miner's failure cannot interrupt requests to other miners.

See Also:
    [Client][minercraft.client.client.Client]: Wraps each call with the
        [Miner][minercraft.models.miner.Miner] it was sent to.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from http import HTTPStatus

import aiohttp

from minercraft.models.constants import DEFAULT_MAX_RESPONSE_SIZE, DEFAULT_TIMEOUT


logger = logging.getLogger("minercraft.utils.http")


@dataclass(frozen=True, slots=True)
class RequestResponse:
    """Outcome of one HTTP request.

    Exactly one of ``body`` and ``error`` is meaningful: when ``error`` is set
    the body is always empty.

    Attributes:
        method: HTTP method that was sent.
        url: Absolute request URL.
        status_code: Status received, or ``None`` if no response arrived.
        body: Raw response body, unmodified.
        error: Failure reason, or ``None`` on success.
    """

    method: str
    url: str
    status_code: int | None = None
    body: bytes = b""
    error: str | None = None

    @property
    def success(self) -> bool:
        """Whether the request completed with the expected status."""
        return self.error is None


async def _read_bounded(response: aiohttp.ClientResponse, max_size: int) -> bytes:
    """Read an entire response body with size enforcement.

    Accumulates chunks until EOF so chunked transfer-encoding is handled
    correctly, and stops as soon as more than *max_size* bytes arrived.

    Raises:
        ValueError: If the response body exceeds *max_size*.
    """
    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await response.content.read(max_size + 1 - total)
        if not chunk:
            break
        total += len(chunk)
        if total > max_size:
            raise ValueError(f"Response body too large: >{max_size} bytes")
        chunks.append(chunk)
    return b"".join(chunks)


async def send_request(  # noqa: PLR0913
    session: aiohttp.ClientSession,
    method: str,
    url: str,
    *,
    token: str | None = None,
    body: bytes | None = None,
    expected_status: int = HTTPStatus.OK,
    timeout: float = DEFAULT_TIMEOUT,  # noqa: ASYNC109
    max_size: int = DEFAULT_MAX_RESPONSE_SIZE,
) -> RequestResponse:
    """Send one request and capture its outcome.

    The ``Authorization`` header is set to *token* verbatim when one is given.
    A status other than *expected_status* is a failure; so is any connection
    error, timeout, or a body larger than *max_size*.

    This function never raises for transport problems. ``asyncio`` cancellation
    still propagates.

    Args:
        session: Open aiohttp session to send the request on.
        method: HTTP method, e.g. ``"GET"``.
        url: Absolute URL.
        token: Optional ``Authorization`` header value.
        body: Optional JSON request body.
        expected_status: The only status treated as success.
        timeout: Total request timeout in seconds.
        max_size: Maximum accepted response body size in bytes.

    Returns:
        A [RequestResponse][minercraft.utils.http.RequestResponse]; check
        ``error`` (or ``success``) before using ``body``.
    """
    headers = {"Content-Type": "application/json"}
    if token:
        headers["Authorization"] = token

    status: int | None = None
    try:
        async with session.request(
            method,
            url,
            headers=headers,
            data=body,
            timeout=aiohttp.ClientTimeout(total=timeout),
        ) as resp:
            status = resp.status
            if resp.status != expected_status:
                raise ValueError(f"HTTP {resp.status}, expected {int(expected_status)}")
            content = await _read_bounded(resp, max_size)
    except (OSError, TimeoutError, aiohttp.ClientError, ValueError) as e:
        reason = str(e) or type(e).__name__
        logger.debug("request_failed method=%s url=%s status=%s error=%s", method, url, status, reason)
        return RequestResponse(method=method, url=url, status_code=status, error=reason)

    logger.debug("request_succeeded method=%s url=%s size=%s", method, url, len(content))
    return RequestResponse(method=method, url=url, status_code=status, body=content)
