"""
Pytest configuration and shared fixtures for minercraft tests.

Provides:
- Real secp256k1 signing keys and helpers to sign envelope payloads
- Builders for fee quote payloads and wire-format envelopes
- A recorded, genuinely signed transaction status response
- Miner fixtures
"""

from __future__ import annotations

import json
import logging
from typing import Any

import pytest
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from minercraft.models import Miner


# ============================================================================
# Recorded Vectors
# ============================================================================

QUERY_TX_ID = "7e0c4651fc256c0433bd704d7e13d24c8d10235f4b28ba192849c5d318de974b"

QUERY_TX_PUBLIC_KEY = "0211ccfc29e3058b770f3cf3eb34b0b2fd2293057a994d4d275121be4151cdf087"

QUERY_TX_SIGNATURE = (
    "3044022066a8a39ff5f5eae818636aa03fdfc386ea4f33f41993cf41d4fb6d4745ae0321"
    "02206a8895a6f742d809647ad1a1df12230e9b480275853ed28bc178f4b48afd802a"
)

QUERY_TX_PAYLOAD = (
    '{"apiVersion":"0.1.0","timestamp":"2020-10-10T13:07:26.014Z",'
    '"returnResult":"success","resultDescription":"",'
    '"blockHash":"0000000000000000050a09fe90b0e8542bba9e712edb8cc9349e61888fe45ac5",'
    '"blockHeight":612530,"confirmations":43733,'
    '"minerId":"0211ccfc29e3058b770f3cf3eb34b0b2fd2293057a994d4d275121be4151cdf087",'
    '"txSecondMempoolExpiry":0}'
)


def query_tx_body() -> bytes:
    """Return the recorded transaction status response body."""
    return json.dumps(
        {
            "payload": QUERY_TX_PAYLOAD,
            "signature": QUERY_TX_SIGNATURE,
            "publicKey": QUERY_TX_PUBLIC_KEY,
            "encoding": "UTF-8",
            "mimetype": "application/json",
        }
    ).encode()


# ============================================================================
# Signing Helpers
# ============================================================================


def make_signing_key() -> ec.EllipticCurvePrivateKey:
    return ec.generate_private_key(ec.SECP256K1())


def public_key_hex(key: ec.EllipticCurvePrivateKey) -> str:
    """Return the compressed SEC1 public key of *key* as hex."""
    return key.public_key().public_bytes(Encoding.X962, PublicFormat.CompressedPoint).hex()


def sign_payload(key: ec.EllipticCurvePrivateKey, payload: str) -> str:
    """Return the hex DER signature of ``sha256(payload)`` under *key*."""
    return key.sign(payload.encode("utf-8"), ec.ECDSA(hashes.SHA256())).hex()


# ============================================================================
# Payload and Envelope Builders
# ============================================================================


def make_fee_payload(
    *,
    standard: tuple[int, int] = (500, 1000),
    data: tuple[int, int] = (500, 1000),
    relay: tuple[int, int] = (250, 1000),
    **overrides: Any,
) -> dict[str, Any]:
    """Build a wire-format fee quote payload.

    ``standard`` and ``data`` are the mining ``(satoshis, bytes)`` rates of the
    two fee types; both share the ``relay`` rate.
    """
    payload: dict[str, Any] = {
        "apiVersion": "0.1.0",
        "timestamp": "2020-10-07T21:13:04.335Z",
        "expiryTime": "2020-10-07T21:23:04.335Z",
        "minerId": QUERY_TX_PUBLIC_KEY,
        "currentHighestBlockHash": "000000000000000000a8a4e4b3d1a5c8c8c0b1f6b2b2c6e7e3b1a0c2e7d4f5a6",
        "currentHighestBlockHeight": 655874,
        "minerReputation": None,
        "fees": [
            {
                "feeType": "standard",
                "miningFee": {"satoshis": standard[0], "bytes": standard[1]},
                "relayFee": {"satoshis": relay[0], "bytes": relay[1]},
            },
            {
                "feeType": "data",
                "miningFee": {"satoshis": data[0], "bytes": data[1]},
                "relayFee": {"satoshis": relay[0], "bytes": relay[1]},
            },
        ],
    }
    payload.update(overrides)
    return payload


def make_envelope(
    payload: dict[str, Any] | str,
    *,
    key: ec.EllipticCurvePrivateKey | None = None,
) -> dict[str, Any]:
    """Build a wire-format envelope around *payload*, signed when *key* is given."""
    text = payload if isinstance(payload, str) else json.dumps(payload, separators=(",", ":"))
    envelope: dict[str, Any] = {
        "payload": text,
        "signature": None,
        "publicKey": None,
        "encoding": "UTF-8",
        "mimetype": "application/json",
    }
    if key is not None:
        envelope["signature"] = sign_payload(key, text)
        envelope["publicKey"] = public_key_hex(key)
    return envelope


def make_body(
    payload: dict[str, Any] | str,
    *,
    key: ec.EllipticCurvePrivateKey | None = None,
) -> bytes:
    """Build a complete response body around *payload*."""
    return json.dumps(make_envelope(payload, key=key)).encode()


# ============================================================================
# Logging Configuration
# ============================================================================


@pytest.fixture(scope="session", autouse=True)
def setup_logging() -> None:
    """Configure logging for tests."""
    logging.basicConfig(level=logging.DEBUG)


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture(scope="session")
def signing_key() -> ec.EllipticCurvePrivateKey:
    """A real secp256k1 private key shared by the session."""
    return make_signing_key()


@pytest.fixture
def taal() -> Miner:
    return Miner(name="Taal", url="merchantapi.taal.com")


@pytest.fixture
def matterpool() -> Miner:
    return Miner(name="Matterpool", url="merchantapi.matterpool.io", token="secret-token")
