"""ECDSA signature verification for Merchant API envelopes.

Miners sign the SHA-256 digest of the envelope payload with their secp256k1
identity key and publish the DER-encoded signature and the compressed public
key, both hex encoded. [verify_message_der][minercraft.utils.signature.verify_message_der]
checks such a signature with the ``cryptography`` library; no curve
arithmetic is implemented here.

Any callable matching [Verifier][minercraft.utils.signature.Verifier] can
replace it, e.g. a hardware-backed verifier or a stub in tests.

See Also:
    [verify_envelope][minercraft.mapi.envelope.verify_envelope]: Computes the
        digest and maps the verifier outcome onto typed errors.
"""

from __future__ import annotations

from collections.abc import Callable

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import Prehashed, decode_dss_signature


Verifier = Callable[[bytes, str, str], bool]
"""``(digest, public_key_hex, signature_hex) -> valid``; raises on malformed input."""

_DIGEST_SIZE = 32


def verify_message_der(digest: bytes, public_key_hex: str, signature_hex: str) -> bool:
    """Verify a DER-encoded secp256k1 ECDSA signature over a SHA-256 digest.

    The digest is used as-is (it is not hashed again).

    Args:
        digest: 32-byte SHA-256 digest of the signed message.
        public_key_hex: Hex-encoded SEC1 public key (compressed or uncompressed).
        signature_hex: Hex-encoded DER signature.

    Returns:
        ``True`` if the signature is valid for the digest and key, else ``False``.

    Raises:
        ValueError: If the digest has the wrong length, either hex string is
            not valid hex, the signature is not DER, or the public key is not a
            point on secp256k1.
    """
    if len(digest) != _DIGEST_SIZE:
        raise ValueError(f"digest must be {_DIGEST_SIZE} bytes, got {len(digest)}")

    try:
        key_bytes = bytes.fromhex(public_key_hex)
        signature = bytes.fromhex(signature_hex)
    except ValueError as e:
        raise ValueError(f"invalid hex encoding: {e}") from e

    try:
        decode_dss_signature(signature)
    except ValueError as e:
        raise ValueError(f"invalid DER signature: {e}") from e

    public_key = ec.EllipticCurvePublicKey.from_encoded_point(ec.SECP256K1(), key_bytes)

    try:
        public_key.verify(signature, digest, ec.ECDSA(Prehashed(hashes.SHA256())))
    except InvalidSignature:
        return False
    return True
