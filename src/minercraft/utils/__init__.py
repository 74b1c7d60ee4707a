"""HTTP transport and signature verification utilities.

The utils layer sits in the middle of the diamond DAG, depending only on
[minercraft.models][minercraft.models]. It provides the low-level network and
cryptographic primitives used by [minercraft.mapi][minercraft.mapi] and
[minercraft.client][minercraft.client].

Attributes:
    http: [send_request][minercraft.utils.http.send_request] and the
        [RequestResponse][minercraft.utils.http.RequestResponse] outcome
        record. Never raises on transport failures.
    signature: [verify_message_der][minercraft.utils.signature.verify_message_der],
        the default secp256k1 DER signature verifier.

Note:
    The utils layer has **zero** imports from ``minercraft.core`` or
    ``minercraft.client``.
"""

from .http import RequestResponse, send_request
from .signature import Verifier, verify_message_der


__all__ = [
    "RequestResponse",
    "Verifier",
    "send_request",
    "verify_message_der",
]
