"""
Signed JSON envelope decoding and verification.

Every Merchant API response is a JSON envelope whose ``payload`` member is
itself a JSON document encoded as a string:

```json
{
  "payload": "{\"apiVersion\":\"0.1.0\",\"timestamp\":\"...\",\"fees\":[...]}",
  "signature": "3044022064...",
  "publicKey": "0211ccfc29...",
  "encoding": "UTF-8",
  "mimetype": "application/json"
}
```

Decoding is two-stage. [parse_envelope][minercraft.mapi.envelope.parse_envelope]
decodes the outer object; [parse_payload][minercraft.mapi.envelope.parse_payload]
strips every backslash from the payload string and decodes the result into a
[BasePayload][minercraft.mapi.base.BasePayload] subclass.

The signature covers the payload string as transmitted, so
[verify_envelope][minercraft.mapi.envelope.verify_envelope] hashes
``Envelope.payload`` (never the stripped form). Both representations are
available on [Envelope][minercraft.mapi.envelope.Envelope].

See Also:
    [minercraft.utils.signature.verify_message_der][minercraft.utils.signature.verify_message_der]:
        Default verifier.
    [minercraft.mapi.fee_quote.FeeQuote][minercraft.mapi.fee_quote.FeeQuote]:
        Verified fee quote built on [SignedResponse][minercraft.mapi.envelope.SignedResponse].
"""

from __future__ import annotations

import hashlib
import json
import logging
from typing import Any, ClassVar, NamedTuple, Self, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    StrictBool,
    StrictStr,
    ValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel

from minercraft.core.exceptions import (
    MalformedEnvelopeError,
    MalformedPayloadError,
    SignatureInvalidError,
    VerifierError,
)
from minercraft.models.miner import Miner  # noqa: TC001
from minercraft.utils.signature import Verifier, verify_message_der

from .base import BasePayload


logger = logging.getLogger("minercraft.mapi")

PayloadT = TypeVar("PayloadT", bound=BasePayload)


def unescape_payload(payload: str) -> str:
    """Remove every backslash from *payload*."""
    return payload.replace("\\", "")


def escape_payload(payload: str) -> str:
    """Backslash-escape every double quote in *payload*.

    Inverse of [unescape_payload][minercraft.mapi.envelope.unescape_payload]
    for payloads whose only backslashes escape double quotes.
    """
    return payload.replace('"', '\\"')


def _describe(error: ValidationError) -> str:
    """Condense a pydantic error into ``loc: msg`` pairs."""
    return "; ".join(
        f"{'.'.join(str(p) for p in e['loc']) or '<root>'}: {e['msg']}" for e in error.errors()
    )


class Envelope(BaseModel):
    """Outer JSON envelope of a Merchant API response.

    Attributes:
        payload: Payload string exactly as decoded from the outer JSON.
        signature: Hex DER signature, or ``""`` for unsigned responses.
        public_key: Hex public key (``publicKey`` on the wire), or ``""``.
        encoding: Payload character encoding label.
        mimetype: Payload media type label.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    payload: StrictStr
    signature: StrictStr = ""
    public_key: StrictStr = ""
    encoding: StrictStr = ""
    mimetype: StrictStr = ""

    @field_validator("*", mode="before")
    @classmethod
    def _null_as_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @property
    def unescaped_payload(self) -> str:
        """Payload with backslashes stripped, ready for JSON decoding."""
        return unescape_payload(self.payload)

    @property
    def has_signature(self) -> bool:
        """Whether both a signature and a public key are present."""
        return bool(self.signature) and bool(self.public_key)

    @property
    def digest(self) -> bytes:
        """SHA-256 digest of the payload as transmitted, i.e. the signed message hash."""
        return hashlib.sha256(self.payload.encode("utf-8")).digest()

    def to_dict(self) -> dict[str, Any]:
        """Serialize back to the wire format."""
        return self.model_dump(by_alias=True)


def parse_envelope(raw: bytes | str) -> Envelope:
    """Decode a response body into an [Envelope][minercraft.mapi.envelope.Envelope].

    Raises:
        MalformedEnvelopeError: If *raw* is not JSON, not a JSON object, lacks
            the ``payload`` member, or has a non-string member.
    """
    try:
        data = json.loads(raw)
    except (ValueError, RecursionError) as e:
        raise MalformedEnvelopeError(f"response is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise MalformedEnvelopeError(f"expected JSON object, got {type(data).__name__}")

    try:
        return Envelope.model_validate(data)
    except ValidationError as e:
        raise MalformedEnvelopeError(f"invalid envelope: {_describe(e)}") from e


def parse_payload(envelope: Envelope, model: type[PayloadT]) -> PayloadT | None:
    """Decode the envelope payload into *model*.

    Returns:
        The decoded payload, or ``None`` when the payload string is empty.

    Raises:
        MalformedPayloadError: If the stripped payload is not JSON or does not
            match *model*.
    """
    text = envelope.unescaped_payload
    if not text:
        return None
    try:
        return model.model_validate_json(text)
    except ValidationError as e:
        raise MalformedPayloadError(f"invalid {model.__name__}: {_describe(e)}") from e


def verify_envelope(envelope: Envelope, verifier: Verifier = verify_message_der) -> bool:
    """Check the envelope signature.

    Unsigned envelopes (missing signature or public key) are not an error;
    they are reported as not validated.

    Returns:
        ``True`` if the signature is valid, ``False`` if there is nothing to verify.

    Raises:
        SignatureInvalidError: If the verifier rejects the signature.
        VerifierError: If the verifier raised, e.g. on a malformed key.
    """
    if not envelope.has_signature:
        if envelope.signature or envelope.public_key:
            logger.debug(
                "signature_incomplete has_signature=%s has_public_key=%s",
                bool(envelope.signature),
                bool(envelope.public_key),
            )
        return False

    try:
        valid = verifier(envelope.digest, envelope.public_key, envelope.signature)
    except Exception as e:  # Intentionally broad: the verifier is pluggable
        raise VerifierError(f"signature verification could not run: {e}") from e

    if not valid:
        raise SignatureInvalidError(
            f"signature does not match payload for public key {envelope.public_key}"
        )
    return True


class OpenedEnvelope(NamedTuple):
    """Result of [open_envelope][minercraft.mapi.envelope.open_envelope]."""

    envelope: Envelope
    payload: BasePayload | None
    validated: bool


def open_envelope(
    raw: bytes | str,
    model: type[BasePayload],
    verifier: Verifier = verify_message_der,
) -> OpenedEnvelope:
    """Parse the envelope, parse its payload into *model*, then verify it.

    Raises:
        MalformedEnvelopeError, MalformedPayloadError, SignatureInvalidError,
        VerifierError: From the respective stage.
    """
    envelope = parse_envelope(raw)
    payload = parse_payload(envelope, model)
    validated = verify_envelope(envelope, verifier)
    return OpenedEnvelope(envelope=envelope, payload=payload, validated=validated)


class SignedResponse(BaseModel):
    """Base for a decoded, verified response from one miner.

    Subclasses declare the payload field name and model; ``from_body()``
    runs the whole decode/verify pipeline and fills it.

    Attributes:
        miner: The [Miner][minercraft.models.miner.Miner] that answered.
        envelope: The decoded outer envelope.
        validated: Whether a signature was present and verified.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    _PAYLOAD_FIELD: ClassVar[str]
    _PAYLOAD_MODEL: ClassVar[type[BasePayload]]

    miner: Miner
    envelope: Envelope
    validated: StrictBool = False

    @classmethod
    def from_body(
        cls,
        miner: Miner,
        body: bytes | str,
        verifier: Verifier = verify_message_der,
    ) -> Self:
        """Decode and verify a raw response body received from *miner*."""
        opened = open_envelope(body, cls._PAYLOAD_MODEL, verifier)
        logger.debug(
            "response_opened miner=%s type=%s validated=%s empty=%s",
            miner.name,
            cls.__name__,
            opened.validated,
            opened.payload is None,
        )
        return cls.model_validate(
            {
                "miner": miner,
                "envelope": opened.envelope,
                "validated": opened.validated,
                cls._PAYLOAD_FIELD: opened.payload,
            }
        )

    @property
    def document(self) -> BasePayload | None:
        """The decoded payload, or ``None`` when the miner sent an empty one."""
        return getattr(self, self._PAYLOAD_FIELD)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-ready dict: miner, decoded payload, envelope fields, validated."""
        payload = self.document
        return {
            "miner": {"name": self.miner.name, "url": self.miner.base_url},
            self._PAYLOAD_FIELD: payload.to_dict() if payload is not None else None,
            **self.envelope.to_dict(),
            "validated": self.validated,
        }
