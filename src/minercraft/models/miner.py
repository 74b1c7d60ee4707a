"""
Validated Merchant API miner identity.

A [Miner][minercraft.models.miner.Miner] is one independently operated
Merchant API endpoint. Instances are created by the configuration layer and
only ever read by the client; they carry no mutable state and are safe to
share across concurrent fetches.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from rfc3986 import uri_reference
from rfc3986.exceptions import UnpermittedComponentError, ValidationError
from rfc3986.validators import Validator

from ._validation import validate_optional_str, validate_str_not_empty


@dataclass(frozen=True, slots=True)
class Miner:
    """Immutable representation of a Merchant API miner.

    The ``url`` may be given either as a bare host with an optional path
    (``merchantapi.taal.com``), which is how miners are usually published,
    or as a full ``http(s)://`` URL. The normalized form is exposed as
    ``base_url`` and never ends with a slash.

    Attributes:
        name: Human-readable name, unique within a configuration.
        url: URL exactly as configured.
        token: Optional value sent in the ``Authorization`` header.
            Excluded from ``repr`` to keep it out of logs.
        base_url: Normalized ``scheme://host[:port][/path]`` prefix for
            endpoint paths.

    Raises:
        ValueError: If the name is empty, or the URL is malformed or uses a
            scheme other than ``http``/``https``.
        TypeError: If a field has the wrong type.

    Examples:
        ```python
        miner = Miner("Taal", "merchantapi.taal.com")
        miner.base_url  # 'https://merchantapi.taal.com'
        ```
    """

    name: str
    url: str
    token: str | None = field(default=None, repr=False)

    base_url: str = field(init=False)

    _DEFAULT_SCHEME: ClassVar[str] = "https"

    def __post_init__(self) -> None:
        validate_str_not_empty(self.name, "name")
        validate_str_not_empty(self.url, "url")
        validate_optional_str(self.token, "token")

        # Bypass frozen restriction to set computed fields
        object.__setattr__(self, "base_url", self._normalize(self.url))

    @classmethod
    def _normalize(cls, raw: str) -> str:
        """Validate *raw* and return it as a base URL without a trailing slash.

        Raises:
            ValueError: If the scheme is not ``http``/``https`` or the URL is invalid.
        """
        raw = raw.strip()
        if "://" not in raw:
            raw = f"{cls._DEFAULT_SCHEME}://{raw}"

        uri = uri_reference(raw).normalize()
        validator = (
            Validator()
            .require_presence_of("scheme", "host")
            .allow_schemes("http", "https")
            .check_validity_of("scheme", "host", "port", "path")
        )

        try:
            validator.validate(uri)
        except UnpermittedComponentError:
            raise ValueError("Invalid scheme: must be http or https") from None
        except ValidationError as e:
            raise ValueError(f"Invalid URL: {e}") from None

        if uri.query:
            raise ValueError(f"Miner URL must not contain a query string: ?{uri.query}")
        if uri.fragment:
            raise ValueError(f"Miner URL must not contain a fragment: #{uri.fragment}")

        port = f":{uri.port}" if uri.port else ""
        path = (uri.path or "").rstrip("/")
        return f"{uri.scheme}://{uri.host}{port}{path}"

    def endpoint(self, path: str) -> str:
        """Return the absolute URL of *path* (which must start with ``/``) on this miner."""
        return f"{self.base_url}{path}"
