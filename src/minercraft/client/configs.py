"""Client configuration models.

See Also:
    [Client][minercraft.client.client.Client]: The facade that consumes
        these configurations.
    [load_yaml][minercraft.core.yaml.load_yaml]: Loads the YAML form of
        [ClientConfig][minercraft.client.configs.ClientConfig].
"""

from __future__ import annotations

import os
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from minercraft.models import DEFAULT_MAX_RESPONSE_SIZE, DEFAULT_TIMEOUT, Miner, MinerName


class MinerConfig(BaseModel):
    """One Merchant API endpoint.

    The auth token may be given inline (``token``) or read from the
    environment variable named by ``token_env`` at validation time. An inline
    token takes precedence.

    Warning:
        ``token`` is a credential. Do not log or serialize this model.
    """

    name: str = Field(min_length=1, description="Unique miner name")
    url: str = Field(min_length=1, description="Base URL or bare host of the Merchant API")
    token: str | None = Field(default=None, repr=False, description="Authorization header value")
    token_env: str | None = Field(
        default=None,
        min_length=1,
        description="Environment variable name holding the token",
    )

    @model_validator(mode="before")
    @classmethod
    def _load_token_from_env(cls, data: Any) -> Any:
        """Populate ``token`` from ``token_env`` when no inline token is given."""
        if isinstance(data, dict) and not data.get("token") and data.get("token_env"):
            env_var = data["token_env"]
            value = os.getenv(env_var)
            if not value:
                raise ValueError(f"{env_var} environment variable is required by miner token_env")
            data = {**data, "token": value}
        return data

    @model_validator(mode="after")
    def _validate_url(self) -> MinerConfig:
        self.to_miner()
        return self

    def to_miner(self) -> Miner:
        """Build the immutable [Miner][minercraft.models.miner.Miner]."""
        return Miner(name=self.name, url=self.url, token=self.token or None)


def _default_miners() -> list[MinerConfig]:
    return [
        MinerConfig(name=MinerName.TAAL, url="merchantapi.taal.com"),
        MinerConfig(name=MinerName.MEMPOOL, url="www.ddpurse.com/openapi"),
        MinerConfig(name=MinerName.MATTERPOOL, url="merchantapi.matterpool.io"),
    ]


class ClientConfig(BaseModel):
    """Client configuration.

    Examples:
        ```yaml
        timeout: 10
        miners:
          - name: Taal
            url: merchantapi.taal.com
            token_env: TAAL_TOKEN
          - name: Matterpool
            url: https://merchantapi.matterpool.io
        ```
    """

    miners: list[MinerConfig] = Field(default_factory=_default_miners)
    timeout: float = Field(
        default=DEFAULT_TIMEOUT, gt=0.0, le=300.0, description="Per-request timeout in seconds"
    )
    max_response_size: int = Field(
        default=DEFAULT_MAX_RESPONSE_SIZE,
        ge=1024,
        le=52_428_800,
        description="Maximum response body size in bytes (default: 1 MB)",
    )

    @field_validator("miners")
    @classmethod
    def _validate_unique_names(cls, v: list[MinerConfig]) -> list[MinerConfig]:
        seen: set[str] = set()
        for miner in v:
            key = miner.name.lower()
            if key in seen:
                raise ValueError(f"duplicate miner name: {miner.name}")
            seen.add(key)
        return v

    def to_miners(self) -> tuple[Miner, ...]:
        return tuple(m.to_miner() for m in self.miners)
