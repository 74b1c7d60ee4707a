"""
Shared base class for Merchant API payload documents.

[BasePayload][minercraft.mapi.base.BasePayload] is the pydantic base for the
documents carried inside an envelope's ``payload`` string (fee quotes and
transaction status). It fixes the wire conventions shared by every payload:

* field names are camelCase on the wire and snake_case in Python;
* unknown keys are ignored, so miners may add fields freely;
* JSON ``null`` means "absent", so the field default applies;
* instances are frozen.

See Also:
    [minercraft.mapi.fee_quote.FeePayload][minercraft.mapi.fee_quote.FeePayload]:
        Fee schedule payload.
    [minercraft.mapi.query_transaction.QueryPayload][minercraft.mapi.query_transaction.QueryPayload]:
        Transaction status payload.
"""

from __future__ import annotations

from typing import Any, Self

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class BasePayload(BaseModel):
    """Frozen pydantic model decoded from a Merchant API payload document."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        """Treat ``null`` members as absent so defaults apply."""
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create an instance from a wire-format (camelCase) dictionary."""
        return cls.model_validate(data)

    def to_dict(self) -> dict[str, Any]:
        """Serialize back to the camelCase wire format, omitting ``None`` values."""
        return self.model_dump(by_alias=True, exclude_none=True)
