"""Wire models for facilitator requests."""

from __future__ import annotations

from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


class PaymentRequirements(_WireModel):
    """x402 v1 payment requirements as sent by a resource server.

    ``asset`` is usually an address string; some servers send an object with
    ``address`` and ``decimals`` instead.
    """

    scheme: str
    network: str
    max_amount_required: Union[int, float, str]
    resource: str
    description: Optional[str] = None
    mime_type: Optional[str] = None
    pay_to: str
    max_timeout_seconds: Optional[int] = None
    asset: Union[str, Dict[str, Any], None] = None
    output_schema: Optional[Dict[str, Any]] = None
    extra: Optional[Dict[str, Any]] = None


class PaymentPayload(_WireModel):
    x402_version: int = Field(alias="x402Version", ge=1)
    scheme: str
    network: str
    payload: Dict[str, Any]


def to_payload(model: Any) -> Dict[str, Any]:
    if hasattr(model, "model_dump"):
        return model.model_dump(by_alias=True, exclude_none=True)
    if isinstance(model, dict):
        return model
    raise TypeError("expected a dict or pydantic model")
