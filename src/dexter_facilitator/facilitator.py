"""Delegated verify/settle capability backed by an upstream x402 facilitator."""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError
from x402.http import FacilitatorConfig, HTTPFacilitatorClient
from x402.schemas import SettleResponse, VerifyResponse

from .constants import DEFAULT_UPSTREAM_FACILITATOR_URL
from .schemas import PaymentPayload, PaymentRequirements

_TRANSACTION_KEYS = ("transaction", "transactionHash", "txHash", "tx", "hash")
_NETWORK_KEYS = ("network", "networkId", "chainId")
_ERROR_REASON_KEYS = ("errorReason", "error_reason", "error", "message")
_ERROR_MESSAGE_KEYS = ("errorMessage", "error_message")
_PAYER_KEYS = ("payer", "userAddress", "user_address")


class UpstreamFacilitatorError(ValueError):
    def __init__(self, action: str, status: int, detail: str) -> None:
        super().__init__(f"Upstream {action} failed ({status}): {detail}")
        self.action = action
        self.status = status
        self.detail = detail


class UpstreamFacilitatorClient(HTTPFacilitatorClient):
    """x402 facilitator client that tolerates non-canonical settle receipts.

    Verify goes through the stock client. Settle answers are read leniently,
    since upstream services disagree on what to call the transaction hash.
    """

    def __init__(self, config: FacilitatorConfig | dict[str, Any] | None = None) -> None:
        super().__init__(config or FacilitatorConfig(url=DEFAULT_UPSTREAM_FACILITATOR_URL))

    async def settle(self, payload, requirements) -> SettleResponse:
        request_body = self._build_request_body(
            payload.x402_version,
            payload.model_dump(by_alias=True, exclude_none=True),
            requirements.model_dump(by_alias=True, exclude_none=True),
        )
        client = self._get_async_client()
        response = await client.post(
            f"{self._url}/settle",
            headers=self._get_settle_headers(),
            json=request_body,
        )
        if response.status_code != 200:
            raise UpstreamFacilitatorError("settle", response.status_code, response.text)
        try:
            body = response.json()
        except ValueError as exc:
            raise UpstreamFacilitatorError("settle", response.status_code, f"invalid JSON: {exc}") from exc
        if not isinstance(body, dict):
            raise UpstreamFacilitatorError("settle", response.status_code, "expected a JSON object")
        return _normalize_settle_response(body, requirements)


class UpstreamFacilitatorBackend:
    """Adapts :class:`UpstreamFacilitatorClient` to the facilitator's backend seam.

    The signer argument is accepted for interface parity; the upstream service
    signs with its own wallet.
    """

    def __init__(
        self,
        url: str = DEFAULT_UPSTREAM_FACILITATOR_URL,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
    ) -> None:
        self.client = UpstreamFacilitatorClient(
            FacilitatorConfig(url=url, timeout=timeout, http_client=http_client)
        )

    async def aclose(self) -> None:
        await self.client.aclose()

    async def verify(
        self,
        signer: Any,
        payload: PaymentPayload,
        requirements: PaymentRequirements,
    ) -> VerifyResponse:
        return await self.client.verify(payload, requirements)

    async def settle(
        self,
        signer: Any,
        payload: PaymentPayload,
        requirements: PaymentRequirements,
    ) -> SettleResponse:
        return await self.client.settle(payload, requirements)


def _first(source: Dict[str, Any], keys) -> Any:
    for key in keys:
        value = source.get(key)
        if value:
            return value
    return None


def _normalize_settle_response(
    payload: Dict[str, Any],
    requirements: PaymentRequirements,
) -> SettleResponse:
    """Map a settle answer onto ``SettleResponse``, falling back to known synonyms."""
    try:
        return SettleResponse.model_validate(payload)
    except ValidationError:
        pass

    error_reason = _first(payload, _ERROR_REASON_KEYS)
    return SettleResponse(
        success=bool(payload.get("success", error_reason is None)),
        error_reason=error_reason,
        error_message=_first(payload, _ERROR_MESSAGE_KEYS),
        payer=_first(payload, _PAYER_KEYS),
        transaction=str(_first(payload, _TRANSACTION_KEYS) or ""),
        network=str(_first(payload, _NETWORK_KEYS) or requirements.network),
    )
