"""Verify and settle requests on behalf of resource servers."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol, Tuple

from .amounts import parse_atomic
from .assets import resolve_asset
from .constants import EXACT_SCHEME, X402_VERSION
from .events import log_settlement, log_verification
from .schemas import PaymentPayload, PaymentRequirements, to_payload
from .settlements import SettlementWindow, WindowSnapshot
from .signers import NetworkRegistry, SignerCapabilityError, is_wallet_capable

logger = logging.getLogger(__name__)


class PaymentBackend(Protocol):
    async def verify(
        self, signer: Any, payload: PaymentPayload, requirements: PaymentRequirements
    ) -> Any: ...

    async def settle(
        self, signer: Any, payload: PaymentPayload, requirements: PaymentRequirements
    ) -> Any: ...


def _now_ms() -> int:
    return int(time.time() * 1000)


def _result_field(result: Any, *names: str) -> Any:
    for name in names:
        if isinstance(result, Mapping):
            value = result.get(name)
        else:
            value = getattr(result, name, None)
        if value is not None:
            return value
    return None


class Facilitator:
    """Resolves the network and signer for a request, then delegates to the backend.

    Successful settlements are added to ``window``. Recording and event
    logging are best effort: once the backend has answered, its result is
    returned even if the amount does not parse or the event cannot be rendered.

    ``fee_payer`` is the address advertised in ``/supported``; it defaults to
    each network's signer address.
    """

    def __init__(
        self,
        registry: NetworkRegistry,
        backend: PaymentBackend,
        window: Optional[SettlementWindow] = None,
        clock: Callable[[], int] = _now_ms,
        fee_payer: Optional[str] = None,
    ) -> None:
        self.registry = registry
        self.backend = backend
        self.window = window if window is not None else SettlementWindow()
        self.fee_payer = fee_payer
        self._clock = clock

    def _parse_request(self, body: Any) -> Tuple[PaymentRequirements, PaymentPayload]:
        if not isinstance(body, Mapping):
            raise ValueError("Request body must be a JSON object")
        requirements = PaymentRequirements.model_validate(body.get("paymentRequirements"))
        payload = PaymentPayload.model_validate(body.get("paymentPayload"))
        return requirements, payload

    async def verify(self, body: Any) -> Dict[str, Any]:
        requirements, payload = self._parse_request(body)
        network = self.registry.resolve_network(requirements.network)
        signer = await self.registry.get_signer(network)
        result = await self.backend.verify(signer, payload, requirements)
        try:
            log_verification(requirements, bool(_result_field(result, "isValid", "is_valid")))
        except Exception:
            logger.exception("failed to log verification for %s", requirements.resource)
        return to_payload(result)

    async def settle(self, body: Any) -> Dict[str, Any]:
        requirements, payload = self._parse_request(body)
        network = self.registry.resolve_network(requirements.network)
        signer = await self.registry.get_signer(network)
        if not is_wallet_capable(signer):
            raise SignerCapabilityError("Configured signer does not expose a wallet address")

        result = await self.backend.settle(signer, payload, requirements)
        success = bool(_result_field(result, "success"))
        try:
            snapshot = self.record_settlement(requirements) if success else None
            log_settlement(requirements, _result_field(result, "transaction"), snapshot, success)
        except Exception:
            logger.exception("failed to record settlement for %s", requirements.resource)
        return to_payload(result)

    def record_settlement(self, requirements: PaymentRequirements) -> Optional[WindowSnapshot]:
        amount_atomic = parse_atomic(requirements.max_amount_required)
        if amount_atomic is None:
            logger.debug(
                "settlement amount %r not parseable, skipping volume",
                requirements.max_amount_required,
            )
            return None
        asset = resolve_asset(requirements)
        return self.window.record(self._clock(), asset.address, asset.decimals, amount_atomic)

    async def supported(self) -> Dict[str, List[Dict[str, Any]]]:
        kinds: List[Dict[str, Any]] = []
        for network in self.registry.networks:
            signer = await self.registry.get_signer(network)
            kind: Dict[str, Any] = {
                "x402Version": X402_VERSION,
                "scheme": EXACT_SCHEME,
                "network": network,
            }
            fee_payer = self.fee_payer
            if fee_payer is None and is_wallet_capable(signer):
                fee_payer = signer.address
            if fee_payer:
                kind["extra"] = {"feePayer": fee_payer}
            kinds.append(kind)
        return {"kinds": kinds}

    def health(self) -> Dict[str, Any]:
        return {"status": "ok", "networks": self.registry.networks}
