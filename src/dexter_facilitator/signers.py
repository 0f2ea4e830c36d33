"""Enabled networks and the signers that act on them."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Iterable, List

from eth_account import Account
from eth_account.signers.local import LocalAccount

from .constants import SUPPORTED_NETWORKS, UnsupportedNetworkError

logger = logging.getLogger(__name__)

SignerFactory = Callable[[str, str], Awaitable[Any]]


class ConfigurationError(ValueError):
    """Raised at startup when the facilitator is configured with unknown networks."""


class SignerCapabilityError(RuntimeError):
    """Raised when a signer cannot do what a request needs from it."""


@dataclass(frozen=True)
class EvmSigner:
    network: str
    account: LocalAccount

    @property
    def address(self) -> str:
        return self.account.address


async def create_signer(network: str, secret_key: str) -> EvmSigner:
    account = await asyncio.to_thread(Account.from_key, secret_key)
    return EvmSigner(network=network, account=account)


def is_wallet_capable(signer: Any) -> bool:
    address = getattr(signer, "address", None)
    return isinstance(address, str) and bool(address)


class NetworkRegistry:
    """Enabled network set plus a per-network signer cache.

    Signer creation is single-flight: the first caller for a network starts the
    creation task and every concurrent caller awaits that same task.
    """

    def __init__(
        self,
        networks: Iterable[str],
        secret_key: str,
        signer_factory: SignerFactory = create_signer,
    ) -> None:
        enabled: List[str] = []
        for network in networks:
            if network not in SUPPORTED_NETWORKS:
                raise ConfigurationError(f"Unsupported network configured: {network}")
            if network not in enabled:
                enabled.append(network)
        self._networks = enabled
        self._secret_key = secret_key
        self._signer_factory = signer_factory
        self._signers: Dict[str, asyncio.Future] = {}

    @property
    def networks(self) -> List[str]:
        return list(self._networks)

    def resolve_network(self, network: str) -> str:
        if network not in self._networks:
            raise UnsupportedNetworkError(f"Network {network} is not enabled for this facilitator")
        return network

    async def get_signer(self, network: str) -> Any:
        pending = self._signers.get(network)
        if pending is None:
            logger.debug("creating signer for %s", network)
            pending = asyncio.ensure_future(self._signer_factory(network, self._secret_key))
            self._signers[network] = pending
        try:
            return await asyncio.shield(pending)
        except asyncio.CancelledError:
            raise
        except Exception:
            # Failed creations are not cached so the next request retries.
            if self._signers.get(network) is pending:
                del self._signers[network]
            raise
