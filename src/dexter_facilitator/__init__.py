"""x402 settlement facilitator (Python)."""

from __future__ import annotations

from .amounts import format_atomic, parse_atomic
from .assets import CanonicalAsset, PlainAddress, StructuredAsset, asset_label, resolve_asset
from .constants import (
    DEFAULT_DECIMALS,
    KNOWN_ASSETS,
    SUPPORTED_NETWORKS,
    UnsupportedNetworkError,
)
from .orchestrator import Facilitator
from .settlements import AssetTotal, SettlementEntry, SettlementWindow, WindowSnapshot
from .signers import (
    ConfigurationError,
    NetworkRegistry,
    SignerCapabilityError,
    create_signer,
    is_wallet_capable,
)

__all__ = [
    "DEFAULT_DECIMALS",
    "KNOWN_ASSETS",
    "SUPPORTED_NETWORKS",
    "UnsupportedNetworkError",
    "ConfigurationError",
    "SignerCapabilityError",
    "parse_atomic",
    "format_atomic",
    "CanonicalAsset",
    "PlainAddress",
    "StructuredAsset",
    "asset_label",
    "resolve_asset",
    "NetworkRegistry",
    "create_signer",
    "is_wallet_capable",
    "SettlementEntry",
    "AssetTotal",
    "WindowSnapshot",
    "SettlementWindow",
    "Facilitator",
]

try:  # Optional: the upstream backend and HTTP app depend on x402 + fastapi
    from .facilitator import (
        UpstreamFacilitatorBackend,
        UpstreamFacilitatorClient,
        UpstreamFacilitatorError,
    )
    from .http import create_app

    __all__.extend(
        [
            "UpstreamFacilitatorBackend",
            "UpstreamFacilitatorClient",
            "UpstreamFacilitatorError",
            "create_app",
        ]
    )
except ImportError:
    UpstreamFacilitatorBackend = None  # type: ignore[assignment]
    UpstreamFacilitatorClient = None  # type: ignore[assignment]
    UpstreamFacilitatorError = None  # type: ignore[assignment]
    create_app = None  # type: ignore[assignment]
