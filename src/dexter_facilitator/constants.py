"""Shared constants for the x402 settlement facilitator."""

from __future__ import annotations

from typing import Dict, List, TypedDict


X402_VERSION = 1
EXACT_SCHEME = "exact"

SUPPORTED_NETWORKS: List[str] = [
    "base",
    "base-sepolia",
    "avalanche",
    "avalanche-fuji",
    "polygon",
    "polygon-amoy",
]

DEFAULT_DECIMALS = 6
MS_IN_DAY = 24 * 60 * 60 * 1000

DEFAULT_UPSTREAM_FACILITATOR_URL = "https://x402.org/facilitator"
LANDING_PAGE_URL = "https://dexter.cash/facilitator"
SERVICE_NAME = "Dexter x402 facilitator"


class KnownAsset(TypedDict):
    address: str
    name: str
    decimals: int


KNOWN_ASSETS: Dict[str, KnownAsset] = {
    "base": {
        "address": "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913",
        "name": "USDC",
        "decimals": 6,
    },
    "base-sepolia": {
        "address": "0x036CbD53842c5426634e7929541eC2318f3dCF7e",
        "name": "USDC",
        "decimals": 6,
    },
    "avalanche": {
        "address": "0xB97EF9Ef8734C71904D8002F8b6Bc66Dd9c48a6E",
        "name": "USDC",
        "decimals": 6,
    },
    "avalanche-fuji": {
        "address": "0x5425890298aed601595a70AB815c96711a31Bc65",
        "name": "USDC",
        "decimals": 6,
    },
    "polygon": {
        "address": "0x3c499c542cEF5E3811e1192ce70d8cC03d5c3359",
        "name": "USDC",
        "decimals": 6,
    },
    "polygon-amoy": {
        "address": "0x41E94Eb019C0762f9Bfcf9Fb1E58725BfB0e7582",
        "name": "USDC",
        "decimals": 6,
    },
}

# Lower-cased address -> display symbol.
KNOWN_ASSET_LABELS: Dict[str, str] = {
    asset["address"].lower(): asset["name"] for asset in KNOWN_ASSETS.values()
}

EXPLORER_URLS: Dict[str, str] = {
    "base": "https://basescan.org",
    "base-sepolia": "https://sepolia.basescan.org",
    "avalanche": "https://snowtrace.io",
    "avalanche-fuji": "https://testnet.snowtrace.io",
    "polygon": "https://polygonscan.com",
    "polygon-amoy": "https://amoy.polygonscan.com",
}


class UnsupportedNetworkError(ValueError):
    """Raised when a request names a network this facilitator does not serve."""
