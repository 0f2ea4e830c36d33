"""Resolve the asset a set of payment requirements refers to."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from .constants import DEFAULT_DECIMALS, KNOWN_ASSET_LABELS

UNKNOWN_ASSET = "unknown"


@dataclass(frozen=True)
class CanonicalAsset:
    address: str
    decimals: int


@dataclass(frozen=True)
class PlainAddress:
    address: str


@dataclass(frozen=True)
class StructuredAsset:
    address: str
    decimals: Optional[int] = None


AssetField = Union[PlainAddress, StructuredAsset, None]


def _as_decimals(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if isinstance(value, float) and math.isfinite(value) and value.is_integer() and value >= 0:
        return int(value)
    return None


def _field(source: Any, name: str) -> Any:
    if isinstance(source, Mapping):
        return source.get(name)
    return getattr(source, name, None)


def decode_asset_field(raw: Any) -> AssetField:
    """Classify the raw ``asset`` value into one of the known shapes."""
    if isinstance(raw, Mapping) and "address" in raw:
        address = raw.get("address")
        return StructuredAsset(
            address=UNKNOWN_ASSET if address is None else str(address),
            decimals=_as_decimals(raw.get("decimals")),
        )
    if isinstance(raw, str) and raw.strip():
        return PlainAddress(raw)
    return None


def decimals_override(extra: Optional[Mapping[str, Any]]) -> Optional[int]:
    if not isinstance(extra, Mapping):
        return None
    return _as_decimals(extra.get("assetDecimals"))


def resolve_asset(requirements: Any) -> CanonicalAsset:
    """Derive ``CanonicalAsset`` from requirements given as a model or a mapping.

    ``extra.assetDecimals`` wins over everything else; a structured asset's own
    ``decimals`` comes next, then ``DEFAULT_DECIMALS``.
    """
    override = decimals_override(_field(requirements, "extra"))
    asset = decode_asset_field(_field(requirements, "asset"))

    if isinstance(asset, StructuredAsset):
        if override is not None:
            decimals = override
        elif asset.decimals is not None:
            decimals = asset.decimals
        else:
            decimals = DEFAULT_DECIMALS
        return CanonicalAsset(asset.address, decimals)

    decimals = DEFAULT_DECIMALS if override is None else override
    if isinstance(asset, PlainAddress):
        return CanonicalAsset(asset.address, decimals)
    return CanonicalAsset(UNKNOWN_ASSET, decimals)


def asset_label(address: str) -> str:
    if not address or address == UNKNOWN_ASSET:
        return UNKNOWN_ASSET
    known = KNOWN_ASSET_LABELS.get(address.lower())
    if known:
        return known
    if len(address) <= 9:
        return address
    return f"{address[:4]}…{address[-4:]}"
