"""Human-readable verification and settlement events."""

from __future__ import annotations

import logging
from typing import List, Mapping, Optional, Tuple
from urllib.parse import urlparse

from .amounts import format_atomic, format_integer, parse_atomic
from .assets import UNKNOWN_ASSET, asset_label, resolve_asset
from .constants import EXPLORER_URLS
from .log import render_event
from .schemas import PaymentRequirements
from .settlements import AssetTotal, WindowSnapshot

logger = logging.getLogger(__name__)


def shorten_resource(resource: Optional[str]) -> str:
    if not resource:
        return "unknown"
    parsed = urlparse(resource)
    if parsed.scheme and parsed.netloc:
        return parsed.path or resource
    return resource


def explorer_link(transaction: Optional[str], network: str) -> Optional[str]:
    if not transaction:
        return None
    base = EXPLORER_URLS.get(network)
    if base is None:
        return None
    return f"{base}/tx/{transaction}"


def format_volume(totals: Mapping[object, AssetTotal]) -> str:
    if not totals:
        return "volume 0"
    parts = [
        f"{format_atomic(total.amount_atomic, total.decimals)} {asset_label(total.asset)}"
        for total in totals.values()
    ]
    return "volume " + " + ".join(parts)


def format_metrics(snapshot: Optional[WindowSnapshot]) -> str:
    if snapshot is None:
        return "volume 0 • count 0"
    return f"{format_volume(snapshot.totals)} • count {snapshot.count}"


def _amount_line(requirements: PaymentRequirements) -> str:
    asset = resolve_asset(requirements)
    amount_atomic = parse_atomic(requirements.max_amount_required)
    label = asset_label(asset.address)
    if amount_atomic is None:
        return f"{requirements.max_amount_required} {label}"
    display = format_atomic(amount_atomic, asset.decimals)
    return f"{display} {label} ({format_integer(amount_atomic)})"


def _header(action: str, requirements: PaymentRequirements, ok: bool) -> str:
    mark = "✓" if ok else "✗"
    return f"{action} {shorten_resource(requirements.resource)} [{requirements.network}] {mark}"


def verification_event(requirements: PaymentRequirements, is_valid: bool = True) -> str:
    asset = resolve_asset(requirements)
    if asset.address == UNKNOWN_ASSET:
        asset_line = "unknown asset"
    else:
        asset_line = f"{asset_label(asset.address)} ({asset.address})"

    fields: List[Tuple[str, str]] = [
        ("resource", f"{requirements.resource} [{requirements.network}]"),
        ("amount", _amount_line(requirements)),
        ("asset", asset_line),
    ]
    if requirements.description:
        fields.append(("detail", requirements.description))
    return render_event(_header("VERIFY", requirements, is_valid), fields)


def settlement_event(
    requirements: PaymentRequirements,
    transaction: Optional[str],
    snapshot: Optional[WindowSnapshot],
    success: bool = True,
) -> str:
    link = explorer_link(transaction, requirements.network)
    fields = [
        ("resource", f"{requirements.resource} [{requirements.network}]"),
        ("amount", _amount_line(requirements)),
        ("explorer", link or "unavailable"),
        ("metrics", format_metrics(snapshot)),
    ]
    return render_event(_header("SETTLE", requirements, success), fields)


def log_verification(requirements: PaymentRequirements, is_valid: bool = True) -> None:
    logger.info(verification_event(requirements, is_valid))


def log_settlement(
    requirements: PaymentRequirements,
    transaction: Optional[str],
    snapshot: Optional[WindowSnapshot],
    success: bool = True,
) -> None:
    logger.info(settlement_event(requirements, transaction, snapshot, success))
