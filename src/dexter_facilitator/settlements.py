"""Trailing 24-hour settlement volume."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, Iterator, Tuple

from .constants import MS_IN_DAY

TotalsKey = Tuple[str, int]


@dataclass(frozen=True)
class SettlementEntry:
    timestamp: int
    asset: str
    decimals: int
    amount_atomic: int


@dataclass(frozen=True)
class AssetTotal:
    asset: str
    decimals: int
    amount_atomic: int


@dataclass(frozen=True)
class WindowSnapshot:
    totals: Dict[TotalsKey, AssetTotal]
    count: int


class SettlementWindow:
    """Append-only log of settlements, trimmed to the trailing retention period.

    Entries are stamped with the ``now`` passed to :meth:`record`, so insertion
    order is timestamp order and pruning only ever looks at the head.
    Totals are grouped by ``(asset, decimals)``; the same address with two
    precisions yields two totals.
    """

    def __init__(self, retention_ms: int = MS_IN_DAY) -> None:
        self._retention_ms = retention_ms
        self._entries: Deque[SettlementEntry] = deque()

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[SettlementEntry]:
        return iter(self._entries)

    def record(self, now: int, asset: str, decimals: int, amount_atomic: int) -> WindowSnapshot:
        self._entries.append(SettlementEntry(now, asset, decimals, amount_atomic))
        self.prune(now)
        return WindowSnapshot(totals=self.totals(), count=len(self._entries))

    def prune(self, now: int) -> None:
        cutoff = now - self._retention_ms
        while self._entries and self._entries[0].timestamp < cutoff:
            self._entries.popleft()

    def totals(self) -> Dict[TotalsKey, AssetTotal]:
        sums: Dict[TotalsKey, int] = {}
        for entry in self._entries:
            key = (entry.asset, entry.decimals)
            sums[key] = sums.get(key, 0) + entry.amount_atomic
        return {
            key: AssetTotal(asset=key[0], decimals=key[1], amount_atomic=amount)
            for key, amount in sums.items()
        }
