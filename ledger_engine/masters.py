"""
Case-insensitive lookups of master data.

Vouchers and extracted invoices refer to ledgers and stock items by name, and
those names are matched case-insensitively. ``MasterIndex`` builds the
lowercased-name -> record map once per computation instead of scanning the
master list for every line.

Two master records whose names differ only by case are an ambiguous
configuration. The first record wins and the others are listed in
``MasterIndex.duplicates``.
"""
from __future__ import annotations
from typing import Generic, Iterable, Iterator, Optional, TypeVar
from loguru import logger
from .models import Ledger, StockItem

T = TypeVar("T", Ledger, StockItem)


def normalize_name(name: Optional[str]) -> str:
    return (name or "").strip().lower()


class MasterIndex(Generic[T]):
    def __init__(self, records: Iterable[T]):
        self._by_key: dict[str, T] = {}
        self.duplicates: list[str] = []
        for record in records:
            key = normalize_name(record.name)
            if key in self._by_key:
                self.duplicates.append(record.name)
                continue
            self._by_key[key] = record
        if self.duplicates:
            logger.warning(f"Master names differ only by case, first match wins: {self.duplicates}")

    def get(self, name: Optional[str]) -> Optional[T]:
        return self._by_key.get(normalize_name(name))

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and normalize_name(name) in self._by_key

    def __len__(self) -> int:
        return len(self._by_key)

    def __iter__(self) -> Iterator[T]:
        return iter(self._by_key.values())


def ledgers_by_name(ledgers: Iterable[Ledger]) -> dict[str, Ledger]:
    """Exact-name map of ledgers, as used by the GST classifier."""
    return {ledger.name: ledger for ledger in ledgers}
