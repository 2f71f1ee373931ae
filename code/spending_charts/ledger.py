from __future__ import annotations

from typing import Dict, Iterable, List

from .normalize import Transaction, TxKind
from .periods import Granularity, derive, period_sort_key

# category -> period -> net total (positive = spending)
Ledger = Dict[str, Dict[str, float]]


def signed_amount(tx: Transaction) -> float:
    if tx.kind is TxKind.INCOME:
        return -tx.amount
    return tx.amount


def build_ledger(transactions: Iterable[Transaction], granularity: Granularity) -> Ledger:
    ledger: Ledger = {}
    for tx in transactions:
        period = derive(tx.date, granularity)
        by_period = ledger.setdefault(tx.category, {})
        by_period[period] = by_period.get(period, 0.0) + signed_amount(tx)
    return ledger


def period_universe(*ledgers: Ledger) -> List[str]:
    periods = set()
    for ledger in ledgers:
        for by_period in ledger.values():
            periods.update(by_period)
    return sorted(periods, key=period_sort_key)
