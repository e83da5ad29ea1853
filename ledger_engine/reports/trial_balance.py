"""
Trial balance.

Every voucher is posted to its ledgers as debits and credits, each ledger is
netted, and zero balances are dropped. By double entry the debit and credit
columns of the result add up to the same figure.

Posting rules:
- Purchase: Cr party (total); Dr Purchases (taxable); Dr IGST, or Dr CGST and SGST
- Sales:    Dr party (total); Cr Sales (taxable); Cr IGST, or Cr CGST and SGST
- Payment:  Dr party; Cr account
- Receipt:  Cr party; Dr account
- Contra:   Cr from-account; Dr to-account
- Journal:  each entry with a ledger name, as entered
"""
from __future__ import annotations
from typing import Iterable
from loguru import logger
from pydantic import BaseModel, ConfigDict
from ..errors import UnknownVoucherTypeError
from ..models import Ledger, Voucher

PURCHASES_LEDGER = "Purchases"
SALES_LEDGER = "Sales"
CGST_LEDGER = "CGST"
SGST_LEDGER = "SGST"
IGST_LEDGER = "IGST"
# Postings to a blank party/account name land here so the books still balance
SUSPENSE_LEDGER = "Suspense"

BALANCE_TOLERANCE = 1e-6


class TrialBalanceRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    ledger: str
    debit: float
    credit: float


class TrialBalanceTotals(BaseModel):
    model_config = ConfigDict(frozen=True)

    debit: float = 0.0
    credit: float = 0.0


class TrialBalance(BaseModel):
    model_config = ConfigDict(frozen=True)

    rows: tuple[TrialBalanceRow, ...] = ()
    totals: TrialBalanceTotals = TrialBalanceTotals()

    @property
    def is_balanced(self) -> bool:
        return abs(self.totals.debit - self.totals.credit) <= BALANCE_TOLERANCE


class _Balances:
    """Running debit/credit per ledger, in first-seen order."""

    def __init__(self):
        self._sums: dict[str, list[float]] = {}

    def ensure(self, name: str) -> str:
        if name not in self._sums:
            self._sums[name] = [0.0, 0.0]
        return name

    def debit(self, name: str, amount: float) -> None:
        self._sums[self.ensure(name or SUSPENSE_LEDGER)][0] += amount

    def credit(self, name: str, amount: float) -> None:
        self._sums[self.ensure(name or SUSPENSE_LEDGER)][1] += amount

    def items(self):
        return self._sums.items()


def _post(balances: _Balances, v: Voucher) -> None:
    if v.type == "Purchase":
        balances.credit(v.party, v.total)
        balances.debit(PURCHASES_LEDGER, v.total_taxable_amount)
        if v.is_inter_state:
            balances.debit(IGST_LEDGER, v.total_igst)
        else:
            balances.debit(CGST_LEDGER, v.total_cgst)
            balances.debit(SGST_LEDGER, v.total_sgst)
    elif v.type == "Sales":
        balances.debit(v.party, v.total)
        balances.credit(SALES_LEDGER, v.total_taxable_amount)
        if v.is_inter_state:
            balances.credit(IGST_LEDGER, v.total_igst)
        else:
            balances.credit(CGST_LEDGER, v.total_cgst)
            balances.credit(SGST_LEDGER, v.total_sgst)
    elif v.type == "Payment":
        balances.debit(v.party, v.amount)
        balances.credit(v.account, v.amount)
    elif v.type == "Receipt":
        balances.credit(v.party, v.amount)
        balances.debit(v.account, v.amount)
    elif v.type == "Contra":
        balances.credit(v.from_account, v.amount)
        balances.debit(v.to_account, v.amount)
    elif v.type == "Journal":
        for entry in v.entries:
            if not entry.ledger:
                continue
            balances.debit(entry.ledger, entry.debit)
            balances.credit(entry.ledger, entry.credit)
    else:
        raise UnknownVoucherTypeError(f"Cannot post voucher type: {v.type}")


def compute_trial_balance(vouchers: Iterable[Voucher], ledgers: Iterable[Ledger]) -> TrialBalance:
    """
    Build the trial balance for a voucher set.

    Rows follow first-seen order: master ledgers in master order, then any
    ledger a voucher names that is missing from the master list.
    """
    balances = _Balances()
    for ledger in ledgers:
        if ledger.name:
            balances.ensure(ledger.name)

    for v in vouchers:
        _post(balances, v)

    rows = []
    total_debit = 0.0
    total_credit = 0.0
    for name, (debit, credit) in balances.items():
        net = debit - credit
        if abs(net) <= BALANCE_TOLERANCE:
            continue
        if net > 0:
            rows.append(TrialBalanceRow(ledger=name, debit=net, credit=0.0))
            total_debit += net
        else:
            rows.append(TrialBalanceRow(ledger=name, debit=0.0, credit=credit - debit))
            total_credit += credit - debit

    result = TrialBalance(
        rows=tuple(rows),
        totals=TrialBalanceTotals(debit=total_debit, credit=total_credit),
    )
    if not result.is_balanced:
        logger.warning(
            f"Trial balance does not tally: debit {total_debit:.2f} vs credit {total_credit:.2f}"
        )
    return result
