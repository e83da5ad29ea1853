"""Day Book and ledger-wise voucher listings."""
from __future__ import annotations
from datetime import date
from typing import Iterable, Optional
from ..errors import UnknownVoucherTypeError
from ..models import Voucher


def month_key(d: date) -> str:
    return f"{d.year:04d}-{d.month:02d}"


def day_book(
    vouchers: Iterable[Voucher],
    on_date: Optional[date] = None,
    month: Optional[str] = None,
) -> list[Voucher]:
    """
    Vouchers in entry order, optionally restricted to one day or one month.

    ``on_date`` takes precedence over ``month`` ("YYYY-MM"). Vouchers whose
    date did not parse only appear in the unfiltered listing.
    """
    if on_date is not None:
        return [v for v in vouchers if v.date == on_date]
    if month:
        return [v for v in vouchers if v.date is not None and month_key(v.date) == month]
    return list(vouchers)


def available_months(vouchers: Iterable[Voucher]) -> list[str]:
    """Distinct "YYYY-MM" keys, newest first. Vouchers without a usable date are skipped."""
    return sorted({month_key(v.date) for v in vouchers if v.date is not None}, reverse=True)


def touches_ledger(v: Voucher, ledger: str) -> bool:
    if v.type in ("Purchase", "Sales"):
        return v.party == ledger
    if v.type in ("Payment", "Receipt"):
        return v.party == ledger or v.account == ledger
    if v.type == "Contra":
        return v.from_account == ledger or v.to_account == ledger
    if v.type == "Journal":
        return any(e.ledger == ledger for e in v.entries)
    raise UnknownVoucherTypeError(f"Unknown voucher type: {v.type}")


def ledger_report(vouchers: Iterable[Voucher], ledger: Optional[str]) -> list[Voucher]:
    """Vouchers touching ``ledger``; with no ledger selected, every voucher."""
    if not ledger:
        return list(vouchers)
    return [v for v in vouchers if touches_ledger(v, ledger)]


def voucher_amount(v: Voucher) -> float:
    if v.type in ("Purchase", "Sales"):
        return v.total
    if v.type in ("Payment", "Receipt", "Contra"):
        return v.amount
    return 0.0


def voucher_party(v: Voucher) -> str:
    if v.type in ("Purchase", "Sales", "Payment", "Receipt"):
        return v.party
    return "N/A"
