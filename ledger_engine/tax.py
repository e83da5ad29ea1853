"""
GST split rules.

Intra-state supplies carry CGST and SGST in equal halves; inter-state supplies
carry the full tax as IGST. A line never carries both.
"""
from __future__ import annotations
from typing import Iterable, NamedTuple, Optional
from .models import CompanyDetails, Ledger, StockItem, VoucherItem

DEFAULT_GST_RATE = 18.0


class TaxSplit(NamedTuple):
    cgst: float
    sgst: float
    igst: float

    @property
    def total(self) -> float:
        return self.cgst + self.sgst + self.igst


class VoucherTotals(NamedTuple):
    taxable: float
    cgst: float
    sgst: float
    igst: float
    total: float


def split_tax(taxable_amount: float, gst_rate_percent: float, is_inter_state: bool) -> TaxSplit:
    tax = taxable_amount * gst_rate_percent / 100
    if is_inter_state:
        return TaxSplit(cgst=0.0, sgst=0.0, igst=tax)
    half = tax / 2
    return TaxSplit(cgst=half, sgst=half, igst=0.0)


def is_inter_state(party_ledger: Optional[Ledger], company: Optional[CompanyDetails]) -> bool:
    """
    Compare the party's state with the company's, ignoring case.

    Unknown party, or a missing state on either side, counts as intra-state.
    """
    party_state = ((party_ledger.state if party_ledger else None) or "").strip()
    company_state = ((company.state if company else None) or "").strip()
    if not party_state or not company_state:
        return False
    return party_state.lower() != company_state.lower()


def resolve_gst_rate(stock_item: Optional[StockItem], default_rate: float = DEFAULT_GST_RATE) -> float:
    """
    GST rate for a line item.

    Unknown items and items without a recorded rate take ``default_rate``.
    A recorded rate of 0 (exempt / nil-rated goods) is kept.
    """
    if stock_item is None or stock_item.gst_rate is None:
        return default_rate
    return stock_item.gst_rate


def build_voucher_item(
    name: str,
    qty: float,
    rate: float,
    gst_rate: float,
    is_inter_state: bool,
) -> VoucherItem:
    taxable_amount = qty * rate
    split = split_tax(taxable_amount, gst_rate, is_inter_state)
    return VoucherItem(
        name=name,
        qty=qty,
        rate=rate,
        taxable_amount=taxable_amount,
        cgst_amount=split.cgst,
        sgst_amount=split.sgst,
        igst_amount=split.igst,
        total_amount=taxable_amount + split.total,
    )


def sum_voucher_items(items: Iterable[VoucherItem]) -> VoucherTotals:
    taxable = cgst = sgst = igst = total = 0.0
    for item in items:
        taxable += item.taxable_amount
        cgst += item.cgst_amount
        sgst += item.sgst_amount
        igst += item.igst_amount
        total += item.total_amount
    return VoucherTotals(taxable=taxable, cgst=cgst, sgst=sgst, igst=igst, total=total)
