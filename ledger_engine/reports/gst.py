"""
GSTR-1 classification and the sales tax summary.

A sale is B2B when the buyer's ledger exists, is GST Registered and carries a
GSTIN. Every other sale (unknown party, unregistered buyer, missing GSTIN) is
B2C. The classifier only partitions; vouchers are passed through untouched.
"""
from __future__ import annotations
from typing import Iterable, Mapping
from pydantic import BaseModel, ConfigDict
from ..models import REGISTERED, Ledger, SalesPurchaseVoucher, Voucher


class Gstr1Report(BaseModel):
    model_config = ConfigDict(frozen=True)

    b2b: tuple[SalesPurchaseVoucher, ...] = ()
    b2c: tuple[SalesPurchaseVoucher, ...] = ()


class SalesTaxSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    taxable: float = 0.0
    cgst: float = 0.0
    sgst: float = 0.0
    igst: float = 0.0
    total: float = 0.0


def sales_vouchers(vouchers: Iterable[Voucher]) -> list[SalesPurchaseVoucher]:
    return [v for v in vouchers if v.type == "Sales"]


def is_b2b(voucher: SalesPurchaseVoucher, ledgers_by_name: Mapping[str, Ledger]) -> bool:
    party = ledgers_by_name.get(voucher.party)
    return bool(
        party is not None
        and party.registration_type == REGISTERED
        and (party.gstin or "").strip()
    )


def classify_gst_filings(
    vouchers: Iterable[Voucher],
    ledgers_by_name: Mapping[str, Ledger],
) -> Gstr1Report:
    b2b = []
    b2c = []
    for v in sales_vouchers(vouchers):
        (b2b if is_b2b(v, ledgers_by_name) else b2c).append(v)
    return Gstr1Report(b2b=tuple(b2b), b2c=tuple(b2c))


def invoice_tax(voucher: SalesPurchaseVoucher) -> float:
    return voucher.total_cgst + voucher.total_sgst + voucher.total_igst


def compute_sales_tax_summary(vouchers: Iterable[Voucher]) -> SalesTaxSummary:
    taxable = cgst = sgst = igst = total = 0.0
    for v in sales_vouchers(vouchers):
        taxable += v.total_taxable_amount
        cgst += v.total_cgst
        sgst += v.total_sgst
        igst += v.total_igst
        total += v.total
    return SalesTaxSummary(taxable=taxable, cgst=cgst, sgst=sgst, igst=igst, total=total)
