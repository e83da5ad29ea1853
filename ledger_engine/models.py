"""
Voucher and master data models.

All models are frozen: reports never mutate their inputs, and editing a draft
means deriving a new record with ``model_copy(update=...)``. JSON uses the
camelCase field names of the books export (``isInterState``,
``totalTaxableAmount``...); Python code uses snake_case attributes. Both are
accepted on input.
"""
from __future__ import annotations
import datetime
from typing import Annotated, Any, Literal, Optional, Union
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

VOUCHER_TYPES = ("Purchase", "Sales", "Payment", "Receipt", "Contra", "Journal")

REGISTERED = "Registered"
UNREGISTERED = "Unregistered"


def _to_date(value: Any) -> Optional[datetime.date]:
    """Stored voucher dates are not validated; anything unparseable becomes None."""
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        return datetime.date.fromisoformat(text[:10])
    except ValueError:
        return None


# None when the stored date does not parse
VoucherDate = Annotated[Optional[datetime.date], BeforeValidator(_to_date)]


class BooksModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ---------------------------------------------------------------------------
# Master data
# ---------------------------------------------------------------------------

class Ledger(BooksModel):
    name: str
    state: Optional[str] = None
    registration_type: str = UNREGISTERED
    gstin: Optional[str] = None
    group: Optional[str] = None


class StockItem(BooksModel):
    name: str
    gst_rate: Optional[float] = None   # None: no rate recorded
    hsn_code: Optional[str] = None
    unit: Optional[str] = None


class CompanyDetails(BooksModel):
    name: str = ""
    state: Optional[str] = None
    gstin: Optional[str] = None


# ---------------------------------------------------------------------------
# Vouchers
# ---------------------------------------------------------------------------

class VoucherItem(BooksModel):
    name: str
    qty: float
    rate: float
    taxable_amount: float
    cgst_amount: float = 0.0
    sgst_amount: float = 0.0
    igst_amount: float = 0.0
    total_amount: float


class SalesPurchaseVoucher(BooksModel):
    id: str = ""
    date: VoucherDate = None
    type: Literal["Purchase", "Sales"]
    party: str
    is_inter_state: bool = False
    items: tuple[VoucherItem, ...] = ()
    total_taxable_amount: float = 0.0
    total_cgst: float = 0.0
    total_sgst: float = 0.0
    total_igst: float = 0.0
    total: float = 0.0
    invoice_no: str = ""
    narration: str = ""


class PaymentReceiptVoucher(BooksModel):
    id: str = ""
    date: VoucherDate = None
    type: Literal["Payment", "Receipt"]
    party: str
    account: str
    amount: float
    narration: str = ""


class ContraVoucher(BooksModel):
    id: str = ""
    date: VoucherDate = None
    type: Literal["Contra"]
    from_account: str
    to_account: str
    amount: float
    narration: str = ""


class JournalEntry(BooksModel):
    ledger: str = ""
    debit: float = 0.0
    credit: float = 0.0


class JournalVoucher(BooksModel):
    id: str = ""
    date: VoucherDate = None
    type: Literal["Journal"]
    entries: tuple[JournalEntry, ...] = ()
    narration: str = ""


Voucher = Annotated[
    Union[SalesPurchaseVoucher, PaymentReceiptVoucher, ContraVoucher, JournalVoucher],
    Field(discriminator="type"),
]


class Snapshot(BooksModel):
    """Everything a report needs: the voucher list plus master data."""

    company: CompanyDetails = CompanyDetails()
    ledgers: tuple[Ledger, ...] = ()
    stock_items: tuple[StockItem, ...] = ()
    vouchers: tuple[Voucher, ...] = ()
