"""
Extracted invoice -> Purchase voucher.

Extracted data is untrusted: names may not match the masters, numbers may be
zero, the date may not parse. Every gap has a default, so normalizing never
raises:

- unknown seller      -> intra-state, party name kept as extracted
- unknown stock item  -> default GST rate (18% unless configured otherwise)
- unparseable date    -> today

Voucher totals are always summed from the recomputed line items. The
subtotal / tax / total figures read off the invoice are advisory only.
"""
from __future__ import annotations
from datetime import date, datetime
from typing import Any, Iterable, Optional
from loguru import logger
from adapters.adapter_types import ExtractedInvoiceData, ExtractedLineItem
from .masters import MasterIndex
from .models import CompanyDetails, Ledger, SalesPurchaseVoucher, StockItem
from .tax import (
    DEFAULT_GST_RATE,
    build_voucher_item,
    is_inter_state,
    resolve_gst_rate,
    split_tax,
    sum_voucher_items,
)

DATE_FORMATS = (
    "%Y-%m-%d",    # 2024-04-01 (requested from the extraction service)
    "%d-%m-%Y",    # 01-04-2024
    "%d/%m/%Y",    # 01/04/2024
    "%d.%m.%Y",    # 01.04.2024
    "%d-%b-%Y",    # 01-Apr-2024
    "%d %b %Y",    # 01 Apr 2024
    "%Y%m%d",      # 20240401
)


def parse_invoice_date(s: Optional[str], today: Optional[date] = None) -> date:
    """Parse an invoice date to a calendar date, falling back to ``today``."""
    fallback = today or date.today()
    if not s:
        return fallback
    s = str(s).strip()
    try:
        # ISO date-times, e.g. 2024-04-01T10:30:00Z
        return datetime.fromisoformat(s.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(s, fmt).date()
        except ValueError:
            continue
    logger.debug(f"Could not parse invoice date {s!r}, using {fallback}")
    return fallback


class InvoiceNormalizer:
    """
    Turns extracted invoices into Purchase vouchers against one set of masters.

    Master lookups are built once, so a whole batch shares them.
    """

    def __init__(
        self,
        ledgers: Iterable[Ledger],
        stock_items: Iterable[StockItem],
        company: Optional[CompanyDetails] = None,
        default_gst_rate: float = DEFAULT_GST_RATE,
    ):
        self.ledgers = MasterIndex(ledgers)
        self.stock_items = MasterIndex(stock_items)
        self.company = company or CompanyDetails()
        self.default_gst_rate = default_gst_rate

    def is_inter_state(self, seller_name: str) -> bool:
        return is_inter_state(self.ledgers.get(seller_name), self.company)

    def gst_rate(self, item_description: str) -> float:
        return resolve_gst_rate(self.stock_items.get(item_description), self.default_gst_rate)

    def normalize(
        self,
        extracted: ExtractedInvoiceData,
        source_label: str,
        today: Optional[date] = None,
    ) -> SalesPurchaseVoucher:
        """
        Build a Purchase voucher from extracted invoice data.

        The voucher id is left empty for the storage layer to assign.
        """
        inter_state = self.is_inter_state(extracted.seller_name)
        items = tuple(
            build_voucher_item(
                name=line.item_description,
                qty=line.quantity,
                rate=line.rate,
                gst_rate=self.gst_rate(line.item_description),
                is_inter_state=inter_state,
            )
            for line in extracted.line_items
        )
        totals = sum_voucher_items(items)
        return SalesPurchaseVoucher(
            id="",
            type="Purchase",
            date=parse_invoice_date(extracted.invoice_date, today),
            invoice_no=extracted.invoice_number,
            party=extracted.seller_name,
            is_inter_state=inter_state,
            items=items,
            total_taxable_amount=totals.taxable,
            total_cgst=totals.cgst,
            total_sgst=totals.sgst,
            total_igst=totals.igst,
            total=totals.total,
            narration=f"Auto-imported from {source_label}",
        )

    def recalculate(self, data: ExtractedInvoiceData) -> ExtractedInvoiceData:
        """
        Recompute subtotal, tax and total of a draft from its line items.

        Uses the same rate fallback as ``normalize`` so the draft shown while
        editing matches the voucher that will be saved.
        """
        inter_state = self.is_inter_state(data.seller_name)
        subtotal = cgst = sgst = igst = 0.0
        for line in data.line_items:
            taxable = line.quantity * line.rate
            split = split_tax(taxable, self.gst_rate(line.item_description), inter_state)
            subtotal += taxable
            cgst += split.cgst
            sgst += split.sgst
            igst += split.igst
        return data.model_copy(update={
            "subtotal": subtotal,
            "cgst_amount": cgst,
            "sgst_amount": sgst,
            "igst_amount": igst,
            "total_amount": subtotal + cgst + sgst + igst,
        })

    def update_line_item(self, data: ExtractedInvoiceData, index: int, **changes: Any) -> ExtractedInvoiceData:
        """Return a recalculated draft with one line item patched."""
        lines = list(data.line_items)
        patched = lines[index].model_dump()
        patched.update(changes)
        lines[index] = ExtractedLineItem.model_validate(patched)
        return self.recalculate(data.model_copy(update={"line_items": tuple(lines)}))


def update_field(data: ExtractedInvoiceData, field: str, value: Any) -> ExtractedInvoiceData:
    """Return a draft with one header field replaced (no recalculation)."""
    patched = data.model_dump()
    patched[field] = value
    return ExtractedInvoiceData.model_validate(patched)


def normalize(
    extracted: ExtractedInvoiceData,
    ledgers: Iterable[Ledger],
    stock_items: Iterable[StockItem],
    company: Optional[CompanyDetails],
    source_label: str,
    *,
    default_gst_rate: float = DEFAULT_GST_RATE,
    today: Optional[date] = None,
) -> SalesPurchaseVoucher:
    normalizer = InvoiceNormalizer(ledgers, stock_items, company, default_gst_rate)
    return normalizer.normalize(extracted, source_label, today)


def recalculate_draft(
    data: ExtractedInvoiceData,
    ledgers: Iterable[Ledger],
    stock_items: Iterable[StockItem],
    company: Optional[CompanyDetails],
    *,
    default_gst_rate: float = DEFAULT_GST_RATE,
) -> ExtractedInvoiceData:
    normalizer = InvoiceNormalizer(ledgers, stock_items, company, default_gst_rate)
    return normalizer.recalculate(data)
