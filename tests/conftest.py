"""Shared fixtures: a small set of books for a Maharashtra-based company."""
from datetime import date
import pytest
from ledger_engine.models import (
    CompanyDetails,
    ContraVoucher,
    JournalEntry,
    JournalVoucher,
    Ledger,
    PaymentReceiptVoucher,
    SalesPurchaseVoucher,
    StockItem,
)
from ledger_engine.tax import build_voucher_item, sum_voucher_items


@pytest.fixture
def company():
    return CompanyDetails(name="Shree Traders", state="Maharashtra", gstin="27AAAAA0000A1Z5")


@pytest.fixture
def ledgers():
    return [
        Ledger(name="Cash"),
        Ledger(name="HDFC Bank"),
        Ledger(name="Acme Distributors", state="Maharashtra", registration_type="Registered", gstin="27BBBBB1111B1Z5"),
        Ledger(name="Gujarat Metals", state="Gujarat", registration_type="Registered", gstin="24CCCCC2222C1Z5"),
        Ledger(name="Walk-in Customer", state="Maharashtra", registration_type="Unregistered"),
    ]


@pytest.fixture
def stock_items():
    return [
        StockItem(name="Widget", gst_rate=18),
        StockItem(name="Gadget", gst_rate=12),
        StockItem(name="Rice", gst_rate=0),
        StockItem(name="Sundry Part"),
    ]


@pytest.fixture
def make_invoice():
    """Build a Sales/Purchase voucher from (name, qty, rate, gst_rate) lines."""

    def _make(type_, party, lines, *, inter_state=False, on=date(2024, 4, 1), invoice_no=""):
        items = tuple(
            build_voucher_item(name, qty, rate, gst_rate, inter_state)
            for name, qty, rate, gst_rate in lines
        )
        totals = sum_voucher_items(items)
        return SalesPurchaseVoucher(
            id=f"{type_}-{party}-{on}",
            date=on,
            type=type_,
            party=party,
            is_inter_state=inter_state,
            items=items,
            total_taxable_amount=totals.taxable,
            total_cgst=totals.cgst,
            total_sgst=totals.sgst,
            total_igst=totals.igst,
            total=totals.total,
            invoice_no=invoice_no,
        )

    return _make


@pytest.fixture
def mixed_vouchers(make_invoice):
    """One voucher of every kind."""
    return [
        make_invoice("Purchase", "Gujarat Metals", [("Widget", 10, 100, 18)], inter_state=True,
                     on=date(2024, 4, 1), invoice_no="GM-1"),
        make_invoice("Sales", "Acme Distributors", [("Widget", 4, 150, 18), ("Gadget", 1, 500, 12)],
                     on=date(2024, 4, 5), invoice_no="S-1"),
        PaymentReceiptVoucher(id="p1", date=date(2024, 4, 10), type="Payment",
                              party="Gujarat Metals", account="HDFC Bank", amount=1180),
        PaymentReceiptVoucher(id="r1", date=date(2024, 5, 2), type="Receipt",
                              party="Acme Distributors", account="Cash", amount=500),
        ContraVoucher(id="c1", date=date(2024, 5, 3), type="Contra",
                      from_account="Cash", to_account="HDFC Bank", amount=300),
        JournalVoucher(id="j1", date=date(2024, 5, 31), type="Journal", entries=(
            JournalEntry(ledger="Rent", debit=2000),
            JournalEntry(ledger="Cash", credit=2000),
            JournalEntry(ledger="", debit=999),
        )),
    ]
