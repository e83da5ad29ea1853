"""
Tests for GSTR-1 classification and the sales tax summary.
"""
import pytest
from ledger_engine.masters import ledgers_by_name
from ledger_engine.models import Ledger
from ledger_engine.reports.gst import classify_gst_filings, compute_sales_tax_summary, invoice_tax


@pytest.fixture
def sales(make_invoice):
    return [
        make_invoice("Sales", "Acme Distributors", [("Widget", 2, 100, 18)], invoice_no="S-1"),
        make_invoice("Sales", "Walk-in Customer", [("Widget", 1, 100, 18)], invoice_no="S-2"),
        make_invoice("Sales", "Unknown Buyer", [("Gadget", 1, 500, 12)], invoice_no="S-3"),
        make_invoice("Sales", "Gujarat Metals", [("Widget", 2, 100, 18)], inter_state=True, invoice_no="S-4"),
        make_invoice("Sales", "No GSTIN Pvt Ltd", [("Widget", 1, 10, 18)], invoice_no="S-5"),
    ]


@pytest.fixture
def index(ledgers):
    return ledgers_by_name(ledgers + [Ledger(name="No GSTIN Pvt Ltd", registration_type="Registered", gstin="  ")])


class TestGstr1:
    def test_b2b_needs_registered_ledger_with_gstin(self, sales, index):
        report = classify_gst_filings(sales, index)
        assert [v.invoice_no for v in report.b2b] == ["S-1", "S-4"]
        assert [v.invoice_no for v in report.b2c] == ["S-2", "S-3", "S-5"]

    def test_partition(self, sales, index, mixed_vouchers):
        """Every sale lands in exactly one bucket; other voucher kinds in none."""
        vouchers = sales + mixed_vouchers
        report = classify_gst_filings(vouchers, index)
        all_sales = [v for v in vouchers if v.type == "Sales"]
        assert len(report.b2b) + len(report.b2c) == len(all_sales)
        b2b_ids = {id(v) for v in report.b2b}
        b2c_ids = {id(v) for v in report.b2c}
        assert not b2b_ids & b2c_ids
        assert b2b_ids | b2c_ids == {id(v) for v in all_sales}

    def test_lookup_is_exact(self, make_invoice, index):
        sale = make_invoice("Sales", "acme distributors", [("Widget", 1, 100, 18)])
        report = classify_gst_filings([sale], index)
        assert report.b2c == (sale,)

    def test_vouchers_passed_through(self, sales, index):
        report = classify_gst_filings(sales, index)
        assert report.b2b[0] is sales[0]

    def test_invoice_tax(self, sales):
        assert invoice_tax(sales[0]) == pytest.approx(36)
        assert invoice_tax(sales[3]) == pytest.approx(36)


class TestSalesTaxSummary:
    def test_sums_sales_only(self, mixed_vouchers):
        summary = compute_sales_tax_summary(mixed_vouchers)
        assert summary.taxable == pytest.approx(1100)
        assert summary.cgst == pytest.approx(84)
        assert summary.sgst == pytest.approx(84)
        assert summary.igst == 0
        assert summary.total == pytest.approx(1268)

    def test_empty(self):
        summary = compute_sales_tax_summary([])
        assert (summary.taxable, summary.cgst, summary.sgst, summary.igst, summary.total) == (0, 0, 0, 0, 0)
