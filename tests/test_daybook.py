"""
Tests for Day Book, ledger report and the report dispatcher.
"""
from datetime import date
import pytest
from ledger_engine.errors import UnknownReportError
from ledger_engine.models import PaymentReceiptVoucher, Snapshot
from ledger_engine.reports import (
    Gstr1Report,
    ReportType,
    TrialBalance,
    available_months,
    build_report,
    day_book,
    ledger_report,
    voucher_amount,
    voucher_party,
)


class TestDayBook:
    def test_unfiltered_keeps_entry_order(self, mixed_vouchers):
        assert day_book(mixed_vouchers) == mixed_vouchers

    def test_filter_by_date(self, mixed_vouchers):
        result = day_book(mixed_vouchers, on_date=date(2024, 4, 10))
        assert [v.id for v in result] == ["p1"]

    def test_filter_by_month(self, mixed_vouchers):
        result = day_book(mixed_vouchers, month="2024-05")
        assert [v.id for v in result] == ["r1", "c1", "j1"]

    def test_date_wins_over_month(self, mixed_vouchers):
        result = day_book(mixed_vouchers, on_date=date(2024, 4, 10), month="2024-05")
        assert [v.id for v in result] == ["p1"]

    def test_no_match(self, mixed_vouchers):
        assert day_book(mixed_vouchers, month="2023-01") == []

    def test_available_months_newest_first(self, mixed_vouchers):
        assert available_months(mixed_vouchers) == ["2024-05", "2024-04"]

    @pytest.fixture
    def with_undated(self, mixed_vouchers):
        undated = PaymentReceiptVoucher.model_validate(
            {"id": "u1", "type": "Payment", "date": "someday", "party": "Acme Distributors", "account": "Cash", "amount": 5}
        )
        return mixed_vouchers + [undated]

    def test_undated_voucher_only_in_unfiltered_listing(self, with_undated):
        assert with_undated[-1].date is None
        assert [v.id for v in day_book(with_undated)][-1] == "u1"
        assert "u1" not in [v.id for v in day_book(with_undated, month="2024-05")]
        assert "u1" not in [v.id for v in day_book(with_undated, on_date=date(2024, 4, 10))]

    def test_available_months_skip_undated(self, with_undated):
        assert available_months(with_undated) == ["2024-05", "2024-04"]


class TestLedgerReport:
    def test_party_and_account(self, mixed_vouchers):
        assert [v.id for v in ledger_report(mixed_vouchers, "HDFC Bank")] == ["p1", "c1"]

    def test_journal_entries(self, mixed_vouchers):
        assert [v.id for v in ledger_report(mixed_vouchers, "Cash")] == ["r1", "c1", "j1"]

    def test_invoice_party(self, mixed_vouchers):
        result = ledger_report(mixed_vouchers, "Acme Distributors")
        assert [v.type for v in result] == ["Sales", "Receipt"]

    def test_no_ledger_selected_lists_everything(self, mixed_vouchers):
        assert ledger_report(mixed_vouchers, "") == mixed_vouchers
        assert ledger_report(mixed_vouchers, None) == mixed_vouchers


class TestDisplayHelpers:
    def test_amount_and_party(self, mixed_vouchers):
        purchase, sale, payment, receipt, contra, journal = mixed_vouchers
        assert voucher_amount(purchase) == pytest.approx(1180)
        assert voucher_amount(payment) == 1180
        assert voucher_amount(contra) == 300
        assert voucher_amount(journal) == 0
        assert voucher_party(receipt) == "Acme Distributors"
        assert voucher_party(contra) == "N/A"
        assert voucher_party(journal) == "N/A"


class TestBuildReport:
    @pytest.fixture
    def snapshot(self, company, ledgers, stock_items, mixed_vouchers):
        return Snapshot(company=company, ledgers=ledgers, stock_items=stock_items, vouchers=mixed_vouchers)

    def test_every_report_type(self, snapshot):
        for report_type in ReportType:
            build_report(report_type, snapshot, ledger="Cash")

    def test_accepts_value_strings(self, snapshot):
        assert isinstance(build_report("TrialBalance", snapshot), TrialBalance)
        assert isinstance(build_report("GSTR1", snapshot), Gstr1Report)

    def test_filters_are_forwarded(self, snapshot):
        result = build_report(ReportType.DAY_BOOK, snapshot, month="2024-04")
        assert [v.id for v in result] == [v.id for v in snapshot.vouchers[:3]]
        result = build_report(ReportType.LEDGER_REPORT, snapshot, ledger="Rent")
        assert [v.id for v in result] == ["j1"]

    def test_unknown_report(self, snapshot):
        with pytest.raises(UnknownReportError):
            build_report("BalanceSheet", snapshot)
