"""
Report derivation.

Every report is a pure function of a books snapshot (vouchers plus master
data) and an optional filter. Nothing here mutates its inputs, so reports may
be computed in any order or in parallel on different snapshots.

Reports:
- DayBook:         vouchers, optionally for one date or one month
- LedgerReport:    vouchers touching one ledger
- TrialBalance:    per-ledger net debit/credit
- StockSummary:    inward / outward / closing quantity per stock item
- GSTR1:           sales split into B2B and B2C
- StockValuation:  closing quantity at weighted-average cost
- SalesTaxReport:  taxable value and tax collected on sales
"""
from __future__ import annotations
from datetime import date
from enum import Enum
from typing import Any, Optional
from ..errors import UnknownReportError
from ..masters import ledgers_by_name
from ..models import Snapshot
from .daybook import available_months, day_book, ledger_report, voucher_amount, voucher_party
from .gst import Gstr1Report, SalesTaxSummary, classify_gst_filings, compute_sales_tax_summary, invoice_tax
from .stock import StockSummaryRow, StockValuationRow, compute_stock_summary, compute_stock_valuation
from .trial_balance import TrialBalance, TrialBalanceRow, compute_trial_balance


class ReportType(str, Enum):
    DAY_BOOK = "DayBook"
    LEDGER_REPORT = "LedgerReport"
    TRIAL_BALANCE = "TrialBalance"
    STOCK_SUMMARY = "StockSummary"
    GSTR1 = "GSTR1"
    STOCK_VALUATION = "StockValuation"
    SALES_TAX_REPORT = "SalesTaxReport"


REPORTS = {
    ReportType.DAY_BOOK: lambda s, f: day_book(s.vouchers, f.get("on_date"), f.get("month")),
    ReportType.LEDGER_REPORT: lambda s, f: ledger_report(s.vouchers, f.get("ledger")),
    ReportType.TRIAL_BALANCE: lambda s, f: compute_trial_balance(s.vouchers, s.ledgers),
    ReportType.STOCK_SUMMARY: lambda s, f: compute_stock_summary(s.vouchers, s.stock_items),
    ReportType.GSTR1: lambda s, f: classify_gst_filings(s.vouchers, ledgers_by_name(s.ledgers)),
    ReportType.STOCK_VALUATION: lambda s, f: compute_stock_valuation(s.vouchers, s.stock_items),
    ReportType.SALES_TAX_REPORT: lambda s, f: compute_sales_tax_summary(s.vouchers),
}


def build_report(
    report_type: ReportType | str,
    snapshot: Snapshot,
    *,
    on_date: Optional[date] = None,
    month: Optional[str] = None,
    ledger: Optional[str] = None,
) -> Any:
    """
    Compute one report over a snapshot.

    Raises:
        UnknownReportError: If ``report_type`` names no known report
    """
    try:
        report_type = ReportType(report_type)
    except ValueError:
        valid = [r.value for r in ReportType]
        raise UnknownReportError(f"Unknown report: {report_type}. Valid: {valid}") from None
    filters = {"on_date": on_date, "month": month, "ledger": ledger}
    return REPORTS[report_type](snapshot, filters)


__all__ = [
    "ReportType",
    "REPORTS",
    "build_report",
    "available_months",
    "day_book",
    "ledger_report",
    "voucher_amount",
    "voucher_party",
    "Gstr1Report",
    "SalesTaxSummary",
    "classify_gst_filings",
    "compute_sales_tax_summary",
    "invoice_tax",
    "StockSummaryRow",
    "StockValuationRow",
    "compute_stock_summary",
    "compute_stock_valuation",
    "TrialBalance",
    "TrialBalanceRow",
    "compute_trial_balance",
]
