"""
Command line interface.

Usage:
    # Trial balance of a books snapshot
    python -m ledger_engine report TrialBalance --snapshot books.json

    # Day Book for April 2024, as JSON
    python -m ledger_engine report DayBook --snapshot books.json --month 2024-04 --json

    # Vouchers touching one ledger
    python -m ledger_engine report LedgerReport --snapshot books.json --ledger "Acme Traders"

    # Extract scanned invoices into draft Purchase vouchers
    python -m ledger_engine import inv-001.jpg inv-002.pdf --snapshot books.json --output new.json
"""
from __future__ import annotations
import argparse
import json
import sys
from datetime import date
from pathlib import Path
from typing import Any, Optional
from loguru import logger
from pydantic import BaseModel
from .config import EngineConfig
from .errors import LedgerEngineError
from .models import Snapshot
from .reports import ReportType, build_report, invoice_tax, voucher_amount, voucher_party
from .snapshot import dump_vouchers, load_snapshot, with_company_state


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level)
    if log_file:
        logger.add(log_file, level="DEBUG", rotation="10 MB", retention=5)


def _to_jsonable(result: Any) -> Any:
    if isinstance(result, BaseModel):
        return result.model_dump(mode="json", by_alias=True)
    if isinstance(result, list):
        return [_to_jsonable(r) for r in result]
    return result


def _date_text(v) -> str:
    return v.date.isoformat() if v.date else "-"


def print_report(report_type: ReportType, result: Any) -> None:
    if report_type in (ReportType.DAY_BOOK, ReportType.LEDGER_REPORT):
        if not result:
            print("No transactions found.")
        for v in result:
            print(f"{_date_text(v):<10}  {v.type:<8}  {voucher_party(v):<30}  {voucher_amount(v):>14,.2f}")
    elif report_type == ReportType.TRIAL_BALANCE:
        for row in result.rows:
            print(f"{row.ledger:<30}  {row.debit:>14,.2f}  {row.credit:>14,.2f}")
        print("-" * 62)
        print(f"{'Total':<30}  {result.totals.debit:>14,.2f}  {result.totals.credit:>14,.2f}")
    elif report_type == ReportType.STOCK_SUMMARY:
        for row in result:
            print(f"{row.name:<30}  in {row.inward:>10,.2f}  out {row.outward:>10,.2f}  closing {row.closing:>10,.2f}")
    elif report_type == ReportType.STOCK_VALUATION:
        for row in result:
            print(f"{row.name:<30}  qty {row.closing_qty:>10,.2f}  @ {row.avg_cost:>10,.2f}  = {row.value:>14,.2f}")
    elif report_type == ReportType.GSTR1:
        for label, bucket in (("B2B", result.b2b), ("B2C", result.b2c)):
            print(f"{label} ({len(bucket)} invoice(s))")
            for v in bucket:
                print(f"  {_date_text(v):<10}  {v.invoice_no:<12}  {v.party:<30}  taxable {v.total_taxable_amount:>12,.2f}  tax {invoice_tax(v):>12,.2f}")
    elif report_type == ReportType.SALES_TAX_REPORT:
        for field in ("taxable", "cgst", "sgst", "igst", "total"):
            print(f"{field.upper():<10}  {getattr(result, field):>14,.2f}")


def _load(args, config: EngineConfig) -> Snapshot:
    return with_company_state(load_snapshot(args.snapshot), config.company_state)


def cmd_report(args, config: EngineConfig) -> int:
    snapshot = _load(args, config)
    report_type = ReportType(args.report_type)
    result = build_report(
        report_type,
        snapshot,
        on_date=args.date,
        month=args.month,
        ledger=args.ledger,
    )
    if args.json:
        print(json.dumps(_to_jsonable(result), indent=2, ensure_ascii=False))
    else:
        print_report(report_type, result)
    return 0


def cmd_import(args, config: EngineConfig) -> int:
    # Imported lazily: report commands need no HTTP stack
    from adapters.gemini_http import GeminiInvoiceExtractor
    from .ingest import InvoiceBatch

    if args.workers:
        config.max_workers = args.workers
    errors = config.validate(require_extraction=True)
    if errors:
        for err in errors:
            logger.error(f"Configuration error: {err}")
        return 1

    snapshot = _load(args, config)
    with GeminiInvoiceExtractor(config) as extractor:
        batch = InvoiceBatch(
            extractor,
            config,
            on_status=lambda job: logger.info(f"{job.name}: {job.status.value}"),
        )
        batch.add_files(args.files)
        batch.run()

    vouchers = batch.to_vouchers(snapshot.ledgers, snapshot.stock_items, snapshot.company)
    output = dump_vouchers(vouchers)
    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
        print(f"✓ Wrote {len(vouchers)} voucher(s) to {args.output}")
    else:
        print(output)

    for job in batch.failed:
        print(f"✗ {job.name}: {job.error}")
    return 1 if batch.failed else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ledger-engine",
        description="Accounting reports and invoice import",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress output except errors")
    sub = parser.add_subparsers(dest="command", required=True)

    report = sub.add_parser("report", help="Compute a report over a books snapshot")
    report.add_argument("report_type", choices=[r.value for r in ReportType])
    report.add_argument("--snapshot", required=True, help="Books snapshot (JSON)")
    report.add_argument(
        "--date",
        type=lambda s: date.fromisoformat(s),
        help="Day Book: only this date (YYYY-MM-DD)",
    )
    report.add_argument("--month", help="Day Book: only this month (YYYY-MM)")
    report.add_argument("--ledger", help="Ledger report: ledger name")
    report.add_argument("--json", action="store_true", help="Print JSON instead of a table")
    report.set_defaults(func=cmd_report)

    imp = sub.add_parser("import", help="Extract scanned invoices into Purchase vouchers")
    imp.add_argument("files", nargs="+", help="Invoice images or PDFs")
    imp.add_argument("--snapshot", required=True, help="Books snapshot (JSON) with the masters")
    imp.add_argument("--output", help="Write vouchers here instead of stdout")
    imp.add_argument("--workers", type=int, help="Files extracted in parallel (default: 1)")
    imp.set_defaults(func=cmd_import)
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = EngineConfig.from_env()

    if args.quiet:
        level = "ERROR"
    elif args.verbose:
        level = "DEBUG"
    else:
        level = config.log_level
    configure_logging(level, config.log_file)

    errors = config.validate()
    if errors:
        for err in errors:
            logger.error(f"Configuration error: {err}")
        return 1

    try:
        return args.func(args, config)
    except LedgerEngineError as e:
        logger.error(str(e))
        return 1
    except KeyboardInterrupt:
        print("\n\nCancelled by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
