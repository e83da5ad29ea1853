"""
Ledger Engine - accounting reports from vouchers, and invoice import.

Turns an immutable books snapshot (vouchers, ledgers, stock items, company
profile) into derived reports, and turns scanned invoices into draft Purchase
vouchers through an external extraction service.

Key Features:
- Trial balance with double-entry postings for all six voucher kinds
- Stock summary and weighted-average stock valuation
- GSTR-1 B2B/B2C classification and sales tax summary
- CGST/SGST vs IGST split from the party's and the company's states
- Batch invoice extraction with per-file retry and status tracking

Usage:
    python -m ledger_engine report TrialBalance --snapshot books.json
    python -m ledger_engine import invoices/*.jpg --snapshot books.json
"""

__version__ = "0.1.0"

from .config import EngineConfig
from .models import Snapshot
from .normalizer import InvoiceNormalizer, normalize
from .reports import ReportType, build_report

__all__ = [
    "EngineConfig",
    "Snapshot",
    "InvoiceNormalizer",
    "normalize",
    "ReportType",
    "build_report",
    "__version__",
]
