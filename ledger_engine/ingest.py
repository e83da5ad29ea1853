"""
Batch import of scanned invoices.

Each file is a small state machine:

    PENDING -> PROCESSING -> SUCCESS | ERROR

While PROCESSING, the extraction call is attempted up to ``retry_attempts``
times with exponential backoff (``retry_delay``, doubling each attempt). A
file that still fails is marked ERROR with the last error message and the
batch moves on; one bad file never aborts the others.

Files run one at a time by default so status updates arrive in order. With
``max_workers`` > 1 they run on a bounded thread pool; transitions stay
monotonic per file. A cancel event is checked before each file starts, and
files not yet started stay PENDING.

The extraction call itself is injected (``ExtractionService``), so the
scheduler and retry policy can be exercised without a network.
"""
from __future__ import annotations
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, Optional
from loguru import logger
from tenacity import Retrying, stop_after_attempt
from adapters.adapter_types import ExtractedInvoiceData, ExtractionService, InvoiceDocument
from .config import EngineConfig
from .errors import InvalidTransitionError
from .models import CompanyDetails, Ledger, SalesPurchaseVoucher, StockItem
from .normalizer import InvoiceNormalizer


class FileStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SUCCESS = "success"
    ERROR = "error"


TRANSITIONS = {
    FileStatus.PENDING: {FileStatus.PROCESSING},
    FileStatus.PROCESSING: {FileStatus.SUCCESS, FileStatus.ERROR},
    FileStatus.SUCCESS: set(),
    FileStatus.ERROR: set(),
}


@dataclass
class FileJob:
    document: InvoiceDocument
    status: FileStatus = FileStatus.PENDING
    attempts: int = 0
    extracted: Optional[ExtractedInvoiceData] = None
    error: Optional[str] = None

    @property
    def id(self) -> str:
        return self.document.id

    @property
    def name(self) -> str:
        return self.document.name

    def advance(
        self,
        status: FileStatus,
        *,
        extracted: Optional[ExtractedInvoiceData] = None,
        error: Optional[str] = None,
    ) -> None:
        if status not in TRANSITIONS[self.status]:
            raise InvalidTransitionError(
                f"{self.name}: cannot go from {self.status.value} to {status.value}"
            )
        self.status = status
        if status == FileStatus.SUCCESS:
            self.extracted = extracted
        elif status == FileStatus.ERROR:
            self.error = error


StatusCallback = Callable[[FileJob], None]


def backoff_delay(attempt: int, base: float) -> float:
    """Wait after failed attempt number ``attempt`` (1-based): base, 2*base, 4*base..."""
    return base * 2 ** (attempt - 1)


class InvoiceBatch:
    """
    Runs a set of invoice files through the extraction service.

    Usage:
        batch = InvoiceBatch(GeminiInvoiceExtractor(config), config)
        batch.add_files(["inv-001.jpg", "inv-002.pdf"])
        batch.run()
        vouchers = batch.to_vouchers(ledgers, stock_items, company)
    """

    def __init__(
        self,
        extractor: ExtractionService,
        config: Optional[EngineConfig] = None,
        *,
        on_status: Optional[StatusCallback] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.extractor = extractor
        self.config = config or EngineConfig.from_env()
        self.on_status = on_status
        self._sleep = sleep
        self._lock = threading.Lock()
        self.jobs: list[FileJob] = []

    # -- queue ---------------------------------------------------------------

    def add_documents(self, documents: Iterable[InvoiceDocument]) -> list[FileJob]:
        """Queue documents; ones already queued (same id) are skipped."""
        known = {job.id for job in self.jobs}
        added = []
        for doc in documents:
            if doc.id in known:
                logger.debug(f"Skipping duplicate file {doc.name}")
                continue
            known.add(doc.id)
            job = FileJob(document=doc)
            self.jobs.append(job)
            added.append(job)
        return added

    def add_files(self, paths: Iterable[str | Path]) -> list[FileJob]:
        return self.add_documents(InvoiceDocument.from_path(p) for p in paths)

    def remove(self, job_id: str) -> bool:
        before = len(self.jobs)
        self.jobs = [job for job in self.jobs if job.id != job_id]
        return len(self.jobs) != before

    @property
    def succeeded(self) -> list[FileJob]:
        return [job for job in self.jobs if job.status == FileStatus.SUCCESS]

    @property
    def failed(self) -> list[FileJob]:
        return [job for job in self.jobs if job.status == FileStatus.ERROR]

    # -- processing ----------------------------------------------------------

    def _advance(self, job: FileJob, status: FileStatus, **kwargs) -> None:
        with self._lock:
            job.advance(status, **kwargs)
            if self.on_status is not None:
                self.on_status(job)

    def _extract_with_retry(self, job: FileJob) -> ExtractedInvoiceData:
        retrying = Retrying(
            stop=stop_after_attempt(self.config.retry_attempts),
            wait=lambda retry_state: backoff_delay(
                retry_state.attempt_number, self.config.retry_delay
            ),
            sleep=self._sleep,
            reraise=True,
            before_sleep=lambda retry_state: logger.warning(
                f"Extraction of {job.name} failed (attempt {retry_state.attempt_number}): "
                f"{retry_state.outcome.exception()}"
            ),
        )
        for attempt in retrying:
            with attempt:
                job.attempts = attempt.retry_state.attempt_number
                return self.extractor.extract(job.document)
        raise AssertionError("unreachable")

    def _process(self, job: FileJob, cancel: Optional[threading.Event]) -> None:
        if job.status != FileStatus.PENDING:
            return
        if cancel is not None and cancel.is_set():
            return
        self._advance(job, FileStatus.PROCESSING)
        logger.info(f"Extracting {job.name}...")
        try:
            data = self._extract_with_retry(job)
        except Exception as e:
            logger.error(f"Giving up on {job.name} after {job.attempts} attempt(s): {e}")
            self._advance(job, FileStatus.ERROR, error=str(e) or type(e).__name__)
            return
        self._advance(job, FileStatus.SUCCESS, extracted=data)
        logger.info(f"  Extracted {job.name}: {len(data.line_items)} line item(s)")

    def run(self, cancel: Optional[threading.Event] = None) -> list[FileJob]:
        """Process every pending file and return all jobs."""
        pending = [job for job in self.jobs if job.status == FileStatus.PENDING]
        logger.info(f"Processing {len(pending)} invoice file(s)")
        workers = max(1, self.config.max_workers)
        if workers == 1:
            for job in pending:
                self._process(job, cancel)
        else:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                list(pool.map(lambda job: self._process(job, cancel), pending))
        logger.info(f"Batch done: {len(self.succeeded)} succeeded, {len(self.failed)} failed")
        return self.jobs

    # -- output --------------------------------------------------------------

    def to_vouchers(
        self,
        ledgers: Iterable[Ledger],
        stock_items: Iterable[StockItem],
        company: Optional[CompanyDetails] = None,
        today: Optional[date] = None,
    ) -> list[SalesPurchaseVoucher]:
        """Purchase vouchers for the successful files, in the order they were added."""
        normalizer = InvoiceNormalizer(
            ledgers, stock_items, company, default_gst_rate=self.config.default_gst_rate
        )
        return [
            normalizer.normalize(job.extracted, job.name, today)
            for job in self.succeeded
        ]
