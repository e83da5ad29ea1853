from __future__ import annotations
import math
import mimetypes
import re
from pathlib import Path
from typing import Annotated, Any, Protocol
from pydantic import BaseModel, BeforeValidator, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class ExtractionError(RuntimeError):
    """Raised when an invoice could not be extracted by the service."""
    pass


def _to_float(x: Any) -> float:
    """Lenient number coercion: '2Nos' -> 2, '1,200/-' -> 1200, '1.5e3' -> 1500, '(5)' -> -5, junk -> 0."""
    if x is None or isinstance(x, bool):
        return 0.0
    if isinstance(x, (int, float)):
        return float(x) if math.isfinite(x) else 0.0   # NaN, inf -> 0
    s = str(x).replace(",", "").strip()
    neg = s.startswith("(") and s.endswith(")")
    if neg:
        s = s[1:-1]
    try:
        val = float(s)
    except ValueError:
        val = None
    if val is not None and math.isfinite(val):
        return -val if neg else val
    m = re.search(r"-?\d+(?:\.\d+)?(?:[eE][-+]?\d+)?", s)
    if not m:
        return 0.0
    val = float(m.group(0))
    return -val if neg else val


def _to_str(x: Any) -> str:
    if x is None:
        return ""
    return str(x).strip()


LenientFloat = Annotated[float, BeforeValidator(_to_float)]
LenientStr = Annotated[str, BeforeValidator(_to_str)]


class _Extracted(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ExtractedLineItem(_Extracted):
    item_description: LenientStr = ""
    hsn_code: LenientStr = ""
    quantity: LenientFloat = 0.0
    rate: LenientFloat = 0.0


class ExtractedInvoiceData(_Extracted):
    """Invoice fields as returned by the extraction service. Untrusted."""

    seller_name: LenientStr = ""
    invoice_number: LenientStr = ""
    invoice_date: LenientStr = ""
    subtotal: LenientFloat = 0.0
    cgst_amount: LenientFloat = 0.0
    sgst_amount: LenientFloat = 0.0
    igst_amount: LenientFloat = 0.0      # not requested from the service; set on recalculation
    total_amount: LenientFloat = 0.0
    line_items: tuple[ExtractedLineItem, ...] = ()

    @field_validator("line_items", mode="before")
    @classmethod
    def _line_items(cls, v: Any) -> list:
        if not isinstance(v, (list, tuple)):
            return []
        return [item for item in v if isinstance(item, (dict, ExtractedLineItem))]


class InvoiceDocument(BaseModel):
    """A scanned invoice (image or PDF) queued for extraction."""

    id: str
    name: str
    mime_type: str
    data: bytes

    @classmethod
    def from_path(cls, path: str | Path) -> "InvoiceDocument":
        path = Path(path)
        stat = path.stat()
        mime_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        return cls(
            id=f"{path.name}-{stat.st_mtime_ns // 1_000_000}",
            name=path.name,
            mime_type=mime_type,
            data=path.read_bytes(),
        )


class ExtractionService(Protocol):
    def extract(self, document: InvoiceDocument) -> ExtractedInvoiceData: ...
