"""
Reading books snapshots from JSON.

A snapshot file holds the company profile, the masters and the voucher list:

    {
      "company": {"name": "...", "state": "Maharashtra"},
      "ledgers": [{"name": "Acme Traders", "state": "Gujarat", ...}],
      "stockItems": [{"name": "Widget", "gstRate": 18}],
      "vouchers": [{"type": "Sales", "date": "2024-04-01", ...}]
    }
"""
from __future__ import annotations
import json
from pathlib import Path
from typing import Iterable, Optional
from pydantic import TypeAdapter, ValidationError
from .errors import SnapshotError
from .models import CompanyDetails, Snapshot, Voucher

_VOUCHERS = TypeAdapter(list[Voucher])


def load_snapshot(path: str | Path) -> Snapshot:
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SnapshotError(f"Cannot read snapshot {path}: {e}") from e
    try:
        return Snapshot.model_validate_json(raw)
    except ValidationError as e:
        raise SnapshotError(f"Invalid snapshot {path}: {e}") from e


def with_company_state(snapshot: Snapshot, state: Optional[str]) -> Snapshot:
    """Fill in the company state if the snapshot has none."""
    if snapshot.company.state or not state:
        return snapshot
    company = CompanyDetails(name=snapshot.company.name, state=state, gstin=snapshot.company.gstin)
    return snapshot.model_copy(update={"company": company})


def dump_vouchers(vouchers: Iterable[Voucher], indent: Optional[int] = 2) -> str:
    data = _VOUCHERS.dump_python(list(vouchers), mode="json", by_alias=True)
    return json.dumps(data, indent=indent, ensure_ascii=False)
