"""
Stock summary and stock valuation.

Quantities come from the line items of Purchase (inward) and Sales (outward)
vouchers, matched to stock items by exact name. Lines naming an item that is
not in the stock master are ignored.

Valuation uses a single weighted-average cost per item: cumulative purchase
value (taxable amount) divided by cumulative purchase quantity. This is the
costing policy, not an approximation of FIFO/LIFO. Closing quantities are not
clamped; a negative closing means more was sold than bought.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable
from pydantic import BaseModel, ConfigDict
from ..errors import UnknownVoucherTypeError
from ..models import StockItem, Voucher


class StockSummaryRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    inward: float
    outward: float
    closing: float


class StockValuationRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    closing_qty: float
    avg_cost: float
    value: float


@dataclass
class _Movement:
    inward: float = 0.0
    outward: float = 0.0
    purchase_value: float = 0.0


def _movements(vouchers: Iterable[Voucher], stock_items: Iterable[StockItem]) -> dict[str, _Movement]:
    moves: dict[str, _Movement] = {}
    for item in stock_items:
        moves.setdefault(item.name, _Movement())

    for v in vouchers:
        if v.type == "Purchase":
            for line in v.items:
                move = moves.get(line.name)
                if move is not None:
                    move.inward += line.qty
                    move.purchase_value += line.taxable_amount
        elif v.type == "Sales":
            for line in v.items:
                move = moves.get(line.name)
                if move is not None:
                    move.outward += line.qty
        elif v.type in ("Payment", "Receipt", "Contra", "Journal"):
            continue    # no inventory lines
        else:
            raise UnknownVoucherTypeError(f"Cannot read stock from voucher type: {v.type}")
    return moves


def compute_stock_summary(vouchers: Iterable[Voucher], stock_items: Iterable[StockItem]) -> list[StockSummaryRow]:
    return [
        StockSummaryRow(
            name=name,
            inward=move.inward,
            outward=move.outward,
            closing=move.inward - move.outward,
        )
        for name, move in _movements(vouchers, stock_items).items()
    ]


def compute_stock_valuation(vouchers: Iterable[Voucher], stock_items: Iterable[StockItem]) -> list[StockValuationRow]:
    rows = []
    for name, move in _movements(vouchers, stock_items).items():
        closing_qty = move.inward - move.outward
        avg_cost = move.purchase_value / move.inward if move.inward > 0 else 0.0
        rows.append(
            StockValuationRow(
                name=name,
                closing_qty=closing_qty,
                avg_cost=avg_cost,
                value=closing_qty * avg_cost,
            )
        )
    return rows
