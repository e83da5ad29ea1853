"""
Tests for the voucher models and master lookups.
"""
from datetime import date
import pytest
from pydantic import TypeAdapter, ValidationError
from ledger_engine.masters import MasterIndex, ledgers_by_name, normalize_name
from ledger_engine.models import (
    ContraVoucher,
    JournalVoucher,
    Ledger,
    PaymentReceiptVoucher,
    SalesPurchaseVoucher,
    StockItem,
    Voucher,
)

VOUCHER = TypeAdapter(Voucher)


class TestVoucherModels:
    def test_camel_case_input(self):
        v = VOUCHER.validate_python({
            "type": "Sales", "date": "2024-04-05", "party": "Acme", "isInterState": True,
            "items": [{"name": "Widget", "qty": 1, "rate": 100, "taxableAmount": 100,
                       "igstAmount": 18, "totalAmount": 118}],
            "totalTaxableAmount": 100, "totalIgst": 18, "total": 118, "invoiceNo": "S-9",
        })
        assert isinstance(v, SalesPurchaseVoucher)
        assert v.is_inter_state is True
        assert v.items[0].igst_amount == 18
        assert v.date == date(2024, 4, 5)

    @pytest.mark.parametrize("data, cls", [
        ({"type": "Receipt", "date": "2024-04-05", "party": "A", "account": "Cash", "amount": 5}, PaymentReceiptVoucher),
        ({"type": "Contra", "date": "2024-04-05", "fromAccount": "Cash", "toAccount": "Bank", "amount": 5}, ContraVoucher),
        ({"type": "Journal", "date": "2024-04-05", "entries": [{"ledger": "Rent", "debit": 5}]}, JournalVoucher),
    ])
    def test_discriminated_by_type(self, data, cls):
        assert isinstance(VOUCHER.validate_python(data), cls)

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            VOUCHER.validate_python({"type": "Refund", "date": "2024-04-05"})

    def test_frozen(self):
        v = PaymentReceiptVoucher(type="Payment", date=date(2024, 4, 5), party="A", account="Cash", amount=5)
        with pytest.raises(ValidationError):
            v.amount = 10
        edited = v.model_copy(update={"amount": 10})
        assert (v.amount, edited.amount) == (5, 10)

    def test_master_defaults(self):
        assert Ledger(name="X").registration_type == "Unregistered"
        assert Ledger(name="X").group is None
        assert StockItem(name="Y").gst_rate is None

    def test_ledger_group_is_kept(self):
        ledger = Ledger.model_validate({"name": "Acme", "group": "Sundry Debtors", "registrationType": "Registered"})
        assert ledger.group == "Sundry Debtors"
        assert ledger.model_dump(by_alias=True)["group"] == "Sundry Debtors"

    @pytest.mark.parametrize("raw, expected", [
        ("2024-04-05", date(2024, 4, 5)),
        ("2024-04-05T10:30:00Z", date(2024, 4, 5)),
        ("", None),
        ("05/04/2024", None),
        ("2024-02-30", None),
        (None, None),
        (20240405, None),
    ])
    def test_stored_dates_are_lenient(self, raw, expected):
        v = VOUCHER.validate_python({"type": "Contra", "date": raw, "fromAccount": "Cash", "toAccount": "Bank", "amount": 1})
        assert v.date == expected


class TestMasterIndex:
    def test_case_insensitive_lookup(self, ledgers):
        index = MasterIndex(ledgers)
        assert index.get("  acme DISTRIBUTORS ").name == "Acme Distributors"
        assert "hdfc bank" in index
        assert index.get("nobody") is None
        assert index.get(None) is None
        assert len(index) == len(ledgers)

    def test_first_duplicate_wins(self):
        index = MasterIndex([StockItem(name="Widget", gst_rate=18), StockItem(name="WIDGET", gst_rate=5)])
        assert index.get("widget").gst_rate == 18
        assert index.duplicates == ["WIDGET"]
        assert [item.name for item in index] == ["Widget"]

    def test_normalize_name(self):
        assert normalize_name("  Rice ") == "rice"
        assert normalize_name(None) == ""

    def test_ledgers_by_name_is_exact(self, ledgers):
        by_name = ledgers_by_name(ledgers)
        assert "Acme Distributors" in by_name
        assert "acme distributors" not in by_name
