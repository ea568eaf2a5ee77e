from decimal import Decimal

import pytest

from statement_ledger.models import Transaction
from statement_ledger.normalizers import (
    build_transaction,
    parse_statement_csv,
    to_amount,
    to_balance,
)
from statement_ledger.summary import summarize


def _assert_direction_invariant(txns: list[Transaction]) -> None:
    for t in txns:
        assert not (t.withdrawal > 0 and t.deposit > 0)
        if t.withdrawal > 0:
            assert t.type in {"spend", "transfer"}
        if t.deposit > 0:
            assert t.type in {"income", "transfer"}


def test_debit_layout_snapshot(debit_csv):
    rows = parse_statement_csv(debit_csv)

    expected = [
        Transaction(
            date="8 Dec",
            description="PAYROLL ACME CORP",
            merchant="PAYROLL ACME CORP",
            withdrawal=Decimal("0"),
            deposit=Decimal("1200.00"),
            balance=Decimal("5400.00"),
            type="income",
            category="Income",
        ),
        Transaction(
            date="9 Dec",
            description="WAL-MART SUPERCENTER #1234",
            merchant="Walmart",
            withdrawal=Decimal("45.10"),
            deposit=Decimal("0"),
            balance=Decimal("5354.90"),
            type="spend",
            category="Groceries",
        ),
        Transaction(
            date="10 Dec",
            description="Online Banking transfer to savings",
            merchant="Online Banking transfer to",
            withdrawal=Decimal("100.00"),
            deposit=Decimal("0"),
            balance=Decimal("5254.90"),
            type="transfer",
            category="Transfer",
        ),
        Transaction(
            date="11 Dec",
            description="E-TRANSFER RECEIVED JOHN",
            merchant="E-TRANSFER RECEIVED JOHN",
            withdrawal=Decimal("0"),
            deposit=Decimal("50.00"),
            balance=Decimal("5304.90"),
            type="transfer",
            category="Transfer",
        ),
    ]
    assert rows == expected
    _assert_direction_invariant(rows)


def test_card_layout_amount_fallback(visa_csv):
    rows = parse_statement_csv(visa_csv)
    assert len(rows) == 4

    refund, food, payment, zero = rows

    assert refund.deposit == Decimal("25.00")
    assert refund.withdrawal == 0
    assert refund.type == "income"
    assert refund.balance is None

    assert food.withdrawal == Decimal("18.75")
    assert food.deposit == 0
    assert (food.type, food.category, food.merchant) == ("spend", "Food", "DoorDash")

    # Negative and zero amounts never populate either column.
    assert (payment.withdrawal, payment.deposit) == (0, 0)
    assert (zero.withdrawal, zero.deposit) == (0, 0)
    _assert_direction_invariant(rows)


def test_refund_keyword_turns_amount_into_deposit():
    text = "Transaction Date,Description,Amount\n2025-12-01,REFUND FROM AMAZON,25.00\n"
    (txn,) = parse_statement_csv(text)
    assert txn.deposit == Decimal("25.00")
    assert txn.withdrawal == 0


def test_amount_ignored_when_money_columns_populated():
    text = "Date,Description,Withdrawals,Deposits,Amount\n8 Dec,COFFEE,4.50,,99.00\n"
    (txn,) = parse_statement_csv(text)
    assert (txn.withdrawal, txn.deposit) == (Decimal("4.50"), 0)


def test_both_money_columns_populated_keeps_the_net():
    text = (
        "Date,Description,Withdrawals,Deposits,Balance\n"
        "8 Dec,COFFEE SHOP,4.50,10.00,100.00\n"
        "9 Dec,COFFEE SHOP,12.00,2.00,90.00\n"
        "10 Dec,COFFEE SHOP,3.00,3.00,90.00\n"
    )
    gain, loss, even = parse_statement_csv(text)

    assert (gain.withdrawal, gain.deposit, gain.type) == (0, Decimal("5.50"), "income")
    assert (loss.withdrawal, loss.deposit, loss.type) == (Decimal("10.00"), 0, "spend")
    assert (even.withdrawal, even.deposit) == (0, 0)
    _assert_direction_invariant([gain, loss, even])


def test_negative_money_switches_column():
    text = (
        "Date,Description,Withdrawals,Deposits,Balance\n"
        "8 Dec,COFFEE SHOP,-4.50,,100.00\n"
        "9 Dec,COFFEE SHOP,,-7.25,92.75\n"
    )
    refund, charge = parse_statement_csv(text)

    assert (refund.withdrawal, refund.deposit, refund.type) == (0, Decimal("4.50"), "income")
    assert (charge.withdrawal, charge.deposit, charge.type) == (Decimal("7.25"), 0, "spend")
    _assert_direction_invariant([refund, charge])
    # Negative entries never reduce spending.
    assert summarize([refund, charge]).spent == Decimal("7.25")


def test_rows_without_date_and_description_are_skipped():
    text = "Date,Description,Withdrawals\n,,12.00\n8 Dec,,5.00\n"
    (txn,) = parse_statement_csv(text)
    assert txn.date == "8 Dec"
    assert txn.description == ""
    assert txn.merchant == "Unknown"
    assert txn.withdrawal == Decimal("5.00")


def test_unparsable_money_degrades_to_zero_and_missing_balance():
    text = "Date,Description,Withdrawals,Deposits,Balance\n8 Dec,COFFEE,abc,,n/a\n"
    (txn,) = parse_statement_csv(text)
    assert (txn.withdrawal, txn.deposit) == (0, 0)
    assert txn.balance is None


def test_short_rows_read_missing_cells_as_blank():
    text = "Date,Description,Withdrawals,Deposits,Balance\n8 Dec,TIM HORTONS,4.50\n"
    (txn,) = parse_statement_csv(text)
    assert txn.withdrawal == Decimal("4.50")
    assert txn.deposit == 0
    assert txn.balance is None


def test_leading_blank_rows_before_header():
    text = ",,\n , \nDate,Description,Withdrawals\n8 Dec,COFFEE,3.00\n"
    (txn,) = parse_statement_csv(text)
    assert txn.description == "COFFEE"


@pytest.mark.parametrize("text", ["", "\n\n", "Date,Description,Withdrawals\n"])
def test_no_data_rows_yields_empty_list(text):
    assert parse_statement_csv(text) == []


def test_direction_inference_is_stable_across_runs(debit_csv):
    first = parse_statement_csv(debit_csv)
    second = parse_statement_csv(debit_csv)
    assert [t.type for t in first] == [t.type for t in second]


def test_build_transaction_forces_type_from_money_column():
    # Classifier says income, but money left the account.
    txn = build_transaction(
        date="8 Dec",
        description="PAYMENT RECEIVED",
        withdrawal=Decimal("10.00"),
        deposit=Decimal("0"),
        balance=None,
    )
    assert (txn.type, txn.category) == ("spend", "Income")

    txn = build_transaction(
        date="8 Dec",
        description="INTERAC TRANSFER",
        withdrawal=Decimal("0"),
        deposit=Decimal("20.00"),
        balance=None,
    )
    assert txn.type == "transfer"


def test_build_transaction_keeps_classifier_type_for_memo_rows():
    txn = build_transaction(
        date="8 Dec",
        description="PAYROLL NOTICE",
        withdrawal=Decimal("0"),
        deposit=Decimal("0"),
        balance=None,
    )
    assert txn.type == "income"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("$1,234.56", Decimal("1234.56")),
        ("  12 ", Decimal("12")),
        ("-5.00", Decimal("-5.00")),
        ("", Decimal("0")),
        (None, Decimal("0")),
        ("abc", Decimal("0")),
        ("NaN", Decimal("0")),
        ("Infinity", Decimal("0")),
    ],
)
def test_to_amount(raw, expected):
    assert to_amount(raw) == expected


def test_to_balance():
    assert to_balance("$5,400.00") == Decimal("5400.00")
    assert to_balance("") is None
    assert to_balance("n/a") is None
