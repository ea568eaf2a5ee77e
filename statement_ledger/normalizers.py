"""Delimited statement export -> :class:`~statement_ledger.models.Transaction` rows.

Pipeline: :func:`~statement_ledger.tokenizer.tokenize` -> header detection
(:mod:`statement_ledger.schema`) -> one transaction per data row.

Money direction
---------------
- Separate ``Withdrawals``/``Deposits`` columns are read as written, then
  folded into one non-negative column: a negative withdrawal is a deposit
  (and vice versa) and a row with both sides populated keeps only the net.
- When both are zero and an ``Amount`` column exists (card exports), a
  positive amount is a deposit if the description looks like a refund or
  credit and a withdrawal otherwise. Zero and negative amounts are ignored.
- The final ``type`` follows the populated column; a ``transfer`` verdict from
  the classifier survives in either direction.

Malformed input never raises: unparsable money is ``0`` (balance ``None``)
and a file with no usable header yields an empty list.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal, InvalidOperation

from .classify import classify, looks_like_credit
from .logging_setup import get_logger
from .merchants import canonical_merchant
from .models import ZERO, ColumnMap, Transaction, TxnType
from .schema import detect_columns, find_header_row
from .tokenizer import tokenize

logger = get_logger("statement_ledger.normalizers")


# ---------------------------------------------------------------------------
# Money helpers
# ---------------------------------------------------------------------------


def _parse_decimal(raw: str | None) -> Decimal | None:
    if raw is None:
        return None
    s = raw.strip().replace("$", "").replace(",", "")
    if not s:
        return None
    try:
        d = Decimal(s)
    except InvalidOperation:
        return None
    # NaN/Infinity parse fine but are not amounts.
    return d if d.is_finite() else None


def to_amount(raw: str | None) -> Decimal:
    """Parse a money cell; blank or unparsable text is ``Decimal("0")``."""

    d = _parse_decimal(raw)
    return ZERO if d is None else d


def to_balance(raw: str | None) -> Decimal | None:
    """Parse a balance cell; blank or unparsable text is ``None``."""

    return _parse_decimal(raw)


# ---------------------------------------------------------------------------
# Row -> Transaction
# ---------------------------------------------------------------------------


def _one_direction(withdrawal: Decimal, deposit: Decimal) -> tuple[Decimal, Decimal]:
    # A negative entry counts for the opposite column; both sides are then
    # netted so at most one comes out non-zero.
    inflow = max(deposit, ZERO) + max(-withdrawal, ZERO)
    outflow = max(withdrawal, ZERO) + max(-deposit, ZERO)
    if outflow > inflow:
        return outflow - inflow, ZERO
    return ZERO, inflow - outflow


def build_transaction(
    *,
    date: str,
    description: str,
    withdrawal: Decimal,
    deposit: Decimal,
    balance: Decimal | None,
) -> Transaction:
    """Classify a row and force its type to agree with the money column.

    Shared by the delimited and run-on text paths so both emit the same shape.
    Signed or doubly-populated money is first folded into one non-negative
    column.
    """

    withdrawal, deposit = _one_direction(withdrawal, deposit)
    base_type, category = classify(description)

    txn_type: TxnType = base_type
    if withdrawal > 0 and deposit == 0:
        txn_type = "transfer" if base_type == "transfer" else "spend"
    elif deposit > 0 and withdrawal == 0:
        txn_type = "transfer" if base_type == "transfer" else "income"

    return Transaction(
        date=date,
        description=description,
        merchant=canonical_merchant(description),
        withdrawal=withdrawal,
        deposit=deposit,
        balance=balance,
        type=txn_type,
        category=category,
    )


def _cell(row: Sequence[str], idx: int | None) -> str:
    if idx is None or idx >= len(row):
        return ""
    return row[idx]


def _normalize_row(row: Sequence[str], columns: ColumnMap) -> Transaction | None:
    date = _cell(row, columns.date).strip()
    description = _cell(row, columns.description).strip()
    if not date and not description:
        return None

    withdrawal = to_amount(_cell(row, columns.withdrawal)) if columns.withdrawal is not None else ZERO
    deposit = to_amount(_cell(row, columns.deposit)) if columns.deposit is not None else ZERO

    if withdrawal == 0 and deposit == 0 and columns.amount is not None:
        amount = to_amount(_cell(row, columns.amount))
        if amount > 0:
            if looks_like_credit(description):
                deposit = amount
            else:
                withdrawal = amount

    balance = to_balance(_cell(row, columns.balance)) if columns.balance is not None else None

    return build_transaction(
        date=date,
        description=description,
        withdrawal=withdrawal,
        deposit=deposit,
        balance=balance,
    )


def normalize_rows(rows: Sequence[Sequence[str]], columns: ColumnMap) -> list[Transaction]:
    """Convert tokenized data rows (header excluded) into transactions."""

    out: list[Transaction] = []
    for row in rows:
        txn = _normalize_row(row, columns)
        if txn is not None:
            out.append(txn)
    return out


def parse_statement_csv(text: str) -> list[Transaction]:
    """Parse a delimited statement export into an ordered transaction list."""

    rows = tokenize(text)
    if len(rows) < 2:
        logger.debug("parse_statement_csv:no_data rows=%d", len(rows))
        return []

    header_idx = find_header_row(rows)
    if header_idx is None:
        return []

    columns = detect_columns(rows[header_idx])
    txns = normalize_rows(rows[header_idx + 1 :], columns)
    logger.debug(
        "parse_statement_csv:done header_row=%d rows=%d transactions=%d columns=%s",
        header_idx,
        len(rows),
        len(txns),
        columns,
    )
    return txns


__all__ = [
    "to_amount",
    "to_balance",
    "build_transaction",
    "normalize_rows",
    "parse_statement_csv",
]
