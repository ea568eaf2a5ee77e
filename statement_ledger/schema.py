"""Header detection for delimited statement exports.

Two layouts are reconciled onto one :class:`~statement_ledger.models.ColumnMap`:

- chequing/debit exports: ``Date, Description, Withdrawals, Deposits, Balance``
- credit-card exports: ``Transaction Date, Merchant, Amount ($)`` (balance
  usually absent, the single amount column may or may not be signed)
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence

from .models import ColumnMap

type _HeaderTest = Callable[[str], bool]


def normalize_header(cell: str) -> str:
    """Lower-case ``cell`` and collapse internal whitespace."""

    return re.sub(r"\s+", " ", cell.lower()).strip()


def find_header_row(rows: Sequence[Sequence[str]]) -> int | None:
    """Index of the first row with at least one non-blank cell, or ``None``."""

    for i, row in enumerate(rows):
        if any(cell.strip() for cell in row):
            return i
    return None


def _find(header: Sequence[str], test: _HeaderTest) -> int | None:
    for i, h in enumerate(header):
        if test(h):
            return i
    return None


def detect_columns(header: Sequence[str]) -> ColumnMap:
    """Map a raw header row to canonical column positions.

    Matching is case-insensitive on whitespace-collapsed cells and the first
    matching cell wins for each role.
    """

    cells = [normalize_header(h) for h in header]

    description = _find(
        cells, lambda h: h == "description" or "merchant" in h or "details" in h
    )
    if description is None:
        description = _find(cells, lambda h: "memo" in h or "payee" in h)

    return ColumnMap(
        date=_find(cells, lambda h: h == "date" or "transaction date" in h),
        description=description,
        withdrawal=_find(cells, lambda h: h.startswith("withdraw")),
        deposit=_find(cells, lambda h: h.startswith("deposit")),
        balance=_find(cells, lambda h: h.startswith("balance")),
        # Credit-card exports label it "Amount ($)".
        amount=_find(cells, lambda h: h == "amount" or "amount ($)" in h or "amount" in h),
    )


__all__ = ["normalize_header", "find_header_row", "detect_columns"]
