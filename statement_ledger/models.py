"""Data models and type aliases for ``statement_ledger``.

Both parsing paths (delimited exports and run-on document text) converge on
:class:`Transaction`. Everything in :class:`Summary` is derived from a list of
transactions on demand and never stored.

Money is carried as :class:`decimal.Decimal` throughout; a value that could not
be parsed is ``Decimal("0")`` (or ``None`` for a missing balance), never a
``float``.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Literal

ZERO = Decimal("0")

# ---------------------------------------------------------------------------
# Transactions
# ---------------------------------------------------------------------------

type TxnType = Literal["spend", "income", "transfer"]
"""Direction/purpose of a transaction; exactly one per row."""


@dataclass(frozen=True, slots=True)
class Transaction:
    """A single normalized statement row.

    Attributes
    ----------
    date:
        Short textual date as found in the source (``"8 Dec"`` for
        reconstructed rows). No calendar validation is applied.
    description:
        Whitespace-normalized source text for the row.
    merchant:
        Canonical label derived from ``description`` (``"Unknown"`` when blank).
    withdrawal / deposit:
        Non-negative amounts leaving/entering the account. At most one is
        non-zero; both may be zero for memo rows.
    balance:
        Running balance after the row, or ``None`` when the source has none.
    type:
        ``spend``/``income``/``transfer``; agrees with the non-zero column.
    category:
        Label such as ``Groceries``, ``Food``, ``Transfer`` or ``Other``.
    """

    date: str
    description: str
    merchant: str
    withdrawal: Decimal
    deposit: Decimal
    balance: Decimal | None
    type: TxnType
    category: str


@dataclass(frozen=True, slots=True)
class ColumnMap:
    """Positions of the canonical columns within a header row (``None`` = absent)."""

    date: int | None = None
    description: int | None = None
    withdrawal: int | None = None
    deposit: int | None = None
    balance: int | None = None
    amount: int | None = None


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class NamedAmount:
    name: str
    amount: Decimal


@dataclass(frozen=True, slots=True)
class HistogramBin:
    """One spend-amount bucket, ``lower <= amount < upper`` (``upper=None`` is open)."""

    label: str
    lower: Decimal
    upper: Decimal | None
    count: int


@dataclass(frozen=True, slots=True)
class Histogram:
    bins: tuple[HistogramBin, ...]
    total_count: int


@dataclass(frozen=True, slots=True)
class Summary:
    """Totals and breakdowns for one statement.

    ``net`` is always ``income - spent``; ``transfers`` is reported alongside
    but never contributes to ``net``. ``categories`` and ``merchants`` cover
    spend rows only and are sorted by amount, largest first.
    """

    spent: Decimal
    income: Decimal
    net: Decimal
    transfers: Decimal
    categories: tuple[NamedAmount, ...]
    merchants: tuple[NamedAmount, ...]
    histogram: Histogram


@dataclass(frozen=True, slots=True)
class SummaryDelta:
    """Change from statement A to statement B (each field is ``b - a``)."""

    spent: Decimal
    income: Decimal
    net: Decimal
    transfers: Decimal


@dataclass(frozen=True, slots=True)
class NamedDelta:
    """One category or merchant seen in A or B; a missing side counts as 0."""

    name: str
    a: Decimal
    b: Decimal
    delta: Decimal


@dataclass(frozen=True, slots=True)
class SummaryComparison:
    """Two summaries side by side.

    ``categories`` and ``merchants`` hold the biggest changes between A and B,
    largest ``abs(delta)`` first, at most ten of each.
    """

    a: Summary
    b: Summary
    delta: SummaryDelta
    categories: tuple[NamedDelta, ...]
    merchants: tuple[NamedDelta, ...]


__all__ = [
    "ZERO",
    "TxnType",
    "Transaction",
    "ColumnMap",
    "NamedAmount",
    "HistogramBin",
    "Histogram",
    "Summary",
    "SummaryDelta",
    "NamedDelta",
    "SummaryComparison",
]
