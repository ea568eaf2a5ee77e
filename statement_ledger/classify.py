"""Keyword rule chains for transaction type and category.

Every table in this module is an ordered tuple evaluated first-match-wins;
the order decides overlaps (``"PAYROLL DEPOSIT TRANSFER"`` is a transfer, not
income) so it must not be re-sorted. Matching is a case-insensitive substring
test.

Two classifiers live here on purpose:

- :func:`classify` returns ``(type, category)`` for ledger rows.
- :func:`categorize` is the quick single-statement categorizer. It has its own
  keyword sets and its own vocabulary (``Grocery``, ``Bills``) and is not
  expected to agree with :func:`classify`.
"""

from __future__ import annotations

from typing import NamedTuple

from .models import TxnType


class _Rule(NamedTuple):
    keywords: tuple[str, ...]
    type: TxnType
    category: str

    def matches(self, text: str) -> bool:
        return _contains_any(text, self.keywords)


def _contains_any(text: str, keywords: tuple[str, ...]) -> bool:
    return any(k in text for k in keywords)


TRANSFER_KEYWORDS: tuple[str, ...] = (
    "transfer",
    "e-transfer",
    "etransfer",
    "br to br",
    "online banking transfer",
)

_CLASSIFY_RULES: tuple[_Rule, ...] = (
    _Rule(TRANSFER_KEYWORDS, "transfer", "Transfer"),
    _Rule(("payroll", "deposit", "received"), "income", "Income"),
    _Rule(("wal-mart", "walmart", "supercenter"), "spend", "Groceries"),
    _Rule(("doordash", "uber", "skip"), "spend", "Food"),
    _Rule(("chegg", "tuition", "university"), "spend", "Education"),
    _Rule(("apple", "amazon", "best buy"), "spend", "Shopping"),
)
_DEFAULT: tuple[TxnType, str] = ("spend", "Other")


def classify(description: str) -> tuple[TxnType, str]:
    """Return ``(type, category)`` for a statement description."""

    d = description.lower()
    for rule in _CLASSIFY_RULES:
        if rule.matches(d):
            return rule.type, rule.category
    return _DEFAULT


# Quick categorizer: (keywords, category), first match wins.
_CATEGORY_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("payroll",), "Income"),
    (
        (
            "online banking transfer",
            "online transfer",
            "e-transfer",
            "etransfer",
            "br to br",
            "transfer received",
        ),
        "Transfer",
    ),
    (("walmart", "sobeys", "superstore", "costco"), "Grocery"),
    (("tim", "tims", "starbucks", "mcdonald"), "Food"),
    (("amazon", "apple.com", "winners", "h&m"), "Shopping"),
    (("fido", "rogers", "bell", "netflix", "spotify"), "Bills"),
)


def categorize(description: str) -> str:
    """Return a single category label for quick statement categorization."""

    d = description.lower()
    for keywords, category in _CATEGORY_RULES:
        if _contains_any(d, keywords):
            return category
    return "Other"


# Card exports list refunds as positive amounts in the same column as
# purchases; these words mark money coming back.
CREDIT_KEYWORDS: tuple[str, ...] = (
    "refund",
    "reversal",
    "return",
    "credit",
    "chargeback",
    "adj",
    "adjustment",
)


def looks_like_credit(description: str) -> bool:
    return _contains_any(description.lower(), CREDIT_KEYWORDS)


DEPOSIT_HINTS: tuple[str, ...] = ("payroll", "deposit", "received", "transfer received")
WITHDRAWAL_HINTS: tuple[str, ...] = ("visa", "purchase", "debit", "payment", "affirm", "sent")


def direction_hints(description: str) -> tuple[bool, bool]:
    """Return ``(looks_like_deposit, looks_like_withdrawal)`` for run-on statement text."""

    d = description.lower()
    return _contains_any(d, DEPOSIT_HINTS), _contains_any(d, WITHDRAWAL_HINTS)


__all__ = [
    "TRANSFER_KEYWORDS",
    "CREDIT_KEYWORDS",
    "DEPOSIT_HINTS",
    "WITHDRAWAL_HINTS",
    "classify",
    "categorize",
    "looks_like_credit",
    "direction_hints",
]
