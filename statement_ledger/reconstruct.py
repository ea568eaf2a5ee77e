"""Recover transaction rows from run-on statement text.

Text pulled out of a statement document usually loses its row structure: the
whole table arrives as one long string such as::

    8Dec PAYROLL CO 1,200.00 5,400.00 9Dec TIM HORTONS 4.50 5,395.50

Rows are rebuilt in two passes:

1. **Anchors.** Every date token (``8 Dec``, ``Dec 8``, ``December 8``) starts
   a segment that runs up to the next date token. Segments made of statement
   boilerplate (opening/closing balance lines, repeated column headers, fraud
   disclaimers) are dropped.
2. **Peeling.** Statement rows end in ``<amount> <balance>``, so each segment
   is consumed right to left: the last two money tokens are the balance and
   the amount, the text before the amount is the description. The consumed
   tail is cut off and the loop repeats until fewer than two money tokens (or
   almost no text) remain. Several rows that share one date are recovered
   this way.

Rows peeled from a segment come out newest-first and are flipped back before
moving to the next segment, so the result is in statement order. Identical
rows (same date, balance, amounts and description) are emitted once.
"""

from __future__ import annotations

import re

from .classify import direction_hints
from .logging_setup import get_logger
from .models import ZERO, Transaction
from .normalizers import build_transaction, to_amount

logger = get_logger("statement_ledger.reconstruct")

# 1-3 digit groups with optional thousands separators and exactly two decimals.
MONEY_RE = re.compile(r"\b\d{1,3}(?:,\d{3})*\.\d{2}\b")

_MONTH = (
    r"(?:jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|aug(?:ust)?"
    r"|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)"
)

# "8Dec" / "8 Dec" / "Dec 8" / "December 8". A day may not be glued to a money
# token on either side ("4.50 Dec", "Dec 4.50").
DATE_RE = re.compile(
    rf"(?<![\w.,])(?P<day>\d{{1,2}})\s*(?P<month>{_MONTH})\b"
    rf"|\b(?P<month_first>{_MONTH})\s*(?P<day_after>\d{{1,2}})(?!\d|[.,]\d)",
    re.IGNORECASE,
)

_MONTH_ABBREVIATIONS: dict[str, str] = {
    "jan": "Jan",
    "january": "Jan",
    "feb": "Feb",
    "february": "Feb",
    "mar": "Mar",
    "march": "Mar",
    "apr": "Apr",
    "april": "Apr",
    "may": "May",
    "jun": "Jun",
    "june": "Jun",
    "jul": "Jul",
    "july": "Jul",
    "aug": "Aug",
    "august": "Aug",
    "sep": "Sep",
    "sept": "Sep",
    "september": "Sep",
    "oct": "Oct",
    "october": "Oct",
    "nov": "Nov",
    "november": "Nov",
    "dec": "Dec",
    "december": "Dec",
}

DESCRIPTION_WINDOW = 220
MIN_CHUNK_LENGTH = 5


def _normalize(s: str) -> str:
    return re.sub(r"\s+", " ", s.replace("\u00a0", " ")).strip()


def month_abbrev(token: str) -> str:
    """``"december"``/``"DEC"`` -> ``"Dec"``."""

    return _MONTH_ABBREVIATIONS.get(token.lower(), token[:3])


def format_date(match: re.Match[str]) -> str:
    """Render a :data:`DATE_RE` match as ``"<day> <Mon>"``."""

    if match.group("day"):
        return f"{match.group('day')} {month_abbrev(match.group('month'))}"
    return f"{match.group('day_after')} {month_abbrev(match.group('month_first'))}"


def _is_boilerplate(segment: str) -> bool:
    low = segment.lower()
    if "opening balance" in low or "closing balance" in low:
        return True
    # Column header repeated at the top of each page.
    if "withdrawals" in low and "deposits" in low and "balance" in low:
        return True
    return "cyber" in low and "scam" in low


def _peel_rows(chunk: str, date: str) -> list[Transaction]:
    """Consume ``chunk`` right to left; rows are returned newest-first."""

    rows: list[Transaction] = []
    while True:
        tokens = list(MONEY_RE.finditer(chunk))
        if len(tokens) < 2:
            break
        amount_tok, balance_tok = tokens[-2], tokens[-1]

        # Only the tail belongs to this row; earlier rows sharing the
        # segment are still to the left.
        row_text = _normalize(chunk[: amount_tok.start()])
        description = _normalize(row_text[-DESCRIPTION_WINDOW:])

        amount = to_amount(amount_tok.group())
        is_deposit, is_withdrawal = direction_hints(description)
        if is_deposit and not is_withdrawal:
            withdrawal, deposit = ZERO, amount
        else:
            withdrawal, deposit = amount, ZERO

        rows.append(
            build_transaction(
                date=date,
                description=description,
                withdrawal=withdrawal,
                deposit=deposit,
                balance=to_amount(balance_tok.group()),
            )
        )

        chunk = _normalize(chunk[: amount_tok.start()])
        if len(chunk) < MIN_CHUNK_LENGTH:
            break
    return rows


def _dedupe(txns: list[Transaction]) -> list[Transaction]:
    seen: set[tuple[object, ...]] = set()
    out: list[Transaction] = []
    for t in txns:
        key = (t.date, t.balance, t.withdrawal, t.deposit, t.description)
        if key in seen:
            continue
        seen.add(key)
        out.append(t)
    return out


def parse_statement_text(raw: str) -> list[Transaction]:
    """Rebuild transactions from a block of statement text without row breaks."""

    text = _normalize(raw.replace("\r", " ").replace("\n", " "))
    anchors = list(DATE_RE.finditer(text))
    if not anchors:
        logger.debug("parse_statement_text:no_anchors length=%d", len(text))
        return []

    txns: list[Transaction] = []
    skipped = 0
    for i, anchor in enumerate(anchors):
        end = anchors[i + 1].start() if i + 1 < len(anchors) else len(text)
        if _is_boilerplate(text[anchor.start() : end]):
            skipped += 1
            continue

        rows = _peel_rows(_normalize(text[anchor.end() : end]), format_date(anchor))
        rows.reverse()
        txns.extend(rows)

    out = _dedupe(txns)
    logger.debug(
        "parse_statement_text:done anchors=%d skipped=%d rows=%d duplicates=%d",
        len(anchors),
        skipped,
        len(out),
        len(txns) - len(out),
    )
    return out


__all__ = [
    "MONEY_RE",
    "DATE_RE",
    "month_abbrev",
    "format_date",
    "parse_statement_text",
]
