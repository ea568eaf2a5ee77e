"""Tolerant comma-separated tokenizer for bank statement exports.

Spreadsheet exports are not always valid RFC 4180 (stray quotes in the middle
of a field, unterminated quotes at EOF), so rather than the stdlib ``csv``
reader this walks the text character by character:

- ``,`` separates fields and ``\\n``, ``\\r\\n`` or a bare ``\\r`` separates
  rows, but only outside quotes.
- ``"`` toggles the quoted state and is not copied; ``""`` inside quotes is a
  literal quote.
- Rows whose fields are all blank are dropped, and the last row is flushed
  even without a trailing newline.
- Unbalanced quotes never raise; the quoted state simply runs to EOF.
"""

from __future__ import annotations


def _has_content(row: list[str]) -> bool:
    return any(field.strip() for field in row)


def tokenize(text: str) -> list[list[str]]:
    """Split ``text`` into rows of raw string fields."""

    rows: list[list[str]] = []
    row: list[str] = []
    field: list[str] = []
    in_quotes = False

    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        nxt = text[i + 1] if i + 1 < n else ""

        if ch == '"':
            if in_quotes and nxt == '"':
                field.append('"')
                i += 2
                continue
            in_quotes = not in_quotes
        elif in_quotes:
            field.append(ch)
        elif ch == ",":
            row.append("".join(field))
            field = []
        elif ch in "\r\n":
            if ch == "\r" and nxt == "\n":
                i += 1
            row.append("".join(field))
            field = []
            if _has_content(row):
                rows.append(row)
            row = []
        else:
            field.append(ch)
        i += 1

    row.append("".join(field))
    if _has_content(row):
        rows.append(row)
    return rows


__all__ = ["tokenize"]
