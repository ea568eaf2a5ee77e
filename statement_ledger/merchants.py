"""Merchant canonicalization.

Statement descriptions carry store numbers, cities and processor prefixes
(``"WAL-MART SUPERCENTER #1234 HALIFAX"``, ``"DD/DOORDASH BURGERKING"``).
Known merchants collapse to a fixed label through an ordered rule table;
anything else falls back to a truncated, whitespace-collapsed description.
"""

from __future__ import annotations

import re
from typing import NamedTuple

UNKNOWN_MERCHANT = "Unknown"
FALLBACK_WIDTH = 26


class MerchantRule(NamedTuple):
    name: str
    patterns: tuple[re.Pattern[str], ...]


def _rule(name: str, *patterns: str) -> MerchantRule:
    return MerchantRule(name, tuple(re.compile(p, re.IGNORECASE) for p in patterns))


# First match wins.
MERCHANT_RULES: tuple[MerchantRule, ...] = (
    _rule("Walmart", r"wal[- ]?mart"),
    _rule("Apple", r"apple\.com", r"\bapple\b"),
    _rule("DoorDash", r"doordash", r"\bdd/doordash"),
    _rule("Chegg", r"chegg"),
    _rule("Fido", r"fido"),
    _rule("Remitly", r"remitly"),
    _rule("Affirm", r"affirm"),
)


def canonical_merchant(description: str) -> str:
    """Return a short, stable merchant label for ``description``."""

    d = description.strip()
    if not d:
        return UNKNOWN_MERCHANT
    for rule in MERCHANT_RULES:
        if any(p.search(d) for p in rule.patterns):
            return rule.name
    return " ".join(d.split())[:FALLBACK_WIDTH]


__all__ = ["MERCHANT_RULES", "MerchantRule", "UNKNOWN_MERCHANT", "canonical_merchant"]
