"""Shared fixtures: small statement samples in each supported layout.

Samples are kept inline (dedented) so each test reads top to bottom without
chasing fixture files. The autouse fixture keeps a developer's
``STATEMENT_LEDGER_LOG_LEVEL`` from leaking into tests.
"""

from __future__ import annotations

import textwrap

import pytest


def dedent(s: str) -> str:
    # Keep internal newlines, normalize indentation for readability.
    return textwrap.dedent(s).lstrip("\n").rstrip() + "\n"


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("STATEMENT_LEDGER_LOG_LEVEL", raising=False)


@pytest.fixture
def debit_csv() -> str:
    """Chequing export with separate withdrawal/deposit/balance columns."""

    return dedent(
        """
        Date,Description,Withdrawals,Deposits,Balance
        8 Dec,PAYROLL ACME CORP,,"1,200.00","5,400.00"
        9 Dec,WAL-MART SUPERCENTER #1234,$45.10,,"5,354.90"
        10 Dec,Online Banking transfer to savings,100.00,,"5,254.90"
        11 Dec,E-TRANSFER RECEIVED JOHN,,50.00,"5,304.90"
        ,,,,
        """
    )


@pytest.fixture
def visa_csv() -> str:
    """Credit-card export with a single amount column and no balance."""

    return dedent(
        """
        Transaction Date,Merchant,Amount ($)
        2025-12-01,REFUND FROM AMAZON,25.00
        2025-12-02,DOORDASH*PIZZA,18.75
        2025-12-03,PAYMENT THANK YOU,-300.00
        2025-12-04,UBER CANADA,0
        """
    )


@pytest.fixture
def statement_text() -> str:
    """Run-on text as extracted from a statement document."""

    return "8Dec PAYROLL CO 1,200.00 5,400.00 9Dec TIM HORTONS 4.50 5,395.50"
