"""Typer console interface for ``statement_ledger``.

Commands load a statement file (CSV export, PDF, or plain extracted text),
parse it and print either the transactions, a summary, or an A/B comparison.
A local ``.env`` is loaded before anything runs so
``STATEMENT_LEDGER_LOG_LEVEL`` can be set there. Parsing itself lives in
:mod:`statement_ledger.api`.
"""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv

from .api import ExtractionError, load_statement_file
from .logging_setup import configure_logging
from .models import Summary, Transaction
from .summary import compare_summaries, format_money, summarize

app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="Parse bank and credit-card statements into a normalized ledger.",
)

_SOURCES = ("auto", "csv", "text", "pdf")

PathOption = Annotated[
    Path,
    typer.Option("--path", help="Statement file (CSV export, PDF, or extracted text).", dir_okay=False),
]
SourceOption = Annotated[
    str,
    typer.Option("--source", help="Input kind: auto (by suffix), csv, text or pdf."),
]


def _fail(message: str) -> typer.Exit:
    typer.echo(f"Error: {message}", err=True)
    return typer.Exit(1)


def _load(path: Path, source: str) -> list[Transaction]:
    if source not in _SOURCES:
        raise _fail(f"unknown source {source!r} (expected one of: {', '.join(_SOURCES)})")
    try:
        return load_statement_file(path, source=source)  # type: ignore[arg-type]
    except FileNotFoundError:
        raise _fail(f"File not found: {path}") from None
    except PermissionError:
        raise _fail(f"Permission denied: {path}") from None
    except UnicodeDecodeError:
        raise _fail(f"File is not UTF-8 text: {path}") from None
    except ExtractionError as e:
        raise _fail(f"Failed to extract text from '{path}': {e}") from None


def _fmt_optional(amount: Decimal | None) -> str:
    return "" if amount is None else f"{amount:.2f}"


def _print_summary(summary: Summary) -> None:
    typer.echo(f"Spent\t{format_money(summary.spent)}")
    typer.echo(f"Income\t{format_money(summary.income)}")
    typer.echo(f"Net\t{format_money(summary.net)}")
    typer.echo(f"Transfers\t{format_money(summary.transfers)}")

    typer.echo("")
    typer.echo("Categories")
    if not summary.categories:
        typer.echo("  No spending rows found.")
    for item in summary.categories:
        typer.echo(f"  {item.name}\t{format_money(item.amount)}")

    typer.echo("")
    typer.echo("Merchants")
    if not summary.merchants:
        typer.echo("  No spending rows found.")
    for item in summary.merchants:
        typer.echo(f"  {item.name}\t{format_money(item.amount)}")

    typer.echo("")
    typer.echo(f"Histogram ({summary.histogram.total_count} purchases)")
    for b in summary.histogram.bins:
        typer.echo(f"  {b.label}\t{b.count}")


@app.command("transactions")
def transactions_cmd(
    path: PathOption,
    source: SourceOption = "auto",
    limit: Annotated[int | None, typer.Option(help="Print at most N rows.", min=0)] = None,
) -> None:
    """Print the parsed transactions as tab-separated rows."""

    txns = _load(path, source)
    typer.echo(f"Loaded {len(txns)} rows")
    shown = txns if limit is None else txns[:limit]
    for t in shown:
        typer.echo(
            "\t".join(
                [
                    t.date,
                    t.description,
                    t.merchant,
                    f"{t.withdrawal:.2f}",
                    f"{t.deposit:.2f}",
                    _fmt_optional(t.balance),
                    t.type,
                    t.category,
                ]
            )
        )


@app.command("summary")
def summary_cmd(path: PathOption, source: SourceOption = "auto") -> None:
    """Print totals, category/merchant breakdowns and the spend histogram."""

    txns = _load(path, source)
    typer.echo(f"Loaded {len(txns)} rows")
    _print_summary(summarize(txns))


@app.command("compare")
def compare_cmd(
    a: Annotated[Path, typer.Option("--a", help="Statement A.", dir_okay=False)],
    b: Annotated[Path, typer.Option("--b", help="Statement B.", dir_okay=False)],
    source: SourceOption = "auto",
) -> None:
    """Compare totals, categories and merchants of two statements (delta is B minus A)."""

    a_txns = _load(a, source)
    b_txns = _load(b, source)
    typer.echo(f"Loaded {len(a_txns)} rows from A, {len(b_txns)} rows from B")

    cmp = compare_summaries(summarize(a_txns), summarize(b_txns))
    typer.echo("\tA\tB\tDelta")
    for label, attr in (
        ("Spent", "spent"),
        ("Income", "income"),
        ("Net", "net"),
        ("Transfers", "transfers"),
    ):
        typer.echo(
            f"{label}\t{format_money(getattr(cmp.a, attr))}"
            f"\t{format_money(getattr(cmp.b, attr))}"
            f"\t{format_money(getattr(cmp.delta, attr))}"
        )

    for title, rows in (("Categories", cmp.categories), ("Merchants", cmp.merchants)):
        typer.echo("")
        typer.echo(f"{title} (biggest changes)")
        if not rows:
            typer.echo("  No spending rows found.")
        for r in rows:
            typer.echo(
                f"  {r.name}\t{format_money(r.a)}\t{format_money(r.b)}\t{format_money(r.delta)}"
            )


@app.callback()
def _root(
    log_level: Annotated[
        str | None,
        typer.Option(help="Log level (falls back to STATEMENT_LEDGER_LOG_LEVEL, then INFO)."),
    ] = None,
) -> None:
    """Load ``.env`` from the working directory and configure logging."""

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging(log_level)


def main() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover - exercised via console script
    main()
