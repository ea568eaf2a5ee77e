"""Application-level entry points for loading and comparing statements.

Two input kinds are understood:

- ``"csv"``: a delimited export, parsed by
  :func:`statement_ledger.normalizers.parse_statement_csv`.
- ``"text"``: run-on document text, parsed by
  :func:`statement_ledger.reconstruct.parse_statement_text`.

Files add ``"pdf"`` (extracted to text first) and ``"auto"`` (chosen by file
suffix). Every parse is independent, so several statements can be parsed
concurrently without coordination.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from os import PathLike
from pathlib import Path
from typing import Literal

from .extraction import PdfTextExtractor, TextExtractor
from .logging_setup import get_logger
from .models import SummaryComparison, Transaction
from .normalizers import parse_statement_csv
from .reconstruct import parse_statement_text
from .summary import compare_summaries, summarize

logger = get_logger("statement_ledger.api")

type TextSource = Literal["csv", "text"]
type FileSource = Literal["auto", "csv", "text", "pdf"]

_PARSERS: dict[str, Callable[[str], list[Transaction]]] = {
    "csv": parse_statement_csv,
    "text": parse_statement_text,
}


class ExtractionError(RuntimeError):
    """Raised when a statement document could not be turned into text."""


def load_statement(text: str, *, source: TextSource = "csv") -> list[Transaction]:
    """Parse statement ``text`` with the parser for ``source``."""

    try:
        parser = _PARSERS[source]
    except KeyError:
        raise ValueError(f"unknown source: {source!r}") from None
    return parser(text)


def _resolve_source(path: Path, source: FileSource) -> str:
    if source != "auto":
        return source
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return "csv"
    if suffix == ".pdf":
        return "pdf"
    return "text"


def load_statement_file(
    path: str | PathLike[str],
    *,
    source: FileSource = "auto",
    extractor: TextExtractor | None = None,
) -> list[Transaction]:
    """Read a statement file and parse it.

    ``FileNotFoundError``/``PermissionError`` propagate unchanged; a PDF that
    cannot be read raises :class:`ExtractionError` with the extractor's message.
    """

    p = Path(path)
    resolved = _resolve_source(p, source)
    if resolved not in {"csv", "text", "pdf"}:
        raise ValueError(f"unknown source: {source!r}")

    if resolved == "pdf":
        result = (extractor or PdfTextExtractor()).extract(p.read_bytes())
        if not result.ok:
            raise ExtractionError(result.error)
        text = result.text or ""
        resolved = "text"
    else:
        # utf-8-sig drops the BOM spreadsheet tools put in front of the header.
        text = p.read_text(encoding="utf-8-sig")

    txns = load_statement(text, source=resolved)  # type: ignore[arg-type]
    logger.debug("load_statement_file:done path=%s source=%s rows=%d", p, resolved, len(txns))
    return txns


def load_statements(
    texts: Iterable[str],
    *,
    source: TextSource = "csv",
    concurrency: int = 4,
) -> list[list[Transaction]]:
    """Parse several statements concurrently, preserving input order.

    The first parser error propagates to the caller.
    """

    if isinstance(concurrency, bool) or not isinstance(concurrency, int) or concurrency < 1:
        raise ValueError("concurrency must be a positive integer")
    if source not in _PARSERS:
        raise ValueError(f"unknown source: {source!r}")

    with ThreadPoolExecutor(max_workers=concurrency) as pool:
        return list(pool.map(lambda t: load_statement(t, source=source), texts))


def compare_statements(
    a_text: str,
    b_text: str,
    *,
    source: TextSource = "csv",
) -> SummaryComparison:
    """Parse statements A and B side by side and compare their summaries."""

    a_txns, b_txns = load_statements([a_text, b_text], source=source, concurrency=2)
    return compare_summaries(summarize(a_txns), summarize(b_txns))


__all__ = [
    "ExtractionError",
    "load_statement",
    "load_statement_file",
    "load_statements",
    "compare_statements",
]
