"""Public interface for the ``statement_ledger`` package.

This module only re-exports the parsing/aggregation entry points and the
public models; there is no runtime logic here.
"""

from .api import (
    ExtractionError,
    compare_statements,
    load_statement,
    load_statement_file,
    load_statements,
)
from .classify import categorize, classify
from .extraction import ExtractionResult, PdfTextExtractor, TextExtractor
from .merchants import canonical_merchant
from .models import (
    ColumnMap,
    Histogram,
    HistogramBin,
    NamedAmount,
    NamedDelta,
    Summary,
    SummaryComparison,
    SummaryDelta,
    Transaction,
    TxnType,
)
from .normalizers import parse_statement_csv
from .reconstruct import parse_statement_text
from .schema import detect_columns
from .summary import compare_summaries, format_money, make_histogram, summarize
from .tokenizer import tokenize

__all__ = [
    # API
    "load_statement",
    "load_statement_file",
    "load_statements",
    "compare_statements",
    "ExtractionError",
    # Parsing
    "tokenize",
    "detect_columns",
    "parse_statement_csv",
    "parse_statement_text",
    "classify",
    "categorize",
    "canonical_merchant",
    # Aggregation
    "summarize",
    "make_histogram",
    "compare_summaries",
    "format_money",
    # Extraction collaborator
    "ExtractionResult",
    "TextExtractor",
    "PdfTextExtractor",
    # Models / types
    "Transaction",
    "TxnType",
    "ColumnMap",
    "NamedAmount",
    "NamedDelta",
    "HistogramBin",
    "Histogram",
    "Summary",
    "SummaryDelta",
    "SummaryComparison",
]
