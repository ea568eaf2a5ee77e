from decimal import Decimal
from pathlib import Path

import pytest

from statement_ledger.api import (
    ExtractionError,
    compare_statements,
    load_statement,
    load_statement_file,
    load_statements,
)
from statement_ledger.extraction import ExtractionResult


class _StubExtractor:
    def __init__(self, result: ExtractionResult) -> None:
        self.result = result
        self.payloads: list[bytes] = []

    def extract(self, payload: bytes) -> ExtractionResult:
        self.payloads.append(payload)
        return self.result


def test_load_statement_routes_by_source(debit_csv, statement_text):
    assert len(load_statement(debit_csv, source="csv")) == 4
    assert len(load_statement(statement_text, source="text")) == 2


def test_load_statement_rejects_unknown_source(debit_csv):
    with pytest.raises(ValueError, match="unknown source"):
        load_statement(debit_csv, source="xlsx")  # type: ignore[arg-type]


def test_parallel_parses_match_serial(debit_csv, visa_csv):
    texts = [debit_csv, visa_csv] * 8
    serial = [load_statement(t, source="csv") for t in texts]
    assert load_statements(texts, source="csv", concurrency=4) == serial


@pytest.mark.parametrize("concurrency", [0, -1, True])
def test_load_statements_validates_concurrency(debit_csv, concurrency):
    with pytest.raises(ValueError, match="concurrency"):
        load_statements([debit_csv], concurrency=concurrency)


def test_compare_statements(debit_csv, visa_csv):
    cmp = compare_statements(debit_csv, visa_csv)
    assert cmp.a.spent == Decimal("45.10")
    assert cmp.b.spent == Decimal("18.75")
    assert cmp.delta.spent == Decimal("-26.35")
    assert cmp.delta.transfers == Decimal("-150.00")


def test_load_statement_file_by_suffix(tmp_path: Path, debit_csv, statement_text):
    csv_path = tmp_path / "statement.csv"
    csv_path.write_text(debit_csv, encoding="utf-8")
    txt_path = tmp_path / "statement.txt"
    txt_path.write_text(statement_text, encoding="utf-8")

    assert len(load_statement_file(csv_path)) == 4
    assert [t.date for t in load_statement_file(txt_path)] == ["8 Dec", "9 Dec"]
    # Explicit source wins over the suffix.
    assert load_statement_file(txt_path, source="csv") == []


def test_load_statement_file_strips_bom(tmp_path: Path, debit_csv):
    path = tmp_path / "bom.csv"
    path.write_text(debit_csv, encoding="utf-8-sig")
    assert load_statement_file(path)[0].date == "8 Dec"


def test_pdf_goes_through_extractor_then_text_parser(tmp_path: Path, statement_text):
    path = tmp_path / "statement.pdf"
    path.write_bytes(b"%PDF-stub")
    extractor = _StubExtractor(ExtractionResult(text=statement_text))

    rows = load_statement_file(path, extractor=extractor)

    assert extractor.payloads == [b"%PDF-stub"]
    assert [t.description for t in rows] == ["PAYROLL CO", "TIM HORTONS"]


def test_failed_extraction_is_surfaced(tmp_path: Path):
    path = tmp_path / "statement.pdf"
    path.write_bytes(b"garbage")
    extractor = _StubExtractor(ExtractionResult(error="Failed to parse PDF"))

    with pytest.raises(ExtractionError, match="Failed to parse PDF"):
        load_statement_file(path, extractor=extractor)


def test_missing_file_propagates(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_statement_file(tmp_path / "nope.csv")
