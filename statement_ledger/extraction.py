"""Document-to-text extraction boundary.

The parsers only ever see text. Turning an uploaded statement document into
that text is the job of a :class:`TextExtractor`; the one shipped here reads
PDFs with ``pdfplumber``. Extraction is the single place where a failure is
reported to the caller, and it is reported as a value
(``ExtractionResult(error=...)``) rather than raised, since there is no
sensible text to fall back to.
"""

from __future__ import annotations

from io import BytesIO
from typing import Protocol, Self

import pdfplumber
from pydantic import BaseModel, ConfigDict, model_validator

from .logging_setup import get_logger

logger = get_logger("statement_ledger.extraction")


class ExtractionResult(BaseModel):
    """Either the extracted ``text`` or an ``error`` message, never both."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    text: str | None = None
    error: str | None = None

    @model_validator(mode="after")
    def _exactly_one(self) -> Self:
        if (self.text is None) == (self.error is None):
            raise ValueError("exactly one of 'text' or 'error' must be set")
        return self

    @property
    def ok(self) -> bool:
        return self.error is None


class TextExtractor(Protocol):
    def extract(self, payload: bytes) -> ExtractionResult: ...


class PdfTextExtractor:
    """Extract statement text from a PDF payload.

    Words on a page are joined with single spaces and pages with ``\\n``; line
    structure inside a page is not preserved, which is what
    :func:`statement_ledger.reconstruct.parse_statement_text` expects.
    """

    def extract(self, payload: bytes) -> ExtractionResult:
        try:
            with pdfplumber.open(BytesIO(payload)) as pdf:
                pages = [
                    " ".join(w["text"] for w in page.extract_words()) for page in pdf.pages
                ]
        except Exception as e:  # noqa: BLE001
            logger.warning("extract:failed error=%s", e.__class__.__name__)
            return ExtractionResult(error=str(e) or "Failed to extract text")

        if not pages:
            return ExtractionResult(error="Document has no pages")

        text = "\n".join(pages)
        logger.debug("extract:done pages=%d chars=%d", len(pages), len(text))
        return ExtractionResult(text=text)


__all__ = ["ExtractionResult", "TextExtractor", "PdfTextExtractor"]
