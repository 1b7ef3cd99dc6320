"""
=============================================================================
PDF Text Conversion for Result Ledgers
=============================================================================

Turns a ledger PDF into ordered, newline-delimited text: one block per
page, one line per visual row.

ROW RECONSTRUCTION:
-------------------
pdfplumber reports every word with its vertical position ('top'). Words
are sorted top to bottom, then grouped into rows: a word whose 'top' lies
more than y_tolerance points below the previous word starts a new row.
Words inside a row are ordered left to right and joined by single spaces.
Each page's text is followed by a newline, so pages never run together.

    converter = PdfTextConverter()
    raw_text = converter.convert('ledger.pdf')        # path
    raw_text = converter.convert(uploaded_bytes)      # bytes
    pages = converter.extract_pages(file_obj)         # rows with 'top'

Failures inside pdfplumber/pdfminer (corrupt or non-PDF input) are raised
as ConversionError.

Date: 2026-10-19
Version: 2.0 - pdfplumber rows replace page cropping
=============================================================================
"""

import io
import logging
import os
from dataclasses import dataclass, field
from typing import BinaryIO, Dict, List, Union

import pdfplumber


PdfSource = Union[str, os.PathLike, bytes, BinaryIO]

DEFAULT_Y_TOLERANCE = 5.0


class ConversionError(Exception):
    """The PDF could not be converted to text"""


@dataclass
class TextLine:
    text: str
    top: float


@dataclass
class PageText:
    page_number: int
    lines: List[TextLine] = field(default_factory=list)

    @property
    def text(self) -> str:
        return '\n'.join(line.text for line in self.lines)


class PdfTextConverter:
    """pdfplumber-backed document-to-text conversion"""

    def __init__(self, y_tolerance: float = DEFAULT_Y_TOLERANCE):
        """
        Args:
            y_tolerance: Max vertical distance (points) between words of one row
        """
        self.y_tolerance = y_tolerance
        self.logger = logging.getLogger(__name__)

    @staticmethod
    def _open(source: PdfSource):
        if isinstance(source, (bytes, bytearray)):
            return pdfplumber.open(io.BytesIO(source))
        return pdfplumber.open(source)

    def group_rows(self, words: List[Dict]) -> List[TextLine]:
        """
        Group pdfplumber words into text rows.

        Args:
            words: Word dicts with 'text', 'top' and 'x0'

        Returns:
            Rows top to bottom; 'top' of a row is the 'top' of its first word
        """
        words = sorted(words, key=lambda w: (float(w.get('top', 0.0)), float(w.get('x0', 0.0))))

        rows = []
        current = []
        last_top = None
        for word in words:
            text = (word.get('text') or '').strip()
            if not text:
                continue
            top = float(word.get('top', 0.0))
            if last_top is not None and abs(top - last_top) > self.y_tolerance:
                rows.append(current)
                current = []
            current.append(word)
            last_top = top
        if current:
            rows.append(current)

        lines = []
        for row in rows:
            row.sort(key=lambda w: float(w.get('x0', 0.0)))
            lines.append(TextLine(
                text=' '.join(w['text'].strip() for w in row),
                top=float(row[0].get('top', 0.0)),
            ))
        return lines

    def extract_pages(self, source: PdfSource) -> List[PageText]:
        """
        Extract row text for every page.

        Raises:
            ConversionError: If the document cannot be opened or read
        """
        pages = []
        try:
            with self._open(source) as pdf:
                self.logger.info(f"PDF has {len(pdf.pages)} pages")
                for page_num, page in enumerate(pdf.pages, 1):
                    words = page.extract_words() or []
                    page_text = PageText(page_number=page_num, lines=self.group_rows(words))
                    self.logger.debug(f"Page {page_num}: {len(page_text.lines)} rows")
                    pages.append(page_text)
        except ConversionError:
            raise
        except Exception as e:
            self.logger.error(f"Error converting PDF: {e}")
            raise ConversionError(str(e) or e.__class__.__name__) from e

        return pages

    def convert(self, source: PdfSource) -> str:
        """
        Convert a PDF to newline-delimited text.

        Args:
            source: File path, raw bytes or binary file object

        Returns:
            Page texts in order, each followed by a newline

        Raises:
            ConversionError: If the document cannot be opened or read
        """
        pages = self.extract_pages(source)
        raw_text = ''.join(page.text + '\n' for page in pages)

        if not raw_text.strip():
            self.logger.warning("PDF produced no extractable text")
        else:
            self.logger.info(f"Raw text length: {len(raw_text)}")
        return raw_text
