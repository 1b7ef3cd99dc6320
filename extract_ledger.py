"""
=============================================================================
Result Ledger Extractor
=============================================================================

Extracts structured student records from a diploma result-ledger PDF:
registration data, subject-wise marks and grades, SGPA/CGPA and the final
result of every student.

Pipeline:
    PDF --(PdfTextConverter)--> raw text
    raw text --> MetadataExtractor      (institute, programme, dates)
    raw text --> StudentSectionParser   (students and subjects)
    --> ExtractionResult

extract() never fails on text input: unmatched fields fall back to
placeholders and unrecognised lines are dropped. Only a failed PDF
conversion raises, as ExtractionError.

Usage:
    python extract_ledger.py <pdf_file> [--output DIR] [--json]

Example:
    python extract_ledger.py ledger.pdf --output ./output/

Output:
    - ledger_subjects_<timestamp>.csv: one row per student subject
    - ledger_students_<timestamp>.xlsx: students and subjects sheets
    - logs/extraction_log.txt: detailed extraction log

Date: 2026-10-19
Version: 1.0
=============================================================================
"""

import argparse
import json
import logging
import os
import sys
from typing import Optional

from config import Config, setup_logging
from export_utils import save_outputs
from ledger_records import ExtractionResult
from metadata_extractor import MetadataExtractor
from pdf_processor import ConversionError, PdfSource, PdfTextConverter
from student_parser import StudentSectionParser


class ExtractionError(Exception):
    """The ledger could not be read at all"""


class LedgerExtractor:
    """
    Extraction facade over the metadata extractor and the student parser.

    Key features:
    - Works on raw text (extract) or directly on a PDF (parse_pdf)
    - One fresh student accumulator per call; safe to reuse, and separate
      instances can run concurrently
    - Optional fixed default result date for reproducible output
    """

    def __init__(self, default_result_date: Optional[str] = None,
                 converter: Optional[PdfTextConverter] = None):
        """
        Initialize the extractor.

        Args:
            default_result_date: Used when the ledger has no result date
                (today's date if None)
            converter: Document-to-text converter (pdfplumber default)
        """
        self.default_result_date = default_result_date
        self.converter = converter or PdfTextConverter()
        self.metadata_extractor = MetadataExtractor(default_result_date)
        self.logger = logging.getLogger(__name__)

    def extract(self, raw_text: str) -> ExtractionResult:
        """
        Build the extraction result from ledger text.

        Args:
            raw_text: Newline-delimited text of the whole document

        Returns:
            ExtractionResult (possibly with placeholder fields and no students)

        Raises:
            ExtractionError: If no text was supplied at all (None)
        """
        if raw_text is None:
            raise ExtractionError("Failed to parse PDF: no text was produced")

        metadata = self.metadata_extractor.extract(raw_text)
        students = StudentSectionParser().parse(raw_text)

        result = ExtractionResult(
            institute=metadata['institute'],
            programme=metadata['programme'],
            result_date=metadata['result_date'],
            examination_info=metadata['examination_info'],
            students=students,
            raw_text=raw_text,
        )

        self.logger.info(
            f"Parsed ledger: {result.institute} | {result.programme} | "
            f"{len(result.students)} student(s)"
        )
        for idx, student in enumerate(result.students, 1):
            self.logger.debug(
                f"  Student {idx}: {student.reg_no} {student.name} - "
                f"{student.final_result} ({len(student.subjects)} subjects)"
            )
        return result

    def parse_pdf(self, source: PdfSource) -> ExtractionResult:
        """
        Convert a PDF and extract its records.

        Args:
            source: File path, raw bytes or binary file object

        Raises:
            ExtractionError: If the PDF could not be converted to text
        """
        try:
            raw_text = self.converter.convert(source)
        except ConversionError as e:
            self.logger.error(f"Failed to parse PDF: {e}")
            raise ExtractionError(f"Failed to parse PDF: {e}") from e
        return self.extract(raw_text)


def extract(raw_text: str, default_result_date: Optional[str] = None) -> ExtractionResult:
    """Extract ledger records from raw text (see LedgerExtractor.extract)"""
    return LedgerExtractor(default_result_date=default_result_date).extract(raw_text)


def main(argv=None):
    """
    Main execution function with command-line argument handling.
    """
    parser = argparse.ArgumentParser(
        description='Extract student records from a result ledger PDF'
    )
    parser.add_argument('pdf_file', help='Result ledger PDF')
    parser.add_argument(
        '--output',
        default='.',
        help='Output directory for CSV/Excel files (default: current directory)'
    )
    parser.add_argument(
        '--json',
        action='store_true',
        help='Print the extraction result as JSON instead of writing files'
    )
    parser.add_argument(
        '--default-date',
        default=Config.DEFAULT_RESULT_DATE,
        help='Result date to use when the ledger has none (default: today)'
    )
    parser.add_argument(
        '--log-level',
        default=Config.LOG_LEVEL,
        help=f'Console log level (default: {Config.LOG_LEVEL})'
    )
    args = parser.parse_args(argv)

    if not os.path.exists(args.pdf_file):
        print(f"Error: PDF file not found: {args.pdf_file}")
        sys.exit(1)

    os.makedirs(args.output, exist_ok=True)
    # Keep stdout clean for --json
    setup_logging(
        os.path.join(args.output, 'logs', 'extraction_log.txt'),
        level='WARNING' if args.json else args.log_level,
    )

    extractor = LedgerExtractor(
        default_result_date=args.default_date,
        converter=PdfTextConverter(y_tolerance=Config.Y_TOLERANCE),
    )
    try:
        result = extractor.parse_pdf(args.pdf_file)
    except ExtractionError as e:
        print(f"\nError during extraction: {e}")
        sys.exit(1)

    if args.json:
        print(json.dumps(result.to_dict(include_raw_text=False), indent=2))
        return

    print("=" * 70)
    print("Result Ledger Extractor v1.0")
    print("=" * 70)
    print(f"Institute:   {result.institute}")
    print(f"Programme:   {result.programme}")
    print(f"Result date: {result.result_date}")
    print(f"Examination: {result.examination_info}")
    print()

    if not result.students:
        print("Error: No student records could be extracted.")
        print("Please check the extraction log for details.")
        sys.exit(1)

    csv_file, excel_file = save_outputs(result, args.output)

    print(f"Total students extracted: {len(result.students)}")
    print()
    print("Output files:")
    print(f"  - {csv_file}")
    print(f"  - {excel_file}")
    print()
    print("Sample data (first 3 records):")
    for i, student in enumerate(result.students[:3], 1):
        print(f"{i}. {student.reg_no} - {student.name} - {student.final_result} "
              f"({len(student.subjects)} subjects, SGPA: {student.sgpa or '-'})")
    print()


if __name__ == '__main__':
    main()
