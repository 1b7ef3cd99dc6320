"""
=============================================================================
Batch Processor for Result Ledgers
=============================================================================

Orchestrates the batch workflow:
1. Scans the input directory for ledger PDFs
2. Extracts metadata, students and subjects from each PDF
3. Stores every ledger in the database (one Ledger row per file)
4. Keeps statistics; a failing PDF never stops the batch

Ledgers already stored (same file name) are skipped, so the batch can be
re-run over the same directory.

Date: 2026-10-19
Version: 3.0
=============================================================================
"""

import json
import logging
import os
from typing import Dict, List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from config import LOG_FORMAT
from extract_ledger import ExtractionError, LedgerExtractor
from ledger_records import ExtractionResult
from models import Ledger, StudentRecord, SubjectResult


class BatchLedgerProcessor:
    """
    Batch processor for extracting and storing records from multiple ledger PDFs.
    """

    def __init__(self, input_dir: str, output_dir: str, db_session: Session,
                 extractor: Optional[LedgerExtractor] = None):
        """
        Initialize batch processor.

        Args:
            input_dir: Directory containing ledger PDF files
            output_dir: Output directory (logs are written to output_dir/logs)
            db_session: SQLAlchemy database session
            extractor: Ledger extractor (default settings if None)
        """
        self.input_dir = input_dir
        self.output_dir = output_dir
        self.db_session = db_session
        self.extractor = extractor or LedgerExtractor()

        os.makedirs(os.path.join(output_dir, 'logs'), exist_ok=True)
        self.log_file = os.path.join(output_dir, 'logs', 'batch_process.log')

        self._setup_logging()

        # Statistics tracking
        self.stats = {
            'pdfs_processed': 0,
            'pdfs_skipped': 0,
            'pdfs_failed': 0,
            'students_extracted': 0,
            'subjects_extracted': 0,
            'db_records_created': 0,
        }

    def _setup_logging(self):
        """Configure logging"""
        self.logger = logging.getLogger('BatchProcessor')
        self.logger.setLevel(logging.DEBUG)
        # Reusing the logger must not stack handlers
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        formatter = logging.Formatter(LOG_FORMAT)
        file_handler = logging.FileHandler(self.log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(formatter)
        self.logger.addHandler(file_handler)
        self.logger.addHandler(console_handler)

    def close(self):
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

    def find_pdf_files(self) -> List[str]:
        """
        Find all PDF files in the input directory.

        Returns:
            Sorted list of PDF file paths
        """
        pdf_files = []

        if not os.path.exists(self.input_dir):
            self.logger.error(f"Input directory not found: {self.input_dir}")
            return pdf_files

        for filename in sorted(os.listdir(self.input_dir)):
            if filename.lower().endswith('.pdf'):
                pdf_files.append(os.path.join(self.input_dir, filename))

        self.logger.info(f"Found {len(pdf_files)} PDF files in {self.input_dir}")
        return pdf_files

    def is_already_stored(self, pdf_filename: str) -> bool:
        return self.db_session.query(Ledger).filter_by(pdf_filename=pdf_filename).first() is not None

    def store_result(self, result: ExtractionResult, pdf_filename: str) -> Ledger:
        """
        Store an extraction result as one ledger with its students and subjects.

        Args:
            result: Extraction result
            pdf_filename: Source file name (unique per ledger)

        Returns:
            The committed Ledger

        Raises:
            IntegrityError: If the ledger was stored before
            SQLAlchemyError: On any other database failure
            (the session is rolled back in both cases)
        """
        ledger = Ledger(
            institute=result.institute,
            programme=result.programme,
            result_date=result.result_date,
            examination_info=result.examination_info,
            pdf_filename=pdf_filename,
        )

        for student in result.students:
            record = StudentRecord(
                reg_no=student.reg_no,
                name=student.name,
                father_name=student.father_name,
                cgpa=student.cgpa,
                sgpa_json=json.dumps(student.sgpa),
                final_result=student.final_result,
            )
            for subject in student.subjects:
                record.subjects.append(SubjectResult(
                    qp_code=subject.qp_code,
                    subject_name=subject.subject_name,
                    ia_marks=subject.marks.ia,
                    theory_marks=subject.marks.tr,
                    practical_marks=subject.marks.pr,
                    result=subject.result,
                    credits=subject.credits,
                    grade=subject.grade,
                    raw_grade=subject.raw_grade,
                    semester=subject.semester,
                ))
            ledger.students.append(record)

        self.db_session.add(ledger)
        try:
            self.db_session.commit()
        except SQLAlchemyError:
            self.db_session.rollback()
            raise

        self.logger.info(
            f"Stored ledger {ledger.id}: {pdf_filename} ({len(ledger.students)} students)"
        )
        return ledger

    def process_single_pdf(self, pdf_path: str) -> bool:
        """
        Process a single PDF file.

        Args:
            pdf_path: Path to PDF file

        Returns:
            True if the ledger was stored, False otherwise
        """
        pdf_basename = os.path.basename(pdf_path)
        self.logger.info(f"{'=' * 70}")
        self.logger.info(f"Processing: {pdf_basename}")

        if self.is_already_stored(pdf_basename):
            self.logger.info(f"Skipping {pdf_basename} - already in database")
            self.stats['pdfs_skipped'] += 1
            return False

        try:
            result = self.extractor.parse_pdf(pdf_path)
        except ExtractionError as e:
            self.logger.error(f"Failed to process {pdf_basename}: {e}")
            self.stats['pdfs_failed'] += 1
            return False

        if not result.students:
            self.logger.warning(f"No students found in {pdf_basename}")

        for student in result.students:
            self.logger.debug(
                f"  {student.reg_no}: {student.name} - {student.final_result} "
                f"({len(student.subjects)} subjects)"
            )

        try:
            ledger = self.store_result(result, pdf_basename)
        except IntegrityError as e:
            self.logger.warning(f"Duplicate records in {pdf_basename} - skipping ({e.orig})")
            self.stats['pdfs_failed'] += 1
            return False
        except SQLAlchemyError as e:
            self.logger.error(f"Database error while storing {pdf_basename}: {e}")
            self.stats['pdfs_failed'] += 1
            return False

        subject_count = sum(len(s.subjects) for s in result.students)
        self.stats['students_extracted'] += len(result.students)
        self.stats['subjects_extracted'] += subject_count
        self.stats['db_records_created'] += len(ledger.students)
        self.stats['pdfs_processed'] += 1

        self.logger.info(f"Successfully processed {pdf_basename}")
        return True

    def process_all_pdfs(self) -> Dict[str, int]:
        """
        Process all PDFs in the input directory.

        Returns:
            Statistics dictionary
        """
        self.logger.info("=" * 70)
        self.logger.info("BATCH PROCESSING STARTED")
        self.logger.info("=" * 70)
        self.logger.info(f"Input directory: {self.input_dir}")
        self.logger.info(f"Output directory: {self.output_dir}")

        pdf_files = self.find_pdf_files()

        if not pdf_files:
            self.logger.error("No PDF files found!")
            return self.stats

        for idx, pdf_path in enumerate(pdf_files, 1):
            self.logger.info(f"[{idx}/{len(pdf_files)}] Processing PDF...")
            self.process_single_pdf(pdf_path)

        self.logger.info("=" * 70)
        self.logger.info("BATCH PROCESSING COMPLETED")
        self.logger.info("=" * 70)
        self.logger.info(f"PDFs processed successfully: {self.stats['pdfs_processed']}")
        self.logger.info(f"PDFs skipped (already stored): {self.stats['pdfs_skipped']}")
        self.logger.info(f"PDFs failed: {self.stats['pdfs_failed']}")
        self.logger.info(f"Students extracted: {self.stats['students_extracted']}")
        self.logger.info(f"Subjects extracted: {self.stats['subjects_extracted']}")
        self.logger.info(f"Database records created: {self.stats['db_records_created']}")

        return self.stats
