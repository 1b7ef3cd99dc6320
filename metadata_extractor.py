"""
=============================================================================
Document Metadata Extractor for Result Ledgers
=============================================================================

Pulls document-level fields out of the whole ledger text, independently
of the per-student pass:

- Institute          "Institute : 149 - [ GOVT POLYTECHNIC ... ]"
- Programme          "Programme : CE - CIVIL ENGINEERING"
- Result date        "Result Date : 24/1/2024"
- Examination period "RESULT LEDGER - DIPLOMA EXAMINATION Nov/Dec-2023"

Every field has fallbacks and ends in a literal placeholder, so
extraction never fails.

Date: 2026-10-19
Version: 1.0
=============================================================================
"""

import logging
from datetime import date
from typing import Dict, Optional

from field_normalizers import format_date, month_name, split_date
from ledger_patterns import (
    EXAMINATION,
    EXAMINATION_FALLBACKS,
    INSTITUTE,
    INSTITUTE_FALLBACK,
    PROGRAMME,
    PROGRAMME_FALLBACK,
    RESULT_DATE,
    RESULT_DATE_FALLBACK,
)


UNKNOWN_INSTITUTE = 'Unknown Institute'
UNKNOWN_PROGRAMME = 'Unknown Programme'
UNKNOWN_EXAMINATION = 'Unknown Examination'


class MetadataExtractor:
    """Best-effort extraction of ledger header fields"""

    def __init__(self, default_result_date: Optional[str] = None):
        """
        Args:
            default_result_date: Returned when the text carries no result
                date. Without it, today's date is used, which makes the
                output depend on when extraction ran.
        """
        self.default_result_date = default_result_date
        self.logger = logging.getLogger(__name__)

    def extract_institute(self, text: str) -> str:
        match = INSTITUTE.search(text)
        if match:
            return match.group(1).strip()

        fallback = INSTITUTE_FALLBACK.search(text)
        if fallback:
            self.logger.debug("Institute taken from keyword fallback")
            return fallback.group(0).strip()
        return UNKNOWN_INSTITUTE

    def extract_programme(self, text: str) -> str:
        match = PROGRAMME.search(text)
        if match:
            return f"{match.group(1)} - {match.group(2).strip()}"

        fallback = PROGRAMME_FALLBACK.search(text)
        if fallback and fallback.group(1).strip():
            self.logger.debug("Programme taken from keyword fallback")
            return fallback.group(1).strip()
        return UNKNOWN_PROGRAMME

    def extract_result_date(self, text: str) -> str:
        match = RESULT_DATE.search(text)
        if match:
            return match.group(1)

        fallback = RESULT_DATE_FALLBACK.search(text)
        if fallback:
            return fallback.group(1)

        if self.default_result_date is not None:
            return self.default_result_date

        self.logger.warning("No result date found in ledger text; using today's date")
        return format_date(date.today())

    def extract_examination_info(self, text: str, result_date: Optional[str] = None) -> str:
        """
        Examination period, e.g. "Nov/Dec 2023".

        Args:
            text: Whole ledger text
            result_date: Already extracted result date (extracted again if omitted)
        """
        match = EXAMINATION.search(text)
        if match:
            # Nov/Dec-2023 -> Nov/Dec 2023
            return match.group(1).replace('-', ' ', 1)

        for pattern in EXAMINATION_FALLBACKS:
            fallback = pattern.search(text)
            if not fallback:
                continue
            groups = fallback.groupdict()
            first = (groups.get('m1') or '').upper()
            second = (groups.get('m2') or '').upper()
            year = groups.get('year') or ''
            if first and second and year:
                return f"{first}/{second} {year}"
            if first and year:
                return f"{first} {year}"

        if result_date is None:
            result_date = self.extract_result_date(text)
        parts = split_date(result_date)
        if parts:
            _, month, year = parts
            return f"{month_name(int(month))} {year}"

        return UNKNOWN_EXAMINATION

    def extract(self, text: str) -> Dict[str, str]:
        """
        Extract all header fields.

        Returns:
            Dict with institute, programme, result_date, examination_info
        """
        text = text or ''
        result_date = self.extract_result_date(text)
        metadata = {
            'institute': self.extract_institute(text),
            'programme': self.extract_programme(text),
            'result_date': result_date,
            'examination_info': self.extract_examination_info(text, result_date),
        }
        self.logger.debug(f"Ledger metadata: {metadata}")
        return metadata
