"""
=============================================================================
Field Normalizers for Result Ledger Values
=============================================================================

Pure conversions from raw matched substrings to typed values. Absent
("AB") and not-applicable ("--") marks become 0 so that every subject
always carries all three mark components.

Date: 2026-10-19
Version: 1.0
=============================================================================
"""

import re
from datetime import date
from typing import Optional, Tuple

from ledger_patterns import CODE_SEMESTER, DATE_PARTS, MONTH_NAMES, SEMESTER_TOKEN
from ledger_records import Marks


ABSENT_MARKS = ('AB', '--')

_LEADING_INT = re.compile(r'^\s*(\d+)')


def parse_mark_value(mark: Optional[str]) -> int:
    """
    Convert one mark token to an integer.

    Args:
        mark: Raw token ("172", "04", "AB", "--")

    Returns:
        Integer mark; 0 for absent, not-applicable or non-numeric tokens
    """
    if not mark:
        return 0
    mark = mark.strip()
    if mark in ABSENT_MARKS:
        return 0
    match = _LEADING_INT.match(mark)
    return int(match.group(1)) if match else 0


def normalize_marks(ia: Optional[str], tr: Optional[str], pr: Optional[str]) -> Marks:
    return Marks(ia=parse_mark_value(ia), tr=parse_mark_value(tr), pr=parse_mark_value(pr))


def normalize_pass_flag(flag: Optional[str]) -> str:
    """P -> 'Pass'; F and F* -> 'Fail'"""
    flag = (flag or '').strip().rstrip('*').upper()
    return 'Fail' if flag == 'F' else 'Pass'


def normalize_grade(grade: Optional[str]) -> str:
    """Strip +, - and * modifiers: 'B+' -> 'B'"""
    return re.sub(r'[+\-*]', '', (grade or '').strip())


def parse_credit(credit: Optional[str]) -> int:
    return parse_mark_value(credit)


def semester_from_token(token: Optional[str]) -> Optional[int]:
    """A leading line token such as '5' names the semester (1-8 only)"""
    if token and SEMESTER_TOKEN.match(token):
        return int(token)
    return None


def semester_from_code(qp_code: Optional[str]) -> Optional[int]:
    """
    Derive the semester from a QP code.

    The digit right after the department letters is the semester:
    20CE53I -> 5. Values outside 1-8 are rejected.
    """
    if not qp_code:
        return None
    match = CODE_SEMESTER.match(qp_code)
    if not match:
        return None
    semester = int(match.group(1))
    return semester if 1 <= semester <= 8 else None


def month_name(month_number: int) -> str:
    if 1 <= month_number <= len(MONTH_NAMES):
        return MONTH_NAMES[month_number - 1]
    return 'Unknown'


def split_date(text: Optional[str]) -> Optional[Tuple[str, str, str]]:
    """'24/1/2024' or '24-01-24' -> (day, month, year); None otherwise"""
    if not text:
        return None
    match = DATE_PARTS.match(text)
    if not match:
        return None
    return match.group(1), match.group(2), match.group(3)


def format_date(value: date) -> str:
    """D/M/YYYY without zero padding, the ledger's own date format"""
    return f"{value.day}/{value.month}/{value.year}"
