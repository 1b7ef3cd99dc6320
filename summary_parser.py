"""
=============================================================================
Summary-Line Parsers (SGPA, CGPA, Results)
=============================================================================

Parsers for the lines that close a student block:

    SGPA (Atempts) 7.11 (7) 5.64 (6) 6.08 (3)
    CGPA : Credit(s) Pending
    Results : FAILS          (or "Results" with ": FAILS" on the next line)

SGPA values are keyed by position (sem1, sem2, ...) in left-to-right
order. The attempts count in brackets is not used to pick the semester.

Date: 2026-10-19
Version: 1.0
=============================================================================
"""

from typing import Dict, Optional

from ledger_patterns import (
    CGPA_PENDING,
    CGPA_VALUE,
    RESULT_CONTINUATION,
    RESULT_INLINE,
    RESULT_KEYWORD,
    RESULT_STANDALONE,
    SGPA_GROUP,
    SGPA_MARKER,
    SGPA_VALUES,
)
from ledger_records import PENDING_CGPA


def is_sgpa_line(line: str) -> bool:
    return 'SGPA' in line and bool(SGPA_MARKER.search(line))


def parse_sgpa_line(line: str) -> Dict[str, float]:
    """
    Extract SGPA values from a summary line.

    Args:
        line: e.g. "SGPA (Atempts) 7.11 (7) 5.64 (6)"

    Returns:
        Ordered dict {'sem1': 7.11, 'sem2': 5.64}; empty if nothing matched.
        Values are floats rounded to 2 places, so a printed "8.00" is
        stored as 8.0; format with "{:.2f}" to print it as in the ledger.
    """
    sgpa = {}
    values_match = SGPA_VALUES.search(line)
    if not values_match:
        return sgpa

    for position, value in enumerate(SGPA_GROUP.findall(values_match.group(1)), 1):
        sgpa[f'sem{position}'] = round(float(value), 2)
    return sgpa


def is_cgpa_line(line: str) -> bool:
    return 'CGPA' in line.upper()


def parse_cgpa_line(line: str) -> Optional[str]:
    """'Pending' for 'CGPA : Credit(s) Pending', the decimal string for 'CGPA : 7.25'"""
    if CGPA_PENDING.search(line):
        return PENDING_CGPA
    match = CGPA_VALUE.search(line)
    return match.group(1) if match else None


def trim_result_label(text: str) -> str:
    """Cut the label right after its outcome keyword: 'FAILS 12' -> 'FAILS'"""
    return RESULT_KEYWORD.sub(lambda m: m.group(1), text.strip(), count=1).strip()


def parse_result_label(line: str) -> Optional[str]:
    """
    Parse an inline result fragment.

    Args:
        line: e.g. "Results : FIRST CLASS WITH DISTINCTION"

    Returns:
        Trimmed label ("FIRST CLASS"), or None if the line has no result
    """
    match = RESULT_INLINE.search(line)
    if not match:
        return None
    label = trim_result_label(match.group(1))
    return label or None


def is_standalone_result_line(line: str) -> bool:
    return bool(RESULT_STANDALONE.match(line.strip()))


def parse_result_continuation(line: str) -> Optional[str]:
    """': FAILS' (the line after a bare 'Results') -> 'FAILS'"""
    match = RESULT_CONTINUATION.match(line.strip())
    if not match:
        return None
    label = trim_result_label(match.group(1))
    return label or None
