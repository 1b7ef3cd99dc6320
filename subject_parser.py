"""
=============================================================================
Subject-Line Parser for Result Ledger Text
=============================================================================

Resolves one ledger line into a Subject record.

A subject line carries a QP code (colon attached or separated by a space)
followed by: name, IA / Tr / Pr marks, pass flag, credit and grade.
Columns are not reliably delimited in the extracted text, so the
remainder is matched against three layered patterns, first match wins:

    standard      NAME 172 / 04 / 50 F 0 F
    concatenated  NAME225 / 25 / 70 P 24 B+
    alternative   NAME225 / 25 / 70P24 B+

Lines matching none of them are not subject lines (None is returned).

Date: 2026-10-19
Version: 1.0
=============================================================================
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from field_normalizers import (
    normalize_grade,
    normalize_marks,
    normalize_pass_flag,
    parse_credit,
    semester_from_code,
    semester_from_token,
)
from ledger_patterns import QP_CODE_MIN_LENGTH, QP_CODE_PATTERNS, SUBJECT_LAYERS, TRAILING_DIGITS
from ledger_records import Subject


logger = logging.getLogger(__name__)


def validate_qp_code(qp_code: Optional[str]) -> bool:
    """True for 20CE53I, 20CE53I2 and 20CSE53I shaped codes only"""
    if not qp_code or len(qp_code) < QP_CODE_MIN_LENGTH:
        return False
    return any(pattern.match(qp_code) for pattern in QP_CODE_PATTERNS)


def locate_qp_code(tokens: List[str]) -> Optional[Tuple[int, str, int]]:
    """
    Find the QP code among the tokens of a line.

    Args:
        tokens: Whitespace-split line

    Returns:
        (code index, code, index where the subject remainder starts),
        or None if the line has no valid code
    """
    # 20CE53I: NAME ...
    for idx, token in enumerate(tokens):
        if ':' in token:
            candidate = token.replace(':', '', 1).strip()
            if validate_qp_code(candidate):
                return idx, candidate, idx + 1

    # 20CE53I : NAME ...
    for idx in range(len(tokens) - 1):
        if tokens[idx + 1] == ':' and validate_qp_code(tokens[idx]):
            return idx, tokens[idx], idx + 2

    return None


def parse_with_layer(layer_index: int, text: str) -> Optional[Dict[str, Any]]:
    """Apply a single subject layer; exposed so each layer can be checked alone"""
    _, pattern, strip_digits = SUBJECT_LAYERS[layer_index]
    match = pattern.match(text.strip())
    if not match:
        return None

    name = match.group('name')
    if strip_digits:
        name = TRAILING_DIGITS.sub('', name)

    return {
        'subject_name': name.strip(),
        'marks': normalize_marks(match.group('ia'), match.group('tr'), match.group('pr')),
        'result': normalize_pass_flag(match.group('flag')),
        'credits': parse_credit(match.group('credit')),
        'grade': normalize_grade(match.group('grade')),
        'raw_grade': match.group('grade'),
    }


def parse_subject_remainder(text: str) -> Optional[Dict[str, Any]]:
    """
    Parse the part of a subject line that follows the QP code.

    Returns:
        Dict with subject_name, marks, result, credits, grade, raw_grade
        and layer (which pattern matched); None if no layer matches
    """
    for idx, (layer_name, _, _) in enumerate(SUBJECT_LAYERS):
        parsed = parse_with_layer(idx, text)
        if parsed:
            parsed['layer'] = layer_name
            return parsed
    return None


class SubjectLineParser:
    """Turns ledger lines into Subject records (stateless)"""

    def __init__(self):
        self.logger = logger

    def parse(self, line: str) -> Optional[Subject]:
        """
        Parse one subject line.

        Args:
            line: Trimmed ledger line, e.g.
                  "5 01 20CE53I : TRANSPORTATION ENGINEERING 172 / 04 / 50 F 0 F"

        Returns:
            Subject, or None when the line is not a recognisable subject line
        """
        tokens = line.split()
        if not tokens:
            return None

        located = locate_qp_code(tokens)
        if not located:
            return None
        _, qp_code, rest_start = located

        rest_of_line = ' '.join(tokens[rest_start:])
        parsed = parse_subject_remainder(rest_of_line)
        if not parsed:
            self.logger.debug(f"No subject layer matched for {qp_code}: {rest_of_line!r}")
            return None

        semester = semester_from_token(tokens[0]) if len(tokens) >= 3 else None
        if semester is None:
            semester = semester_from_code(qp_code)

        self.logger.debug(
            f"Subject {qp_code} ({parsed['layer']}): {parsed['subject_name']} "
            f"{parsed['result']} {parsed['grade']}"
        )

        return Subject(
            qp_code=qp_code,
            subject_name=parsed['subject_name'],
            marks=parsed['marks'],
            result=parsed['result'],
            credits=parsed['credits'],
            grade=parsed['grade'],
            semester=semester,
            raw_grade=parsed['raw_grade'],
        )
