"""
=============================================================================
Student-Section Parser for Result Ledger Text
=============================================================================

Single pass over the ledger lines with an explicit two-state machine:

    SEEKING     no student open; waiting for a registration line
    IN_SECTION  a student is open and accepts subject lines

Per line, in priority order:
1. Page furniture / metadata echoes are skipped
2. Registration line opens a student (-> IN_SECTION)
3. Results line records the outcome (-> SEEKING)
4. SGPA line fills the SGPA map
5. CGPA line records the CGPA
6. Semester summary rows are skipped
7. Anything else inside a section is tried as a subject line

Unrecognised lines are dropped; a pass never raises. Each parse() call
starts from a fresh accumulator, so one parser instance can be reused,
but instances must not be shared between concurrent extractions.

Date: 2026-10-19
Version: 1.0
=============================================================================
"""

import logging
from enum import Enum
from typing import Dict, List, Optional

from ledger_patterns import REGISTRATION_PATTERNS, SKIP_PHRASES, SUMMARY_LABELS
from ledger_records import Student
from subject_parser import SubjectLineParser
from summary_parser import (
    is_cgpa_line,
    is_sgpa_line,
    is_standalone_result_line,
    parse_cgpa_line,
    parse_result_continuation,
    parse_result_label,
    parse_sgpa_line,
)


class ParserState(Enum):
    SEEKING = 'seeking'
    IN_SECTION = 'in_section'


def is_skip_line(line: str) -> bool:
    return any(phrase in line for phrase in SKIP_PHRASES)


def is_summary_line(line: str) -> bool:
    return any(label in line for label in SUMMARY_LABELS)


def match_registration(line: str) -> Optional[Dict[str, str]]:
    """
    Match a student header line.

    Args:
        line: e.g. "1 149CE20001 STUDENT NAME [ S(D)/o : FATHER NAME ]"

    Returns:
        Dict with reg_no, name, father_name; None if not a header line
    """
    for pattern in REGISTRATION_PATTERNS:
        match = pattern.match(line)
        if match:
            groups = match.groupdict()
            return {
                'reg_no': groups['reg_no'].strip(),
                'name': groups['name'].strip(),
                'father_name': (groups.get('father') or 'Unknown').strip(),
            }
    return None


class StudentSectionParser:
    """
    Walks ledger text once and assembles Student records.

    Usage:
        students = StudentSectionParser().parse(raw_text)
    """

    def __init__(self, subject_parser: Optional[SubjectLineParser] = None):
        self.subject_parser = subject_parser or SubjectLineParser()
        self.logger = logging.getLogger(__name__)
        self._reset()

    def _reset(self):
        self.state = ParserState.SEEKING
        self.current_student: Optional[Student] = None
        self.students: List[Student] = []
        self._by_reg_no: Dict[str, Student] = {}
        self.lines_skipped = 0
        self.lines_dropped = 0

    def parse(self, raw_text: str) -> List[Student]:
        """
        Parse all student sections of the ledger text.

        Args:
            raw_text: Newline-delimited text of the whole document

        Returns:
            Students in order of first appearance
        """
        self._reset()
        lines = (raw_text or '').split('\n')

        i = 0
        while i < len(lines):
            line = lines[i].strip()
            next_line = lines[i + 1].strip() if i + 1 < len(lines) else None
            consumed_next = self.process_line(line, next_line)
            i += 2 if consumed_next else 1

        self.logger.debug(
            f"Parsed {len(self.students)} student(s) from {len(lines)} lines "
            f"({self.lines_skipped} skipped, {self.lines_dropped} dropped)"
        )
        return self.students

    def process_line(self, line: str, next_line: Optional[str] = None) -> bool:
        """
        Classify one trimmed line and update the accumulator.

        Args:
            line: Current line
            next_line: Following line, used only for the split Results form

        Returns:
            True if next_line was consumed as part of this line
        """
        if not line:
            return False

        if is_skip_line(line):
            self.lines_skipped += 1
            return False

        header = match_registration(line)
        if header:
            self._open_student(header)
            return False

        if self.current_student is None:
            self.lines_dropped += 1
            return False

        result_label = parse_result_label(line)
        if result_label:
            if is_sgpa_line(line):
                self._record_sgpa(line)
            self._close_student(result_label)
            return False

        if is_standalone_result_line(line):
            label = parse_result_continuation(next_line) if next_line else None
            if label:
                self._close_student(label)
                return True
            self.lines_dropped += 1
            return False

        if is_sgpa_line(line):
            self._record_sgpa(line)
            return False

        if is_cgpa_line(line):
            cgpa = parse_cgpa_line(line)
            if cgpa:
                self.current_student.cgpa = cgpa

        if self.state is not ParserState.IN_SECTION:
            self.lines_dropped += 1
            return False

        if is_summary_line(line):
            self.lines_skipped += 1
            return False

        subject = self.subject_parser.parse(line)
        if subject:
            self.current_student.add_subject(subject)
        else:
            self.lines_dropped += 1
        return False

    def _open_student(self, header: Dict[str, str]):
        reg_no = header['reg_no']
        student = self._by_reg_no.get(reg_no)
        if student is not None:
            # Same student repeated on a continuation page
            self.logger.debug(f"Reopening student {reg_no}")
        else:
            student = Student(
                reg_no=reg_no,
                name=header['name'],
                father_name=header['father_name'],
            )
            self.students.append(student)
            self._by_reg_no[reg_no] = student
            self.logger.debug(f"Found student: {reg_no} - {student.name} [{student.father_name}]")

        self.current_student = student
        self.state = ParserState.IN_SECTION

    def _close_student(self, label: str):
        student = self.current_student
        if not student.record_result(label):
            self.logger.debug(
                f"Ignoring result {label!r} for {student.reg_no}; already {student.final_result!r}"
            )
        else:
            self.logger.debug(f"Set result for {student.reg_no}: {label}")
        self.state = ParserState.SEEKING

    def _record_sgpa(self, line: str):
        sgpa = parse_sgpa_line(line)
        if sgpa:
            self.current_student.sgpa = sgpa
