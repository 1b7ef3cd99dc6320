"""
=============================================================================
Record Types for Result Ledger Extraction
=============================================================================

Typed containers produced by the extractor:

- Marks: IA / Theory / Practical components of one subject
- Subject: one subject line of a student
- SemesterResult: ordered bucket of subjects
- Student: one student block of the ledger
- ExtractionResult: document metadata plus all students

to_dict() on every record gives the JSON shape served by the upload API
and consumed by the browser UI (camelCase keys).

Date: 2026-10-19
Version: 1.0
=============================================================================
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


UNKNOWN_RESULT = 'Unknown'
PENDING_CGPA = 'Pending'
CURRENT_SEMESTER = 'Current'


@dataclass(frozen=True)
class Marks:
    """Internal assessment, theory and practical marks (absent -> 0)"""
    ia: int = 0
    tr: int = 0
    pr: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {'IA': self.ia, 'Tr': self.tr, 'Pr': self.pr}


@dataclass(frozen=True)
class Subject:
    """One subject line. Frozen: never changed once parsed."""
    qp_code: str
    subject_name: str
    marks: Marks
    result: str
    credits: int
    grade: str
    semester: Optional[int] = None
    raw_grade: str = ''

    @property
    def passed(self) -> bool:
        return self.result == 'Pass'

    def to_dict(self) -> Dict[str, Any]:
        return {
            'qpCode': self.qp_code,
            'subjectName': self.subject_name,
            'marks': self.marks.to_dict(),
            'result': self.result,
            'credits': self.credits,
            'grade': self.grade,
            'rawGrade': self.raw_grade,
            'semester': self.semester,
        }


@dataclass
class SemesterResult:
    semester: str
    subjects: List[Subject] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'semester': self.semester,
            'subjects': [s.to_dict() for s in self.subjects],
        }


@dataclass
class Student:
    """
    One student block of the ledger.

    The parser creates it on a registration line and fills it while the
    student section is open. reg_no is never reassigned by the parser and
    final_result only moves away from 'Unknown' once.
    """
    reg_no: str
    name: str
    father_name: str
    semester_results: List[SemesterResult] = field(
        default_factory=lambda: [SemesterResult(CURRENT_SEMESTER)]
    )
    cgpa: str = PENDING_CGPA
    sgpa: Dict[str, float] = field(default_factory=dict)
    final_result: str = UNKNOWN_RESULT

    @property
    def subjects(self) -> List[Subject]:
        """All subjects across semester buckets, in ledger order"""
        return [s for bucket in self.semester_results for s in bucket.subjects]

    @property
    def has_result(self) -> bool:
        return self.final_result != UNKNOWN_RESULT

    def add_subject(self, subject: Subject) -> None:
        self.semester_results[0].subjects.append(subject)

    def record_result(self, label: str) -> bool:
        """
        Set the final outcome.

        Returns:
            True if the label was stored, False if it was empty or the
            student already had a concrete outcome
        """
        label = (label or '').strip()
        if not label or self.has_result:
            return False
        self.final_result = label
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {
            'regNo': self.reg_no,
            'name': self.name,
            'fatherName': self.father_name,
            'semesterResults': [b.to_dict() for b in self.semester_results],
            'cgpa': self.cgpa,
            'sgpa': dict(self.sgpa),
            'finalResult': self.final_result,
        }


@dataclass
class ExtractionResult:
    institute: str
    programme: str
    result_date: str
    examination_info: str
    students: List[Student] = field(default_factory=list)
    raw_text: str = ''

    def find_student(self, reg_no: str) -> Optional[Student]:
        for student in self.students:
            if student.reg_no == reg_no:
                return student
        return None

    def to_dict(self, include_raw_text: bool = True) -> Dict[str, Any]:
        data = {
            'institute': self.institute,
            'programme': self.programme,
            'resultDate': self.result_date,
            'examinationInfo': self.examination_info,
            'students': [s.to_dict() for s in self.students],
        }
        if include_raw_text:
            data['rawText'] = self.raw_text
        return data
