"""
=============================================================================
Database Models for Result Ledger Records
=============================================================================

SQLAlchemy models for storing extracted ledgers.

Tables:
- Ledger: one processed ledger PDF with its header metadata
- StudentRecord: one student of a ledger (result, CGPA, SGPA)
- SubjectResult: one subject line of a student

Date: 2026-10-19
Version: 2.0
=============================================================================
"""

import json
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class Ledger(Base):
    """A processed ledger document"""
    __tablename__ = 'ledgers'

    id = Column(Integer, primary_key=True, autoincrement=True)
    institute = Column(String(300))
    programme = Column(String(300))
    result_date = Column(String(20))  # literal date as printed, e.g. "24/1/2024"
    examination_info = Column(String(100))  # "Nov/Dec 2023"
    pdf_filename = Column(String(300), nullable=False, unique=True)
    created_at = Column(DateTime, default=datetime.now)

    # Relationships
    students = relationship('StudentRecord', back_populates='ledger',
                            cascade='all, delete-orphan')

    def __repr__(self):
        return f"<Ledger(id={self.id}, file={self.pdf_filename}, exam={self.examination_info})>"


class StudentRecord(Base):
    """A student block of one ledger"""
    __tablename__ = 'student_records'

    id = Column(Integer, primary_key=True, autoincrement=True)
    ledger_id = Column(Integer, ForeignKey('ledgers.id'), nullable=False)
    reg_no = Column(String(30), nullable=False)
    name = Column(String(200), nullable=False)
    father_name = Column(String(200))
    cgpa = Column(String(20))  # "Pending" or a decimal string
    sgpa_json = Column(Text)  # {"sem1": 7.11, ...} in ledger order
    final_result = Column(String(50))
    created_at = Column(DateTime, default=datetime.now)

    # Relationships
    ledger = relationship('Ledger', back_populates='students')
    subjects = relationship('SubjectResult', back_populates='student',
                            cascade='all, delete-orphan')

    # One record per registration number per ledger
    __table_args__ = (
        UniqueConstraint('ledger_id', 'reg_no', name='unique_ledger_student'),
    )

    @property
    def sgpa(self):
        return json.loads(self.sgpa_json) if self.sgpa_json else {}

    def __repr__(self):
        return f"<StudentRecord(reg_no={self.reg_no}, name={self.name}, result={self.final_result})>"


class SubjectResult(Base):
    """Marks and grade of one subject for one student"""
    __tablename__ = 'subject_results'

    id = Column(Integer, primary_key=True, autoincrement=True)
    student_id = Column(Integer, ForeignKey('student_records.id'), nullable=False)
    qp_code = Column(String(20), nullable=False)
    subject_name = Column(String(300))
    ia_marks = Column(Integer, default=0)
    theory_marks = Column(Integer, default=0)
    practical_marks = Column(Integer, default=0)
    result = Column(String(10))  # "Pass", "Fail"
    credits = Column(Integer, default=0)
    grade = Column(String(5))
    raw_grade = Column(String(5))  # grade as printed, e.g. "B+"
    semester = Column(Integer)

    # Relationships
    student = relationship('StudentRecord', back_populates='subjects')

    def __repr__(self):
        return f"<SubjectResult(qp_code={self.qp_code}, grade={self.grade}, result={self.result})>"
