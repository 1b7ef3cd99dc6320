"""
=============================================================================
Export Utilities for Result Ledger Records
=============================================================================

Tabular exports of an ExtractionResult (pandas -> CSV / Excel) and JSON
exports and statistics over the ledger database.

Date: 2026-10-19
Version: 2.0
=============================================================================
"""

import json
import logging
import os
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd
from sqlalchemy.orm import Session

from ledger_records import ExtractionResult
from models import Ledger, StudentRecord


logger = logging.getLogger(__name__)

SUBJECT_COLUMNS = [
    'Reg_No', 'Name', 'Father_Name', 'QP_Code', 'Subject', 'Semester',
    'IA', 'Theory', 'Practical', 'Result', 'Credits', 'Grade', 'Raw_Grade',
    'Final_Result',
]


def subjects_dataframe(result: ExtractionResult) -> pd.DataFrame:
    """
    One row per student subject, student columns repeated.

    Args:
        result: Extraction result

    Returns:
        DataFrame with SUBJECT_COLUMNS (empty frame with those columns if
        there are no subjects)
    """
    records = []
    for student in result.students:
        for subject in student.subjects:
            records.append({
                'Reg_No': student.reg_no,
                'Name': student.name,
                'Father_Name': student.father_name,
                'QP_Code': subject.qp_code,
                'Subject': subject.subject_name,
                'Semester': subject.semester,
                'IA': subject.marks.ia,
                'Theory': subject.marks.tr,
                'Practical': subject.marks.pr,
                'Result': subject.result,
                'Credits': subject.credits,
                'Grade': subject.grade,
                'Raw_Grade': subject.raw_grade,
                'Final_Result': student.final_result,
            })
    return pd.DataFrame(records, columns=SUBJECT_COLUMNS)


def students_dataframe(result: ExtractionResult) -> pd.DataFrame:
    """
    One row per student with subject counts and SGPA_semN columns.

    SGPA columns follow the order of the widest SGPA map in the ledger.
    """
    sgpa_keys = []
    for student in result.students:
        for key in student.sgpa:
            if key not in sgpa_keys:
                sgpa_keys.append(key)

    records = []
    for student in result.students:
        subjects = student.subjects
        record = {
            'Reg_No': student.reg_no,
            'Name': student.name,
            'Father_Name': student.father_name,
            'Subjects': len(subjects),
            'Failed_Subjects': sum(1 for s in subjects if not s.passed),
            'Total_Credits': sum(s.credits for s in subjects),
            'CGPA': student.cgpa,
            'Final_Result': student.final_result,
        }
        for key in sgpa_keys:
            record[f'SGPA_{key}'] = student.sgpa.get(key)
        records.append(record)

    columns = ['Reg_No', 'Name', 'Father_Name', 'Subjects', 'Failed_Subjects',
               'Total_Credits', 'CGPA', 'Final_Result'] + [f'SGPA_{k}' for k in sgpa_keys]
    return pd.DataFrame(records, columns=columns)


def subjects_csv(result: ExtractionResult) -> str:
    """Subject-level CSV as a string"""
    return subjects_dataframe(result).to_csv(index=False)


def _autosize_columns(worksheet) -> None:
    for column in worksheet.columns:
        max_length = max((len(str(cell.value)) for cell in column if cell.value is not None),
                         default=0)
        worksheet.column_dimensions[column[0].column_letter].width = min(max_length + 2, 50)


def save_outputs(result: ExtractionResult, output_dir: str = '.') -> Tuple[Optional[str], Optional[str]]:
    """
    Save extracted data to CSV and Excel files.

    Args:
        result: Extraction result
        output_dir: Target directory (created if missing)

    Returns:
        Tuple of (csv_file, excel_file) paths; (None, None) if there is
        nothing to write
    """
    if not result.students:
        logger.error("Cannot save empty extraction result")
        return None, None

    os.makedirs(output_dir, exist_ok=True)
    subjects_df = subjects_dataframe(result)
    students_df = students_dataframe(result)

    # Generate timestamped filenames
    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    csv_file = os.path.join(output_dir, f'ledger_subjects_{timestamp}.csv')
    excel_file = os.path.join(output_dir, f'ledger_students_{timestamp}.xlsx')

    subjects_df.to_csv(csv_file, index=False)
    logger.info(f"Saved CSV: {csv_file}")

    with pd.ExcelWriter(excel_file, engine='openpyxl') as writer:
        students_df.to_excel(writer, index=False, sheet_name='Students')
        subjects_df.to_excel(writer, index=False, sheet_name='Subjects')
        for worksheet in writer.sheets.values():
            _autosize_columns(worksheet)

    logger.info(f"Saved Excel: {excel_file}")
    return csv_file, excel_file


def _student_row(student: StudentRecord, ledger: Ledger) -> Dict[str, Any]:
    return {
        'reg_no': student.reg_no,
        'name': student.name,
        'father_name': student.father_name,
        'cgpa': student.cgpa,
        'sgpa': student.sgpa,
        'final_result': student.final_result,
        'ledger_id': ledger.id,
        'institute': ledger.institute,
        'programme': ledger.programme,
        'result_date': ledger.result_date,
        'examination_info': ledger.examination_info,
        'pdf_filename': ledger.pdf_filename,
    }


def export_students_json(db_session: Session, output_file: str = 'students.json') -> int:
    """
    Export all stored student records to a JSON file.

    Args:
        db_session: SQLAlchemy session
        output_file: Output JSON file path

    Returns:
        Number of records exported
    """
    records = db_session.query(
        StudentRecord, Ledger
    ).join(
        Ledger, StudentRecord.ledger_id == Ledger.id
    ).all()

    export_data = []
    for student, ledger in records:
        row = _student_row(student, ledger)
        row['subjects'] = [
            {
                'qp_code': s.qp_code,
                'subject_name': s.subject_name,
                'marks': {'IA': s.ia_marks, 'Tr': s.theory_marks, 'Pr': s.practical_marks},
                'result': s.result,
                'credits': s.credits,
                'grade': s.grade,
                'semester': s.semester,
            }
            for s in student.subjects
        ]
        export_data.append(row)

    export_data.sort(key=lambda x: (x['reg_no'], x['ledger_id']))

    with open(output_file, 'w') as f:
        json.dump(export_data, f, indent=2)

    logger.info(f"Exported {len(export_data)} student records to {output_file}")
    return len(export_data)


def get_student_by_reg_no(db_session: Session, reg_no: str) -> List[Dict[str, Any]]:
    """
    Get all stored records for a registration number (one per ledger).

    Args:
        db_session: SQLAlchemy session
        reg_no: Registration number, e.g. "149CE20001"
    """
    records = db_session.query(
        StudentRecord, Ledger
    ).join(
        Ledger, StudentRecord.ledger_id == Ledger.id
    ).filter(
        StudentRecord.reg_no == reg_no
    ).all()

    return [_student_row(student, ledger) for student, ledger in records]


def is_failed(final_result: Optional[str]) -> bool:
    return bool(final_result) and final_result.strip().upper().startswith('FAIL')


def get_failed_students(db_session: Session) -> List[Dict[str, Any]]:
    """All stored students whose final result is FAIL/FAILS"""
    records = db_session.query(
        StudentRecord, Ledger
    ).join(
        Ledger, StudentRecord.ledger_id == Ledger.id
    ).filter(
        StudentRecord.final_result.ilike('FAIL%')
    ).all()

    return [_student_row(student, ledger) for student, ledger in records]


def get_ledger_statistics(db_session: Session) -> List[Dict[str, Any]]:
    """
    Pass/fail counts for every stored ledger.

    Students still at 'Unknown' count as neither passed nor failed.
    """
    stats = []
    for ledger in db_session.query(Ledger).order_by(Ledger.id).all():
        results = [s.final_result for s in ledger.students]
        total = len(results)
        failed = sum(1 for r in results if is_failed(r))
        unknown = sum(1 for r in results if not r or r == 'Unknown')
        passed = total - failed - unknown

        stats.append({
            'ledger_id': ledger.id,
            'pdf_filename': ledger.pdf_filename,
            'institute': ledger.institute,
            'programme': ledger.programme,
            'examination_info': ledger.examination_info,
            'result_date': ledger.result_date,
            'total_students': total,
            'passed': passed,
            'failed': failed,
            'unknown': unknown,
            'pass_percentage': round((passed / total * 100) if total > 0 else 0, 2),
        })

    return stats


if __name__ == '__main__':
    from config import Config
    from init_db import get_database_session

    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

    print("=" * 70)
    print("Exporting Student Records to JSON")
    print("=" * 70)
    print()

    session = get_database_session(Config.DATABASE_PATH)
    count = export_students_json(session, 'students.json')
    session.close()

    print()
    print(f"Exported {count} records to students.json")
    print()
