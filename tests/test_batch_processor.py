import pytest
from sqlalchemy import event
from sqlalchemy.exc import IntegrityError, OperationalError

from batch_processor import BatchLedgerProcessor
from extract_ledger import extract
from init_db import init_database
from models import Ledger, StudentRecord, SubjectResult


@pytest.fixture
def session(tmp_path):
    db_session = init_database(str(tmp_path / "batch.db"))
    yield db_session
    db_session.close()


@pytest.fixture
def input_dir(tmp_path, ledger_pdf_bytes):
    directory = tmp_path / "ledgers"
    directory.mkdir()
    (directory / "ledger_ce.pdf").write_bytes(ledger_pdf_bytes)
    (directory / "broken.pdf").write_bytes(b"this is not a pdf")
    (directory / "notes.txt").write_text("ignored")
    return directory


def _processor(input_dir, tmp_path, session):
    return BatchLedgerProcessor(str(input_dir), str(tmp_path / "out"), session)


def test_find_pdf_files(input_dir, tmp_path, session):
    processor = _processor(input_dir, tmp_path, session)
    files = processor.find_pdf_files()
    processor.close()
    assert [f.rsplit("/", 1)[-1] for f in files] == ["broken.pdf", "ledger_ce.pdf"]


def test_missing_input_dir(tmp_path, session):
    processor = _processor(tmp_path / "nowhere", tmp_path, session)
    stats = processor.process_all_pdfs()
    processor.close()
    assert stats["pdfs_processed"] == 0


def test_process_all_pdfs(input_dir, tmp_path, session):
    processor = _processor(input_dir, tmp_path, session)
    stats = processor.process_all_pdfs()
    processor.close()

    assert stats["pdfs_processed"] == 1
    assert stats["pdfs_failed"] == 1
    assert stats["students_extracted"] == 2
    assert stats["subjects_extracted"] == 3
    assert stats["db_records_created"] == 2

    ledger = session.query(Ledger).one()
    assert ledger.pdf_filename == "ledger_ce.pdf"
    assert ledger.programme == "CE - CIVIL ENGINEERING"
    assert session.query(SubjectResult).count() == 3

    student = session.query(StudentRecord).filter_by(reg_no="149CE20001").one()
    assert student.sgpa == {"sem1": 7.11, "sem2": 5.64, "sem3": 6.08}
    assert [s.raw_grade for s in student.subjects] == ["F", "B+"]
    assert (tmp_path / "out" / "logs" / "batch_process.log").exists()


def test_rerun_skips_stored_ledgers(input_dir, tmp_path, session):
    first = _processor(input_dir, tmp_path, session)
    first.process_all_pdfs()
    first.close()

    second = _processor(input_dir, tmp_path, session)
    stats = second.process_all_pdfs()
    second.close()

    assert stats["pdfs_skipped"] == 1
    assert stats["pdfs_processed"] == 0
    assert session.query(Ledger).count() == 1


def test_store_duplicate_ledger_rolls_back(tmp_path, session, ledger_text):
    processor = _processor(tmp_path, tmp_path, session)
    result = extract(ledger_text)
    processor.store_result(result, "same.pdf")

    with pytest.raises(IntegrityError):
        processor.store_result(result, "same.pdf")
    processor.close()

    assert session.query(Ledger).count() == 1
    assert session.query(StudentRecord).count() == 2


def test_database_error_does_not_stop_batch(tmp_path, session, ledger_pdf_bytes):
    directory = tmp_path / "two_ledgers"
    directory.mkdir()
    (directory / "a_ledger.pdf").write_bytes(ledger_pdf_bytes)
    (directory / "b_ledger.pdf").write_bytes(ledger_pdf_bytes)

    def fail_first_ledger(db_session, flush_context, instances):
        for obj in db_session.new:
            if isinstance(obj, Ledger) and obj.pdf_filename == "a_ledger.pdf":
                raise OperationalError("INSERT INTO ledgers", {}, Exception("disk I/O error"))

    event.listen(session, "before_flush", fail_first_ledger)
    processor = _processor(directory, tmp_path, session)
    stats = processor.process_all_pdfs()
    processor.close()
    event.remove(session, "before_flush", fail_first_ledger)

    assert stats["pdfs_failed"] == 1
    assert stats["pdfs_processed"] == 1
    assert [l.pdf_filename for l in session.query(Ledger).all()] == ["b_ledger.pdf"]
    assert session.query(StudentRecord).count() == 2
