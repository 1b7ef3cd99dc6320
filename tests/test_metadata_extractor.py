from datetime import date

from field_normalizers import format_date
from metadata_extractor import MetadataExtractor


def test_ledger_header(ledger_text):
    metadata = MetadataExtractor().extract(ledger_text)
    assert metadata == {
        "institute": "GOVT POLYTECHNIC BANGALORE",
        "programme": "CE - CIVIL ENGINEERING",
        "result_date": "24/1/2024",
        "examination_info": "Nov/Dec 2023",
    }


def test_placeholders_with_default_date():
    metadata = MetadataExtractor(default_result_date="1/1/2024").extract("")
    assert metadata["institute"] == "Unknown Institute"
    assert metadata["programme"] == "Unknown Programme"
    assert metadata["result_date"] == "1/1/2024"
    assert metadata["examination_info"] == "Jan 2024"


def test_result_date_falls_back_to_today():
    assert MetadataExtractor().extract_result_date("no dates here") == format_date(date.today())


def test_result_date_loose_form():
    assert MetadataExtractor().extract_result_date("Declared on DATE: 05-02-24") == "05-02-24"


def test_institute_keyword_fallback():
    extractor = MetadataExtractor()
    assert extractor.extract_institute("GOVERNMENT COLLEGE OF ENGINEERING\nother") == "COLLEGE OF ENGINEERING"


def test_programme_keyword_fallback():
    assert MetadataExtractor().extract_programme("BRANCH: MECHANICAL") == "MECHANICAL"


def test_examination_fallbacks():
    extractor = MetadataExtractor(default_result_date="1/1/2024")
    assert extractor.extract_examination_info("DIPLOMA EXAMINATION NOV/DEC 2022") == "NOV/DEC 2022"
    assert extractor.extract_examination_info("Examination held in MAY 2021") == "MAY 2021"
    assert extractor.extract_examination_info("nothing", result_date="15/6/2023") == "Jun 2023"
    assert extractor.extract_examination_info("nothing", result_date="June 2023") == "Unknown Examination"
