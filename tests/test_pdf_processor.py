import io

import pytest

from pdf_processor import ConversionError, PdfTextConverter


def test_rows_rebuilt_from_words(make_pdf):
    lines = [
        "1 149CE20001 ASHA KUMARI [ S(D)/o : RAMESH KUMAR ]",
        "5 01 20CE53I : TRANSPORTATION ENGINEERING 172 / 04 / 50 F 0 F",
    ]
    text = PdfTextConverter().convert(make_pdf(lines))
    assert text.splitlines() == lines
    assert text.endswith("\n")


def test_pages_in_order(make_pdf):
    pages = PdfTextConverter().extract_pages(make_pdf(["Page No : 1", "second row"], pages=2))
    assert [p.page_number for p in pages] == [1, 2]
    assert pages[0].lines[0].top < pages[0].lines[1].top
    assert pages[1].text == "Page No : 1\nsecond row"


def test_file_object_and_path(tmp_path, make_pdf):
    data = make_pdf(["Results : PASS"])
    path = tmp_path / "one.pdf"
    path.write_bytes(data)

    converter = PdfTextConverter()
    assert converter.convert(str(path)) == "Results : PASS\n"
    assert converter.convert(io.BytesIO(data)) == "Results : PASS\n"


def test_empty_page_is_not_an_error(make_pdf):
    assert PdfTextConverter().convert(make_pdf([])) == "\n"


def test_group_rows_tolerance():
    words = [
        {"text": "B", "top": 100.0, "x0": 50.0},
        {"text": "A", "top": 101.5, "x0": 10.0},
        {"text": "C", "top": 120.0, "x0": 10.0},
    ]
    assert [r.text for r in PdfTextConverter(y_tolerance=5).group_rows(words)] == ["A B", "C"]
    assert [r.text for r in PdfTextConverter(y_tolerance=1).group_rows(words)] == ["B", "A", "C"]


def test_corrupt_input():
    with pytest.raises(ConversionError):
        PdfTextConverter().convert(b"this is not a pdf")
