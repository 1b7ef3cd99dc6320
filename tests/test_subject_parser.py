from dataclasses import FrozenInstanceError

import pytest

from ledger_records import Marks
from subject_parser import (
    SubjectLineParser,
    locate_qp_code,
    parse_subject_remainder,
    parse_with_layer,
    validate_qp_code,
)


def test_qp_code_shapes():
    assert validate_qp_code("20CE53I")
    assert validate_qp_code("20CE53I2")
    assert validate_qp_code("20CSE53I")
    assert not validate_qp_code("20CE5")
    assert not validate_qp_code("ABCDEFG")
    assert not validate_qp_code("123456")
    assert not validate_qp_code("149CE20001")
    assert not validate_qp_code("")
    assert not validate_qp_code(None)


def test_locate_code_with_attached_colon():
    tokens = "5 01 20CE53I: TRANSPORTATION ENGINEERING".split()
    assert locate_qp_code(tokens) == (2, "20CE53I", 3)


def test_locate_code_with_separate_colon():
    tokens = "5 01 20CE53I : TRANSPORTATION ENGINEERING".split()
    assert locate_qp_code(tokens) == (2, "20CE53I", 4)


def test_locate_code_missing():
    assert locate_qp_code("Credit Applied 20 20".split()) is None


def test_standard_subject_line():
    subject = SubjectLineParser().parse(
        "20CE53I : TRANSPORTATION ENGINEERING 172 / 04 / 50 F 0 F"
    )
    assert subject.qp_code == "20CE53I"
    assert subject.subject_name == "TRANSPORTATION ENGINEERING"
    assert subject.marks == Marks(ia=172, tr=4, pr=50)
    assert subject.result == "Fail"
    assert subject.credits == 0
    assert subject.grade == "F"
    assert subject.semester == 5


def test_concatenated_marks_line():
    subject = SubjectLineParser().parse(
        "20CE53I : TRANSPORTATION ENGINEERING225 / 25 / 70P24 B+"
    )
    assert subject.subject_name == "TRANSPORTATION ENGINEERING"
    assert subject.marks == Marks(ia=225, tr=25, pr=70)
    assert subject.result == "Pass"
    assert subject.credits == 24
    assert subject.grade == "B"
    assert subject.raw_grade == "B+"


def test_absent_theory_mark():
    subject = SubjectLineParser().parse("20CE51I : SURVEYING 20 / AB / 45 P 3 C")
    assert subject.marks == Marks(ia=20, tr=0, pr=45)
    assert subject.grade == "C"


def test_not_applicable_marks():
    subject = SubjectLineParser().parse("20CE57P : SURVEY PRACTICE 40 / -- / -- P 2 A")
    assert subject.marks == Marks(ia=40, tr=0, pr=0)


def test_leading_semester_token_wins_over_code():
    subject = SubjectLineParser().parse(
        "4 01 20CE53I : TRANSPORTATION ENGINEERING 172 / 04 / 50 F 0 F"
    )
    assert subject.semester == 4


def test_each_layer_alone():
    standard = parse_with_layer(0, "HYDRAULICS 30 / 40 / 10 P 4 B")
    assert standard["subject_name"] == "HYDRAULICS"
    assert standard["credits"] == 4

    concatenated = parse_with_layer(1, "HYDRAULICS30 / 40 / 10 P 4 B")
    assert concatenated["subject_name"] == "HYDRAULICS"
    assert concatenated["marks"] == Marks(ia=30, tr=40, pr=10)

    alternative = parse_with_layer(2, "HYDRAULICS30 / 40 / 10P4 B")
    assert alternative["subject_name"] == "HYDRAULICS"
    assert alternative["credits"] == 4
    assert alternative["result"] == "Pass"

    assert parse_with_layer(0, "HYDRAULICS30 / 40 / 10 P 4 B") is None


def test_first_layer_wins():
    parsed = parse_subject_remainder("HYDRAULICS 30 / 40 / 10 P 4 B")
    assert parsed["layer"] == "standard"


def test_non_subject_lines():
    parser = SubjectLineParser()
    assert parser.parse("") is None
    assert parser.parse("Credit Earned 20 18 20") is None
    assert parser.parse("20CE53I : TRANSPORTATION ENGINEERING no marks here") is None
    assert parser.parse("XX : SOMETHING 1 / 2 / 3 P 4 A") is None


def test_parsed_subject_cannot_change():
    subject = SubjectLineParser().parse("20CE51I : SURVEYING 20 / AB / 45 P 3 C")
    with pytest.raises(FrozenInstanceError):
        subject.marks.ia = 999
    with pytest.raises(FrozenInstanceError):
        subject.grade = "A"
    assert hash(subject) == hash(SubjectLineParser().parse("20CE51I : SURVEYING 20 / AB / 45 P 3 C"))
