from student_parser import ParserState, StudentSectionParser, is_skip_line, match_registration


def test_minimal_student_line():
    students = StudentSectionParser().parse(
        "1 20CE53I STUDENT NAME [ S(D)/o : FATHER NAME ]\n"
        "Results : PASS\n"
    )
    assert len(students) == 1
    student = students[0]
    assert student.reg_no == "20CE53I"
    assert student.name == "STUDENT NAME"
    assert student.father_name == "FATHER NAME"
    assert student.final_result == "PASS"
    assert student.subjects == []
    assert student.cgpa == "Pending"
    assert [b.semester for b in student.semester_results] == ["Current"]


def test_registration_forms():
    assert match_registration("1 149CE20001 ASHA KUMARI [ S(D)/o : RAMESH KUMAR ]") == {
        "reg_no": "149CE20001", "name": "ASHA KUMARI", "father_name": "RAMESH KUMAR",
    }
    assert match_registration("2 149CE20002 RAVI SHANKAR [ MOHAN SHANKAR ]")["father_name"] == "MOHAN SHANKAR"
    assert match_registration("3 149CE20003 LATA RAO") == {
        "reg_no": "149CE20003", "name": "LATA RAO", "father_name": "Unknown",
    }


def test_subject_lines_are_not_registrations():
    assert match_registration("5 01 20CE53I : TRANSPORTATION ENGINEERING 172 / 04 / 50 F 0 F") is None
    assert match_registration("1 20CE53I : TRANSPORTATION ENGINEERING 172 / 04 / 50 F 0 F") is None
    assert match_registration("Credit Applied 20 20 20") is None


def test_full_ledger(ledger_text):
    students = StudentSectionParser().parse(ledger_text)
    assert [s.reg_no for s in students] == ["149CE20001", "149CE20002"]

    first, second = students
    assert [s.qp_code for s in first.subjects] == ["20CE53I", "20CE54I"]
    assert first.subjects[1].subject_name == "ENVIRONMENTAL ENGINEERING"
    assert first.sgpa == {"sem1": 7.11, "sem2": 5.64, "sem3": 6.08}
    assert first.cgpa == "Pending"
    assert first.final_result == "FAILS"

    assert len(second.subjects) == 1
    assert second.final_result == "PASS"
    assert second.sgpa == {}


def test_unmatched_line_leaves_student_untouched():
    parser = StudentSectionParser()
    parser.process_line("1 149CE20001 ASHA KUMARI [ S(D)/o : RAMESH KUMAR ]")
    student = parser.current_student

    consumed = parser.process_line("SOMETHING THAT IS NOT A SUBJECT")

    assert consumed is False
    assert parser.current_student is student
    assert parser.state is ParserState.IN_SECTION
    assert student.subjects == []
    assert student.final_result == "Unknown"
    assert parser.lines_dropped == 1


def test_split_results_consumes_next_line():
    parser = StudentSectionParser()
    parser.process_line("1 149CE20001 ASHA KUMARI")
    assert parser.process_line("Results", ": FAILS") is True
    assert parser.current_student.final_result == "FAILS"
    assert parser.state is ParserState.SEEKING


def test_bare_results_without_continuation_is_dropped():
    students = StudentSectionParser().parse(
        "1 149CE20001 ASHA KUMARI\n"
        "Results\n"
        "5 01 20CE53I : TRANSPORTATION ENGINEERING 172 / 04 / 50 F 0 F\n"
    )
    assert students[0].final_result == "Unknown"
    assert len(students[0].subjects) == 1


def test_subjects_after_result_are_ignored():
    students = StudentSectionParser().parse(
        "1 149CE20001 ASHA KUMARI\n"
        "Results : PASS\n"
        "5 01 20CE53I : TRANSPORTATION ENGINEERING 172 / 04 / 50 F 0 F\n"
    )
    assert students[0].subjects == []


def test_first_result_label_is_kept():
    students = StudentSectionParser().parse(
        "1 149CE20001 ASHA KUMARI\n"
        "Results : PASS\n"
        "1 149CE20001 ASHA KUMARI\n"
        "Results : FAILS\n"
    )
    assert len(students) == 1
    assert students[0].final_result == "PASS"


def test_repeated_registration_reopens_student():
    students = StudentSectionParser().parse(
        "1 149CE20001 ASHA KUMARI [ S(D)/o : RAMESH KUMAR ]\n"
        "5 01 20CE53I : TRANSPORTATION ENGINEERING 172 / 04 / 50 F 0 F\n"
        "Page No : 2\n"
        "...Continue\n"
        "1 149CE20001 ASHA KUMARI [ S(D)/o : RAMESH KUMAR ]\n"
        "5 02 20CE54I : ENVIRONMENTAL ENGINEERING 180 / 30 / 60 P 4 A\n"
        "Results : FAILS\n"
    )
    assert len(students) == 1
    assert [s.qp_code for s in students[0].subjects] == ["20CE53I", "20CE54I"]


def test_skip_phrases():
    assert is_skip_line("Page No : 3")
    assert is_skip_line("Printed on : 25/1/2024")
    assert not is_skip_line("Results : PASS")


def test_lines_before_first_student_are_dropped():
    students = StudentSectionParser().parse(
        "5 01 20CE53I : TRANSPORTATION ENGINEERING 172 / 04 / 50 F 0 F\n"
        "Results : PASS\n"
    )
    assert students == []


def test_cgpa_value_recorded():
    students = StudentSectionParser().parse(
        "1 149CE20001 ASHA KUMARI\n"
        "CGPA : 7.25\n"
        "Results : PASS\n"
    )
    assert students[0].cgpa == "7.25"


def test_parser_reuse_starts_fresh(ledger_text):
    parser = StudentSectionParser()
    first = parser.parse(ledger_text)
    second = parser.parse(ledger_text)
    assert len(first) == len(second) == 2
    assert first is not second
    assert [s.to_dict() for s in first] == [s.to_dict() for s in second]


def test_empty_text():
    assert StudentSectionParser().parse("") == []
