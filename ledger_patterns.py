"""
=============================================================================
Pattern Library for Result Ledger Text
=============================================================================

Every recognisable fragment of a ledger line, as compiled regular
expressions and phrase lists. Nothing here holds state; the parsers
import these names and apply them in their own priority order.

Sample lines (pdf text, one per line):

    1 149CE20001 STUDENT NAME [ S(D)/o : FATHER NAME ]
    5 01 20CE53I : TRANSPORTATION ENGINEERING 172 / 04 / 50 F 0 F
    20CE53I : TRANSPORTATION ENGINEERING225 / 25 / 70P24 B+
    SGPA (Atempts) 7.11 (7) 5.64 (6) 6.08 (3)
    CGPA : Credit(s) Pending
    Results : FAILS

Date: 2026-10-19
Version: 1.0
=============================================================================
"""

import re


# === LINE FILTERS ===

# Page furniture and metadata echoes, dropped before any classification
SKIP_PHRASES = (
    'BOARD OF TECHNICAL EXAMINATION',
    'RESULT LEDGER',
    'Page No :',
    'Continue...',
    '...Continue',
    'Note : This is only for Institutional Reference',
    'Institute :',
    'Programme :',
    'Result Date :',
    'Printed on :',
)

# Semester summary rows inside a student section (never subject lines)
SUMMARY_LABELS = (
    'Semester I II III IV V VI',
    'Credit Applied',
    'Credit Earned',
    'Σ(Ci x Gi)',
    'Î£(Ci x Gi)',  # same symbol decoded as latin-1
    'SGPA',
    '% Conversion',
    'CGPA :',
)


# === STUDENT HEADER ===

# Serial number, then the registration number: digits, department
# letters, digits, optional alphanumeric tail (149CE20001, 20CE53I)
_SERIAL_AND_REG = r'^(?P<sno>\d+)\s+(?P<reg_no>\d+[A-Z]{2,4}\d+[A-Z0-9]*)\s+'

REGISTRATION_PATTERNS = (
    # 1 149CE20001 NAME [ S(D)/o : FATHER ]
    re.compile(
        _SERIAL_AND_REG
        + r'(?P<name>.+?)\s*\[\s*S\(D\)\s*/\s*o\s*:\s*(?P<father>.+?)\s*\]'
    ),
    # 1 149CE20001 NAME [ FATHER ]
    re.compile(
        _SERIAL_AND_REG
        + r'(?P<name>[^:\[\]]+?)\s*\[\s*(?P<father>[^\]]+?)\s*\]'
    ),
    # 1 149CE20001 NAME
    re.compile(_SERIAL_AND_REG + r'(?!:)(?P<name>[^:/\[\]]+)$'),
)


# === RESULT LINE ===

RESULT_INLINE = re.compile(r'Results?\s*:\s*([A-Z][A-Z\s]*)', re.IGNORECASE)
RESULT_STANDALONE = re.compile(r'^Results?$', re.IGNORECASE)
RESULT_CONTINUATION = re.compile(r'^:\s*(.+)$')
RESULT_KEYWORD = re.compile(
    r'\s*(PASS|FAILS?|DISTINCTION|FIRST CLASS|SECOND CLASS).*$',
    re.IGNORECASE,
)


# === SEMESTER SUMMARY ===

SGPA_MARKER = re.compile(r'\(At+empts\)', re.IGNORECASE)
SGPA_VALUES = re.compile(r'SGPA\s*\(At+empts\)\s*([\d.\s()]+)', re.IGNORECASE)
SGPA_GROUP = re.compile(r'(\d+\.\d+)\s*\(\d+\)')

CGPA_PENDING = re.compile(r'CGPA[\s:]*Credit\(s\)\s*Pending', re.IGNORECASE)
CGPA_VALUE = re.compile(r'CGPA\s*:?\s*(\d+(?:\.\d+)?)', re.IGNORECASE)


# === SUBJECT LINE ===

QP_CODE_PATTERNS = (
    re.compile(r'^\d{2}[A-Z]{2}\d{2}[A-Z]$'),      # 20CE53I
    re.compile(r'^\d{2}[A-Z]{2}\d{2}[A-Z]\d+$'),   # 20CE53I2
    re.compile(r'^\d{2}[A-Z]+\d{2}[A-Z]$'),        # 20CSE53I
)
QP_CODE_MIN_LENGTH = 6

_MARK = r'\d+|AB|--'
_MARKS_TAIL = (
    r'(?P<ia>\d+)\s*/\s*(?P<tr>' + _MARK + r')\s*/\s*(?P<pr>' + _MARK + r')'
)
_GRADE = r'(?P<grade>[A-F][+\-*]?)$'

# (name, pattern, strip trailing digits from the name)
SUBJECT_LAYERS = (
    # NAME 172 / 04 / 50 F 0 F
    ('standard', re.compile(
        r'^(?P<name>.+?)\s+' + _MARKS_TAIL
        + r'\s*(?P<flag>[PF]\*?)\s*(?P<credit>\d+)\s*' + _GRADE
    ), False),
    # NAME172 / 04 / 50 F 0 F
    ('concatenated', re.compile(
        r'^(?P<name>.+?)' + _MARKS_TAIL
        + r'\s*(?P<flag>[PF]\*?)\s*(?P<credit>\d+)\s*' + _GRADE
    ), True),
    # NAME225 / 25 / 70P24 B+
    ('alternative', re.compile(
        r'^(?P<name>.+?)' + _MARKS_TAIL
        + r'\s*(?P<flag>[PF]\*?)(?P<credit>\d+)\s*' + _GRADE
    ), True),
)

SEMESTER_TOKEN = re.compile(r'^[1-8]$')
CODE_SEMESTER = re.compile(r'^\d{2}[A-Z]+(\d)')
TRAILING_DIGITS = re.compile(r'\d+$')


# === DOCUMENT METADATA ===

INSTITUTE = re.compile(r'Institute\s*:\s*\d+\s*-\s*\[\s*([^\]]+)\s*\]', re.IGNORECASE)
INSTITUTE_FALLBACK = re.compile(r'(?:UNIVERSITY|COLLEGE|INSTITUTION)[^\n]*', re.IGNORECASE)

PROGRAMME = re.compile(r'Programme\s*:\s*([A-Z]+)\s*-\s*([^\n]+)', re.IGNORECASE)
PROGRAMME_FALLBACK = re.compile(r'(?:PROGRAMME|COURSE|BRANCH)[ \t:]*([^\n]+)', re.IGNORECASE)

RESULT_DATE = re.compile(r'Result Date\s*:\s*(\d{1,2}/\d{1,2}/\d{4})', re.IGNORECASE)
RESULT_DATE_FALLBACK = re.compile(
    r'(?:DATE|RESULT DATE)[\s:]*(\d{1,2}[-/]\d{1,2}[-/]\d{2,4})', re.IGNORECASE
)

# RESULT LEDGER - DIPLOMA EXAMINATION Nov/Dec-2023
EXAMINATION = re.compile(
    r'RESULT LEDGER\s*-\s*DIPLOMA EXAMINATION\s+([A-Za-z]+/[A-Za-z]+-\d{4})',
    re.IGNORECASE,
)

_MONTH = r'JAN|FEB|MAR|APR|MAY|JUN|JUL|AUG|SEP|OCT|NOV|DEC'
EXAMINATION_FALLBACKS = (
    re.compile(
        r'DIPLOMA.*?(?P<m1>' + _MONTH + r')[/\s]*(?P<m2>' + _MONTH
        + r')?[/\s]*(?P<year>[12]\d{3})',
        re.IGNORECASE,
    ),
    re.compile(
        r'(?P<m1>' + _MONTH + r')[/\s]*(?P<m2>' + _MONTH
        + r')?[/\s]*(?P<year>[12]\d{3})',
        re.IGNORECASE,
    ),
    re.compile(
        r'EXAMINATION.*?(?P<m1>' + _MONTH + r')[/\s]*(?P<year>[12]\d{3})',
        re.IGNORECASE,
    ),
)

DATE_PARTS = re.compile(r'^\s*(\d{1,2})[-/](\d{1,2})[-/](\d{2,4})\s*$')

MONTH_NAMES = (
    'Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
    'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec',
)
