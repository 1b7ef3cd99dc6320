import io
import logging

import pytest
from reportlab.pdfgen import canvas  # type: ignore


LEDGER_LINES = [
    "BOARD OF TECHNICAL EXAMINATION",
    "RESULT LEDGER - DIPLOMA EXAMINATION Nov/Dec-2023",
    "Institute : 149 - [ GOVT POLYTECHNIC BANGALORE ]",
    "Programme : CE - CIVIL ENGINEERING",
    "Result Date : 24/1/2024",
    "Page No : 1",
    "1 149CE20001 ASHA KUMARI [ S(D)/o : RAMESH KUMAR ]",
    "5 01 20CE53I : TRANSPORTATION ENGINEERING 172 / 04 / 50 F 0 F",
    "5 02 20CE54I : ENVIRONMENTAL ENGINEERING225 / 25 / 70P24 B+",
    "Semester I II III IV V VI",
    "Credit Applied 20 20 20 20 20",
    "SGPA (Atempts) 7.11 (7) 5.64 (6) 6.08 (3)",
    "CGPA : Credit(s) Pending",
    "Results : FAILS",
    "2 149CE20002 RAVI SHANKAR [ MOHAN SHANKAR ]",
    "5 01 20CE53I : TRANSPORTATION ENGINEERING 180 / 30 / 60 P 4 A",
    "Results",
    ": PASS",
]


def _render_pdf(lines, pages=1):
    buffer = io.BytesIO()
    c = canvas.Canvas(buffer)
    for _ in range(pages):
        c.setFont("Helvetica", 9)
        y = 800
        for line in lines:
            c.drawString(40, y, line)
            y -= 20
        c.showPage()
    c.save()
    return buffer.getvalue()


@pytest.fixture
def ledger_lines():
    return list(LEDGER_LINES)


@pytest.fixture
def ledger_text():
    return "\n".join(LEDGER_LINES) + "\n"


@pytest.fixture
def make_pdf():
    """Build PDF bytes with one text row per line"""
    return _render_pdf


@pytest.fixture
def ledger_pdf_bytes():
    return _render_pdf(LEDGER_LINES)


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
