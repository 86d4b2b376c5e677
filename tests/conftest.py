import io
import textwrap

import pytest
from docx import Document
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

CONTRACT_TEXT = """EMPLOYMENT AGREEMENT

This Employment Agreement is made between Acme Corporation (the Company) and Jane Smith (the Employee). The parties agree to the following terms, which take force on the effective date stated below.

The Employee shall serve as Senior Analyst and shall report to the Head of Research. The Company will pay a base salary of 85,000 per year. Payment is made in equal monthly installments, less any deductions required by law.

Either party may end this agreement with thirty days of written notice. Upon termination the Employee shall return all property of the Company and shall keep all confidential information private for a period of two years.

This agreement is governed by the laws of the State of New York."""

NON_CONTRACT_TEXT = """The garden was quiet in the early morning. Birds sang from the old oak tree and the dew covered the grass. A small dog ran across the lawn to greet the children who were playing near the fence. Their mother called them in for breakfast, and the smell of fresh bread filled the kitchen. After the meal they walked to the river, where the water was cold and clear. They spent the whole day collecting stones and watching the ducks float by. In the evening the family sat together by the fire and told stories until it was time for bed."""


def _draw_lines(c: canvas.Canvas, text: str) -> None:
    y = 720
    for paragraph in text.split("\n"):
        for line in textwrap.wrap(paragraph, 80) or [""]:
            c.drawString(72, y, line)
            y -= 14


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Hello PDF World")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def encrypted_pdf_bytes() -> bytes:
    """Generate a PDF that cannot be opened without a user password."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter, encrypt="secret")
    c.drawString(72, 720, "Locked content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def contract_text() -> str:
    return CONTRACT_TEXT


@pytest.fixture()
def non_contract_text() -> str:
    return NON_CONTRACT_TEXT


@pytest.fixture()
def contract_pdf_bytes() -> bytes:
    """Generate a one-page PDF carrying a short employment agreement."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    _draw_lines(c, CONTRACT_TEXT)
    c.save()
    return buf.getvalue()


@pytest.fixture()
def non_contract_pdf_bytes() -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    _draw_lines(c, NON_CONTRACT_TEXT)
    c.save()
    return buf.getvalue()


@pytest.fixture()
def contract_docx_bytes() -> bytes:
    """Generate a .docx with the agreement as paragraphs and a salary table."""
    document = Document()
    for paragraph in CONTRACT_TEXT.split("\n\n"):
        document.add_paragraph(paragraph)
    table = document.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "Base salary"
    table.rows[0].cells[1].text = "85,000"
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()


@pytest.fixture()
def non_contract_docx_bytes() -> bytes:
    document = Document()
    document.add_paragraph(NON_CONTRACT_TEXT)
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()
