from datetime import date

from fpdf import FPDF

from labrecord.core.pdf_export import (
    build_record_document,
    record_filename,
    render_record_pdf,
    wrap_text,
)
from labrecord.schemas.record import Record


def make_record(**overrides):
    data = dict(
        assignment_id=1,
        title="Sum Of Two Numbers",
        description="Read two integers and print their sum.",
        algorithm="step1;step2;step3",
        code='print("ok")',
        language="python",
        output="ok\n",
    )
    data.update(overrides)
    return Record(**data)


def test_filename():
    assert record_filename("Sum Of  Two\tNumbers") == "digital-record-sum-of-two-numbers.pdf"


def test_renders_pdf_bytes():
    data = render_record_pdf(make_record(), on=date(2026, 3, 1))

    assert data.startswith(b"%PDF")


def test_section_order():
    doc = build_record_document(make_record())

    assert doc.headings == ["Problem Description", "Algorithm", "Source Code (PYTHON)", "Output"]


def test_optional_sections_are_skipped():
    doc = build_record_document(make_record(description=None, output=""))

    assert doc.headings == ["Algorithm", "Source Code (PYTHON)"]


def test_long_code_adds_pages():
    code = "\n".join(f"x{i} = {i}" for i in range(300))

    doc = build_record_document(make_record(code=code))

    assert doc.pdf.page_no() > 1


def test_wrap_keeps_indent_and_width():
    pdf = FPDF()
    pdf.add_page()
    pdf.set_font("courier", "", 9)
    width = 60

    lines = wrap_text(pdf, "    " + "word " * 40 + "\n" + "x" * 200, width)

    assert lines[0].startswith("    word")
    assert all(pdf.get_string_width(line) <= width for line in lines)
    assert "".join(lines).count("x") == 200


def test_non_latin_text_does_not_break_rendering():
    data = render_record_pdf(make_record(title="Сумма чисел", algorithm="шаг 1 → шаг 2"))

    assert data.startswith(b"%PDF")
