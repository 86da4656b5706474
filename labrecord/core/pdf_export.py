# labrecord/core/pdf_export.py
import logging
import re
from datetime import date
from typing import List, Optional

from fpdf import FPDF

from labrecord.schemas.record import Record

logger = logging.getLogger(__name__)

MARGIN = 20
PAGE_BOTTOM = 270  # last baseline on a page, in mm
SECTION_BOTTOM = 250  # a heading below this starts a new page
CODE_LINE_HEIGHT = 4.5
TEXT_LINE_HEIGHT = 5


def record_filename(title: str) -> str:
    slug = re.sub(r"\s+", "-", title or "").lower()
    return f"digital-record-{slug}.pdf"


def _latin1(text: str) -> str:
    # core PDF fonts only cover Latin-1
    return (text or "").encode("latin-1", "replace").decode("latin-1")


def _fit(pdf: FPDF, line: str, width: float) -> int:
    lo, hi = 1, len(line)
    while lo < hi:
        mid = (lo + hi + 1) // 2
        if pdf.get_string_width(line[:mid]) <= width:
            lo = mid
        else:
            hi = mid - 1
    return lo


def wrap_text(pdf: FPDF, text: str, width: float) -> List[str]:
    """Split text into lines no wider than `width` in the current font.

    Leading indentation is kept, breaks prefer the last space that fits and
    words longer than a line are cut.
    """
    lines = []
    for raw in _latin1(text).replace("\t", "    ").splitlines() or [""]:
        line = raw.rstrip()
        while pdf.get_string_width(line) > width:
            cut = _fit(pdf, line, width)
            space = line.rfind(" ", 0, cut + 1)
            if space > 0 and line[:space].strip():
                cut = space
            lines.append(line[:cut].rstrip())
            line = line[cut:].lstrip(" ")
        lines.append(line)
    return lines


class RecordPDF:
    def __init__(self):
        self.pdf = FPDF(format="A4")
        self.pdf.set_auto_page_break(auto=False)
        self.pdf.add_page()
        self.width = self.pdf.w - MARGIN * 2
        self.y = MARGIN
        self.headings = []

    def new_page(self):
        self.pdf.add_page()
        self.y = MARGIN

    def centered(self, text: str, style: str, size: int, advance: float):
        self.pdf.set_font("helvetica", style, size)
        text = _latin1(text)
        x = (self.pdf.w - self.pdf.get_string_width(text)) / 2
        self.pdf.text(x, self.y, text)
        self.y += advance

    def rule(self):
        self.pdf.set_draw_color(200)
        self.pdf.line(MARGIN, self.y, self.pdf.w - MARGIN, self.y)
        self.y += 10

    def heading(self, text: str):
        if self.y > SECTION_BOTTOM:
            self.new_page()
        self.headings.append(text)
        self.pdf.set_font("helvetica", "B", 12)
        self.pdf.text(MARGIN, self.y, _latin1(text))
        self.y += 7

    def block(self, text: str, monospace: bool):
        if monospace:
            self.pdf.set_font("courier", "", 9)
            line_height = CODE_LINE_HEIGHT
        else:
            self.pdf.set_font("helvetica", "", 10)
            line_height = TEXT_LINE_HEIGHT
        for line in wrap_text(self.pdf, text, self.width):
            if self.y > PAGE_BOTTOM:
                self.new_page()
            self.pdf.text(MARGIN, self.y, line)
            self.y += line_height
        self.y += 8

    def section(self, title: str, text: str, monospace: bool = True):
        self.heading(title)
        self.block(text, monospace)

    def output(self) -> bytes:
        return bytes(self.pdf.output())


def build_record_document(record: Record, on: Optional[date] = None) -> RecordPDF:
    """Lay out a record: title, description, algorithm, source code, output."""
    language = (record.language or "unknown").upper()
    doc = RecordPDF()

    doc.centered("Digital Record", "B", 18, 12)
    doc.centered(record.title, "B", 14, 8)
    doc.centered(f"Language: {language} | Date: {(on or date.today()).isoformat()}", "", 9, 12)
    doc.rule()

    if record.description:
        doc.section("Problem Description", record.description, monospace=False)
    doc.section("Algorithm", record.algorithm)
    doc.section(f"Source Code ({language})", record.code)
    if record.output:
        doc.section("Output", record.output)
    return doc


def render_record_pdf(record: Record, on: Optional[date] = None) -> bytes:
    data = build_record_document(record, on).output()
    logger.info(f"📄 [PDF] Rendered record for assignment={record.assignment_id} ({len(data)} bytes)")
    return data
