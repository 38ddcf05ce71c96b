"""
services/export_service.py

Spreadsheet (.xlsx) and document (.docx) exports of the teacher ratings table.
Both take the rows produced by build_export_rows(), so every export shows the
same filtered teachers with ratings rounded to one decimal place.
"""

import io
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import List

from docx import Document
from openpyxl import Workbook
from openpyxl.styles import Font

from services.report_engine import CATEGORIES, TeacherSummary

HEADERS = ["Teacher Name", "Teaching", "Content", "Management", "Communication",
           "Preparedness", "Average", "Students"]

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def one_decimal(value) -> float:
    """Half-up rounding to one decimal place (4.25 -> 4.3, unlike round())."""
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def build_export_rows(teachers: List[TeacherSummary]) -> List[dict]:
    return [
        {
            "name": t.name,
            **{category: one_decimal(t.ratings[category]) for category in CATEGORIES},
            "average": one_decimal(t.average_rating),
            "students": t.students,
        }
        for t in teachers
    ]


def _row_values(row: dict) -> list:
    return [row["name"], *[row[c] for c in CATEGORIES], row["average"], row["students"]]


def to_xlsx(rows: List[dict]) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = "Teacher Ratings"

    ws.append(HEADERS)
    for cell in ws[1]:
        cell.font = Font(bold=True)

    for row in rows:
        ws.append(_row_values(row))
        # one decimal for every rating column (B..G)
        for cell in ws[ws.max_row][1:7]:
            cell.number_format = "0.0"

    ws.column_dimensions["A"].width = 30

    out = io.BytesIO()
    wb.save(out)
    return out.getvalue()


def to_docx(rows: List[dict], school_name: str, title: str) -> bytes:
    doc = Document()
    doc.add_heading(school_name, level=1)
    doc.add_paragraph(title)

    table = doc.add_table(rows=1, cols=len(HEADERS))
    table.style = "Table Grid"
    for cell, header in zip(table.rows[0].cells, HEADERS):
        cell.text = header

    for row in rows:
        cells = table.add_row().cells
        values = _row_values(row)
        for i, value in enumerate(values):
            # ratings as "4.0", student count as a plain integer
            cells[i].text = f"{value:.1f}" if isinstance(value, float) else str(value)

    doc.add_paragraph(f"Generated on {date.today().isoformat()}")

    out = io.BytesIO()
    doc.save(out)
    return out.getvalue()
