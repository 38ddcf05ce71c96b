import io

import openpyxl
import pytest
from docx import Document

from services.export_service import HEADERS, build_export_rows, to_docx, to_xlsx
from services.pdf_service import PDFService
from services.report_engine import EvaluationInput, aggregate_teachers, compute_overall_stats
from tests.helpers import add_evaluation, add_teacher


@pytest.fixture
def teachers():
    return aggregate_teachers([
        EvaluationInput("Ms. Cruz", {"q1": 4, "q2": 5, "q3": 5}, department="SHS"),
        EvaluationInput("Mr. Santos", {"q1": "n/a"}, department="SHS"),
    ])


def test_rows_are_rounded_to_one_decimal(teachers):
    cruz, santos = build_export_rows(teachers)
    assert cruz["teaching"] == 4.7
    assert cruz["average"] == 4.7
    assert cruz["content"] == 0.0
    assert cruz["students"] == 1
    assert santos["average"] == 0.0
    assert isinstance(santos["average"], float)


def test_ties_round_half_up():
    teachers = aggregate_teachers([EvaluationInput("Ms. Lim", {"q1": 5, "q2": 4, "q3": 4, "q4": 4})])
    assert teachers[0].ratings["teaching"] == 4.25

    (row,) = build_export_rows(teachers)
    assert row["teaching"] == 4.3
    assert row["average"] == 4.3

    (table,) = Document(io.BytesIO(to_docx([row], "ACLC College of Daet", "Teacher Ratings"))).tables
    assert table.rows[1].cells[1].text == "4.3"


def test_xlsx_has_header_and_rows(teachers):
    wb = openpyxl.load_workbook(io.BytesIO(to_xlsx(build_export_rows(teachers))))
    ws = wb["Teacher Ratings"]
    rows = list(ws.iter_rows(values_only=True))
    assert list(rows[0]) == HEADERS
    assert rows[1][0] == "Ms. Cruz"
    assert rows[1][1] == 4.7
    assert rows[1][7] == 1
    assert ws["B2"].number_format == "0.0"
    assert ws["A1"].font.bold


def test_docx_table_formats_ratings(teachers):
    doc = Document(io.BytesIO(to_docx(build_export_rows(teachers), "ACLC College of Daet", "Teacher Ratings")))
    assert doc.paragraphs[0].text == "ACLC College of Daet"
    (table,) = doc.tables
    assert [c.text for c in table.rows[0].cells] == HEADERS
    assert [c.text for c in table.rows[2].cells] == ["Mr. Santos", "0.0", "0.0", "0.0", "0.0", "0.0", "0.0", "1"]
    assert table.rows[1].cells[1].text == "4.7"


def test_pdf_html_lists_teachers(teachers):
    html = PDFService().render_ratings_html({
        "school_name": "ACLC College of Daet",
        "title": "Teacher Ratings",
        "overall": compute_overall_stats(teachers).as_dict(),
        "headers": HEADERS,
        "rows": build_export_rows(teachers),
    })
    assert "Ms. Cruz" in html
    assert "4.7" in html
    assert "Generated on" in html


def test_pdf_html_without_rows():
    html = PDFService().render_ratings_html({
        "school_name": "ACLC College of Daet",
        "title": "Teacher Ratings",
        "overall": compute_overall_stats([]).as_dict(),
        "headers": HEADERS,
        "rows": [],
    })
    assert "No teacher evaluations found." in html
    assert "N/A" in html


# ==========================================================
# HTTP surface
# ==========================================================

@pytest.fixture
def stored_evaluations(db):
    cruz = add_teacher(db, "Ms. Cruz", department="SHS")
    reyes = add_teacher(db, "Dr. Reyes", department="College")
    add_evaluation(db, "stu-1", cruz.id, {"q1": 4, "q5": 5})
    add_evaluation(db, "stu-2", cruz.id, {"teachingEffectiveness": "5"})
    add_evaluation(db, "stu-1", reyes.id, {"q1": 3})
    add_evaluation(db, "stu-3", 999, {"q1": 2})


def test_summary_filters_rows_but_not_overall(client, stored_evaluations):
    r = client.get("/v1/reports/summary", params={"department": "SHS"})
    data = r.json()["data"]
    assert [t["name"] for t in data["teachers"]] == ["Ms. Cruz"]
    assert data["teachers"][0]["ratings"]["teaching"] == 4.5
    assert data["overall"]["total_evaluations"] == 4
    assert data["overall"]["highest_rated_teacher"]["name"] == "Ms. Cruz"
    assert data["teacher_names"] == ["Ms. Cruz", "Dr. Reyes", "Unknown Teacher"]
    assert data["departments"] == ["SHS", "College", "General"]
    assert r.json()["message"] == "Based on 4 evaluation responses"


def test_summary_without_evaluations(client):
    body = client.get("/v1/reports/summary").json()
    assert body["data"]["teachers"] == []
    assert body["data"]["overall"]["highest_rated_teacher"]["name"] == "N/A"


def test_exports_follow_filter(client, stored_evaluations):
    r = client.get("/v1/reports/export/xlsx", params={"teacher": "Dr. Reyes"})
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("application/vnd.openxmlformats")
    ws = openpyxl.load_workbook(io.BytesIO(r.content)).active
    assert [row[0] for row in ws.iter_rows(min_row=2, values_only=True)] == ["Dr. Reyes"]

    r = client.get("/v1/reports/export/docx", params={"department": "College"})
    assert r.status_code == 200
    (table,) = Document(io.BytesIO(r.content)).tables
    assert len(table.rows) == 2


def test_teachers_evaluated_count(client, stored_evaluations):
    r = client.get("/v1/evaluations/teachers-evaluated")
    assert r.json()["data"] == {"teachers_evaluated": 3}


def test_student_submissions_fall_back_to_unknown_teacher(client, stored_evaluations):
    rows = client.get("/v1/evaluations/students/stu-3").json()["data"]
    assert rows[0]["teacher_name"] == "Unknown Teacher"
