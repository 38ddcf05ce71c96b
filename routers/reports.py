from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from config.settings import settings
from database.db import get_db
from schemas.common import ok
from services.export_service import (
    DOCX_MEDIA_TYPE,
    XLSX_MEDIA_TYPE,
    build_export_rows,
    to_docx,
    to_xlsx,
)
from services.report_queries import build_report, report_payload

router = APIRouter(prefix="/reports", tags=["reports"])


# ==========================================================
# [1] dashboard summary
# ==========================================================

# ✅ per-teacher rows (filtered) + school-wide stats (unfiltered)
@router.get("/summary")
def read_summary(
    department: Optional[str] = None,
    teacher: Optional[str] = None,
    db: Session = Depends(get_db),
):
    teachers, rows = build_report(db, department, teacher)
    if not teachers:
        message = "Data will appear here once students submit their evaluations."
    else:
        message = f"Based on {sum(t.students for t in teachers)} evaluation responses"
    return ok(report_payload(teachers, rows), message)


# ==========================================================
# [2] exports (same filtered rows as the summary table)
# ==========================================================

@router.get("/export/xlsx")
def export_xlsx(
    department: Optional[str] = None,
    teacher: Optional[str] = None,
    db: Session = Depends(get_db),
):
    _, rows = build_report(db, department, teacher)
    return Response(
        content=to_xlsx(build_export_rows(rows)),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": "attachment; filename=TeacherRatings.xlsx"},
    )


@router.get("/export/docx")
def export_docx(
    department: Optional[str] = None,
    teacher: Optional[str] = None,
    db: Session = Depends(get_db),
):
    _, rows = build_report(db, department, teacher)
    content = to_docx(build_export_rows(rows), settings.REPORT_SCHOOL_NAME, settings.REPORT_TITLE)
    return Response(
        content=content,
        media_type=DOCX_MEDIA_TYPE,
        headers={"Content-Disposition": "attachment; filename=TeacherRatings.docx"},
    )
