import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response
from sqlalchemy.orm import Session

from config.settings import settings
from database.db import get_db
from services.export_service import HEADERS, build_export_rows
from services.pdf_service import PDFService
from services.report_engine import compute_overall_stats
from services.report_queries import build_report

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/pdf", tags=["PDF"])

pdf_service = PDFService()


# ✅ [PDF] printable teacher ratings report
@router.get("/teacher-ratings")
def generate_ratings_pdf(
    department: Optional[str] = None,
    teacher: Optional[str] = None,
    db: Session = Depends(get_db),
):
    teachers, rows = build_report(db, department, teacher)
    pdf_data = {
        "school_name": settings.REPORT_SCHOOL_NAME,
        "title": settings.REPORT_TITLE,
        "headers": HEADERS,
        "rows": build_export_rows(rows),
        "overall": compute_overall_stats(teachers).as_dict(),
    }

    try:
        pdf_content = pdf_service.generate_ratings_pdf(pdf_data)
    except (ImportError, OSError) as e:
        logger.error(f"PDF generation failed: {e}")
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": {"code": "PDF_ERROR", "message": f"PDF generation failed: {e}"},
            },
        )

    return Response(
        content=pdf_content,
        media_type="application/pdf",
        headers={"Content-Disposition": "attachment; filename=TeacherRatings.pdf"},
    )
