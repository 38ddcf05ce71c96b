from typing import Literal

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database.db import get_db
from schemas.common import ok
from schemas.intake import StudentContext
from services.assignment_directory import load_directory

router = APIRouter(prefix="/directory", tags=["assignment directory"])


# ✅ teachers a student must evaluate (read-only, no intake session involved)
@router.get("/{student_id}")
def read_directory(
    student_id: str,
    level: Literal["shs", "college"] = Query(...),
    strand_course: str = Query(...),
    section: str = Query(...),
    db: Session = Depends(get_db),
):
    student = StudentContext(id=student_id, level=level, strand_course=strand_course, section=section)
    result = load_directory(db, student)
    return {
        "success": result.notice is None,
        "data": {
            "teachers": [t.as_dict() for t in result.teachers],
            "all_assigned": [t.as_dict() for t in result.all_assigned],
        },
        "message": result.notice,
    }
