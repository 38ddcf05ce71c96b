import logging

from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database.db import get_db
from models.evaluations import Evaluation as EvaluationModel
from models.teachers import Teacher as TeacherModel
from schemas.common import ok
from services.errors import RemoteStoreError
from services.report_engine import UNKNOWN_TEACHER

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/evaluations", tags=["evaluations"])


# ✅ [READ] one student's submitted evaluations
@router.get("/students/{student_id}")
def read_student_submissions(student_id: str, db: Session = Depends(get_db)):
    try:
        rows = (
            db.query(EvaluationModel, TeacherModel.name)
            .outerjoin(TeacherModel, TeacherModel.id == EvaluationModel.teacher_id)
            .filter(EvaluationModel.student_id == student_id)
            .order_by(EvaluationModel.id)
            .all()
        )
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error fetching submissions of {student_id}: {e}")
        raise RemoteStoreError("Failed to load submissions.")

    return ok([
        {
            "teacher_id": evaluation.teacher_id,
            "teacher_name": teacher_name or UNKNOWN_TEACHER,
            "overall_rating": evaluation.overall_rating,
            "positive_feedback": evaluation.positive_feedback,
            "suggestions": evaluation.suggestions,
        }
        for evaluation, teacher_name in rows
    ])


# ✅ [STATS] number of distinct teachers with at least one evaluation
@router.get("/teachers-evaluated")
def read_teachers_evaluated_count(db: Session = Depends(get_db)):
    try:
        count = db.query(func.count(func.distinct(EvaluationModel.teacher_id))).scalar() or 0
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error fetching teachers evaluated count: {e}")
        raise RemoteStoreError("Failed to load teachers evaluated count. Please try again.")
    return ok({"teachers_evaluated": count})
