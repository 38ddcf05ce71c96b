import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.evaluations import Evaluation as EvaluationModel
from models.teachers import Teacher as TeacherModel
from services.errors import RemoteStoreError
from services.report_engine import (
    EvaluationInput,
    TeacherSummary,
    aggregate_teachers,
    category_overview,
    compute_overall_stats,
    department_names,
    filter_teachers,
    median_rating,
)

logger = logging.getLogger(__name__)


def fetch_evaluation_inputs(db: Session) -> List[EvaluationInput]:
    """Every stored evaluation with its teacher's current name/department (outer join)."""
    try:
        rows = (
            db.query(EvaluationModel.answers, TeacherModel.name, TeacherModel.department)
            .outerjoin(TeacherModel, TeacherModel.id == EvaluationModel.teacher_id)
            .order_by(EvaluationModel.id)
            .all()
        )
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error loading evaluations: {e}")
        raise RemoteStoreError("Failed to load evaluations")

    return [
        EvaluationInput(teacher_name=name, answers=answers or {}, department=department)
        for answers, name, department in rows
    ]


def build_report(db: Session, department: Optional[str] = None, teacher: Optional[str] = None):
    """
    Aggregates everything, then filters the rows for display/export.
    Returns (all teachers, filtered teachers).
    """
    teachers: List[TeacherSummary] = aggregate_teachers(fetch_evaluation_inputs(db))
    return teachers, filter_teachers(teachers, department=department, teacher_name=teacher)


def report_payload(teachers: List[TeacherSummary], rows: List[TeacherSummary]) -> dict:
    return {
        "teachers": [t.as_dict() for t in rows],
        "overall": compute_overall_stats(teachers).as_dict(),
        "median_rating": median_rating(teachers),
        "category_overview": category_overview(teachers),
        "departments": department_names(teachers),
        "teacher_names": [t.name for t in teachers],
    }
