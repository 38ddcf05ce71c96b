import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database.db import get_db
from models.teacher_assignments import TeacherAssignment as AssignmentModel
from models.teachers import Teacher as TeacherModel
from schemas.assignments import Assignment, AssignmentCreate
from schemas.common import ok
from services.errors import NotFound, RemoteStoreError, ValidationFailure

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/assignments", tags=["teacher assignments"])


def _serialize(assignment: AssignmentModel) -> dict:
    data = Assignment.model_validate(assignment).model_dump()
    data["teacher_name"] = assignment.teacher.name if assignment.teacher else "Unknown"
    return data


# ✅ [CREATE] bind a teacher to a subject for one section
@router.post("/")
def create_assignment(payload: AssignmentCreate, db: Session = Depends(get_db)):
    subject = payload.subject.strip()
    strand_course = payload.strand_course.strip()
    section = payload.section.strip()
    if not subject:
        raise ValidationFailure("Subject name is required")
    if not strand_course or not section:
        raise ValidationFailure("Please select a strand/course and section")

    teacher = db.query(TeacherModel).filter(TeacherModel.id == payload.teacher_id).first()
    if teacher is None or not teacher.is_active:
        raise ValidationFailure("Please select a teacher")

    duplicate = (
        db.query(AssignmentModel)
        .filter(
            AssignmentModel.level == payload.level,
            AssignmentModel.strand_course == strand_course,
            AssignmentModel.section == section,
            AssignmentModel.subject == subject,
        )
        .first()
    )
    if duplicate is not None:
        raise ValidationFailure("This subject is already assigned to this section")

    assignment = AssignmentModel(
        teacher_id=teacher.id,
        subject=subject,
        level=payload.level,
        strand_course=strand_course,
        section=section,
    )
    try:
        db.add(assignment)
        db.commit()
        db.refresh(assignment)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error adding assignment: {e}")
        raise RemoteStoreError("Failed to add assignment")

    return ok(_serialize(assignment), "Teacher and subject assigned to section successfully")


# ✅ [READ] assignments, optionally for one level / strand / section
@router.get("/")
def read_assignments(
    level: Optional[str] = None,
    strand_course: Optional[str] = None,
    section: Optional[str] = None,
    db: Session = Depends(get_db),
):
    query = db.query(AssignmentModel)
    if level:
        query = query.filter(AssignmentModel.level == level)
    if strand_course:
        query = query.filter(AssignmentModel.strand_course == strand_course)
    if section:
        query = query.filter(AssignmentModel.section == section)
    return ok([_serialize(a) for a in query.order_by(AssignmentModel.id).all()])


# ✅ [DELETE] remove one assignment
@router.delete("/{assignment_id}")
def delete_assignment(assignment_id: int, db: Session = Depends(get_db)):
    assignment = db.query(AssignmentModel).filter(AssignmentModel.id == assignment_id).first()
    if assignment is None:
        raise NotFound("Assignment not found")
    try:
        db.delete(assignment)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error removing assignment {assignment_id}: {e}")
        raise RemoteStoreError("Failed to remove assignment")

    return ok({"assignment_id": assignment_id}, "Assignment removed successfully")
