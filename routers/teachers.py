import logging
from typing import Literal, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database.db import get_db
from models.teachers import Teacher as TeacherModel
from schemas.common import ok
from schemas.teachers import Teacher, TeacherCreate, TeacherUpdate
from services.errors import NotFound, RemoteStoreError, ValidationFailure

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/teachers", tags=["teachers"])


def _serialize(teacher: TeacherModel) -> dict:
    return Teacher.model_validate(teacher).model_dump()


def _get_or_404(db: Session, teacher_id: int) -> TeacherModel:
    teacher = db.query(TeacherModel).filter(TeacherModel.id == teacher_id).first()
    if teacher is None:
        raise NotFound("Teacher not found")
    return teacher


def _clean_subjects(subjects):
    return [s.strip() for s in subjects if s and s.strip()]


# ==========================================================
# [1] CRUD
# ==========================================================

# ✅ [CREATE] add a teacher
@router.post("/")
def create_teacher(teacher: TeacherCreate, db: Session = Depends(get_db)):
    name = teacher.name.strip()
    department = teacher.department.strip()
    if not name:
        raise ValidationFailure("Teacher name is required")
    if not department:
        raise ValidationFailure("Department is required")

    db_teacher = TeacherModel(
        name=name,
        department=department,
        level=teacher.level,
        subjects=_clean_subjects(teacher.subjects),
        is_active=True,
    )
    try:
        db.add(db_teacher)
        db.commit()
        db.refresh(db_teacher)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error adding teacher: {e}")
        raise RemoteStoreError("Failed to add teacher")

    return ok(_serialize(db_teacher), "Teacher added successfully")


# ✅ [READ] all teachers (optionally one level)
@router.get("/")
def read_teachers(
    level: Optional[Literal["all", "shs", "college", "both"]] = "all",
    active_only: bool = False,
    db: Session = Depends(get_db),
):
    query = db.query(TeacherModel)
    if level and level != "all":
        query = query.filter(TeacherModel.level == level)
    if active_only:
        query = query.filter(TeacherModel.is_active.is_(True))
    records = query.order_by(TeacherModel.name).all()
    return ok([_serialize(r) for r in records])


# ✅ [READ] one teacher
@router.get("/{teacher_id}")
def read_teacher(teacher_id: int, db: Session = Depends(get_db)):
    return ok(_serialize(_get_or_404(db, teacher_id)))


# ✅ [UPDATE] name / department / level / subjects
@router.put("/{teacher_id}")
def update_teacher(teacher_id: int, updated: TeacherUpdate, db: Session = Depends(get_db)):
    teacher = _get_or_404(db, teacher_id)
    changes = updated.model_dump(exclude_unset=True)

    for key in ("name", "department"):
        if key in changes:
            changes[key] = (changes[key] or "").strip()
            if not changes[key]:
                raise ValidationFailure(f"Teacher {key} is required")
    if "subjects" in changes:
        changes["subjects"] = _clean_subjects(changes["subjects"] or [])

    for key, value in changes.items():
        setattr(teacher, key, value)
    try:
        db.commit()
        db.refresh(teacher)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error updating teacher {teacher_id}: {e}")
        raise RemoteStoreError("Failed to update teacher")

    return ok(_serialize(teacher), "Teacher updated successfully")


# ✅ [DELETE] deactivate; evaluations keep pointing at the row
@router.delete("/{teacher_id}")
def deactivate_teacher(teacher_id: int, db: Session = Depends(get_db)):
    teacher = _get_or_404(db, teacher_id)
    teacher.is_active = False
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error deactivating teacher {teacher_id}: {e}")
        raise RemoteStoreError("Failed to remove teacher")

    return ok({"teacher_id": teacher_id, "is_active": False}, "Teacher deactivated successfully")
