import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database.db import get_db
from models.profiles import Profile as ProfileModel
from schemas.common import ok
from schemas.profiles import Profile, ProfileUpdate
from services.errors import NotFound, RemoteStoreError, ValidationFailure

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profiles", tags=["student profiles"])


# ✅ [READ] approved students, by name
@router.get("/")
def read_students(db: Session = Depends(get_db)):
    records = (
        db.query(ProfileModel)
        .filter(ProfileModel.role == "student", ProfileModel.is_approved.is_(True))
        .order_by(ProfileModel.full_name)
        .all()
    )
    return ok([Profile.model_validate(r).model_dump() for r in records])


# ✅ [UPDATE] full name / USN
@router.put("/{student_id}")
def update_student(student_id: str, updated: ProfileUpdate, db: Session = Depends(get_db)):
    profile = db.query(ProfileModel).filter(ProfileModel.id == student_id).first()
    if profile is None:
        raise NotFound("Student not found")

    changes = updated.model_dump(exclude_unset=True)
    for key, value in changes.items():
        value = (value or "").strip()
        if not value:
            raise ValidationFailure("Name is required" if key == "full_name" else "USN is required")
        setattr(profile, key, value)

    try:
        db.commit()
        db.refresh(profile)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error updating student {student_id}: {e}")
        raise RemoteStoreError("Failed to update student")

    return ok(Profile.model_validate(profile).model_dump(), "Student updated successfully")
