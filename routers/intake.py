from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.db import get_db
from schemas.common import ok
from schemas.intake import EvaluationDraft, PersonalListAdd, StudentContext
from services.intake_service import add_personal_teacher, intake_registry, submit_session

router = APIRouter(prefix="/intake/sessions", tags=["evaluation intake"])


# ==========================================================
# [1] session lifecycle
# ==========================================================

# ✅ open (or reopen) a session: loads the teachers this student still has to rate
@router.post("/")
def open_session(student: StudentContext, db: Session = Depends(get_db)):
    session = intake_registry.open(db, student)
    return ok(session.view(), session.notice)


@router.get("/{student_id}")
def read_session(student_id: str):
    return ok(intake_registry.get(student_id).view())


@router.delete("/{student_id}")
def discard_session(student_id: str):
    intake_registry.discard(student_id)
    return ok({"student_id": student_id}, "Session discarded")


# ==========================================================
# [2] stepper
# ==========================================================

@router.post("/{student_id}/next")
def next_teacher(student_id: str):
    session = intake_registry.get(student_id)
    session.next()
    return ok(session.view())


@router.post("/{student_id}/previous")
def previous_teacher(student_id: str):
    session = intake_registry.get(student_id)
    session.previous()
    return ok(session.view())


# ✅ buffer one teacher's answers (no database call)
@router.put("/{student_id}/evaluations/{teacher_id}")
def save_evaluation(student_id: str, teacher_id: int, draft: EvaluationDraft):
    session = intake_registry.get(student_id)
    session.save(teacher_id, draft.answers, draft.positive_comments, draft.suggestions)
    return ok(session.view(), "Evaluation saved")


# ==========================================================
# [3] personal list (college)
# ==========================================================

@router.post("/{student_id}/personal-list")
def add_teacher(student_id: str, payload: PersonalListAdd, db: Session = Depends(get_db)):
    session = intake_registry.get(student_id)
    add_personal_teacher(db, session, payload.teacher_id, payload.subject)
    return ok(session.view(), "Teacher added to evaluation list")


@router.delete("/{student_id}/teachers/{teacher_id}")
def remove_teacher(student_id: str, teacher_id: int):
    session = intake_registry.get(student_id)
    session.remove_teacher(teacher_id)
    return ok(session.view(), "Teacher removed from evaluation list")


# ==========================================================
# [4] final submit
# ==========================================================

@router.post("/{student_id}/submit")
def submit_all(student_id: str, db: Session = Depends(get_db)):
    session = intake_registry.get(student_id)
    rows = submit_session(db, session)
    return ok(
        {**session.view(), "submitted_ids": [r.id for r in rows]},
        "All evaluations submitted successfully!",
    )
