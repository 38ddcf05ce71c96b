"""
services/intake_service.py

Per-student evaluation intake.

- One teacher is shown at a time; the student moves forward/backward.
- Saving a teacher's answers only buffers them in memory (keyed by teacher id).
- The final submit is allowed once every teacher in the list is buffered, and
  writes every buffered evaluation in a single transaction.

State flow:
  IDLE → SHOWING_TEACHER → EVALUATED → SHOWING_TEACHER → ... → ALL_EVALUATED
       → SUBMITTING → SUBMITTED
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.evaluations import Evaluation as EvaluationModel
from models.profiles import Profile as ProfileModel
from models.student_evaluation_lists import StudentEvaluationListEntry as PersonalListModel
from models.teachers import Teacher as TeacherModel
from services.assignment_directory import AssignedTeacher, DirectoryResult, load_directory
from services.errors import NotFound, RemoteStoreError, SubmissionRejected, ValidationFailure

logger = logging.getLogger(__name__)


class IntakeState(str, Enum):
    IDLE = "idle"
    SHOWING_TEACHER = "showing_teacher"
    EVALUATED = "evaluated"
    ALL_EVALUATED = "all_evaluated"
    SUBMITTING = "submitting"
    SUBMITTED = "submitted"


@dataclass
class BufferedEvaluation:
    teacher_id: int
    teacher_name: str
    answers: Dict[str, int] = field(default_factory=dict)
    positive_comments: str = ""
    suggestions: str = ""


def derive_overall_rating(answers: Dict[str, int]) -> int:
    """ceil(mean(answers)), or 5 when there are no answers."""
    values = list(answers.values())
    if not values:
        return 5
    return math.ceil(sum(values) / len(values)) or 5


# ==========================================================
# [1] session state
# ==========================================================

class EvaluationSession:
    def __init__(self, student):
        self.student = student                              # StudentContext
        self.teachers: List[AssignedTeacher] = []           # still to evaluate
        self.all_assigned: List[AssignedTeacher] = []
        self.pending: Dict[int, BufferedEvaluation] = {}
        self.current_index = 0
        self.notice: Optional[str] = None
        self.submitting = False
        self.submitted = False

    # ---------- loading ----------
    def load(self, result: DirectoryResult):
        self.teachers = list(result.teachers)
        self.all_assigned = list(result.all_assigned)
        self.notice = result.notice

        # buffered answers only survive for teachers still on the list
        listed = {t.teacher_id for t in self.teachers}
        self.pending = {tid: ev for tid, ev in self.pending.items() if tid in listed}
        self._clamp_index()

    def _clamp_index(self):
        if self.current_index >= len(self.teachers) or self.current_index < 0:
            self.current_index = 0

    def _find(self, teacher_id: int) -> Optional[AssignedTeacher]:
        return next((t for t in self.teachers if t.teacher_id == teacher_id), None)

    # ---------- state ----------
    @property
    def current_teacher(self) -> Optional[AssignedTeacher]:
        if not self.teachers:
            return None
        return self.teachers[self.current_index]

    @property
    def all_evaluated(self) -> bool:
        return 0 < len(self.teachers) == len(self.pending)

    @property
    def state(self) -> IntakeState:
        if self.submitted:
            return IntakeState.SUBMITTED
        if self.submitting:
            return IntakeState.SUBMITTING
        if not self.teachers:
            return IntakeState.IDLE
        if self.all_evaluated:
            return IntakeState.ALL_EVALUATED
        if self.current_teacher.teacher_id in self.pending:
            return IntakeState.EVALUATED
        return IntakeState.SHOWING_TEACHER

    # ---------- navigation ----------
    def next(self):
        if self.current_index < len(self.teachers) - 1:
            self.current_index += 1

    def previous(self):
        if self.current_index > 0:
            self.current_index -= 1

    # ---------- buffering ----------
    def save(self, teacher_id: int, answers: Dict[str, int],
             positive_comments: Optional[str] = None,
             suggestions: Optional[str] = None) -> BufferedEvaluation:
        if self.submitted:
            raise SubmissionRejected("Evaluations were already submitted")
        teacher = self._find(teacher_id)
        if teacher is None:
            raise ValidationFailure("This teacher is not on your evaluation list")

        evaluation = BufferedEvaluation(
            teacher_id=teacher.teacher_id,
            teacher_name=teacher.name,
            answers=dict(answers),
            positive_comments=positive_comments or "",
            suggestions=suggestions or "",
        )
        self.pending[teacher.teacher_id] = evaluation
        return evaluation

    def remove_teacher(self, teacher_id: int):
        """In-memory only; drops the teacher and any buffered answers for them."""
        if self.student.level != "college":
            raise ValidationFailure("Only college students can remove teachers from their list")
        listed = {t.teacher_id for t in self.teachers} | {t.teacher_id for t in self.all_assigned}
        if teacher_id not in listed:
            raise NotFound("This teacher is not on your evaluation list")

        self.teachers = [t for t in self.teachers if t.teacher_id != teacher_id]
        self.all_assigned = [t for t in self.all_assigned if t.teacher_id != teacher_id]
        self.pending.pop(teacher_id, None)
        self._clamp_index()

    def build_records(self) -> List[dict]:
        s = self.student
        return [
            {
                "student_id": s.id,
                "teacher_id": ev.teacher_id,
                "teacher_name": ev.teacher_name,
                "student_name": s.full_name,
                "student_usn": s.usn,
                "level": s.level,
                "strand_course": s.strand_course,
                "section": s.section,
                "overall_rating": derive_overall_rating(ev.answers),
                "positive_feedback": ev.positive_comments,
                "suggestions": ev.suggestions,
                "answers": dict(ev.answers),
            }
            for ev in self.pending.values()
        ]

    def view(self) -> dict:
        current = self.current_teacher
        return {
            "student_id": self.student.id,
            "state": self.state.value,
            "current_index": self.current_index,
            "current_teacher": current.as_dict() if current else None,
            "teachers": [
                {**t.as_dict(), "evaluated": t.teacher_id in self.pending}
                for t in self.teachers
            ],
            "all_assigned": [t.as_dict() for t in self.all_assigned],
            "teacher_count": len(self.teachers),
            "buffered_count": len(self.pending),
            "all_evaluated": self.all_evaluated,
            "can_submit": self.all_evaluated and not self.submitted and not self.submitting,
            "notice": self.notice,
        }


# ==========================================================
# [2] registry (one session per student)
# ==========================================================

class IntakeRegistry:
    def __init__(self):
        self._sessions: Dict[str, EvaluationSession] = {}

    def open(self, db: Session, student) -> EvaluationSession:
        session = EvaluationSession(student)
        session.load(load_directory(db, student))
        self._sessions[student.id] = session
        logger.info(f"Intake session opened for student {student.id} ({len(session.teachers)} teachers)")
        return session

    def get(self, student_id: str) -> EvaluationSession:
        session = self._sessions.get(student_id)
        if session is None:
            raise NotFound("No evaluation session for this student")
        return session

    def discard(self, student_id: str):
        self._sessions.pop(student_id, None)

    def clear(self):
        self._sessions.clear()


intake_registry = IntakeRegistry()


# ==========================================================
# [3] remote operations
# ==========================================================

def _find_profile(db: Session, student_id: str):
    return db.query(ProfileModel.id).filter(ProfileModel.id == student_id).first()


def ensure_profile(db: Session, student):
    """
    Evaluations reference profiles.id, so the profile must exist first.
    Missing → create a minimal one → look it up again; abort if still missing.
    """
    try:
        if _find_profile(db, student.id) is not None:
            return
        logger.warning(f"Student profile {student.id} not found. Creating a new profile.")
        db.add(ProfileModel(
            id=student.id,
            full_name=student.full_name,
            usn=student.usn,
            strand_course=student.strand_course,
            section=student.section,
            level=student.level,
            role="student",
            status="active",
        ))
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to create student profile {student.id}: {e}")
        raise RemoteStoreError("Failed to create your profile. Please contact the administrator.")

    try:
        verified = _find_profile(db, student.id)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to verify student profile {student.id}: {e}")
        verified = None
    if verified is None:
        raise RemoteStoreError("Profile verification failed. Please try again.")


def submit_session(db: Session, session: EvaluationSession) -> List[EvaluationModel]:
    """Insert every buffered evaluation as one batch; nothing is kept on failure."""
    if session.submitted:
        raise SubmissionRejected("Evaluations were already submitted")
    if session.submitting:
        raise SubmissionRejected("Evaluations are already being submitted")
    if not session.all_evaluated:
        raise SubmissionRejected("Please evaluate every teacher before submitting")

    session.submitting = True
    try:
        ensure_profile(db, session.student)
        rows = [EvaluationModel(**record) for record in session.build_records()]
        db.add_all(rows)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error submitting evaluations for student {session.student.id}: {e}")
        raise RemoteStoreError("Failed to submit evaluations. Please check the data and try again.")
    finally:
        session.submitting = False

    session.submitted = True
    logger.info(f"Student {session.student.id} submitted {len(rows)} evaluations")
    return rows


def add_personal_teacher(db: Session, session: EvaluationSession, teacher_id: int, subject: str):
    """College only: persist to the personal list right away, then reload the directory."""
    student = session.student
    if student.level != "college":
        raise ValidationFailure("Only college students can add teachers to their evaluation list")
    subject = (subject or "").strip()
    if not subject:
        raise ValidationFailure("Please select a valid subject for this teacher.")

    try:
        teacher = db.query(TeacherModel).filter(TeacherModel.id == teacher_id).first()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Teacher lookup failed ({teacher_id}): {e}")
        raise RemoteStoreError("Error adding teacher to evaluation list")
    if teacher is None or not teacher.is_active:
        raise NotFound("Teacher not found")

    ensure_profile(db, student)
    try:
        db.add(PersonalListModel(
            student_id=student.id,
            teacher_id=teacher.id,
            subject=subject,
            level=student.level,
            strand_course=student.strand_course,
            section=student.section,
        ))
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error adding teacher {teacher_id} to list of student {student.id}: {e}")
        raise RemoteStoreError("Error adding teacher to evaluation list")

    session.load(load_directory(db, student))
