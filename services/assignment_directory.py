"""
services/assignment_directory.py

Works out which teachers a student has to evaluate:
  1) teacher_assignments rows for the student's level + strand/course + section
  2) college only: the student's personal list (student_evaluation_lists)
Both sources are merged per teacher and teachers the student already
evaluated are dropped from the to-do list.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.evaluations import Evaluation as EvaluationModel
from models.student_evaluation_lists import StudentEvaluationListEntry as PersonalListModel
from models.teacher_assignments import TeacherAssignment as AssignmentModel
from models.teachers import Teacher as TeacherModel

logger = logging.getLogger(__name__)

LOAD_FAILED_NOTICE = "Error loading teachers"


@dataclass
class AssignedTeacher:
    teacher_id: int
    name: str
    department: str
    level: str
    subjects: List[str] = field(default_factory=list)

    def as_dict(self) -> dict:
        return {
            "teacher_id": self.teacher_id,
            "name": self.name,
            "department": self.department,
            "level": self.level,
            "subjects": list(self.subjects),
        }


@dataclass
class DirectoryResult:
    teachers: List[AssignedTeacher]             # still to be evaluated
    all_assigned: List[AssignedTeacher]         # merged list before the evaluated filter
    notice: Optional[str] = None                # set when loading failed


def merge_teacher_sources(
    assigned: Iterable[Tuple[TeacherModel, str]],
    personal: Iterable[Tuple[TeacherModel, str]] = (),
) -> List[AssignedTeacher]:
    """
    One entry per teacher id in first-seen order; subjects from both sources
    are unioned without duplicates. Inactive teachers are skipped.
    """
    merged = {}
    for source in (assigned, personal):
        for teacher, subject in source:
            if teacher is None or not teacher.is_active:
                continue
            entry = merged.get(teacher.id)
            if entry is None:
                entry = AssignedTeacher(
                    teacher_id=teacher.id,
                    name=teacher.name,
                    department=teacher.department,
                    level=teacher.level,
                )
                merged[teacher.id] = entry
            if subject and subject not in entry.subjects:
                entry.subjects.append(subject)
    return list(merged.values())


def load_directory(db: Session, student) -> DirectoryResult:
    """
    `student` needs id / level / strand_course / section
    (StudentContext or the profiles row).
    A failing query degrades to an empty list plus a notice.
    """
    try:
        assigned = (
            db.query(TeacherModel, AssignmentModel.subject)
            .join(AssignmentModel, AssignmentModel.teacher_id == TeacherModel.id)
            .filter(
                AssignmentModel.level == student.level,
                AssignmentModel.strand_course == student.strand_course,
                AssignmentModel.section == student.section,
            )
            .order_by(AssignmentModel.id)
            .all()
        )

        personal = []
        if student.level == "college":
            personal = (
                db.query(TeacherModel, PersonalListModel.subject)
                .join(PersonalListModel, PersonalListModel.teacher_id == TeacherModel.id)
                .filter(PersonalListModel.student_id == student.id)
                .order_by(PersonalListModel.id)
                .all()
            )

        evaluated_ids = {
            teacher_id
            for (teacher_id,) in db.query(EvaluationModel.teacher_id)
            .filter(EvaluationModel.student_id == student.id)
            .all()
        }
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Directory lookup failed for student {student.id}: {e}")
        return DirectoryResult(teachers=[], all_assigned=[], notice=LOAD_FAILED_NOTICE)

    all_assigned = merge_teacher_sources(assigned, personal)
    remaining = [t for t in all_assigned if t.teacher_id not in evaluated_ids]

    logger.info(
        f"Directory for student {student.id}: {len(all_assigned)} assigned, "
        f"{len(remaining)} left to evaluate"
    )
    return DirectoryResult(teachers=remaining, all_assigned=all_assigned)
