"""Seed helpers shared by the API and service tests."""

from models.evaluations import Evaluation as EvaluationModel
from models.student_evaluation_lists import StudentEvaluationListEntry as PersonalListModel
from models.teacher_assignments import TeacherAssignment as AssignmentModel
from models.teachers import Teacher as TeacherModel


def add_teacher(db, name, department="College", level="both", is_active=True, subjects=None):
    teacher = TeacherModel(
        name=name,
        department=department,
        level=level,
        is_active=is_active,
        subjects=subjects or [],
    )
    db.add(teacher)
    db.commit()
    db.refresh(teacher)
    return teacher


def add_assignment(db, teacher, subject, level="shs", strand_course="HUMSS", section="9-1"):
    assignment = AssignmentModel(
        teacher_id=teacher.id,
        subject=subject,
        level=level,
        strand_course=strand_course,
        section=section,
    )
    db.add(assignment)
    db.commit()
    return assignment


def add_personal_entry(db, student_id, teacher, subject):
    entry = PersonalListModel(student_id=student_id, teacher_id=teacher.id, subject=subject)
    db.add(entry)
    db.commit()
    return entry


def add_evaluation(db, student_id, teacher_id, answers, overall_rating=5):
    evaluation = EvaluationModel(
        student_id=student_id,
        teacher_id=teacher_id,
        answers=answers,
        overall_rating=overall_rating,
    )
    db.add(evaluation)
    db.commit()
    return evaluation
