"""
services/report_engine.py

Reduces raw evaluation records into per-teacher and school-wide statistics.

Two answer shapes exist in stored evaluations:
  - legacy: five named fields (teachingEffectiveness, courseContent, ...)
  - numbered: q1..q20, each question belonging to one of five categories

classify_answers() tags a record with its shape and normalize() turns either
shape into the same category → [ratings] mapping, so the statistics below
never look at the raw answer keys.
"""

import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

CATEGORIES = ("teaching", "content", "management", "communication", "preparedness")

UNKNOWN_TEACHER = "Unknown Teacher"
DEFAULT_DEPARTMENT = "General"

LEGACY_FIELDS = {
    "teachingEffectiveness": "teaching",
    "courseContent": "content",
    "classroomManagement": "management",
    "communication": "communication",
    "preparedness": "preparedness",
}

# (first question, last question, category)
QUESTION_RANGES = (
    (1, 4, "teaching"),
    (5, 8, "content"),
    (9, 12, "management"),
    (13, 16, "communication"),
    (17, 20, "preparedness"),
)

NUMBERED_KEY = re.compile(r"^q(\d+)$")
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


# ==========================================================
# [1] answer shapes
# ==========================================================

@dataclass(frozen=True)
class LegacyAnswers:
    fields: Mapping[str, Any]


@dataclass(frozen=True)
class NumberedAnswers:
    questions: Mapping[int, Any]


AnswerShape = Union[LegacyAnswers, NumberedAnswers]


def classify_answers(answers: Optional[Mapping[str, Any]]) -> AnswerShape:
    """Numbered if any key looks like q<n>, legacy otherwise."""
    answers = answers if isinstance(answers, Mapping) else {}
    numbered = {}
    for key, value in answers.items():
        match = NUMBERED_KEY.match(str(key))
        if match:
            numbered[int(match.group(1))] = value
    if numbered:
        return NumberedAnswers(questions=numbered)
    return LegacyAnswers(fields=dict(answers))


def category_for_question(index: int) -> str:
    for first, last, category in QUESTION_RANGES:
        if first <= index <= last:
            return category
    # questions added beyond q20 count towards teaching
    return "teaching"


def parse_rating(value: Any) -> Optional[int]:
    """
    Leading-integer parse: 4, "4", " 4 ", "4.7" → 4.
    None, "", booleans and non-numeric text → None (excluded from the sums).
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else None


def normalize(shape: AnswerShape) -> Dict[str, List[int]]:
    values: Dict[str, List[int]] = {category: [] for category in CATEGORIES}

    if isinstance(shape, NumberedAnswers):
        for index, raw in shape.questions.items():
            rating = parse_rating(raw)
            if rating is not None:
                values[category_for_question(index)].append(rating)
    else:
        for name, category in LEGACY_FIELDS.items():
            rating = parse_rating(shape.fields.get(name))
            if rating is not None:
                values[category].append(rating)

    return values


# ==========================================================
# [2] aggregation
# ==========================================================

@dataclass
class EvaluationInput:
    teacher_name: Optional[str]
    answers: Mapping[str, Any] = field(default_factory=dict)
    department: Optional[str] = None


@dataclass
class TeacherSummary:
    name: str
    department: str
    ratings: Dict[str, float]
    students: int
    average_rating: float

    def as_dict(self) -> dict:
        return {
            "name": self.name,
            "department": self.department,
            "ratings": dict(self.ratings),
            "students": self.students,
            "average_rating": self.average_rating,
        }


@dataclass
class RatedTeacher:
    name: str
    average_rating: float
    students: int


PLACEHOLDER_TEACHER = RatedTeacher(name="N/A", average_rating=0, students=0)


@dataclass
class OverallStats:
    average_rating: float
    total_evaluations: int
    highest_rated_teacher: RatedTeacher
    lowest_rated_teacher: RatedTeacher

    def as_dict(self) -> dict:
        return {
            "average_rating": self.average_rating,
            "total_evaluations": self.total_evaluations,
            "highest_rated_teacher": vars(self.highest_rated_teacher).copy(),
            "lowest_rated_teacher": vars(self.lowest_rated_teacher).copy(),
        }


def summarize_teacher(name: str, records: List[EvaluationInput]) -> TeacherSummary:
    sums = {category: 0 for category in CATEGORIES}
    counts = {category: 0 for category in CATEGORIES}

    for record in records:
        for category, ratings in normalize(classify_answers(record.answers)).items():
            sums[category] += sum(ratings)
            counts[category] += len(ratings)

    ratings = {
        category: (sums[category] / counts[category]) if counts[category] else 0
        for category in CATEGORIES
    }
    # empty categories are left out of the teacher's average, not counted as 0
    non_zero = [value for value in ratings.values() if value > 0]
    average = sum(non_zero) / len(non_zero) if non_zero else 0

    department = records[0].department or DEFAULT_DEPARTMENT

    return TeacherSummary(
        name=name,
        department=department,
        ratings=ratings,
        students=len(records),
        average_rating=average,
    )


def aggregate_teachers(records: Iterable[EvaluationInput]) -> List[TeacherSummary]:
    """Group by teacher name (first-seen order) and summarize each group."""
    groups: Dict[str, List[EvaluationInput]] = {}
    for record in records:
        groups.setdefault(record.teacher_name or UNKNOWN_TEACHER, []).append(record)
    return [summarize_teacher(name, group) for name, group in groups.items()]


def _rated(summary: TeacherSummary) -> RatedTeacher:
    return RatedTeacher(
        name=summary.name,
        average_rating=summary.average_rating,
        students=summary.students,
    )


def compute_overall_stats(teachers: List[TeacherSummary]) -> OverallStats:
    if not teachers:
        return OverallStats(
            average_rating=0,
            total_evaluations=0,
            highest_rated_teacher=PLACEHOLDER_TEACHER,
            lowest_rated_teacher=PLACEHOLDER_TEACHER,
        )

    # max()/min() keep the first teacher on ties
    highest = max(teachers, key=lambda t: t.average_rating)
    lowest = min(teachers, key=lambda t: t.average_rating)

    return OverallStats(
        average_rating=sum(t.average_rating for t in teachers) / len(teachers),
        total_evaluations=sum(t.students for t in teachers),
        highest_rated_teacher=_rated(highest),
        lowest_rated_teacher=_rated(lowest),
    )


def median_rating(teachers: List[TeacherSummary]) -> float:
    """Upper median of the teachers' averages (0 when there are none)."""
    if not teachers:
        return 0
    ordered = sorted(t.average_rating for t in teachers)
    return ordered[len(ordered) // 2]


def category_overview(teachers: List[TeacherSummary]) -> Dict[str, float]:
    """Mean of each category average across teachers."""
    if not teachers:
        return {category: 0 for category in CATEGORIES}
    return {
        category: sum(t.ratings[category] for t in teachers) / len(teachers)
        for category in CATEGORIES
    }


def department_names(teachers: List[TeacherSummary]) -> List[str]:
    return list(dict.fromkeys(t.department for t in teachers))


# ==========================================================
# [3] view filter
# ==========================================================

def _is_set(value: Optional[str]) -> bool:
    return bool(value) and value != "all"


def filter_teachers(
    teachers: List[TeacherSummary],
    department: Optional[str] = None,
    teacher_name: Optional[str] = None,
) -> List[TeacherSummary]:
    """Post-hoc filter over already aggregated rows; "all" or None means no filter."""
    rows = teachers
    if _is_set(department):
        rows = [t for t in rows if t.department == department]
    if _is_set(teacher_name):
        rows = [t for t in rows if t.name == teacher_name]
    return rows
