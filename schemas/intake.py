"""
schemas/intake.py

Request bodies of the evaluation intake flow.
- StudentContext: who is evaluating (sent once when the session is opened)
- EvaluationDraft: one teacher's answers, buffered in memory until the final submit
- PersonalListAdd: college students adding a teacher to their own list
"""

from typing import Annotated, Dict, Literal, Optional

from pydantic import BaseModel, Field

Rating = Annotated[int, Field(ge=1, le=5)]


class StudentContext(BaseModel):
    id: str = Field(..., min_length=1, description="Student identity (profiles.id)")
    usn: str = ""
    full_name: str = ""
    strand_course: str = Field(..., description="Strand (SHS) or course (college)")
    section: str
    level: Literal["shs", "college"]


class EvaluationDraft(BaseModel):
    answers: Dict[str, Rating] = Field(default_factory=dict, description='{"q1": 5, "q2": 4, ...}')
    positive_comments: Optional[str] = None
    suggestions: Optional[str] = None


class PersonalListAdd(BaseModel):
    teacher_id: int
    subject: str = ""
