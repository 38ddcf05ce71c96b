from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field


# ==========================================================
# strands / courses share the same shape
# ==========================================================
class ProgramCreate(BaseModel):
    name: str
    sections: List[str] = Field(default_factory=list)
    subjects: List[str] = Field(default_factory=list)


class ProgramUpdate(BaseModel):
    name: Optional[str] = None
    sections: Optional[List[str]] = None
    subjects: Optional[List[str]] = None


# ==========================================================
# evaluation questions
# ==========================================================
class QuestionCreate(BaseModel):
    text: str
    category: str = "Overall"


class QuestionUpdate(BaseModel):
    text: Optional[str] = None
    category: Optional[str] = None


# ==========================================================
# filter keywords / semester
# ==========================================================
class KeywordCreate(BaseModel):
    word: str


class SemesterConfig(BaseModel):
    semester: str = "1st Semester"
    evaluation_date: date
