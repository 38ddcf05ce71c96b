from pydantic import BaseModel, Field
from typing import List, Literal, Optional

TeacherLevel = Literal["shs", "college", "both"]


# ✅ input schema: registering a new teacher (POST)
class TeacherCreate(BaseModel):
    name: str                                        # display name
    department: str                                  # e.g. Senior High School, College
    level: TeacherLevel = "both"                     # levels the teacher handles
    subjects: List[str] = Field(default_factory=list)


# ✅ partial update (PUT); only the fields sent are changed
class TeacherUpdate(BaseModel):
    name: Optional[str] = None
    department: Optional[str] = None
    level: Optional[TeacherLevel] = None
    subjects: Optional[List[str]] = None


# ✅ output schema (GET)
class Teacher(TeacherCreate):
    id: int
    is_active: bool

    class Config:
        from_attributes = True              # SQLAlchemy model → Pydantic
