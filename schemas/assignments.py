from pydantic import BaseModel
from typing import Literal

StudentLevel = Literal["shs", "college"]


# ==========================================================
# [input]
# ==========================================================
class AssignmentCreate(BaseModel):
    teacher_id: int                     # teacher being assigned
    subject: str                        # subject taught to the section
    level: StudentLevel                 # shs / college
    strand_course: str                  # e.g. HUMSS, BSIT
    section: str                        # e.g. 9-1


# ==========================================================
# [output]
# ==========================================================
class Assignment(AssignmentCreate):
    id: int

    class Config:
        from_attributes = True
