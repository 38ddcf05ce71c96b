from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from database.db import Base


class TeacherAssignment(Base):
    __tablename__ = "teacher_assignments"

    id = Column(Integer, primary_key=True, index=True)
    teacher_id = Column(Integer, ForeignKey("teachers.id"), nullable=False, index=True)
    subject = Column(String(150), nullable=False)           # subject taught to the section
    section = Column(String(20), nullable=False)            # e.g. 9-1, 2-1
    strand_course = Column(String(50), nullable=False)      # strand (SHS) or course (college)
    level = Column(String(10), nullable=False)              # shs / college

    # ✅ Teacher ↔ Assignment (N:1)
    teacher = relationship("Teacher", back_populates="assignments")
