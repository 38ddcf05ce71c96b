from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from database.db import Base


class StudentEvaluationListEntry(Base):
    """College students' personal additions to their evaluation list."""
    __tablename__ = "student_evaluation_lists"

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(String(64), ForeignKey("profiles.id"), nullable=False, index=True)
    teacher_id = Column(Integer, ForeignKey("teachers.id"), nullable=False)
    subject = Column(String(150), nullable=False)
    level = Column(String(10))
    strand_course = Column(String(50))
    section = Column(String(20))

    teacher = relationship("Teacher")
