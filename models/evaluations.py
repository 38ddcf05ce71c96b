from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, JSON, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from database.db import Base


class Evaluation(Base):
    __tablename__ = "evaluations"
    # a student evaluates a teacher at most once
    __table_args__ = (
        UniqueConstraint("student_id", "teacher_id", name="uq_evaluations_student_teacher"),
    )

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(String(64), ForeignKey("profiles.id"), nullable=False, index=True)
    teacher_id = Column(Integer, ForeignKey("teachers.id"), nullable=False, index=True)

    # denormalised copies taken at submission time
    teacher_name = Column(String(100))
    student_name = Column(String(150))
    student_usn = Column(String(50))
    level = Column(String(10))
    strand_course = Column(String(50))
    section = Column(String(20))

    overall_rating = Column(Integer, nullable=False)        # ceil(mean(answers)) or 5
    positive_feedback = Column(Text, default="")
    suggestions = Column(Text, default="")
    answers = Column(JSON, nullable=False, default=dict)    # {"q1": 5, ...} or legacy named fields
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    # ✅ Evaluation ↔ Teacher (N:1), used for the name/department join in reports
    teacher = relationship("Teacher")
