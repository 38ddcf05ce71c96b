from sqlalchemy import Column, Integer, String, Boolean, JSON
from sqlalchemy.orm import relationship
from database.db import Base


class Teacher(Base):
    __tablename__ = "teachers"

    id = Column(Integer, primary_key=True, index=True)      # teacher ID (PK)
    name = Column(String(100), nullable=False)              # display name
    department = Column(String(100), nullable=False)        # department (e.g. Senior High School, College)
    level = Column(String(10), nullable=False, default="both")  # shs / college / both
    is_active = Column(Boolean, nullable=False, default=True)   # deactivated instead of deleted
    subjects = Column(JSON, nullable=False, default=list)   # subjects the teacher can handle

    # ✅ sections this teacher is assigned to (1:N)
    assignments = relationship("TeacherAssignment", back_populates="teacher")
