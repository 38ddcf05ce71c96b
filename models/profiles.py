from sqlalchemy import Column, String, Boolean
from database.db import Base


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(String(64), primary_key=True)               # external student identity
    full_name = Column(String(150))
    usn = Column(String(50), index=True)                    # university serial number
    strand_course = Column(String(50))
    section = Column(String(20))
    level = Column(String(10))                              # shs / college
    role = Column(String(20), nullable=False, default="student")
    status = Column(String(20), nullable=False, default="active")
    is_approved = Column(Boolean, nullable=False, default=True)
