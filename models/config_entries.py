from sqlalchemy import Column, String, JSON
from database.db import Base


class ConfigEntry(Base):
    """Key-value storage for admin-managed collections (strands, courses, ...)."""
    __tablename__ = "config_entries"

    key = Column(String(100), primary_key=True)
    value = Column(JSON, nullable=False)
