from pydantic import BaseModel
from typing import Optional


class ProfileUpdate(BaseModel):
    full_name: Optional[str] = None
    usn: Optional[str] = None


class Profile(BaseModel):
    id: str
    full_name: Optional[str] = None
    usn: Optional[str] = None
    strand_course: Optional[str] = None
    section: Optional[str] = None
    level: Optional[str] = None
    role: str
    status: str

    class Config:
        from_attributes = True
