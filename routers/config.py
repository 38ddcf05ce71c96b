from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.db import get_db
from schemas.common import ok
from schemas.config import (
    KeywordCreate,
    ProgramCreate,
    ProgramUpdate,
    QuestionCreate,
    QuestionUpdate,
    SemesterConfig,
)
from services.config_store import COURSES, KEYWORDS, QUESTIONS, SEMESTER, STRANDS, config_store

router = APIRouter(prefix="/config", tags=["configuration"])


# ==========================================================
# [1] strands (SHS)
# ==========================================================

@router.get("/strands")
def read_strands(db: Session = Depends(get_db)):
    return ok(config_store.load(db, STRANDS))


@router.post("/strands")
def create_strand(payload: ProgramCreate, db: Session = Depends(get_db)):
    item = config_store.add_program(db, STRANDS, payload.name, payload.sections, payload.subjects)
    return ok(item, "Strand added successfully")


@router.put("/strands/{strand_id}")
def update_strand(strand_id: str, payload: ProgramUpdate, db: Session = Depends(get_db)):
    item = config_store.update_program(db, STRANDS, strand_id, payload.model_dump(exclude_unset=True))
    return ok(item, "Strand updated successfully")


@router.delete("/strands/{strand_id}")
def delete_strand(strand_id: str, db: Session = Depends(get_db)):
    return ok(config_store.delete_item(db, STRANDS, strand_id), "Strand deleted successfully")


# ==========================================================
# [2] courses (college)
# ==========================================================

@router.get("/courses")
def read_courses(db: Session = Depends(get_db)):
    return ok(config_store.load(db, COURSES))


@router.post("/courses")
def create_course(payload: ProgramCreate, db: Session = Depends(get_db)):
    item = config_store.add_program(db, COURSES, payload.name, payload.sections, payload.subjects)
    return ok(item, "Course added successfully")


@router.put("/courses/{course_id}")
def update_course(course_id: str, payload: ProgramUpdate, db: Session = Depends(get_db)):
    item = config_store.update_program(db, COURSES, course_id, payload.model_dump(exclude_unset=True))
    return ok(item, "Course updated successfully")


@router.delete("/courses/{course_id}")
def delete_course(course_id: str, db: Session = Depends(get_db)):
    return ok(config_store.delete_item(db, COURSES, course_id), "Course deleted successfully")


# ==========================================================
# [3] evaluation questions
# ==========================================================

@router.get("/questions")
def read_questions(db: Session = Depends(get_db)):
    return ok(config_store.load(db, QUESTIONS))


@router.post("/questions")
def create_question(payload: QuestionCreate, db: Session = Depends(get_db)):
    return ok(config_store.add_question(db, payload.text, payload.category), "Question added successfully")


@router.put("/questions/{question_id}")
def update_question(question_id: str, payload: QuestionUpdate, db: Session = Depends(get_db)):
    item = config_store.update_question(db, question_id, payload.model_dump(exclude_unset=True))
    return ok(item, "Question updated successfully")


@router.delete("/questions/{question_id}")
def delete_question(question_id: str, db: Session = Depends(get_db)):
    return ok(config_store.delete_item(db, QUESTIONS, question_id), "Question deleted successfully")


# ==========================================================
# [4] feedback filter keywords
# ==========================================================

@router.get("/keywords")
def read_keywords(db: Session = Depends(get_db)):
    return ok(config_store.load(db, KEYWORDS))


@router.post("/keywords")
def create_keyword(payload: KeywordCreate, db: Session = Depends(get_db)):
    words = config_store.add_keyword(db, payload.word)
    return ok(words, f'Added "{words[-1]}" to keyword list')


@router.delete("/keywords/{word}")
def delete_keyword(word: str, db: Session = Depends(get_db)):
    return ok(config_store.remove_keyword(db, word), f'Removed "{word}" from keyword list')


# ==========================================================
# [5] semester
# ==========================================================

@router.get("/semester")
def read_semester(db: Session = Depends(get_db)):
    return ok(config_store.load(db, SEMESTER))


@router.put("/semester")
def update_semester(payload: SemesterConfig, db: Session = Depends(get_db)):
    value = config_store.set_semester(db, payload.semester, payload.evaluation_date)
    return ok(value, "Semester settings updated successfully")
