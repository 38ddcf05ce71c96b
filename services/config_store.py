"""
services/config_store.py

Admin-managed collections kept as key → JSON value rows (config_entries).
A missing key means "never configured": the defaults are written and returned.
Every mutation reads the whole collection, changes it and writes it back while
holding the store lock, so other requests never see a half-applied change.
"""

import logging
import threading
import uuid
from datetime import date
from typing import Any, Callable, Dict, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.config_entries import ConfigEntry as ConfigEntryModel
from services.errors import NotFound, RemoteStoreError, ValidationFailure

logger = logging.getLogger(__name__)

STRANDS = "admin_strands"
COURSES = "admin_courses"
QUESTIONS = "admin_questions"
KEYWORDS = "filtered_words"
SEMESTER = "semester_config"


def _default_strands():
    return [
        {"id": "ABM", "name": "ABM", "sections": ["9-1", "9-2", "8-1"],
         "subjects": ["Business Math", "Entrepreneurship", "Business Ethics"]},
        {"id": "GAS", "name": "GAS", "sections": ["9-1", "9-2", "8-1"],
         "subjects": ["General Mathematics", "Earth Science", "Physical Science"]},
        {"id": "HUMSS", "name": "HUMSS", "sections": ["9-1", "9-2", "9-3", "9-4", "8-1", "8-2"],
         "subjects": ["Philippine Politics", "Community Engagement", "Media and Information Literacy"]},
        {"id": "TVL", "name": "TVL", "sections": ["9-1", "8-1"],
         "subjects": ["Technical Drafting", "Computer Programming", "Electronics"]},
    ]


def _default_courses():
    return [
        {"id": "BSIT", "name": "BSIT", "sections": ["1-1", "2-1", "3-1", "4-1"],
         "subjects": ["Programming", "Database Systems", "Web Development", "System Analysis"]},
        {"id": "ACT", "name": "ACT", "sections": ["1-1", "2-1"],
         "subjects": ["Financial Accounting", "Cost Accounting", "Taxation"]},
        {"id": "BSE", "name": "BSE", "sections": ["1-1", "2-1", "3-1", "4-1"],
         "subjects": ["Educational Psychology", "Curriculum Development", "Teaching Methods"]},
    ]


def _default_questions():
    return [
        {"id": "1", "text": "How would you rate the teacher's overall performance?", "category": "Overall"},
        {"id": "2", "text": "How clear were the teacher's explanations?", "category": "Teaching Quality"},
        {"id": "3", "text": "How well did the teacher manage classroom time?", "category": "Time Management"},
        {"id": "4", "text": "How approachable was the teacher for questions?", "category": "Accessibility"},
    ]


def _default_keywords():
    return ["excellent", "good", "great", "amazing", "poor", "bad", "terrible", "disappointing"]


def _default_semester():
    return {"semester": "1st Semester", "evaluation_date": date.today().isoformat()}


DEFAULTS: Dict[str, Callable[[], Any]] = {
    STRANDS: _default_strands,
    COURSES: _default_courses,
    QUESTIONS: _default_questions,
    KEYWORDS: _default_keywords,
    SEMESTER: _default_semester,
}

ID_PREFIX = {STRANDS: "STRAND", COURSES: "COURSE", QUESTIONS: "Q"}


def _require(value, label: str) -> str:
    text = (value or "").strip()
    if not text:
        raise ValidationFailure(f"{label} is required")
    return text


class ConfigStore:
    def __init__(self):
        self._lock = threading.RLock()

    # ==========================================================
    # [1] raw load / save
    # ==========================================================
    def load(self, db: Session, key: str):
        if key not in DEFAULTS:
            raise NotFound(f"Unknown configuration collection: {key}")
        with self._lock:
            try:
                entry = db.get(ConfigEntryModel, key)
            except SQLAlchemyError as e:
                db.rollback()
                logger.error(f"Failed to read config '{key}': {e}")
                raise RemoteStoreError(f"Failed to load {key}")
            if entry is not None:
                return entry.value

            defaults = DEFAULTS[key]()
            logger.info(f"Seeding default values for '{key}'")
            self.save(db, key, defaults)
            return defaults

    def save(self, db: Session, key: str, value):
        with self._lock:
            try:
                entry = db.get(ConfigEntryModel, key)
                if entry is None:
                    db.add(ConfigEntryModel(key=key, value=value))
                else:
                    entry.value = value
                db.commit()
            except SQLAlchemyError as e:
                db.rollback()
                logger.error(f"Failed to write config '{key}': {e}")
                raise RemoteStoreError(f"Failed to save {key}")
        return value

    def _mutate(self, db: Session, key: str, change: Callable[[List[dict]], List[dict]]):
        with self._lock:
            items = [dict(item) for item in self.load(db, key)]
            return self.save(db, key, change(items))

    # ==========================================================
    # [2] id-based collections (strands, courses, questions)
    # ==========================================================
    def add_item(self, db: Session, key: str, item: dict) -> dict:
        new_item = {"id": f"{ID_PREFIX[key]}_{uuid.uuid4().hex[:8]}", **item}
        self._mutate(db, key, lambda items: items + [new_item])
        return new_item

    def update_item(self, db: Session, key: str, item_id: str, changes: dict) -> dict:
        updated = {}

        def apply(items):
            for item in items:
                if item["id"] == item_id:
                    item.update(changes)
                    updated.update(item)
            if not updated:
                raise NotFound(f"{item_id} not found")
            return items

        self._mutate(db, key, apply)
        return updated

    def delete_item(self, db: Session, key: str, item_id: str):
        def apply(items):
            remaining = [item for item in items if item["id"] != item_id]
            if len(remaining) == len(items):
                raise NotFound(f"{item_id} not found")
            return remaining

        return self._mutate(db, key, apply)

    # strands and courses share the same validation
    def add_program(self, db: Session, key: str, name: str, sections=(), subjects=()) -> dict:
        return self.add_item(db, key, {
            "name": _require(name, "Name"),
            "sections": list(sections),
            "subjects": list(subjects),
        })

    def update_program(self, db: Session, key: str, item_id: str, changes: dict) -> dict:
        if "name" in changes:
            changes = {**changes, "name": _require(changes["name"], "Name")}
        return self.update_item(db, key, item_id, changes)

    def add_question(self, db: Session, text: str, category: str = "Overall") -> dict:
        return self.add_item(db, QUESTIONS, {
            "text": _require(text, "Question text"),
            "category": (category or "").strip() or "Overall",
        })

    def update_question(self, db: Session, item_id: str, changes: dict) -> dict:
        if "text" in changes:
            changes = {**changes, "text": _require(changes["text"], "Question text")}
        return self.update_item(db, QUESTIONS, item_id, changes)

    # ==========================================================
    # [3] filter keywords
    # ==========================================================
    def add_keyword(self, db: Session, word: str) -> List[str]:
        word = _require(word, "Keyword").lower()

        def apply(words):
            if word in words:
                raise ValidationFailure("This keyword is already in the list")
            return words + [word]

        with self._lock:
            words = list(self.load(db, KEYWORDS))
            return self.save(db, KEYWORDS, apply(words))

    def remove_keyword(self, db: Session, word: str) -> List[str]:
        with self._lock:
            words = list(self.load(db, KEYWORDS))
            return self.save(db, KEYWORDS, [w for w in words if w != word])

    # ==========================================================
    # [4] semester
    # ==========================================================
    def set_semester(self, db: Session, semester: str, evaluation_date: date) -> dict:
        value = {
            "semester": _require(semester, "Semester"),
            "evaluation_date": evaluation_date.isoformat(),
        }
        return self.save(db, SEMESTER, value)


config_store = ConfigStore()
