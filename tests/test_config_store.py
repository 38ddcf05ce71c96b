from datetime import date

import pytest

from services.config_store import COURSES, KEYWORDS, QUESTIONS, SEMESTER, STRANDS, ConfigStore
from services.errors import NotFound, ValidationFailure


@pytest.fixture
def store():
    return ConfigStore()


def test_first_load_seeds_defaults(store, db):
    strands = store.load(db, STRANDS)
    assert [s["id"] for s in strands] == ["ABM", "GAS", "HUMSS", "TVL"]
    assert [c["id"] for c in store.load(db, COURSES)] == ["BSIT", "ACT", "BSE"]
    assert len(store.load(db, QUESTIONS)) == 4
    assert "excellent" in store.load(db, KEYWORDS)
    assert store.load(db, SEMESTER)["semester"] == "1st Semester"


def test_saved_value_round_trips(store, db):
    value = [{"id": "STEM", "name": "STEM", "sections": ["9-1"], "subjects": ["Calculus"]}]
    store.save(db, STRANDS, value)
    assert store.load(db, STRANDS) == value


def test_stored_empty_list_is_not_reseeded(store, db):
    store.save(db, KEYWORDS, [])
    assert store.load(db, KEYWORDS) == []


def test_unknown_key(store, db):
    with pytest.raises(NotFound):
        store.load(db, "admin_colors")


def test_program_add_update_delete(store, db):
    added = store.add_program(db, STRANDS, "  STEM ", ["9-1"], ["Calculus"])
    assert added["id"].startswith("STRAND_")
    assert added["name"] == "STEM"

    updated = store.update_program(db, STRANDS, added["id"], {"sections": ["9-1", "9-2"]})
    assert updated["sections"] == ["9-1", "9-2"]
    assert updated["name"] == "STEM"

    remaining = store.delete_item(db, STRANDS, added["id"])
    assert added["id"] not in [s["id"] for s in remaining]


def test_program_requires_name(store, db):
    with pytest.raises(ValidationFailure):
        store.add_program(db, COURSES, "   ")
    with pytest.raises(ValidationFailure):
        store.update_program(db, COURSES, "BSIT", {"name": ""})


def test_update_or_delete_missing_item(store, db):
    with pytest.raises(NotFound):
        store.update_item(db, QUESTIONS, "Q_missing", {"text": "x"})
    with pytest.raises(NotFound):
        store.delete_item(db, QUESTIONS, "Q_missing")


def test_question_defaults_to_overall_category(store, db):
    question = store.add_question(db, "Does the teacher start on time?", "")
    assert question["id"].startswith("Q_")
    assert question["category"] == "Overall"


def test_keywords_are_lowercased_and_unique(store, db):
    store.save(db, KEYWORDS, [])
    assert store.add_keyword(db, "  Helpful ") == ["helpful"]
    with pytest.raises(ValidationFailure, match="already in the list"):
        store.add_keyword(db, "HELPFUL")
    with pytest.raises(ValidationFailure):
        store.add_keyword(db, " ")
    assert store.remove_keyword(db, "helpful") == []


def test_semester(store, db):
    value = store.set_semester(db, "2nd Semester", date(2025, 1, 15))
    assert value == {"semester": "2nd Semester", "evaluation_date": "2025-01-15"}
    assert store.load(db, SEMESTER) == value


# ==========================================================
# HTTP surface
# ==========================================================

def test_config_endpoints(client):
    r = client.get("/v1/config/strands")
    assert r.status_code == 200
    assert len(r.json()["data"]) == 4

    r = client.post("/v1/config/courses", json={"name": "BSCS", "sections": ["1-1"], "subjects": []})
    course_id = r.json()["data"]["id"]
    assert client.delete(f"/v1/config/courses/{course_id}").status_code == 200
    assert client.delete(f"/v1/config/courses/{course_id}").status_code == 404

    r = client.put("/v1/config/semester", json={"semester": "2nd Semester", "evaluation_date": "2025-01-15"})
    assert r.json()["data"]["evaluation_date"] == "2025-01-15"


def test_duplicate_keyword_returns_error_envelope(client):
    client.post("/v1/config/keywords", json={"word": "Helpful"})
    r = client.post("/v1/config/keywords", json={"word": "helpful"})
    assert r.status_code == 400
    body = r.json()
    assert body["success"] is False
    assert body["error"] == {"code": "VALIDATION_ERROR", "message": "This keyword is already in the list"}
