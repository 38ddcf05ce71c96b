from types import SimpleNamespace

from sqlalchemy.exc import OperationalError

from schemas.intake import StudentContext
from services.assignment_directory import LOAD_FAILED_NOTICE, load_directory, merge_teacher_sources
from tests.helpers import add_assignment, add_evaluation, add_personal_entry, add_teacher


def _student(level="shs", strand_course="HUMSS", section="9-1", student_id="stu-1"):
    return StudentContext(id=student_id, level=level, strand_course=strand_course, section=section)


def _teacher(teacher_id, name, is_active=True):
    return SimpleNamespace(id=teacher_id, name=name, department="College", level="both", is_active=is_active)


# ==========================================================
# merge (pure)
# ==========================================================

def test_merge_unions_subjects_per_teacher():
    reyes = _teacher(1, "Dr. Reyes")
    lim = _teacher(2, "Ms. Lim")
    merged = merge_teacher_sources(
        [(reyes, "Programming"), (lim, "Networking")],
        [(reyes, "Programming"), (reyes, "Database Systems")],
    )
    assert [t.teacher_id for t in merged] == [1, 2]
    assert merged[0].subjects == ["Programming", "Database Systems"]


def test_merge_skips_inactive_and_missing_teachers():
    merged = merge_teacher_sources([(_teacher(1, "Gone", is_active=False), "Math"), (None, "Math")])
    assert merged == []


# ==========================================================
# load_directory
# ==========================================================

def test_no_assignments_for_section_gives_empty_lists(db):
    add_assignment(db, add_teacher(db, "Ms. Cruz"), "Math", section="9-2")
    result = load_directory(db, _student())
    assert result.teachers == []
    assert result.all_assigned == []
    assert result.notice is None


def test_assigned_teachers_in_assignment_order(db):
    cruz = add_teacher(db, "Ms. Cruz")
    santos = add_teacher(db, "Mr. Santos")
    add_assignment(db, santos, "Earth Science")
    add_assignment(db, cruz, "Philippine Politics")
    add_assignment(db, santos, "Physical Science")

    result = load_directory(db, _student())
    assert [t.name for t in result.teachers] == ["Mr. Santos", "Ms. Cruz"]
    assert result.teachers[0].subjects == ["Earth Science", "Physical Science"]


def test_already_evaluated_teachers_are_left_out(db):
    cruz = add_teacher(db, "Ms. Cruz")
    santos = add_teacher(db, "Mr. Santos")
    add_assignment(db, cruz, "Philippine Politics")
    add_assignment(db, santos, "Earth Science")
    add_evaluation(db, "stu-1", cruz.id, {"q1": 5})

    result = load_directory(db, _student())
    assert [t.name for t in result.teachers] == ["Mr. Santos"]
    assert [t.name for t in result.all_assigned] == ["Ms. Cruz", "Mr. Santos"]


def test_inactive_teachers_are_left_out(db):
    add_assignment(db, add_teacher(db, "Retired", is_active=False), "Math")
    assert load_directory(db, _student()).teachers == []


def test_personal_list_merges_for_college_only(db):
    reyes = add_teacher(db, "Dr. Reyes")
    add_assignment(db, reyes, "Programming", level="college", strand_course="BSIT", section="1-1")
    add_personal_entry(db, "stu-2", reyes, "Programming")
    add_personal_entry(db, "stu-2", reyes, "Web Development")

    college = _student(level="college", strand_course="BSIT", section="1-1", student_id="stu-2")
    (teacher,) = load_directory(db, college).teachers
    assert teacher.subjects == ["Programming", "Web Development"]

    # personal entries are ignored for SHS students
    add_assignment(db, add_teacher(db, "Ms. Cruz"), "Math")
    add_personal_entry(db, "stu-1", reyes, "Programming")
    assert [t.name for t in load_directory(db, _student()).teachers] == ["Ms. Cruz"]


class _BrokenSession:
    rolled_back = False

    def query(self, *args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("connection refused"))

    def rollback(self):
        self.rolled_back = True


def test_query_failure_degrades_to_notice():
    broken = _BrokenSession()
    result = load_directory(broken, _student())
    assert result.teachers == []
    assert result.all_assigned == []
    assert result.notice == LOAD_FAILED_NOTICE
    assert broken.rolled_back is True


def test_directory_endpoint(client, db):
    add_assignment(db, add_teacher(db, "Ms. Cruz"), "Math")
    r = client.get("/v1/directory/stu-1", params={"level": "shs", "strand_course": "HUMSS", "section": "9-1"})
    body = r.json()
    assert r.status_code == 200
    assert body["success"] is True
    assert [t["name"] for t in body["data"]["teachers"]] == ["Ms. Cruz"]
