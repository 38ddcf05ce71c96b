import csv
import sys

from sqlalchemy.orm import Session

from database.db import SessionLocal
from database.init_db import init_db
from models.teachers import Teacher as TeacherModel

CSV_PATH = "data/teachers.csv"  # ✅ columns: name, department, level, subjects ("Math; Science"), is_active


def _parse_subjects(raw: str):
    return [s.strip() for s in (raw or "").replace(",", ";").split(";") if s.strip()]


def migrate_teachers(csv_path: str = CSV_PATH, db: Session = None) -> int:
    own_session = db is None
    db = db or SessionLocal()
    imported = 0

    try:
        with open(csv_path, newline="", encoding="utf-8-sig") as csvfile:
            reader = csv.DictReader(csvfile)
            for row in reader:
                name = (row.get("name") or "").strip()
                department = (row.get("department") or "").strip()
                if not name or not department:
                    print(f"⚠️ skipped row without name/department: {row}")
                    continue

                db.add(TeacherModel(
                    name=name,
                    department=department,
                    level=(row.get("level") or "both").strip().lower(),
                    subjects=_parse_subjects(row.get("subjects")),
                    is_active=str(row.get("is_active", "true")).strip().lower() in ("true", "1", "yes", ""),
                ))
                imported += 1

        db.commit()
    finally:
        if own_session:
            db.close()

    print(f"✅ teachers CSV → DB: {imported} rows")
    return imported


if __name__ == "__main__":
    init_db()
    migrate_teachers(sys.argv[1] if len(sys.argv) > 1 else CSV_PATH)
