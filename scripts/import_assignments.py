import csv
import sys

from sqlalchemy.orm import Session

from database.db import SessionLocal
from database.init_db import init_db
from models.teacher_assignments import TeacherAssignment as AssignmentModel
from models.teachers import Teacher as TeacherModel

CSV_PATH = "data/teacher_assignments.csv"  # ✅ columns: teacher_name, subject, level, strand_course, section


def migrate_assignments(csv_path: str = CSV_PATH, db: Session = None) -> int:
    own_session = db is None
    db = db or SessionLocal()
    imported = 0

    try:
        teacher_ids = {t.name: t.id for t in db.query(TeacherModel).all()}

        with open(csv_path, newline="", encoding="utf-8-sig") as csvfile:
            reader = csv.DictReader(csvfile)
            for row in reader:
                teacher_id = teacher_ids.get((row.get("teacher_name") or "").strip())
                if teacher_id is None:
                    print(f"⚠️ unknown teacher, skipped: {row.get('teacher_name')}")
                    continue

                db.add(AssignmentModel(
                    teacher_id=teacher_id,
                    subject=row["subject"].strip(),
                    level=row["level"].strip().lower(),
                    strand_course=row["strand_course"].strip(),
                    section=row["section"].strip(),
                ))
                imported += 1

        db.commit()
    finally:
        if own_session:
            db.close()

    print(f"✅ teacher_assignments CSV → DB: {imported} rows")
    return imported


if __name__ == "__main__":
    init_db()
    migrate_assignments(sys.argv[1] if len(sys.argv) > 1 else CSV_PATH)
