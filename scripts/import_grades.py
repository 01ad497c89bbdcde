"""
CSV 성적 데이터를 성적 입력 서비스로 가져온다.

CSV 컬럼: assessment_id, student_id, value
- 평가 단위로 묶어 한 번씩 입력하므로, 한 평가 안에서 하나라도 잘못되면 그 평가 전체가 거부된다.
"""

import csv
import sys
from collections import OrderedDict

from sqlalchemy.orm import Session

from database.db import SessionLocal
from schemas.grades import GradeItem, GradeLaunch
from services import grade_service
from utils.exceptions import RecordError

CSV_PATH = "data/grades.csv"  # ✅ 기본 파일 경로


def load_batches(path):
    batches = OrderedDict()
    with open(path, newline="", encoding="utf-8-sig") as csvfile:
        reader = csv.DictReader(csvfile)
        for row in reader:
            batches.setdefault(int(row["assessment_id"]), []).append(
                GradeItem(student_id=int(row["student_id"]), value=float(row["value"]))
            )
    return batches


def migrate_grades(teacher_id: int, path: str = CSV_PATH):
    db: Session = SessionLocal()
    inserted = updated = rejected = 0
    try:
        for assessment_id, items in load_batches(path).items():
            try:
                result = grade_service.launch_grades(
                    db, teacher_id, GradeLaunch(assessment_id=assessment_id, grades=items)
                )
                inserted += result.inserted
                updated += result.updated
            except RecordError as exc:
                rejected += 1
                print(f"⚠️ 평가 {assessment_id} 거부: {exc.message}")
    finally:
        db.close()
    print(f"✅ 성적 CSV → DB 입력 완료 (신규 {inserted}건, 갱신 {updated}건, 거부된 평가 {rejected}개)")


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("사용법: python -m scripts.import_grades <teacher_id> [csv_path]")
        sys.exit(1)
    migrate_grades(int(sys.argv[1]), sys.argv[2] if len(sys.argv) > 2 else CSV_PATH)
