"""
CSV 출결 데이터를 출결 등록 서비스로 가져온다.

CSV 컬럼: class_id, date(YYYY-MM-DD), period, student_id, status, note
- (class_id, date) 단위로 묶어 한 번씩 등록하므로 수업별 명단이 전체 교체된다.
- 검증 실패한 수업은 건너뛰고 나머지는 계속 진행한다.
"""

import csv
import sys
from collections import OrderedDict
from datetime import date

from sqlalchemy.orm import Session

from database.db import SessionLocal
from schemas.attendance import AttendanceEntry, AttendanceRegister
from services import attendance_service
from utils.exceptions import RecordError

CSV_PATH = "data/attendance.csv"  # ✅ 기본 파일 경로


def load_sessions(path):
    sessions = OrderedDict()
    with open(path, newline="", encoding="utf-8-sig") as csvfile:
        reader = csv.DictReader(csvfile)
        for row in reader:
            key = (int(row["class_id"]), date.fromisoformat(row["date"]))
            bucket = sessions.setdefault(key, {"period": row["period"], "roster": [], "note": None})
            bucket["roster"].append(AttendanceEntry(student_id=int(row["student_id"]), status=row["status"]))
            if row.get("note"):
                bucket["note"] = row["note"]
    return sessions


def migrate_attendance(teacher_id: int, path: str = CSV_PATH):
    db: Session = SessionLocal()
    imported = failed = 0
    try:
        for (class_id, session_date), bucket in load_sessions(path).items():
            payload = AttendanceRegister(
                class_id=class_id,
                date=session_date,
                period=bucket["period"],
                roster=bucket["roster"],
                note=bucket["note"],
            )
            try:
                attendance_service.register_attendance(db, teacher_id, payload)
                imported += 1
            except RecordError as exc:
                failed += 1
                print(f"⚠️ {class_id} / {session_date} 건너뜀: {exc.message}")
    finally:
        db.close()
    print(f"✅ 출결 CSV → DB 등록 완료 (성공 {imported}건, 실패 {failed}건)")


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("사용법: python -m scripts.import_attendance <teacher_id> [csv_path]")
        sys.exit(1)
    migrate_attendance(int(sys.argv[1]), sys.argv[2] if len(sys.argv) > 2 else CSV_PATH)
