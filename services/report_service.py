"""
services/report_service.py

- 출석 리포트 / 성취도 리포트 생성 (읽기 전용, 저장하지 않음)
- 매 호출마다 현재 DB 내용으로 다시 계산한다.
"""

import logging
from collections import Counter
from datetime import datetime

from sqlalchemy import func
from sqlalchemy.orm import Session

from models.assessments import Assessment
from models.attendance import AttendanceRecord, AttendanceStatus
from models.class_sessions import ClassSession
from models.grades import GradeEntry
from models.students import Student
from schemas.reports import (
    AssessmentScore,
    FrequencyReport,
    FrequencyReportRequest,
    GradeBand,
    PerformanceCategory,
    PerformanceReport,
    PerformanceReportRequest,
    StudentFrequency,
    StudentPerformance,
)
from services import catalog, report_stats
from utils.exceptions import BadRequestError

logger = logging.getLogger(__name__)


# ==========================================================
# [출석 리포트]
# ==========================================================
def frequency_report(db: Session, teacher_id: int, request: FrequencyReportRequest) -> FrequencyReport:
    class_ = catalog.ensure_class_owner(db, teacher_id, request.class_id)

    if request.date_from > request.date_to:
        raise BadRequestError("시작일은 종료일보다 이전이어야 합니다.")

    session_ids = [
        r[0]
        for r in db.query(ClassSession.id)
        .filter(
            ClassSession.class_id == request.class_id,
            ClassSession.date >= request.date_from,
            ClassSession.date <= request.date_to,
        )
        .all()
    ]
    total_sessions = len(session_ids)

    students = (
        db.query(Student)
        .filter(Student.class_id == request.class_id)
        .order_by(Student.student_name, Student.id)
        .all()
    )

    counts = Counter()
    if session_ids:
        rows = (
            db.query(AttendanceRecord.student_id, AttendanceRecord.status, func.count(AttendanceRecord.id))
            .filter(AttendanceRecord.session_id.in_(session_ids))
            .group_by(AttendanceRecord.student_id, AttendanceRecord.status)
            .all()
        )
        for student_id, status, n in rows:
            counts[(student_id, status)] = n

    lines = []
    for student in students:
        presences = counts[(student.id, AttendanceStatus.PRESENT)]
        absences = counts[(student.id, AttendanceStatus.ABSENT)]
        excused = counts[(student.id, AttendanceStatus.EXCUSED_ABSENCE)]
        percentage = round(presences / total_sessions * 100, 2) if total_sessions > 0 else 0
        lines.append(StudentFrequency(
            student_id=student.id,
            student_name=student.student_name,
            registration=student.registration,
            total_sessions=total_sessions,
            presences=presences,
            absences=absences,
            excused=excused,
            percentage=percentage,
        ))

    average = report_stats.mean([line.percentage for line in lines])

    logger.info(
        f"출석 리포트 생성: class_id={request.class_id} sessions={total_sessions} students={len(lines)}"
    )
    return FrequencyReport(
        class_id=class_.id,
        class_name=class_.name,
        subject_name=class_.subject.name if class_.subject else "",
        date_from=request.date_from,
        date_to=request.date_to,
        generated_at=datetime.now(),
        students=lines,
        total_sessions=total_sessions,
        average_attendance=round(average, 2),
        total_presences=sum(line.presences for line in lines),
        total_absences=sum(line.absences for line in lines),
        total_excused=sum(line.excused for line in lines),
    )


# ==========================================================
# [성취도 리포트]
# ==========================================================
def performance_report(db: Session, teacher_id: int, request: PerformanceReportRequest) -> PerformanceReport:
    class_ = catalog.ensure_class_owner(db, teacher_id, request.class_id)

    query = db.query(Assessment).filter(Assessment.subject_id == class_.subject_id)

    # ✅ period 라벨이 붙은 수업들의 날짜 범위로 평가 필터 (해당 수업이 없으면 필터 없음)
    if request.period and request.period.strip():
        first_day, last_day = (
            db.query(func.min(ClassSession.date), func.max(ClassSession.date))
            .filter(ClassSession.class_id == request.class_id, ClassSession.period == request.period)
            .one()
        )
        if first_day is not None:
            query = query.filter(Assessment.applied_on >= first_day, Assessment.applied_on <= last_day)

    assessments = query.order_by(Assessment.applied_on, Assessment.id).all()

    students = (
        db.query(Student)
        .filter(Student.class_id == request.class_id)
        .order_by(Student.student_name, Student.id)
        .all()
    )

    grades = {}
    if assessments:
        for g in db.query(GradeEntry).filter(
            GradeEntry.assessment_id.in_([a.id for a in assessments])
        ).all():
            grades[(g.assessment_id, g.student_id)] = g.value

    lines = []
    for student in students:
        scores = []
        for assessment in assessments:
            value = grades.get((assessment.id, student.id))
            percentage = None
            if value is not None and assessment.max_value > 0:
                percentage = round(value / assessment.max_value * 100, 2)
            scores.append(AssessmentScore(
                assessment_id=assessment.id,
                title=assessment.title,
                applied_on=assessment.applied_on,
                max_value=assessment.max_value,
                value=value,
                percentage=percentage,
            ))

        graded = [s for s in scores if s.value is not None]
        sum_grades = sum(s.value for s in graded)
        sum_max = sum(s.max_value for s in graded)
        overall = sum_grades / sum_max * 100 if sum_max > 0 else 0

        lines.append(StudentPerformance(
            student_id=student.id,
            student_name=student.student_name,
            registration=student.registration,
            total_assessments=len(assessments),
            overall_average=round(overall, 2),
            sum_grades=round(sum_grades, 2),
            sum_max=sum_max,
            assessments=scores,
        ))

    # ✅ 평균 0인 학생은 통계/분포에서 제외
    averages = sorted(line.overall_average for line in lines if line.overall_average > 0)

    class_average = report_stats.mean(averages)
    above = sum(1 for v in averages if v > class_average)
    below = sum(1 for v in averages if v < class_average)

    logger.info(
        f"성취도 리포트 생성: class_id={request.class_id} assessments={len(assessments)} "
        f"students={len(lines)} scored={len(averages)}"
    )
    return PerformanceReport(
        class_id=class_.id,
        class_name=class_.name,
        subject_name=class_.subject.name if class_.subject else "",
        period=request.period,
        generated_at=datetime.now(),
        students=lines,
        class_average=round(class_average, 2),
        class_median=round(report_stats.median(averages), 2),
        highest=round(max(averages), 2) if averages else 0,
        lowest=round(min(averages), 2) if averages else 0,
        above_average=above,
        below_average=below,
        distribution=[GradeBand(label=label, count=n) for label, n in report_stats.histogram(averages)],
        classification=[
            PerformanceCategory(category=category, band=band, count=n, percentage=pct)
            for category, band, n, pct in report_stats.classify(averages)
        ],
        observation=report_stats.build_observation(class_average, below),
        recommendation=report_stats.build_recommendation(below),
    )
