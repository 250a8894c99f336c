"""
services/grade_service.py

- DB에서 한 과목의 성적 스냅샷(구성요소/등급 구간/과제/학생 성적)을 읽어
  순수 집계기(services.grading.aggregator)에 넘기는 연결 계층
- 과목 전체 요약은 수강 중(active) 학생마다 집계하며,
  한 학생의 집계 오류가 전체 요약을 중단시키지 않음
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from config.settings import settings
from models.assignments import Assignment as AssignmentModel
from models.courses import Course as CourseModel
from models.enrollments import Enrollment as EnrollmentModel
from models.enums import EnrollmentStatus
from models.grades import Grade as GradeModel
from models.users import User as UserModel
from services.grading.aggregator import aggregate_course_grade
from services.grading.errors import GradingError
from services.grading.records import (
    AssignmentRecord,
    BandRecord,
    ComponentRecord,
    CourseGradeResult,
    GradeRecord,
)
from services.grading.validation import validate_course_configuration

logger = logging.getLogger(__name__)


class CourseSnapshot:
    """한 과목의 집계용 설정 스냅샷"""

    def __init__(self, course: CourseModel, components, bands, assignments):
        self.course = course
        self.components: List[ComponentRecord] = components
        self.bands: List[BandRecord] = bands
        self.assignments: List[AssignmentRecord] = assignments


def load_course_snapshot(db: Session, course_id: int) -> Optional[CourseSnapshot]:
    course = db.query(CourseModel).filter(CourseModel.id == course_id).first()
    if course is None:
        return None

    assignments = db.query(AssignmentModel).filter(AssignmentModel.course_id == course_id).all()
    return CourseSnapshot(
        course=course,
        components=[ComponentRecord.model_validate(c) for c in course.grade_components],
        bands=[BandRecord.model_validate(b) for b in course.grade_bands],
        assignments=[AssignmentRecord.model_validate(a) for a in assignments],
    )


def load_student_grades(db: Session, course_id: int, student_id: int) -> List[GradeRecord]:
    rows = (
        db.query(GradeModel)
        .filter(GradeModel.course_id == course_id, GradeModel.student_id == student_id)
        .all()
    )
    return [GradeRecord.model_validate(g) for g in rows]


def _aggregate(snapshot: CourseSnapshot, student_id: int, grades: List[GradeRecord]) -> CourseGradeResult:
    return aggregate_course_grade(
        student_id,
        snapshot.course.id,
        grades,
        snapshot.components,
        snapshot.assignments,
        snapshot.bands,
        passing_grade=snapshot.course.passing_grade,
        tolerance=settings.GRADE_WEIGHT_TOLERANCE,
        strict=settings.STRICT_SCORE_RANGE,
        at_risk_ratio=settings.AT_RISK_RATIO,
    )


# ==========================================================
# [1단계] 학생 한 명의 과목 성적
# ==========================================================

def compute_student_grade(db: Session, course_id: int, student_id: int) -> Optional[CourseGradeResult]:
    """과목이 없으면 None, 집계 오류는 GradingError로 그대로 전달"""
    snapshot = load_course_snapshot(db, course_id)
    if snapshot is None:
        return None
    grades = load_student_grades(db, course_id, student_id)
    return _aggregate(snapshot, student_id, grades)


# ==========================================================
# [2단계] 과목 전체 요약 (수강생별)
# ==========================================================

def get_grades_summary(db: Session, course_id: int) -> Optional[List[Dict[str, Any]]]:
    snapshot = load_course_snapshot(db, course_id)
    if snapshot is None:
        return None

    enrollments = (
        db.query(EnrollmentModel, UserModel)
        .join(UserModel, UserModel.id == EnrollmentModel.student_id)
        .filter(EnrollmentModel.course_id == course_id, EnrollmentModel.status == EnrollmentStatus.ACTIVE)
        .order_by(UserModel.last_name, UserModel.first_name)
        .all()
    )

    summaries = []
    for _, student in enrollments:
        row = {
            "student": {
                "id": student.id,
                "username": student.username,
                "first_name": student.first_name,
                "last_name": student.last_name,
            }
        }
        try:
            result = _aggregate(snapshot, student.id, load_student_grades(db, course_id, student.id))
            row.update(status="ok", result=result.model_dump(mode="json"))
        except GradingError as e:
            logger.warning(f"성적 요약 중 집계 실패: course_id={course_id}, student_id={student.id}, {e.error_code}")
            row.update(status="error", error=e.to_dict())
        summaries.append(row)
    return summaries


# ==========================================================
# [3단계] 과목 성적 설정 점검
# ==========================================================

def check_course_configuration(db: Session, course_id: int) -> Optional[List[str]]:
    snapshot = load_course_snapshot(db, course_id)
    if snapshot is None:
        return None
    return validate_course_configuration(
        snapshot.components, snapshot.bands, tolerance=settings.GRADE_WEIGHT_TOLERANCE
    )
