"""
services/component_score_service.py

- 과제를 거치지 않고 구성요소 단위로 직접 입력한 점수(component_scores) 관리
- 진행률은 구성요소 만점(total_points)을 분모로 계산
"""

import logging
from typing import Iterable, Tuple

from sqlalchemy.orm import Session

from models.component_scores import ComponentScore as ComponentScoreModel
from models.grade_components import GradeComponent as GradeComponentModel
from services.grading.errors import ScoreOutOfRangeError

logger = logging.getLogger(__name__)


def check_points(points_earned: float, component: GradeComponentModel):
    """획득 점수는 0 ~ 구성요소 만점 사이여야 함 (보정 없이 거절)"""
    if points_earned < 0 or points_earned > component.total_points:
        raise ScoreOutOfRangeError(
            f"Points earned must be between 0 and {component.total_points:g}",
            details={
                "grade_component_id": component.id,
                "points_earned": points_earned,
                "total_points": component.total_points,
            },
        )


def summarize_progress(rows: Iterable[Tuple[float, float]]) -> dict:
    """(획득 점수, 구성요소 만점) 목록 → 진행률"""
    rows = list(rows)
    earned = sum(points for points, _ in rows)
    possible = sum(total or 0.0 for _, total in rows)
    return {
        "total_components": len(rows),
        "completed_components": sum(1 for points, _ in rows if points > 0),
        "total_points_earned": earned,
        "total_possible_points": possible,
        "percentage": round(earned / possible * 100, 2) if possible > 0 else 0.0,
    }


def get_component_progress(db: Session, course_id: int, student_id: int) -> dict:
    rows = (
        db.query(ComponentScoreModel.points_earned, GradeComponentModel.total_points)
        .join(GradeComponentModel, GradeComponentModel.id == ComponentScoreModel.grade_component_id)
        .filter(ComponentScoreModel.course_id == course_id, ComponentScoreModel.student_id == student_id)
        .all()
    )
    progress = summarize_progress(rows)
    logger.debug(f"구성요소 진행률 계산: course={course_id} student={student_id} {progress['percentage']}%")
    return {"student_id": student_id, "course_id": course_id, **progress}
