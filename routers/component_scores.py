from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.db import get_db
from models.component_scores import ComponentScore as ComponentScoreModel
from models.enrollments import Enrollment as EnrollmentModel
from models.enums import EnrollmentStatus
from models.grade_components import GradeComponent as GradeComponentModel
from schemas.component_scores import (
    ComponentProgress,
    ComponentScore as ComponentScoreSchema,
    ComponentScoreCreate,
    ComponentScoreUpdate,
)
from services import component_score_service

router = APIRouter(prefix="/component-scores", tags=["구성요소 점수"])


def _dump(score):
    return ComponentScoreSchema.model_validate(score).model_dump(mode="json")


def _not_found():
    return {"success": False, "error": {"code": 404, "message": "Component score not found"}}


# ==========================================================
# [1단계] CRUD 기본 라우터
# ==========================================================

# ✅ [CREATE] 구성요소 점수 등록
#    - 과목 ID는 구성요소에서 가져옴
#    - 해당 과목을 수강 중(active)인 학생만 가능
#    - 점수가 0 ~ total_points 를 벗어나면 422 (SCORE_OUT_OF_RANGE)
@router.post("/")
def create_component_score(score: ComponentScoreCreate, db: Session = Depends(get_db)):
    component = db.get(GradeComponentModel, score.grade_component_id)
    if component is None:
        return {"success": False, "error": {"code": 404, "message": "Grade component not found"}}

    enrollment = (
        db.query(EnrollmentModel)
        .filter(
            EnrollmentModel.student_id == score.student_id,
            EnrollmentModel.course_id == component.course_id,
            EnrollmentModel.status == EnrollmentStatus.ACTIVE,
        )
        .first()
    )
    if enrollment is None:
        return {"success": False, "error": {"code": 403, "message": "Student is not enrolled in this course"}}

    existing = (
        db.query(ComponentScoreModel)
        .filter(
            ComponentScoreModel.student_id == score.student_id,
            ComponentScoreModel.grade_component_id == score.grade_component_id,
        )
        .first()
    )
    if existing:
        return {"success": False, "error": {"code": 409, "message": "Component score already exists"}}

    component_score_service.check_points(score.points_earned, component)

    db_score = ComponentScoreModel(course_id=component.course_id, **score.model_dump())
    db.add(db_score)
    db.commit()
    db.refresh(db_score)
    return {"success": True, "data": _dump(db_score), "message": "Component score created successfully"}


# ✅ [READ] 구성요소 점수 목록 (학생/과목/구성요소 필터)
@router.get("/")
def read_component_scores(
    student_id: int = None,
    course_id: int = None,
    grade_component_id: int = None,
    db: Session = Depends(get_db),
):
    query = db.query(ComponentScoreModel)
    if student_id is not None:
        query = query.filter(ComponentScoreModel.student_id == student_id)
    if course_id is not None:
        query = query.filter(ComponentScoreModel.course_id == course_id)
    if grade_component_id is not None:
        query = query.filter(ComponentScoreModel.grade_component_id == grade_component_id)
    records = query.order_by(ComponentScoreModel.id).all()
    return {"success": True, "data": [_dump(r) for r in records]}


# ✅ [READ] 학생의 과목 내 구성요소 진행률
@router.get("/progress")
def read_component_progress(course_id: int, student_id: int, db: Session = Depends(get_db)):
    progress = component_score_service.get_component_progress(db, course_id, student_id)
    return {"success": True, "data": ComponentProgress(**progress).model_dump()}


# ==========================================================
# [2단계] 동적 라우터
# ==========================================================

# ✅ [READ] 특정 구성요소 점수 조회
@router.get("/{score_id}")
def read_component_score(score_id: int, db: Session = Depends(get_db)):
    score = db.get(ComponentScoreModel, score_id)
    if score is None:
        return _not_found()
    return {"success": True, "data": _dump(score)}


# ✅ [UPDATE] 점수/피드백 수정 (보낸 필드만 반영)
@router.put("/{score_id}")
def update_component_score(score_id: int, updated: ComponentScoreUpdate, db: Session = Depends(get_db)):
    score = db.get(ComponentScoreModel, score_id)
    if score is None:
        return _not_found()

    changes = updated.model_dump(exclude_unset=True, exclude_none=True)
    if "points_earned" in changes:
        component = db.get(GradeComponentModel, score.grade_component_id)
        component_score_service.check_points(changes["points_earned"], component)

    for key, value in changes.items():
        setattr(score, key, value)

    db.commit()
    db.refresh(score)
    return {"success": True, "data": _dump(score), "message": "Component score updated successfully"}


# ✅ [DELETE] 구성요소 점수 삭제
@router.delete("/{score_id}")
def delete_component_score(score_id: int, db: Session = Depends(get_db)):
    score = db.get(ComponentScoreModel, score_id)
    if score is None:
        return _not_found()

    db.delete(score)
    db.commit()
    return {"success": True, "data": {"score_id": score_id, "message": "Component score deleted successfully"}}
