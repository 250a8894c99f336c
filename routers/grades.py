from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.db import get_db
from models.assignments import Assignment as AssignmentModel
from models.grades import Grade as GradeModel
from models.users import User as UserModel
from schemas.common import Pagination, make_meta
from schemas.grades import Grade as GradeSchema, GradeCreate, GradeUpdate
from services import submission_service

router = APIRouter(prefix="/grades", tags=["grades"])


def _dump(grade):
    return GradeSchema.model_validate(grade).model_dump(mode="json")


# ==========================================================
# [1단계] CRUD 기본 라우터
# ==========================================================

# ✅ [CREATE] 성적(제출) 등록
#    - 과목 ID는 과제에서 가져와 중복 저장
#    - 만점을 비워두면 과제 만점 사용
#    - 제출 여부를 보내지 않으면 제출 기록(submissions)을 따름
@router.post("/")
def create_grade(grade: GradeCreate, db: Session = Depends(get_db)):
    assignment = db.get(AssignmentModel, grade.assignment_id)
    if assignment is None:
        return {"success": False, "error": {"code": 404, "message": "Assignment not found"}}
    if db.get(UserModel, grade.student_id) is None:
        return {"success": False, "error": {"code": 404, "message": "Student not found"}}

    existing = (
        db.query(GradeModel)
        .filter(GradeModel.student_id == grade.student_id, GradeModel.assignment_id == grade.assignment_id)
        .first()
    )
    if existing:
        return {"success": False, "error": {"code": 409, "message": "Grade already exists for this assignment"}}

    data = grade.model_dump()
    if data["max_score"] is None:
        data["max_score"] = assignment.max_score
    if "is_submitted" not in grade.model_fields_set:
        submitted = submission_service.has_submitted(db, grade.student_id, grade.assignment_id)
        if submitted is not None:
            data["is_submitted"] = submitted
    db_grade = GradeModel(course_id=assignment.course_id, **data)
    db.add(db_grade)
    db.commit()
    db.refresh(db_grade)
    return {"success": True, "data": _dump(db_grade), "message": "Grade created successfully"}


# ✅ [READ] 성적 목록 (학생/과목 필터 + 페이징)
@router.get("/")
def read_grades(
    student_id: int = None,
    course_id: int = None,
    p: Pagination = Depends(),
    db: Session = Depends(get_db),
):
    query = db.query(GradeModel)
    if student_id is not None:
        query = query.filter(GradeModel.student_id == student_id)
    if course_id is not None:
        query = query.filter(GradeModel.course_id == course_id)

    total = query.count()
    records = query.order_by(GradeModel.id).offset((p.page - 1) * p.size).limit(p.size).all()
    return {
        "success": True,
        "data": [_dump(r) for r in records],
        "meta": make_meta(total, p.page, p.size).model_dump(),
    }


# ==========================================================
# [2단계] 동적 라우터
# ==========================================================

# ✅ [READ] 특정 성적 조회
@router.get("/{grade_id}")
def read_grade(grade_id: int, db: Session = Depends(get_db)):
    grade = db.get(GradeModel, grade_id)
    if grade is None:
        return {"success": False, "error": {"code": 404, "message": "Grade not found"}}
    return {"success": True, "data": _dump(grade)}


# ✅ [UPDATE] 채점/피드백 수정 (보낸 필드만 반영)
@router.put("/{grade_id}")
def update_grade(grade_id: int, updated: GradeUpdate, db: Session = Depends(get_db)):
    grade = db.get(GradeModel, grade_id)
    if grade is None:
        return {"success": False, "error": {"code": 404, "message": "Grade not found"}}

    for key, value in updated.model_dump(exclude_unset=True).items():
        setattr(grade, key, value)

    db.commit()
    db.refresh(grade)
    return {"success": True, "data": _dump(grade), "message": "Grade updated successfully"}


# ✅ [DELETE] 성적 삭제
@router.delete("/{grade_id}")
def delete_grade(grade_id: int, db: Session = Depends(get_db)):
    grade = db.get(GradeModel, grade_id)
    if grade is None:
        return {"success": False, "error": {"code": 404, "message": "Grade not found"}}

    db.delete(grade)
    db.commit()
    return {"success": True, "data": {"grade_id": grade_id, "message": "Grade deleted successfully"}}
