from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.db import get_db
from models.assignments import Assignment as AssignmentModel, AssignmentFile as AssignmentFileModel
from models.courses import Course as CourseModel
from models.enums import AssignmentStatus, AssignmentType
from models.grades import Grade as GradeModel
from schemas.assignments import (
    Assignment as AssignmentSchema,
    AssignmentCreate,
    AssignmentFileCreate,
    AssignmentStatusUpdate,
    AssignmentUpdate,
)
from services.assignment_lifecycle import check_transition

router = APIRouter(prefix="/assignments", tags=["과제"])


def _dump(assignment):
    return AssignmentSchema.model_validate(assignment).model_dump(mode="json")


# ==========================================================
# [1단계] CRUD 기본 라우터
# ==========================================================

# ✅ [CREATE] 과제 추가 (항상 draft 상태로 생성)
@router.post("/")
def create_assignment(assignment: AssignmentCreate, db: Session = Depends(get_db)):
    if db.get(CourseModel, assignment.course_id) is None:
        return {"success": False, "error": {"code": 404, "message": "Course not found"}}

    db_assignment = AssignmentModel(**assignment.model_dump(exclude={"files"}))
    db_assignment.files = [AssignmentFileModel(**f.model_dump()) for f in assignment.files]
    db.add(db_assignment)
    db.commit()
    db.refresh(db_assignment)
    return {"success": True, "data": _dump(db_assignment), "message": "Assignment created successfully"}


# ✅ [READ] 과제 목록 (과목/유형/상태 필터)
@router.get("/")
def read_assignments(
    course_id: int = None,
    type: AssignmentType = None,
    status: AssignmentStatus = None,
    db: Session = Depends(get_db),
):
    query = db.query(AssignmentModel)
    if course_id is not None:
        query = query.filter(AssignmentModel.course_id == course_id)
    if type:
        query = query.filter(AssignmentModel.type == type)
    if status:
        query = query.filter(AssignmentModel.status == status)

    # 마감일 순, 마감일 없는 과제는 뒤로
    records = query.order_by(AssignmentModel.due_date.is_(None), AssignmentModel.due_date, AssignmentModel.id).all()
    return {"success": True, "data": [_dump(r) for r in records]}


# ==========================================================
# [2단계] 동적 라우터
# ==========================================================

# ✅ [READ] 특정 과제 조회
@router.get("/{assignment_id}")
def read_assignment(assignment_id: int, db: Session = Depends(get_db)):
    assignment = db.get(AssignmentModel, assignment_id)
    if assignment is None:
        return {"success": False, "error": {"code": 404, "message": "Assignment not found"}}
    return {"success": True, "data": _dump(assignment)}


# ✅ [UPDATE] 과제 수정
@router.put("/{assignment_id}")
def update_assignment(assignment_id: int, updated: AssignmentUpdate, db: Session = Depends(get_db)):
    assignment = db.get(AssignmentModel, assignment_id)
    if assignment is None:
        return {"success": False, "error": {"code": 404, "message": "Assignment not found"}}

    for key, value in updated.model_dump(exclude_unset=True).items():
        setattr(assignment, key, value)
    db.commit()
    db.refresh(assignment)
    return {"success": True, "data": _dump(assignment), "message": "Assignment updated successfully"}


# ✅ [UPDATE] 과제 상태 변경 (앞 단계로만 이동, 잘못된 변경은 409)
@router.patch("/{assignment_id}/status")
def update_assignment_status(assignment_id: int, updated: AssignmentStatusUpdate, db: Session = Depends(get_db)):
    assignment = db.get(AssignmentModel, assignment_id)
    if assignment is None:
        return {"success": False, "error": {"code": 404, "message": "Assignment not found"}}

    assignment.status = check_transition(assignment.status, updated.status)
    db.commit()
    db.refresh(assignment)
    return {"success": True, "data": _dump(assignment), "message": f"Assignment is now {assignment.status.value}"}


# ✅ [CREATE] 첨부파일 메타데이터 추가
@router.post("/{assignment_id}/files")
def add_assignment_file(assignment_id: int, file: AssignmentFileCreate, db: Session = Depends(get_db)):
    assignment = db.get(AssignmentModel, assignment_id)
    if assignment is None:
        return {"success": False, "error": {"code": 404, "message": "Assignment not found"}}

    assignment.files.append(AssignmentFileModel(**file.model_dump()))
    db.commit()
    db.refresh(assignment)
    return {"success": True, "data": _dump(assignment)}


# ✅ [DELETE] 과제 삭제 (첨부파일은 cascade 삭제)
@router.delete("/{assignment_id}")
def delete_assignment(assignment_id: int, db: Session = Depends(get_db)):
    assignment = db.get(AssignmentModel, assignment_id)
    if assignment is None:
        return {"success": False, "error": {"code": 404, "message": "Assignment not found"}}
    if db.query(GradeModel).filter(GradeModel.assignment_id == assignment_id).first():
        return {"success": False, "error": {"code": 409, "message": "Assignment already has grades"}}

    db.delete(assignment)
    db.commit()
    return {"success": True, "data": {"assignment_id": assignment_id, "message": "Assignment deleted successfully"}}
