from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.db import get_db
from models.assignment_submissions import AssignmentSubmission as SubmissionModel
from models.assignments import Assignment as AssignmentModel
from models.enrollments import Enrollment as EnrollmentModel
from models.enums import EnrollmentStatus, SubmissionStatus
from schemas.submissions import (
    MarkCompleted,
    Submission as SubmissionSchema,
    SubmissionCreate,
    SubmissionUpdate,
)
from services import submission_service

router = APIRouter(prefix="/submissions", tags=["과제 제출"])


def _dump(submission):
    return SubmissionSchema.model_validate(submission).model_dump(mode="json")


def _check_enrolled(db: Session, student_id: int, assignment: AssignmentModel):
    """과제 과목을 수강 중(active)이 아니면 에러 응답, 정상이면 None"""
    enrollment = (
        db.query(EnrollmentModel)
        .filter(
            EnrollmentModel.student_id == student_id,
            EnrollmentModel.course_id == assignment.course_id,
            EnrollmentModel.status == EnrollmentStatus.ACTIVE,
        )
        .first()
    )
    if enrollment is None:
        return {"success": False, "error": {"code": 403, "message": "Student is not enrolled in this course"}}
    return None


def _find(db: Session, student_id: int, assignment_id: int):
    return (
        db.query(SubmissionModel)
        .filter(SubmissionModel.student_id == student_id, SubmissionModel.assignment_id == assignment_id)
        .first()
    )


# ==========================================================
# [1단계] 제출 / 완료 처리
# ==========================================================

# ✅ [CREATE] 과제 제출 (학생당 과제 1건)
@router.post("/")
def create_submission(submission: SubmissionCreate, db: Session = Depends(get_db)):
    assignment = db.get(AssignmentModel, submission.assignment_id)
    if assignment is None:
        return {"success": False, "error": {"code": 404, "message": "Assignment not found"}}
    error = _check_enrolled(db, submission.student_id, assignment)
    if error:
        return error
    if _find(db, submission.student_id, submission.assignment_id):
        return {"success": False, "error": {"code": 409, "message": "Submission already exists"}}

    db_submission = SubmissionModel(
        student_id=submission.student_id,
        assignment_id=submission.assignment_id,
        notes=submission.notes,
    )
    submission_service.apply_status(db_submission, submission.status, assignment)
    db.add(db_submission)
    submission_service.sync_grade(db, db_submission)
    db.commit()
    db.refresh(db_submission)
    return {"success": True, "data": _dump(db_submission), "message": "Submission created successfully"}


# ✅ [UPDATE] 완료 처리 (제출 기록이 없으면 생성 후 완료)
@router.post("/complete")
def mark_completed(body: MarkCompleted, db: Session = Depends(get_db)):
    assignment = db.get(AssignmentModel, body.assignment_id)
    if assignment is None:
        return {"success": False, "error": {"code": 404, "message": "Assignment not found"}}

    submission = _find(db, body.student_id, body.assignment_id)
    if submission is None:
        error = _check_enrolled(db, body.student_id, assignment)
        if error:
            return error
        submission = SubmissionModel(student_id=body.student_id, assignment_id=body.assignment_id)
        db.add(submission)

    submission_service.apply_status(submission, SubmissionStatus.COMPLETED, assignment)
    submission_service.sync_grade(db, submission)
    db.commit()
    db.refresh(submission)
    return {"success": True, "data": _dump(submission), "message": "Submission marked as completed"}


# ==========================================================
# [2단계] 조회 / 수정
# ==========================================================

# ✅ [READ] 학생별 제출 목록 (최근 순)
@router.get("/student/{student_id}")
def read_student_submissions(student_id: int, db: Session = Depends(get_db)):
    records = (
        db.query(SubmissionModel)
        .filter(SubmissionModel.student_id == student_id)
        .order_by(SubmissionModel.id.desc())
        .all()
    )
    return {"success": True, "data": [_dump(r) for r in records]}


# ✅ [READ] 과제별 제출 목록
@router.get("/assignment/{assignment_id}")
def read_assignment_submissions(assignment_id: int, db: Session = Depends(get_db)):
    if db.get(AssignmentModel, assignment_id) is None:
        return {"success": False, "error": {"code": 404, "message": "Assignment not found"}}
    records = (
        db.query(SubmissionModel)
        .filter(SubmissionModel.assignment_id == assignment_id)
        .order_by(SubmissionModel.id.desc())
        .all()
    )
    return {"success": True, "data": [_dump(r) for r in records]}


# ✅ [READ] 특정 제출 조회
@router.get("/{submission_id}")
def read_submission(submission_id: int, db: Session = Depends(get_db)):
    submission = db.get(SubmissionModel, submission_id)
    if submission is None:
        return {"success": False, "error": {"code": 404, "message": "Submission not found"}}
    return {"success": True, "data": _dump(submission)}


# ✅ [UPDATE] 제출 상태/메모 수정
@router.put("/{submission_id}")
def update_submission(submission_id: int, updated: SubmissionUpdate, db: Session = Depends(get_db)):
    submission = db.get(SubmissionModel, submission_id)
    if submission is None:
        return {"success": False, "error": {"code": 404, "message": "Submission not found"}}

    changes = updated.model_dump(exclude_unset=True)
    if "notes" in changes:
        submission.notes = changes["notes"]
    if changes.get("status") is not None:
        assignment = db.get(AssignmentModel, submission.assignment_id)
        submission_service.apply_status(submission, changes["status"], assignment)
        submission_service.sync_grade(db, submission)

    db.commit()
    db.refresh(submission)
    return {"success": True, "data": _dump(submission), "message": "Submission updated successfully"}
