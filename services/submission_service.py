"""
services/submission_service.py

- 과제 제출 상태 변경 시 제출/완료 시각과 지각 여부를 채움
- 제출 상태를 같은 과제의 성적(grades.is_submitted)에 반영
"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from models.assignment_submissions import AssignmentSubmission as SubmissionModel
from models.assignments import Assignment as AssignmentModel
from models.enums import SubmissionStatus
from models.grades import Grade as GradeModel


def is_late(due_date: Optional[datetime], at: datetime) -> bool:
    if due_date is None:
        return False
    if due_date.tzinfo is not None:
        at = at.astimezone(due_date.tzinfo) if at.tzinfo else at.replace(tzinfo=due_date.tzinfo)
    return at > due_date


def apply_status(
    submission: SubmissionModel,
    status: SubmissionStatus,
    assignment: AssignmentModel,
    now: Optional[datetime] = None,
):
    """상태 반영. 최초 제출 시각/지각 여부는 처음 한 번만 기록"""
    now = now or datetime.now()
    submission.status = status
    if status != SubmissionStatus.NOT_SUBMITTED and submission.submitted_at is None:
        submission.submitted_at = now
        submission.is_late = is_late(assignment.due_date, now)
    if status == SubmissionStatus.COMPLETED:
        submission.completed_at = now


def sync_grade(db: Session, submission: SubmissionModel) -> Optional[GradeModel]:
    grade = (
        db.query(GradeModel)
        .filter(
            GradeModel.student_id == submission.student_id,
            GradeModel.assignment_id == submission.assignment_id,
        )
        .first()
    )
    if grade is not None:
        grade.is_submitted = submission.status != SubmissionStatus.NOT_SUBMITTED
    return grade


def has_submitted(db: Session, student_id: int, assignment_id: int) -> Optional[bool]:
    """제출 기록이 없으면 None"""
    submission = (
        db.query(SubmissionModel)
        .filter(SubmissionModel.student_id == student_id, SubmissionModel.assignment_id == assignment_id)
        .first()
    )
    if submission is None:
        return None
    return submission.status != SubmissionStatus.NOT_SUBMITTED
