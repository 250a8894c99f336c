from datetime import datetime
from pydantic import BaseModel
from typing import Optional
from models.enums import SubmissionStatus

# ✅ 입력용: 과제 제출
class SubmissionCreate(BaseModel):
    student_id: int
    assignment_id: int
    notes: Optional[str] = None
    status: SubmissionStatus = SubmissionStatus.SUBMITTED

# ✅ 입력용: 상태/메모 수정
class SubmissionUpdate(BaseModel):
    status: Optional[SubmissionStatus] = None
    notes: Optional[str] = None

# ✅ 입력용: 완료 처리 (제출 기록이 없으면 새로 생성)
class MarkCompleted(BaseModel):
    student_id: int
    assignment_id: int

# ✅ 출력용
class Submission(BaseModel):
    id: int
    student_id: int
    assignment_id: int
    status: SubmissionStatus
    notes: Optional[str] = None
    submitted_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    is_late: bool

    class Config:
        from_attributes = True
