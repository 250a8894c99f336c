from datetime import datetime
from pydantic import BaseModel, Field
from typing import List, Optional
from models.enums import AssignmentType, AssignmentStatus

# ✅ 첨부파일 메타데이터 (파일 저장은 외부에서 처리)
class AssignmentFileCreate(BaseModel):
    original_name: str
    file_name: str
    file_path: str
    mime_type: str
    size: int = Field(..., ge=0)

class AssignmentFile(AssignmentFileCreate):
    id: int
    assignment_id: int

    class Config:
        from_attributes = True


# ✅ 입력용: 과제 생성
class AssignmentCreate(BaseModel):
    course_id: int                                   # 과목 ID
    created_by_id: Optional[int] = None              # 출제 교수 ID
    title: str                                       # 과제 제목
    description: Optional[str] = None
    type: AssignmentType                             # 유형 (lab / assignment / quiz / exam / project)
    max_score: float = Field(..., gt=0)              # 만점
    weight: float = Field(0.0, ge=0, le=100)         # 반영 비율 (참고용)
    due_date: Optional[datetime] = None              # 마감일
    files: List[AssignmentFileCreate] = []

# ✅ 입력용: 과제 수정 (상태는 /status 로만 변경)
class AssignmentUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    max_score: Optional[float] = Field(None, gt=0)
    weight: Optional[float] = Field(None, ge=0, le=100)
    due_date: Optional[datetime] = None

# ✅ 입력용: 상태 변경
class AssignmentStatusUpdate(BaseModel):
    status: AssignmentStatus

# ✅ 출력용
class Assignment(BaseModel):
    id: int
    course_id: int
    created_by_id: Optional[int] = None
    title: str
    description: Optional[str] = None
    type: AssignmentType
    max_score: float
    weight: float
    due_date: Optional[datetime] = None
    status: AssignmentStatus
    files: List[AssignmentFile] = []

    class Config:
        from_attributes = True
