from pydantic import BaseModel, Field
from typing import Optional

# ✅ 입력용: 성적(제출/채점) 등록
class GradeCreate(BaseModel):
    student_id: int                                  # 학생 ID
    assignment_id: int                               # 과제 ID
    score: float = 0.0                               # 획득 점수
    max_score: Optional[float] = Field(None, gt=0)   # 만점 (비우면 과제 만점)
    feedback: Optional[str] = None                   # 피드백
    is_submitted: bool = True                        # 제출 여부
    is_graded: bool = False                          # 채점 완료 여부

# ✅ 입력용: 채점/피드백 수정
class GradeUpdate(BaseModel):
    score: Optional[float] = None
    max_score: Optional[float] = Field(None, gt=0)
    feedback: Optional[str] = None
    is_submitted: Optional[bool] = None
    is_graded: Optional[bool] = None

# ✅ 출력용
class Grade(BaseModel):
    id: int                                          # 성적 고유 ID
    student_id: int                                  # 학생 ID
    assignment_id: int                               # 과제 ID
    course_id: int                                   # 과목 ID
    score: float                                     # 획득 점수
    max_score: Optional[float] = None                # 만점
    feedback: Optional[str] = None                   # 피드백
    is_submitted: bool
    is_graded: bool

    class Config:
        from_attributes = True
