from pydantic import BaseModel, Field
from typing import Optional

# ✅ 입력용: 구성요소 점수 등록
class ComponentScoreCreate(BaseModel):
    student_id: int                                  # 학생 ID
    grade_component_id: int                          # 구성요소 ID
    points_earned: float = Field(..., ge=0)          # 획득 점수
    feedback: Optional[str] = None
    is_submitted: bool = True
    is_graded: bool = False

# ✅ 입력용: 점수/피드백 수정
class ComponentScoreUpdate(BaseModel):
    points_earned: Optional[float] = Field(None, ge=0)
    feedback: Optional[str] = None
    is_submitted: Optional[bool] = None
    is_graded: Optional[bool] = None

# ✅ 출력용
class ComponentScore(BaseModel):
    id: int
    student_id: int
    grade_component_id: int
    course_id: int
    points_earned: float
    feedback: Optional[str] = None
    is_submitted: bool
    is_graded: bool

    class Config:
        from_attributes = True


# ✅ 출력용: 학생의 과목 내 구성요소 진행률
class ComponentProgress(BaseModel):
    student_id: int
    course_id: int
    total_components: int                            # 점수가 등록된 구성요소 수
    completed_components: int                        # 0점 초과 구성요소 수
    total_points_earned: float
    total_possible_points: float                     # 구성요소 total_points 합
    percentage: float                                # 획득 / 가능 * 100 (소수 둘째 자리)
