"""
집계기가 읽는 스냅샷 레코드.

- ORM 객체에서 model_validate(obj)로 바로 만들 수 있도록 from_attributes 사용
- frozen: 집계 도중 입력이 바뀌지 않음을 보장
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from models.enums import AssignmentType, ComponentType, PassingStatus


class _Record(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)


class GradeRecord(_Record):
    id: Optional[int] = None
    student_id: Optional[int] = None
    course_id: Optional[int] = None
    assignment_id: int
    score: float
    max_score: Optional[float] = None        # 과제별 만점 덮어쓰기
    is_graded: bool = False


class AssignmentRecord(_Record):
    id: int
    course_id: Optional[int] = None
    type: AssignmentType
    max_score: Optional[float] = None


class ComponentRecord(_Record):
    id: Optional[int] = None
    name: str
    type: ComponentType
    weight: float
    minimum_score: float = 0.0
    total_points: float = 100.0
    is_mandatory: bool = False


class BandRecord(_Record):
    id: Optional[int] = None
    min_score: float
    max_score: float
    grade_value: int
    grade_letter: Optional[str] = None


# =========================================================
# 집계 결과
# =========================================================

class ScoreWarning(BaseModel):
    """만점 초과 등 데이터 무결성 경고 (ScoreOutOfRangeError를 직렬화한 형태)"""
    code: str
    message: str
    assignment_id: Optional[int] = None
    grade_id: Optional[int] = None
    score: float
    effective_max: float
    clamped_percentage: float


class ComponentScore(BaseModel):
    component_id: Optional[int] = None
    name: str
    type: ComponentType
    weight: float
    average: float = Field(..., description="구성요소 내 정규화 점수 평균 (0~100)")
    weighted: float = Field(..., description="최종 점수에 반영된 값 (average * weight / 100)")
    graded_items: int
    total_assignments: int
    is_mandatory: bool
    below_minimum: bool


class FinalScore(BaseModel):
    student_id: Optional[int] = None
    course_id: Optional[int] = None
    final_percentage: float
    components: List[ComponentScore] = []
    warnings: List[ScoreWarning] = []


class CourseGradeResult(FinalScore):
    grade_value: int
    band: BandRecord
    passing_status: PassingStatus = PassingStatus.UNKNOWN
