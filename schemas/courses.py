from pydantic import BaseModel, Field
from typing import List, Optional
from models.enums import ComponentType

# ✅ 입력용: 성적 구성요소
class GradeComponentCreate(BaseModel):
    name: str                                                  # 구성요소 이름
    type: ComponentType                                        # 분류 (Lab / Assignment / Midterm / Exam / Project)
    weight: float = Field(..., ge=0, le=100)                   # 반영 비율 (%)
    minimum_score: float = Field(0.0, ge=0, le=100)            # 최소 기준 점수
    total_points: float = Field(100.0, gt=0)                   # 만점
    is_mandatory: bool = False                                 # 필수 여부

# ✅ 출력용
class GradeComponent(GradeComponentCreate):
    id: int
    course_id: int

    class Config:
        from_attributes = True


# ✅ 입력용: 등급 구간
class GradeBandCreate(BaseModel):
    min_score: float = Field(..., ge=0, le=100)                # 구간 최저 점수 (포함)
    max_score: float = Field(..., ge=0, le=100)                # 구간 최고 점수 (포함)
    grade_value: int                                           # 등급 값
    grade_letter: Optional[str] = None                         # 등급 문자 (예: A, B)

# ✅ 출력용
class GradeBand(GradeBandCreate):
    id: int
    course_id: int

    class Config:
        from_attributes = True


# ✅ 입력용: 과목 생성 (구성요소/등급 구간을 한 번에 등록 가능)
class CourseCreate(BaseModel):
    code: str                                                  # 과목 코드
    name: str                                                  # 과목 이름
    description: Optional[str] = None
    credits: int = 3                                           # 학점
    passing_grade: Optional[float] = Field(None, ge=0, le=100) # 통과 기준 (비우면 설정 기본값)
    professor_id: Optional[int] = None                         # 담당 교수 ID
    grade_components: List[GradeComponentCreate] = []
    grade_bands: List[GradeBandCreate] = []

# ✅ 입력용: 과목 수정 (기본 정보만)
class CourseUpdate(BaseModel):
    code: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    credits: Optional[int] = None
    passing_grade: Optional[float] = Field(None, ge=0, le=100)
    is_active: Optional[bool] = None

# ✅ 출력용
class Course(BaseModel):
    id: int
    code: str
    name: str
    description: Optional[str] = None
    credits: int
    passing_grade: float
    is_active: bool
    professor_id: Optional[int] = None
    grade_components: List[GradeComponent] = []
    grade_bands: List[GradeBand] = []

    class Config:
        from_attributes = True
