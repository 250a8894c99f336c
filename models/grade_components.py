from sqlalchemy import Column, Integer, String, Float, Boolean, ForeignKey, Enum
from database.db import Base
from models.enums import ComponentType

class GradeComponent(Base):
    __tablename__ = "grade_components"  # 과목별 성적 구성요소 (평가 비율)

    id = Column(Integer, primary_key=True, index=True)                         # 구성요소 고유 ID (PK)
    course_id = Column(
        Integer, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True
    )                                                                          # 과목 ID (과목 삭제 시 함께 삭제)
    name = Column(String(100), nullable=False)                                 # 구성요소 이름 (예: 실습, 기말고사)
    type = Column(
        Enum(ComponentType, name="grade_components_type_enum", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )                                                                          # 분류 (Lab / Assignment / Midterm / Exam / Project)
    weight = Column(Float, nullable=False)                                     # 반영 비율 (%) — 과목 내 합계 100
    minimum_score = Column(Float, nullable=False, default=0.0)                 # 최소 기준 점수 (미달 시 표시)
    total_points = Column(Float, nullable=False, default=100.0)                # 만점 (점수 정규화 기준)
    is_mandatory = Column(Boolean, nullable=False, default=False)              # 필수 여부
