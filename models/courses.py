from sqlalchemy import Column, Integer, String, Float, Boolean, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from database.db import Base

# ✅ 관계 대상 모델 import (cascade 대상)
from models.grade_components import GradeComponent as GradeComponentModel
from models.grade_bands import GradeBand as GradeBandModel

class Course(Base):
    __tablename__ = "courses"  # 과목 정보 테이블

    id = Column(Integer, primary_key=True, index=True)               # 과목 고유 ID (PK)
    code = Column(String(20), nullable=False)                        # 과목 코드 (예: CS101)
    name = Column(String(100), nullable=False)                       # 과목 이름
    description = Column(Text)                                       # 과목 설명
    credits = Column(Integer, nullable=False, default=3)             # 학점
    passing_grade = Column(Float, nullable=False, default=50.0)      # 통과 기준 점수 (%)
    is_active = Column(Boolean, nullable=False, default=True)        # 개설 여부
    professor_id = Column(Integer, ForeignKey("users.id"))           # 담당 교수 ID (FK)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # ==========================================================
    # [관계 설정]
    # ==========================================================

    # ✅ 성적 구성요소 / 등급 구간 (1:N)
    #    - 과목 삭제 시 함께 삭제 (DB의 ON DELETE CASCADE와 동일하게 ORM에서도 처리)
    grade_components = relationship(
        GradeComponentModel,
        backref="course",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by=GradeComponentModel.id,
    )
    grade_bands = relationship(
        GradeBandModel,
        backref="course",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by=GradeBandModel.min_score,
    )
