from sqlalchemy import Column, Integer, String, Float, ForeignKey
from database.db import Base

class GradeBand(Base):
    __tablename__ = "grade_bands"  # 과목별 등급 구간 테이블

    id = Column(Integer, primary_key=True, index=True)                         # 등급 구간 고유 ID (PK)
    course_id = Column(
        Integer, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True
    )                                                                          # 과목 ID (과목 삭제 시 함께 삭제)
    min_score = Column(Float, nullable=False)                                  # 구간 최저 점수 (포함)
    max_score = Column(Float, nullable=False)                                  # 구간 최고 점수 (포함)
    grade_value = Column(Integer, nullable=False)                              # 등급 값 (예: 0, 1, 2)
    grade_letter = Column(String(10))                                          # 등급 문자 (예: A, B, F)
