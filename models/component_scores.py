from sqlalchemy import Column, Integer, Float, Text, Boolean, DateTime, ForeignKey, UniqueConstraint, func
from database.db import Base

class ComponentScore(Base):
    __tablename__ = "component_scores"  # 구성요소 단위 점수 (과제 없이 직접 입력하는 점수)
    __table_args__ = (
        UniqueConstraint("student_id", "grade_component_id", name="uq_component_score_student_component"),
    )

    id = Column(Integer, primary_key=True, index=True)                         # 점수 고유 ID (PK)
    student_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)        # 학생 ID
    grade_component_id = Column(
        Integer, ForeignKey("grade_components.id", ondelete="CASCADE"), nullable=False
    )                                                                          # 구성요소 ID (구성요소 삭제 시 함께 삭제)
    course_id = Column(
        Integer, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True
    )                                                                          # 과목 ID (조회용 중복 저장)
    points_earned = Column(Float, nullable=False)                              # 획득 점수 (0 ~ 구성요소 total_points)
    feedback = Column(Text)                                                    # 피드백
    is_submitted = Column(Boolean, nullable=False, default=True)               # 제출 여부
    is_graded = Column(Boolean, nullable=False, default=False)                 # 채점 완료 여부
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
