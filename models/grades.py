from sqlalchemy import Column, Integer, Float, Text, Boolean, DateTime, ForeignKey, UniqueConstraint, func
from database.db import Base

class Grade(Base):
    __tablename__ = "grades"  # 과제별 채점 결과 테이블
    __table_args__ = (UniqueConstraint("student_id", "assignment_id", name="uq_grade_student_assignment"),)

    id = Column(Integer, primary_key=True, index=True)                         # 성적 고유 ID (PK)
    student_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)        # 학생 ID
    assignment_id = Column(Integer, ForeignKey("assignments.id"), nullable=False)           # 과제 ID
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False, index=True)       # 과목 ID (조회용 중복 저장)
    score = Column(Float, nullable=False)                                      # 획득 점수
    max_score = Column(Float)                                                  # 만점 (비어 있으면 과제 만점 사용)
    feedback = Column(Text)                                                    # 피드백
    is_submitted = Column(Boolean, nullable=False, default=False)              # 제출 여부
    is_graded = Column(Boolean, nullable=False, default=False)                 # 채점 완료 여부 (True일 때만 집계)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
