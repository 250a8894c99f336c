from sqlalchemy import Column, Integer, Text, Boolean, DateTime, ForeignKey, Enum, UniqueConstraint, func
from database.db import Base
from models.enums import SubmissionStatus

class AssignmentSubmission(Base):
    __tablename__ = "assignment_submissions"  # 학생별 과제 제출 현황
    __table_args__ = (
        UniqueConstraint("student_id", "assignment_id", name="uq_submission_student_assignment"),
    )

    id = Column(Integer, primary_key=True, index=True)                         # 제출 고유 ID (PK)
    student_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)        # 학생 ID
    assignment_id = Column(
        Integer, ForeignKey("assignments.id", ondelete="CASCADE"), nullable=False, index=True
    )                                                                          # 과제 ID (과제 삭제 시 함께 삭제)
    status = Column(
        Enum(SubmissionStatus, name="submissions_status_enum", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=SubmissionStatus.NOT_SUBMITTED,
    )                                                                          # 제출 상태
    notes = Column(Text)                                                       # 학생 메모
    submitted_at = Column(DateTime)                                            # 최초 제출 시각
    completed_at = Column(DateTime)                                            # 완료 처리 시각
    is_late = Column(Boolean, nullable=False, default=False)                   # 마감 이후 제출 여부
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
