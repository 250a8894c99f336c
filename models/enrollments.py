from sqlalchemy import Column, Integer, DateTime, ForeignKey, Enum, UniqueConstraint, func
from database.db import Base
from models.enums import EnrollmentStatus

class Enrollment(Base):
    __tablename__ = "enrollments"  # 수강 신청 테이블
    __table_args__ = (UniqueConstraint("student_id", "course_id", name="uq_enrollment_student_course"),)

    id = Column(Integer, primary_key=True, index=True)                         # 수강 고유 ID (PK)
    student_id = Column(Integer, ForeignKey("users.id"), nullable=False)       # 학생 ID (FK)
    course_id = Column(
        Integer, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False
    )                                                                          # 과목 ID (과목 삭제 시 함께 삭제)
    status = Column(
        Enum(EnrollmentStatus, name="enrollments_status_enum", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=EnrollmentStatus.ACTIVE,
    )                                                                          # 수강 상태 (active / completed / dropped)
    enrolled_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
