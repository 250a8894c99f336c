from sqlalchemy import Column, Integer, BigInteger, String, Float, Text, DateTime, ForeignKey, Enum, func
from sqlalchemy.orm import relationship
from database.db import Base
from models.enums import AssignmentType, AssignmentStatus


class AssignmentFile(Base):
    __tablename__ = "assignment_files"  # 과제 첨부파일 메타데이터 (파일 자체는 외부 저장소)

    id = Column(Integer, primary_key=True, index=True)
    assignment_id = Column(
        Integer, ForeignKey("assignments.id", ondelete="CASCADE"), nullable=False, index=True
    )                                                                          # 과제 ID (과제 삭제 시 함께 삭제)
    original_name = Column(String(255), nullable=False)                        # 업로드 당시 파일명
    file_name = Column(String(255), nullable=False)                            # 저장 파일명
    file_path = Column(String(500), nullable=False)                            # 저장 경로
    mime_type = Column(String(100), nullable=False)
    size = Column(BigInteger, nullable=False)                                  # 바이트 단위
    uploaded_at = Column(DateTime, server_default=func.now())


class Assignment(Base):
    __tablename__ = "assignments"  # 과제/시험 정보 테이블

    id = Column(Integer, primary_key=True, index=True)                         # 과제 고유 ID (PK)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False, index=True)  # 과목 ID (FK)
    created_by_id = Column(Integer, ForeignKey("users.id"))                    # 출제 교수 ID (FK)
    title = Column(String(200), nullable=False)                                # 과제 제목
    description = Column(Text)                                                 # 과제 설명
    type = Column(
        Enum(AssignmentType, name="assignments_type_enum", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )                                                                          # 유형 (lab / assignment / quiz / exam / project)
    max_score = Column(Float, nullable=False)                                  # 만점
    weight = Column(Float, nullable=False, default=0.0)                        # 과목 내 반영 비율 (참고용)
    due_date = Column(DateTime)                                                # 마감일
    status = Column(
        Enum(AssignmentStatus, name="assignments_status_enum", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=AssignmentStatus.DRAFT,
    )                                                                          # 진행 상태
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # ✅ 첨부파일 (1:N, 과제 삭제 시 함께 삭제)
    files = relationship(
        AssignmentFile,
        backref="assignment",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
