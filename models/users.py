from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum, func
from werkzeug.security import generate_password_hash, check_password_hash
from database.db import Base
from models.enums import UserRole

class User(Base):
    __tablename__ = "users"  # 사용자(학생/교수/관리자) 테이블

    id = Column(Integer, primary_key=True, index=True)               # 사용자 고유 ID (PK)
    username = Column(String(50), unique=True, nullable=False)       # 로그인 아이디
    email = Column(String(100), unique=True, nullable=False)         # 이메일
    password = Column(String(255), nullable=False)                   # 비밀번호 해시 (salt 포함)
    first_name = Column(String(50), nullable=False)                  # 이름
    last_name = Column(String(50), nullable=False)                   # 성
    role = Column(
        Enum(UserRole, name="users_role_enum", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=UserRole.STUDENT,
    )                                                                # 역할 (student / professor / admin)
    is_active = Column(Boolean, nullable=False, default=True)        # 활성 여부
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    def set_password(self, password: str):
        self.password = generate_password_hash(password, method="pbkdf2:sha256", salt_length=16)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password, password)
