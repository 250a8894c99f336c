from pydantic import BaseModel
from typing import Optional
from models.enums import UserRole, EnrollmentStatus

# ✅ 입력용: 사용자 등록
class UserCreate(BaseModel):
    username: str
    email: str
    password: str
    first_name: str
    last_name: str
    role: UserRole = UserRole.STUDENT

# ✅ 출력용 (비밀번호 제외)
class User(BaseModel):
    id: int
    username: str
    email: str
    first_name: str
    last_name: str
    role: UserRole
    is_active: bool

    class Config:
        from_attributes = True


# ✅ 입력용: 수강 신청
class EnrollmentCreate(BaseModel):
    student_id: int
    course_id: int

# ✅ 입력용: 수강 상태 변경
class EnrollmentUpdate(BaseModel):
    status: EnrollmentStatus

# ✅ 출력용
class Enrollment(BaseModel):
    id: int
    student_id: int
    course_id: int
    status: EnrollmentStatus

    class Config:
        from_attributes = True
