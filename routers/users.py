from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.db import get_db
from models.courses import Course as CourseModel
from models.enrollments import Enrollment as EnrollmentModel
from models.enums import EnrollmentStatus, UserRole
from models.users import User as UserModel
from schemas.users import (
    Enrollment as EnrollmentSchema,
    EnrollmentCreate,
    EnrollmentUpdate,
    User as UserSchema,
    UserCreate,
)

router = APIRouter(tags=["사용자 및 수강"])


# ==========================================================
# [1단계] 사용자
# ==========================================================

# ✅ [CREATE] 사용자 등록
@router.post("/users/")
def create_user(user: UserCreate, db: Session = Depends(get_db)):
    exists = (
        db.query(UserModel)
        .filter((UserModel.username == user.username) | (UserModel.email == user.email))
        .first()
    )
    if exists:
        return {"success": False, "error": {"code": 409, "message": "Username or email already registered"}}

    db_user = UserModel(**user.model_dump(exclude={"password"}))
    db_user.set_password(user.password)
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return {
        "success": True,
        "data": UserSchema.model_validate(db_user).model_dump(mode="json"),
        "message": "User created successfully"
    }


# ✅ [READ] 사용자 목록 (역할 필터 가능)
@router.get("/users/")
def read_users(role: UserRole = None, db: Session = Depends(get_db)):
    query = db.query(UserModel)
    if role:
        query = query.filter(UserModel.role == role)
    records = query.order_by(UserModel.id).all()
    return {
        "success": True,
        "data": [UserSchema.model_validate(r).model_dump(mode="json") for r in records],
    }


# ✅ [READ] 특정 사용자 조회
@router.get("/users/{user_id}")
def read_user(user_id: int, db: Session = Depends(get_db)):
    user = db.get(UserModel, user_id)
    if user is None:
        return {"success": False, "error": {"code": 404, "message": "User not found"}}
    return {"success": True, "data": UserSchema.model_validate(user).model_dump(mode="json")}


# ==========================================================
# [2단계] 수강 신청
# ==========================================================

# ✅ [CREATE] 수강 신청
@router.post("/enrollments/")
def create_enrollment(enrollment: EnrollmentCreate, db: Session = Depends(get_db)):
    student = db.get(UserModel, enrollment.student_id)
    if student is None or student.role != UserRole.STUDENT:
        return {"success": False, "error": {"code": 404, "message": "Student not found"}}
    if db.get(CourseModel, enrollment.course_id) is None:
        return {"success": False, "error": {"code": 404, "message": "Course not found"}}

    existing = (
        db.query(EnrollmentModel)
        .filter(
            EnrollmentModel.student_id == enrollment.student_id,
            EnrollmentModel.course_id == enrollment.course_id,
        )
        .first()
    )
    if existing:
        # 수강 취소 후 재신청이면 다시 active로
        if existing.status == EnrollmentStatus.DROPPED:
            existing.status = EnrollmentStatus.ACTIVE
            db.commit()
            db.refresh(existing)
            return {"success": True, "data": EnrollmentSchema.model_validate(existing).model_dump(mode="json")}
        return {"success": False, "error": {"code": 409, "message": "Student already enrolled"}}

    db_enrollment = EnrollmentModel(**enrollment.model_dump())
    db.add(db_enrollment)
    db.commit()
    db.refresh(db_enrollment)
    return {
        "success": True,
        "data": EnrollmentSchema.model_validate(db_enrollment).model_dump(mode="json"),
        "message": "Enrollment created successfully"
    }


# ✅ [READ] 과목별 수강생 목록
@router.get("/enrollments/")
def read_enrollments(course_id: int = None, student_id: int = None, db: Session = Depends(get_db)):
    query = db.query(EnrollmentModel)
    if course_id is not None:
        query = query.filter(EnrollmentModel.course_id == course_id)
    if student_id is not None:
        query = query.filter(EnrollmentModel.student_id == student_id)
    records = query.order_by(EnrollmentModel.id).all()
    return {
        "success": True,
        "data": [EnrollmentSchema.model_validate(r).model_dump(mode="json") for r in records],
    }


# ✅ [UPDATE] 수강 상태 변경 (active / completed / dropped)
@router.put("/enrollments/{enrollment_id}")
def update_enrollment(enrollment_id: int, updated: EnrollmentUpdate, db: Session = Depends(get_db)):
    enrollment = db.get(EnrollmentModel, enrollment_id)
    if enrollment is None:
        return {"success": False, "error": {"code": 404, "message": "Enrollment not found"}}

    enrollment.status = updated.status
    db.commit()
    db.refresh(enrollment)
    return {"success": True, "data": EnrollmentSchema.model_validate(enrollment).model_dump(mode="json")}
