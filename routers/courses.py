from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from config.settings import settings
from database.db import get_db
from models.assignments import Assignment as AssignmentModel
from models.courses import Course as CourseModel
from models.grade_components import GradeComponent as GradeComponentModel
from models.grade_bands import GradeBand as GradeBandModel
from models.users import User as UserModel
from schemas.courses import (
    Course as CourseSchema,
    CourseCreate,
    CourseUpdate,
    GradeBand as GradeBandSchema,
    GradeBandCreate,
    GradeComponent as GradeComponentSchema,
    GradeComponentCreate,
)
from services import grade_service

router = APIRouter(prefix="/courses", tags=["과목 및 성적 설정"])


def _course_not_found():
    return {"success": False, "error": {"code": 404, "message": "Course not found"}}


# ==========================================================
# [1단계] CRUD 기본 라우터
# ==========================================================

# ✅ [CREATE] 과목 추가 (구성요소/등급 구간 동시 등록 가능)
@router.post("/")
def create_course(course: CourseCreate, db: Session = Depends(get_db)):
    if course.professor_id is not None and db.get(UserModel, course.professor_id) is None:
        return {"success": False, "error": {"code": 404, "message": "Professor not found"}}

    data = course.model_dump(exclude={"grade_components", "grade_bands"})
    if data["passing_grade"] is None:
        data["passing_grade"] = settings.DEFAULT_PASSING_GRADE

    db_course = CourseModel(**data)
    db_course.grade_components = [GradeComponentModel(**c.model_dump()) for c in course.grade_components]
    db_course.grade_bands = [GradeBandModel(**b.model_dump()) for b in course.grade_bands]
    db.add(db_course)
    db.commit()
    db.refresh(db_course)

    # 저장은 하되, 가중치 합/구간 중복 같은 설정 문제는 함께 알려줌
    issues = grade_service.check_course_configuration(db, db_course.id)
    return {
        "success": True,
        "data": CourseSchema.model_validate(db_course).model_dump(mode="json"),
        "config_issues": issues,
        "message": "Course created successfully"
    }


# ✅ [READ] 전체 과목 조회
@router.get("/")
def read_courses(db: Session = Depends(get_db)):
    records = db.query(CourseModel).order_by(CourseModel.id).all()
    return {
        "success": True,
        "data": [CourseSchema.model_validate(r).model_dump(mode="json") for r in records],
        "message": "전체 과목 조회 완료"
    }


# ✅ [READ] 특정 과목 조회
@router.get("/{course_id}")
def read_course(course_id: int, db: Session = Depends(get_db)):
    course = db.get(CourseModel, course_id)
    if course is None:
        return _course_not_found()
    return {"success": True, "data": CourseSchema.model_validate(course).model_dump(mode="json")}


# ✅ [UPDATE] 과목 기본 정보 수정
@router.put("/{course_id}")
def update_course(course_id: int, updated: CourseUpdate, db: Session = Depends(get_db)):
    course = db.get(CourseModel, course_id)
    if course is None:
        return _course_not_found()

    for key, value in updated.model_dump(exclude_unset=True).items():
        setattr(course, key, value)

    db.commit()
    db.refresh(course)
    return {
        "success": True,
        "data": CourseSchema.model_validate(course).model_dump(mode="json"),
        "message": "Course updated successfully"
    }


# ✅ [DELETE] 과목 삭제 (구성요소/등급 구간은 cascade 삭제)
@router.delete("/{course_id}")
def delete_course(course_id: int, db: Session = Depends(get_db)):
    course = db.get(CourseModel, course_id)
    if course is None:
        return _course_not_found()
    if db.query(AssignmentModel).filter(AssignmentModel.course_id == course_id).first():
        return {"success": False, "error": {"code": 409, "message": "Course still has assignments"}}

    db.delete(course)
    db.commit()
    return {"success": True, "data": {"course_id": course_id, "message": "Course deleted successfully"}}


# ==========================================================
# [2단계] 성적 구성요소 / 등급 구간
# ==========================================================

# ✅ [CREATE] 구성요소 추가
@router.post("/{course_id}/components")
def add_component(course_id: int, component: GradeComponentCreate, db: Session = Depends(get_db)):
    course = db.get(CourseModel, course_id)
    if course is None:
        return _course_not_found()

    db_component = GradeComponentModel(course_id=course_id, **component.model_dump())
    db.add(db_component)
    db.commit()
    db.refresh(db_component)
    return {
        "success": True,
        "data": GradeComponentSchema.model_validate(db_component).model_dump(mode="json"),
        "config_issues": grade_service.check_course_configuration(db, course_id),
    }


# ✅ [UPDATE] 구성요소 수정
@router.put("/{course_id}/components/{component_id}")
def update_component(
    course_id: int, component_id: int, updated: GradeComponentCreate, db: Session = Depends(get_db)
):
    component = (
        db.query(GradeComponentModel)
        .filter(GradeComponentModel.id == component_id, GradeComponentModel.course_id == course_id)
        .first()
    )
    if component is None:
        return {"success": False, "error": {"code": 404, "message": "Grade component not found"}}

    for key, value in updated.model_dump().items():
        setattr(component, key, value)
    db.commit()
    db.refresh(component)
    return {
        "success": True,
        "data": GradeComponentSchema.model_validate(component).model_dump(mode="json"),
        "config_issues": grade_service.check_course_configuration(db, course_id),
    }


# ✅ [DELETE] 구성요소 삭제
@router.delete("/{course_id}/components/{component_id}")
def delete_component(course_id: int, component_id: int, db: Session = Depends(get_db)):
    component = (
        db.query(GradeComponentModel)
        .filter(GradeComponentModel.id == component_id, GradeComponentModel.course_id == course_id)
        .first()
    )
    if component is None:
        return {"success": False, "error": {"code": 404, "message": "Grade component not found"}}

    db.delete(component)
    db.commit()
    return {"success": True, "data": {"component_id": component_id, "message": "Grade component deleted"}}


# ✅ [CREATE] 등급 구간 추가
@router.post("/{course_id}/bands")
def add_band(course_id: int, band: GradeBandCreate, db: Session = Depends(get_db)):
    course = db.get(CourseModel, course_id)
    if course is None:
        return _course_not_found()

    db_band = GradeBandModel(course_id=course_id, **band.model_dump())
    db.add(db_band)
    db.commit()
    db.refresh(db_band)
    return {
        "success": True,
        "data": GradeBandSchema.model_validate(db_band).model_dump(mode="json"),
        "config_issues": grade_service.check_course_configuration(db, course_id),
    }


# ✅ [DELETE] 등급 구간 삭제
@router.delete("/{course_id}/bands/{band_id}")
def delete_band(course_id: int, band_id: int, db: Session = Depends(get_db)):
    band = (
        db.query(GradeBandModel)
        .filter(GradeBandModel.id == band_id, GradeBandModel.course_id == course_id)
        .first()
    )
    if band is None:
        return {"success": False, "error": {"code": 404, "message": "Grade band not found"}}

    db.delete(band)
    db.commit()
    return {"success": True, "data": {"band_id": band_id, "message": "Grade band deleted"}}


# ✅ [CHECK] 성적 설정 점검 (가중치 합, 구성요소 중복, 등급 구간 중복/범위)
@router.get("/{course_id}/grading-config")
def check_grading_config(course_id: int, db: Session = Depends(get_db)):
    issues = grade_service.check_course_configuration(db, course_id)
    if issues is None:
        return _course_not_found()
    return {"success": True, "data": {"course_id": course_id, "valid": not issues, "issues": issues}}


# ==========================================================
# [3단계] 최종 성적 집계
# ==========================================================

# ✅ [READ] 학생 한 명의 과목 최종 성적
#    - 집계 오류(설정 오류, 필수 구성요소 미채점, 구간 없음)는 전역 에러 핸들러가 처리
@router.get("/{course_id}/students/{student_id}/grade")
def get_student_course_grade(course_id: int, student_id: int, db: Session = Depends(get_db)):
    result = grade_service.compute_student_grade(db, course_id, student_id)
    if result is None:
        return _course_not_found()
    return {"success": True, "data": result.model_dump(mode="json")}


# ✅ [SUMMARY] 수강생 전체 최종 성적 요약
@router.get("/{course_id}/grades/summary")
def get_course_grades_summary(course_id: int, db: Session = Depends(get_db)):
    summaries = grade_service.get_grades_summary(db, course_id)
    if summaries is None:
        return _course_not_found()
    return {
        "success": True,
        "data": {"course_id": course_id, "count": len(summaries), "students": summaries}
    }
