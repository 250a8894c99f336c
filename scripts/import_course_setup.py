"""
과목 성적 설정 CSV → DB 등록

- data/grade_components.csv: course_id,name,type,weight,minimum_score,total_points,is_mandatory
- data/grade_bands.csv:      course_id,min_score,max_score,grade_value,grade_letter
- 등록 후 과목별로 설정 점검 결과(가중치 합, 구간 중복)를 출력
"""

import csv
import sys

from sqlalchemy.orm import Session
from database.db import SessionLocal
from models import courses  # noqa: F401  ✅ FK 대상 테이블 import
from models.enums import ComponentType
from models.grade_components import GradeComponent as GradeComponentModel
from models.grade_bands import GradeBand as GradeBandModel
from services.grade_service import check_course_configuration

COMPONENTS_CSV = "data/grade_components.csv"
BANDS_CSV = "data/grade_bands.csv"


def _as_bool(value) -> bool:
    return str(value).strip().lower() in ("true", "1", "yes")


def import_components(db: Session, path: str = COMPONENTS_CSV) -> set:
    course_ids = set()
    with open(path, newline="", encoding="utf-8-sig") as csvfile:
        for row in csv.DictReader(csvfile):
            component = GradeComponentModel(
                course_id=int(row["course_id"]),                          # 과목 ID
                name=row["name"],                                         # 구성요소 이름
                type=ComponentType(row["type"]),                          # 분류 (Lab, Exam ...)
                weight=float(row["weight"]),                              # 반영 비율
                minimum_score=float(row.get("minimum_score") or 0),       # 최소 기준 점수
                total_points=float(row.get("total_points") or 100),       # 만점
                is_mandatory=_as_bool(row.get("is_mandatory")),           # 필수 여부
            )
            db.add(component)
            course_ids.add(component.course_id)
    return course_ids


def import_bands(db: Session, path: str = BANDS_CSV) -> set:
    course_ids = set()
    with open(path, newline="", encoding="utf-8-sig") as csvfile:
        for row in csv.DictReader(csvfile):
            band = GradeBandModel(
                course_id=int(row["course_id"]),                          # 과목 ID
                min_score=float(row["min_score"]),                        # 구간 최저 점수
                max_score=float(row["max_score"]),                        # 구간 최고 점수
                grade_value=int(row["grade_value"]),                      # 등급 값
                grade_letter=row.get("grade_letter") or None,             # 등급 문자
            )
            db.add(band)
            course_ids.add(band.course_id)
    return course_ids


def migrate_course_setup(components_path: str = COMPONENTS_CSV, bands_path: str = BANDS_CSV):
    db: Session = SessionLocal()
    try:
        course_ids = import_components(db, components_path) | import_bands(db, bands_path)
        db.commit()

        for course_id in sorted(course_ids):
            issues = check_course_configuration(db, course_id)
            if issues:
                print(f"⚠️ 과목 {course_id} 설정 문제: {'; '.join(issues)}")
    finally:
        db.close()
    print("✅ 성적 구성요소/등급 구간 CSV → DB 등록 완료")


if __name__ == "__main__":
    migrate_course_setup(*sys.argv[1:3])
