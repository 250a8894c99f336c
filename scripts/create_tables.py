from database.db import Base, engine

# ✅ 테이블 생성을 위해 모든 모델 import (FK 순서는 SQLAlchemy가 정리)
from models import (  # noqa: F401
    users, courses, grade_components, grade_bands, enrollments,
    assignments, assignment_submissions, grades, component_scores,
)


def create_tables():
    Base.metadata.create_all(bind=engine)
    print(f"✅ 테이블 생성 완료: {', '.join(sorted(Base.metadata.tables))}")


if __name__ == "__main__":
    create_tables()
