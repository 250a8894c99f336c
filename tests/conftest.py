import os
import tempfile

# ✅ 앱/엔진 import 전에 테스트용 sqlite DB로 교체
_DB_PATH = os.path.join(tempfile.gettempdir(), "course_grades_test.db")
os.environ["DATABASE_URL_OVERRIDE"] = f"sqlite:///{_DB_PATH}"
os.environ["ENV"] = "test"

import pytest
from fastapi.testclient import TestClient

from database.db import Base, SessionLocal, engine
from main import app


@pytest.fixture(autouse=True)
def _tables():
    # 테스트마다 빈 테이블에서 시작
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
