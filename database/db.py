from sqlalchemy import create_engine, event          # SQLAlchemy 엔진 생성 도구
from sqlalchemy.orm import declarative_base          # 모델의 Base 클래스
from sqlalchemy.orm import sessionmaker              # 세션 팩토리 함수

from config.settings import settings                 # ✅ 환경변수 설정 파일 불러오기

# ✅ sqlite는 스레드 검사를 끄고 FK 제약(ON DELETE CASCADE)을 켜야 MySQL과 동일하게 동작
_is_sqlite = settings.DATABASE_URL.startswith("sqlite")
_connect_args = {"check_same_thread": False} if _is_sqlite else {}

# ✅ 환경변수에서 DB 연결 URL을 불러와 엔진 생성
engine = create_engine(settings.DATABASE_URL, connect_args=_connect_args)

if _is_sqlite:
    @event.listens_for(engine, "connect")
    def _enable_sqlite_fk(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

# ✅ 세션 팩토리: DB 연결에 사용할 세션 생성기 정의
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# ✅ 모델 정의 시 상속할 Base 클래스 (Declarative 방식 사용)
Base = declarative_base()


# ✅ 요청 단위 세션 (FastAPI Depends 용)
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
