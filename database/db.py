from sqlalchemy import create_engine               # SQLAlchemy engine factory
from sqlalchemy.orm import declarative_base, sessionmaker

from config.settings import settings               # ✅ environment settings

# ✅ SQLite needs check_same_thread=False because FastAPI runs sync routes in a threadpool
_connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(settings.DATABASE_URL, connect_args=_connect_args)

# ✅ session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# ✅ base class for every model (declarative)
Base = declarative_base()


# ✅ request-scoped session; routers depend on this so tests can override it once
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
