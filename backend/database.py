# backend/database.py
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from config import load_settings_or_exit

settings = load_settings_or_exit()
SQLALCHEMY_DATABASE_URL = settings.sqlalchemy_url


def build_engine(url: str):
    # SQLite needs cross-thread access for the threadpool FastAPI runs sync routes in
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)
    return create_engine(url, pool_pre_ping=True)


engine = build_engine(SQLALCHEMY_DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    # Make sure every model is registered on Base.metadata before creating tables
    import models.users  # noqa: F401
    import models.supplier  # noqa: F401
    import models.customer  # noqa: F401
    import models.inventory  # noqa: F401
    import models.sales_order  # noqa: F401
    import models.purchase_order  # noqa: F401

    Base.metadata.create_all(bind=engine)
