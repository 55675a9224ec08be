# bookstore/data/database.py
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from bookstore.utils.settings import DATABASE_URL


def make_engine(url: str):
    connect_args = {}
    if url.startswith("sqlite"):
        # pooled connections get reused by other threads
        connect_args = {"check_same_thread": False, "timeout": 15}
    return create_engine(
        url,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


engine = make_engine(DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """
    Dependency injecting a database session into FastAPI routes:
    db: Session = Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_database():
    # every model must be imported before create_all
    import bookstore.data.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
