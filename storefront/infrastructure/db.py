from typing import Iterator
from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from storefront.domain.models import Base


class Database:
    """Owns the engine and session factory for one application instance."""

    def __init__(self, url: str = None, engine: Engine = None):
        if engine is None:
            engine = create_engine(url, echo=False, future=True, pool_pre_ping=True)
        self.engine = engine
        self.SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)

    def init_models(self):
        Base.metadata.create_all(self.engine)

    def ping(self):
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1")).fetchone()

    def dispose(self):
        self.engine.dispose()


def get_db(request: Request) -> Iterator[Session]:
    db = request.app.state.database.SessionLocal()
    try:
        yield db
    finally:
        db.close()
