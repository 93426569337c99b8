# order_service/data/database.py
from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def build_engine(url: str) -> Engine:
    # sqlite w pamięci (testy, dev) - jedno połączenie współdzielone między wątkami
    if url.startswith("sqlite"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(url, pool_pre_ping=True)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def get_db(request: Request):
    # fabryka sesji jest tworzona w lifespan aplikacji (main.py)
    db: Session = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
