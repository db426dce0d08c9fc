from typing import Tuple
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession
from sqlalchemy.orm import sessionmaker, declarative_base

# Declarative base for models
Base = declarative_base()


def create_session_factory(database_url: str, echo: bool = False) -> Tuple[AsyncEngine, sessionmaker]:
    """Create the asynchronous engine and session factory for a database URL"""
    engine_kwargs = {"echo": echo, "pool_pre_ping": True}
    if not database_url.startswith("sqlite"):
        engine_kwargs.update(pool_size=20, max_overflow=40, pool_recycle=1800)

    engine = create_async_engine(database_url, **engine_kwargs)

    # Asynchronous session factory
    session_factory = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    return engine, session_factory
