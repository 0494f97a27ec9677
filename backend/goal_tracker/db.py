from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from goal_tracker.core.config import settings

# SQLAlchemy Base class for models to inherit
Base = declarative_base()


def make_engine(url: str):
    if url.startswith("sqlite"):
        # Request handlers run in a thread pool; in-memory sqlite must share one connection
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url or url.rstrip("/").endswith("sqlite:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)
    return create_engine(
        url,
        pool_pre_ping=True,   # helps avoid stale connections
    )


# Create SQLAlchemy engine (connects to Postgres by default)
engine = make_engine(settings.sqlalchemy_url)

# Factory that creates DB sessions
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Dependency we will use in FastAPI routes
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
