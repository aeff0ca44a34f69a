"""
SQL lead store plumbing — declarative Base, engine, sessions.

Used when STORE_BACKEND=sql. DATABASE_URL points at the same leads table the
collection job writes to; local.db (SQLite) stands in when it is unset.
The engine is lazy: nothing connects until SqlLeadStore opens a session.
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from mission_control.config import DATABASE_URL


class Base(DeclarativeBase):
    pass


# Hosted Postgres URLs use postgres:// but SQLAlchemy 2.x requires postgresql://
url = DATABASE_URL.replace('postgres://', 'postgresql://', 1)

# SQLite needs different engine kwargs than Postgres
if url.startswith('sqlite'):
    engine = create_engine(url, connect_args={'check_same_thread': False})
else:
    engine = create_engine(url, pool_pre_ping=True, pool_size=5, max_overflow=10)

SessionLocal = sessionmaker(bind=engine)


def get_session():
    """Return a new session on the lead store engine."""
    return SessionLocal()


def create_tables():
    """Create the leads table if missing (local dev / seeding only)."""
    import mission_control.models.db_lead  # noqa: F401  registers the table on Base
    Base.metadata.create_all(engine)
