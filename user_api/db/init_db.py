"""
Database initialization helpers.

Production schemas are managed by Alembic (see migrations/); create_all is
for tests and local development.
"""

from sqlalchemy.engine import Engine

from user_api.models.base import Base

# Import models so their tables get registered on Base.metadata
from user_api.models import user  # noqa: F401


def init_db(engine: Engine) -> None:
    """
    Create all tables based on SQLAlchemy models.
    """
    Base.metadata.create_all(bind=engine)


def drop_db(engine: Engine) -> None:
    Base.metadata.drop_all(bind=engine)
