# File: user_api/models/base.py

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Alembic and init_db() both read the table definitions from Base.metadata.
    """
    pass
