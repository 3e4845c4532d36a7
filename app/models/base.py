"""Declarative base shared by the user, follow, article and comment models."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base.metadata is what alembic/env.py autogenerates against."""
