"""Declarative base shared by all ORM models."""

from uuid import uuid4

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


def new_id() -> str:
    """UUID primary key as a string."""
    return str(uuid4())
