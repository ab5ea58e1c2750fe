"""
Module: portavia_kernel.db.base
Responsibility: Declarative base for the SQLAlchemy mappings of the hosted
    project tables and views.  Provides the string primary-key convention
    and the type annotation map for consistent column types.
Architecture position: Kernel > DB.  Lowest-level import target within the
    kernel.  ALL model files import from here.  MUST NOT import from models/,
    selectors/, domain/, or outer layers.

Invariants enforced:
    - Opaque string keys: project ids are stored as String(36) and treated
      as opaque strings (the hosted backend issues UUIDs; nothing here
      parses them).
    - Decimal precision: type_annotation_map maps Python Decimal to
      Numeric(38, 9).  NEVER use float for monetary amounts or hours.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import ClassVar
from uuid import uuid4

from sqlalchemy import BigInteger, Date, DateTime, Numeric, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def new_id() -> str:
    """Generate a new opaque primary key."""
    return str(uuid4())


class Base(DeclarativeBase):
    """
    Declarative base for all SQLAlchemy models.

    Guarantees:
        - id is a String(36) primary key, defaulting to a new uuid4 string.
        - Decimal maps to Numeric(38, 9).
        - date maps to Date, datetime to timezone-aware DateTime.
        - int maps to BigInteger.
    """

    type_annotation_map: ClassVar[dict] = {
        Decimal: Numeric(38, 9),
        date: Date,
        datetime: DateTime(timezone=True),
        int: BigInteger,
    }

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=new_id,
    )


def is_view(table) -> bool:
    """True when a mapped table stands for a database-side view."""
    return bool(table.info.get("is_view", False))
