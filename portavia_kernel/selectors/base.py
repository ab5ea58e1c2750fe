"""
Module: portavia_kernel.selectors.base
Responsibility: Abstract base class for all read-only query selectors.
    Selectors provide structured read access to the hosted project data
    without mutation capability.
Architecture position: Kernel > Selectors.  May import from db/base.py,
    models/ and domain/facts.py.  MUST NOT import from engines, services,
    or config.

Invariants enforced:
    - Read-only access: Selectors accept a Session from the caller but MUST NOT
      call session.add(), session.delete(), session.commit(), or session.flush().
    - DTO return convention: Selectors return frozen dataclasses or scalars,
      NOT ORM model instances.
    - Session ownership: Selectors do NOT create or manage their own sessions;
      the caller owns the session and its lifetime.
"""

from abc import ABC
from typing import Generic, TypeVar

from sqlalchemy.orm import Session

from portavia_kernel.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseSelector(ABC, Generic[ModelType]):
    """
    Abstract base class for all selectors.

    Contract:
        Selectors accept a Session from the caller, perform read-only queries,
        and return DTOs or computed results.  They MUST NOT mutate any data.

    Guarantees:
        - session is stored as a public attribute for subclass query use.
        - No commit, flush, add, or delete operations are performed.
    """

    def __init__(self, session: Session):
        """
        Initialize the selector.

        Args:
            session: SQLAlchemy session for database operations.
        """
        self.session = session
