"""
Clock -- Deterministic time abstraction.

Responsibility:
    Provides an injectable clock interface so that engine and service code
    never call ``datetime.now()`` or ``date.today()`` directly.  The
    derivation engines take "today" as an explicit parameter; services ask
    a Clock for it.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O (except SystemClock,
    which is the one sanctioned I/O boundary for time).
"""

from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta, timezone


class Clock(ABC):
    """
    Abstract clock interface.

    Contract:
        All services that need the current time must receive a Clock
        instance via constructor injection.

    Guarantees:
        - ``now()`` returns a timezone-aware ``datetime``.
        - ``today()`` returns the calendar date of ``now()``.
    """

    @abstractmethod
    def now(self) -> datetime:
        """Get the current time."""
        ...

    def today(self) -> date:
        """Get the current calendar date."""
        return self.now().date()


class SystemClock(Clock):
    """
    Production clock that returns actual system time.

    Contract:
        The sole sanctioned I/O boundary for time.

    Guarantees:
        ``now()`` is timezone-aware and in the host's local zone, so that
        ``today()`` matches the calendar date users see.
    """

    def now(self) -> datetime:
        """Get current system time with timezone."""
        return datetime.now(timezone.utc).astimezone()


class DeterministicClock(Clock):
    """
    Test clock with controlled time.

    Guarantees:
        - ``now()`` returns the same value on repeated calls until
          ``advance()`` or ``set_time()`` is called.
    """

    def __init__(self, fixed_time: datetime | None = None):
        self._fixed_time = fixed_time or datetime(
            2025, 1, 20, 9, 0, 0, tzinfo=timezone.utc
        )
        self._advance_seconds = 0

    @classmethod
    def on(cls, day: date) -> "DeterministicClock":
        """Build a clock fixed at noon UTC on ``day``."""
        return cls(datetime(day.year, day.month, day.day, 12, 0, 0, tzinfo=timezone.utc))

    def now(self) -> datetime:
        """Get the fixed/controlled time."""
        return self._fixed_time + timedelta(seconds=self._advance_seconds)

    def set_time(self, time: datetime) -> None:
        """Set the clock to a specific time."""
        self._fixed_time = time
        self._advance_seconds = 0

    def advance(self, seconds: int = 1) -> None:
        """Advance the clock by the specified seconds."""
        self._advance_seconds += seconds

    def advance_days(self, days: int = 1) -> None:
        """Advance the clock by whole days."""
        self.advance(days * 86400)
