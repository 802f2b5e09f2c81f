"""
Round robin task assignment.
"""
import threading
from typing import Iterable, Optional, Sequence

from models import ExistingTask, RosterMember
from assignment.interfaces import AssignmentStrategy, TaskLike, ensure_roster
from utils.logger import logger


class RoundRobinCounter:
    """Monotonic rotation counter shared by round robin assigners."""

    def __init__(self, start: int = 0):
        self._value = start
        self._lock = threading.Lock()

    @property
    def value(self) -> int:
        return self._value

    def next_index(self, size: int) -> int:
        """Return the current position modulo ``size`` and advance the counter."""
        with self._lock:
            index = self._value % size
            self._value += 1
        return index

    def reset(self, start: int = 0) -> None:
        with self._lock:
            self._value = start


# Process-wide counter used unless an assigner is given its own
default_counter = RoundRobinCounter()


class RoundRobinAssigner(AssignmentStrategy):
    """
    Rotate assignments evenly through the roster.

    Task content and current workload are ignored; the only input that
    matters is how many assignments the counter has already handed out.
    """

    name = "round_robin"

    def __init__(self, counter: Optional[RoundRobinCounter] = None):
        self.counter = counter if counter is not None else default_counter

    def assign(
        self,
        task: TaskLike,
        existing_tasks: Iterable[ExistingTask],
        roster: Sequence[RosterMember],
    ) -> str:
        roster = ensure_roster(roster)
        member = roster[self.counter.next_index(len(roster))]
        logger.debug(f"Round robin picked {member.name}")
        return member.name
