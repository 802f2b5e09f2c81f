"""
Interfaces and errors for task assignment strategies.
"""
from abc import ABC, abstractmethod
from typing import Any, Iterable, Mapping, Optional, Sequence, Union

from models import ExistingTask, RosterMember, TaskDescriptor

TaskLike = Union[TaskDescriptor, Mapping[str, Any]]


class EmptyRosterError(ValueError):
    """Raised when an assignment is requested without any roster members."""

    def __init__(self, message: str = "Cannot assign a task: the roster is empty"):
        super().__init__(message)


class InvalidTaskError(ValueError):
    """Raised when a task descriptor cannot be interpreted at all."""


def ensure_roster(roster: Optional[Sequence[RosterMember]]) -> Sequence[RosterMember]:
    """Return the roster or raise EmptyRosterError."""
    if not roster:
        raise EmptyRosterError()
    return roster


def coerce_task(task: TaskLike) -> TaskDescriptor:
    """
    Accept a TaskDescriptor or a plain mapping.

    Missing fields are defaulted; only values that are not task-shaped at
    all are rejected.
    """
    if isinstance(task, TaskDescriptor):
        return task
    if isinstance(task, Mapping):
        return TaskDescriptor.from_dict(task)
    raise InvalidTaskError(f"Unsupported task descriptor: {task!r}")


class AssignmentStrategy(ABC):
    """Base interface for task assignment strategies."""

    name: str = ""

    @abstractmethod
    def assign(
        self,
        task: TaskLike,
        existing_tasks: Iterable[ExistingTask],
        roster: Sequence[RosterMember],
    ) -> str:
        """
        Pick the roster member that should own a new task.

        Args:
            task: Task to assign
            existing_tasks: Snapshot of tasks already in flight
            roster: Ordered roster members

        Returns:
            Name of exactly one roster member

        Raises:
            EmptyRosterError: If the roster is empty
        """
        pass
