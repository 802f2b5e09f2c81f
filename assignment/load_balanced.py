"""
Workload-driven task assignment: load balanced and specialty first.
"""
from typing import Iterable, Sequence

from models import ExistingTask, RosterMember
from analysis.workload import (
    analyze_workload,
    get_available_members,
    get_least_loaded_from_list,
    get_least_loaded_member,
)
from assignment.interfaces import AssignmentStrategy, TaskLike, coerce_task, ensure_roster
from assignment.specialty import find_specialty_matches
from utils.logger import logger


class LoadBalancedAssigner(AssignmentStrategy):
    """Assign to the member with the lowest current utilization."""

    name = "load_balanced"

    def assign(
        self,
        task: TaskLike,
        existing_tasks: Iterable[ExistingTask],
        roster: Sequence[RosterMember],
    ) -> str:
        roster = ensure_roster(roster)
        analysis = analyze_workload(roster, existing_tasks)
        available = get_available_members(analysis)

        if not available:
            # Everyone is at capacity, take the least loaded anyway
            chosen = get_least_loaded_member(analysis)
            logger.debug(f"All members at capacity, falling back to {chosen}")
            return chosen

        return available[0].name


class SpecialtyFirstAssigner(AssignmentStrategy):
    """
    Prefer specialists for the task, least loaded first.

    Specialists at or over capacity are skipped; when none remain the
    decision is handed to the load balanced strategy over the whole roster.
    """

    name = "specialty_first"

    def __init__(self):
        self.fallback = LoadBalancedAssigner()

    def assign(
        self,
        task: TaskLike,
        existing_tasks: Iterable[ExistingTask],
        roster: Sequence[RosterMember],
    ) -> str:
        roster = ensure_roster(roster)
        task = coerce_task(task)
        existing_tasks = list(existing_tasks)

        analysis = analyze_workload(roster, existing_tasks)
        specialists = [
            name
            for name in find_specialty_matches(task, roster)
            if analysis[name].utilization_percent < 100
        ]

        if specialists:
            return get_least_loaded_from_list(specialists, analysis)

        logger.debug(f"No available specialist for '{task.type}', using load balancing")
        return self.fallback.assign(task, existing_tasks, roster)
