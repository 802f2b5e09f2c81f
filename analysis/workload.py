"""
Workload analysis for the retention roster.
"""
from typing import Any, Dict, Iterable, List, Sequence

from models import (
    PRIORITY_HIGH,
    PRIORITY_LOW,
    PRIORITY_MEDIUM,
    ExistingTask,
    PriorityBreakdown,
    RosterMember,
    WorkloadStat,
    tasks_from_records,
)
from utils.logger import logger


def compute_utilization(assigned: int, capacity: int) -> float:
    """Utilization in percent; members without capacity are divided by one."""
    return assigned / max(capacity, 1) * 100


def analyze_workload(
    roster: Sequence[RosterMember], existing_tasks: Iterable[Any]
) -> Dict[str, WorkloadStat]:
    """
    Compute the current workload of every roster member.

    Only open tasks count. The result is rebuilt from scratch on every call
    and keeps roster order, which later serves as the tie-break order.

    Args:
        roster: Ordered roster members
        existing_tasks: Snapshot rows or ExistingTask objects

    Returns:
        Dict mapping member names to their workload statistics
    """
    open_by_member: Dict[str, List[ExistingTask]] = {m.name: [] for m in roster}
    unmapped = 0

    for task in tasks_from_records(existing_tasks):
        if not task.is_open:
            continue
        bucket = open_by_member.get(task.assigned_to)
        if bucket is None:
            unmapped += 1
            continue
        bucket.append(task)

    if unmapped:
        logger.debug(f"Ignored {unmapped} open tasks assigned outside the roster")

    analysis = {}
    for member in roster:
        member_tasks = open_by_member[member.name]
        assigned = len(member_tasks)
        total_premium = sum(t.premium for t in member_tasks)

        analysis[member.name] = WorkloadStat(
            name=member.name,
            capacity=member.capacity,
            assigned=assigned,
            utilization_percent=compute_utilization(assigned, member.capacity),
            available=max(0, member.capacity - assigned),
            tasks=PriorityBreakdown(
                high=sum(1 for t in member_tasks if t.priority == PRIORITY_HIGH),
                medium=sum(1 for t in member_tasks if t.priority == PRIORITY_MEDIUM),
                low=sum(1 for t in member_tasks if t.priority == PRIORITY_LOW),
                total=assigned,
            ),
            avg_premium=total_premium / assigned if assigned > 0 else 0.0,
            total_premium=total_premium,
            specialties=member.specialties,
        )

    return analysis


def get_available_members(analysis: Dict[str, WorkloadStat]) -> List[WorkloadStat]:
    """Members under capacity, least utilized first."""
    return sorted(
        (stat for stat in analysis.values() if stat.utilization_percent < 100),
        key=lambda stat: stat.utilization_percent,
    )


def get_least_loaded_member(analysis: Dict[str, WorkloadStat]) -> str:
    """Name of the least utilized member; ties go to the earlier roster entry."""
    return min(analysis.values(), key=lambda stat: stat.utilization_percent).name


def get_least_loaded_from_list(
    names: Iterable[str], analysis: Dict[str, WorkloadStat]
) -> str:
    """Least utilized member among the given names."""
    return min(
        (analysis[name] for name in names), key=lambda stat: stat.utilization_percent
    ).name
