"""
Redistribution of open tasks from overloaded to underloaded members.
"""
import math
from typing import Any, Dict, Iterable, List, Optional, Sequence

from models import (
    PRIORITY_HIGH,
    PRIORITY_LOW,
    PRIORITY_MEDIUM,
    ExistingTask,
    Redistribution,
    RosterMember,
    WorkloadStat,
    tasks_from_records,
)
from analysis.workload import analyze_workload
from assignment.specialty import find_specialty_matches
from utils.logger import logger

# Lowest priority moves first; unknown priorities rank with medium
PRIORITY_ORDER = {PRIORITY_LOW: 1, PRIORITY_MEDIUM: 2, PRIORITY_HIGH: 3}


def find_best_redistribution_target(
    task: ExistingTask,
    underloaded: Sequence[WorkloadStat],
    roster: Sequence[RosterMember],
) -> Optional[str]:
    """
    Choose where to move a task.

    Underloaded specialists come first, then the most underloaded member.

    Args:
        task: Task being moved
        underloaded: Underloaded members, least utilized first
        roster: Ordered roster members

    Returns:
        Target member name, or None if nobody is underloaded
    """
    if not underloaded:
        return None

    matches = set(find_specialty_matches(task.to_descriptor(), roster))
    for stat in underloaded:
        if stat.name in matches:
            return stat.name

    return underloaded[0].name


def redistribute_tasks(
    existing_tasks: Iterable[Any],
    roster: Sequence[RosterMember],
    max_imbalance_percent: float = 50,
    move_fraction: float = 0.2,
) -> List[Redistribution]:
    """
    Propose task moves that reduce workload skew.

    A greedy single pass: every member above ``100 + max_imbalance_percent``
    utilization gives up ``floor(assigned * move_fraction)`` of its open
    tasks, lowest priority first, to members below
    ``100 - max_imbalance_percent``. Nothing is executed.

    Args:
        existing_tasks: Snapshot of tasks already in flight
        roster: Ordered roster members
        max_imbalance_percent: Tolerated distance from full utilization
        move_fraction: Share of an overloaded member's tasks to move

    Returns:
        List of proposed redistributions
    """
    existing_tasks = tasks_from_records(existing_tasks)
    analysis = analyze_workload(roster, existing_tasks)
    running_counts = {name: stat.assigned for name, stat in analysis.items()}
    redistributions: List[Redistribution] = []

    overloaded = sorted(
        (s for s in analysis.values() if s.utilization_percent > 100 + max_imbalance_percent),
        key=lambda s: -s.utilization_percent,
    )
    underloaded = sorted(
        (s for s in analysis.values() if s.utilization_percent < 100 - max_imbalance_percent),
        key=lambda s: s.utilization_percent,
    )

    if not overloaded:
        logger.debug("No overloaded members, nothing to redistribute")
        return redistributions

    for member in overloaded:
        member_tasks = sorted(
            (t for t in existing_tasks if t.assigned_to == member.name and t.is_open),
            key=lambda t: PRIORITY_ORDER.get(t.priority, 2),
        )
        tasks_to_move = math.floor(member.assigned * move_fraction)

        for task in member_tasks[:tasks_to_move]:
            target = find_best_redistribution_target(task, underloaded, roster)
            if target is None:
                logger.debug(f"No redistribution target for task {task.id}")
                continue

            redistributions.append(
                Redistribution(task_id=task.id, from_member=member.name, to_member=target)
            )
            running_counts[member.name] -= 1
            running_counts[target] += 1

    logger.info(f"Proposed {len(redistributions)} redistributions")
    logger.debug(f"Assigned counts after proposed moves: {running_counts}")
    return redistributions
