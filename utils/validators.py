"""
Validation utilities for rosters, task snapshots and redistributions.
"""
from collections import Counter
from typing import List, Sequence

from models import PRIORITIES, ExistingTask, Redistribution, RosterMember
from utils.logger import logger


def validate_roster(roster: Sequence[RosterMember]) -> bool:
    """Validate that a roster is non-empty, uniquely named and has capacity."""
    if not roster:
        logger.error("Roster is empty.")
        return False

    valid = True
    duplicates = [name for name, count in Counter(m.name for m in roster).items() if count > 1]
    if duplicates:
        logger.error(f"Duplicate roster members: {duplicates}")
        valid = False

    for member in roster:
        if member.capacity <= 0:
            logger.error(f"Member {member.name} has non-positive capacity {member.capacity}.")
            valid = False

    return valid


def find_unknown_assignees(
    tasks: Sequence[ExistingTask], roster: Sequence[RosterMember]
) -> List[str]:
    """Assignee names referenced by tasks but missing from the roster."""
    names = {m.name for m in roster}
    unknown = {t.assigned_to for t in tasks if t.assigned_to and t.assigned_to not in names}
    return sorted(unknown)


def validate_tasks(tasks: Sequence[ExistingTask], roster: Sequence[RosterMember]) -> bool:
    """
    Validate a task snapshot against the roster.

    Unknown assignees and unknown priorities are only warned about, since
    the analyzer ignores or tolerates them. Duplicate task ids make the
    snapshot invalid.

    Args:
        tasks: Snapshot tasks
        roster: Roster members

    Returns:
        bool: True if the snapshot is usable as-is
    """
    unknown = find_unknown_assignees(tasks, roster)
    if unknown:
        logger.warning(f"Tasks assigned to members outside the roster: {unknown}")

    odd_priorities = sorted({t.priority for t in tasks if t.priority not in PRIORITIES})
    if odd_priorities:
        logger.warning(f"Tasks with unknown priorities: {odd_priorities}")

    duplicates = [tid for tid, count in Counter(t.id for t in tasks).items() if count > 1]
    if duplicates:
        logger.error(f"Duplicate task ids in snapshot: {duplicates}")
        return False

    return True


def validate_redistributions(
    redistributions: Sequence[Redistribution],
    tasks: Sequence[ExistingTask],
    roster: Sequence[RosterMember],
) -> bool:
    """
    Validate proposed moves before they are applied.

    Checks:
    1. Every move references an open task owned by the source member
    2. Source and target are roster members and differ
    3. No task is moved twice
    """
    task_map = {t.id: t for t in tasks}
    names = {m.name for m in roster}
    seen = set()

    for move in redistributions:
        task = task_map.get(move.task_id)
        if task is None:
            logger.error(f"Task {move.task_id} not found in snapshot.")
            return False

        if not task.is_open or task.assigned_to != move.from_member:
            logger.error(
                f"Task {move.task_id} is not an open task of {move.from_member}."
            )
            return False

        if move.from_member not in names or move.to_member not in names:
            logger.error(
                f"Move of task {move.task_id} references unknown members "
                f"{move.from_member} -> {move.to_member}."
            )
            return False

        if move.from_member == move.to_member:
            logger.error(f"Task {move.task_id} is moved onto its current owner.")
            return False

        if move.task_id in seen:
            logger.error(f"Task {move.task_id} is moved more than once.")
            return False
        seen.add(move.task_id)

    return True
