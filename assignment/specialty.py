"""
Specialty matching between tasks and roster members.
"""
from typing import Callable, List, Sequence, Tuple

from models import HIGH_VALUE_PREMIUM, RosterMember, TaskDescriptor

SpecialtyRule = Tuple[Callable[[TaskDescriptor], bool], str]


def _type_contains(fragment: str) -> Callable[[TaskDescriptor], bool]:
    return lambda task: fragment in task.type


def _premium_at_least(threshold: float) -> Callable[[TaskDescriptor], bool]:
    return lambda task: task.premium >= threshold


# Evaluated in order; a member matches when any rule fires for a specialty it has.
SPECIALTY_RULES: List[SpecialtyRule] = [
    (_type_contains("nsf"), "nsf"),
    (_type_contains("cancellation"), "cancellation"),
    (_type_contains("retention"), "retention"),
    (_premium_at_least(HIGH_VALUE_PREMIUM), "high-value"),
    (_type_contains("payment"), "payment-issues"),
    (_type_contains("commercial"), "commercial"),
]


def required_specialties(task: TaskDescriptor) -> List[str]:
    """Specialties that would qualify a member for this task."""
    return [specialty for applies, specialty in SPECIALTY_RULES if applies(task)]


def is_specialty_match(task: TaskDescriptor, member: RosterMember) -> bool:
    return any(member.has_specialty(s) for s in required_specialties(task))


def find_specialty_matches(
    task: TaskDescriptor, roster: Sequence[RosterMember]
) -> List[str]:
    """
    Find the roster members whose specialties fit a task.

    Args:
        task: Task to match
        roster: Ordered roster members

    Returns:
        Matching member names in roster order, without duplicates
    """
    wanted = required_specialties(task)
    matches: List[str] = []
    for member in roster:
        if member.name in matches:
            continue
        if any(member.has_specialty(s) for s in wanted):
            matches.append(member.name)
    return matches
