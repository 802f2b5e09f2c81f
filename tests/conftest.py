"""Shared fixtures for the distribution engine tests."""
from typing import List

import pytest

from assignment.round_robin import RoundRobinCounter
from models import ExistingTask, RosterMember


def build_tasks(
    member: str,
    count: int,
    priority: str = "medium",
    status: str = "open",
    task_type: str = "nsf",
    premium: float = 1000.0,
    prefix: str = "",
) -> List[ExistingTask]:
    prefix = prefix or member
    return [
        ExistingTask(
            id=f"{prefix}-{i}",
            type=task_type,
            priority=priority,
            premium=premium,
            assigned_to=member,
            status=status,
        )
        for i in range(count)
    ]


@pytest.fixture
def make_tasks():
    return build_tasks


@pytest.fixture
def example_roster() -> List[RosterMember]:
    return [
        RosterMember(name="A", specialties={"nsf"}, capacity=10),
        RosterMember(name="B", specialties=set(), capacity=10),
    ]


@pytest.fixture
def example_tasks(make_tasks) -> List[ExistingTask]:
    return make_tasks("A", 9) + make_tasks("B", 2)


@pytest.fixture
def three_roster() -> List[RosterMember]:
    return [
        RosterMember(name="Ana", specialties={"nsf", "payment-issues"}, capacity=20),
        RosterMember(name="Ben", specialties={"cancellation", "retention"}, capacity=18),
        RosterMember(name="Cleo", specialties={"high-value", "commercial"}, capacity=15),
    ]


@pytest.fixture
def counter() -> RoundRobinCounter:
    return RoundRobinCounter()
