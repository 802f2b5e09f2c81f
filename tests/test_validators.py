from assignment.redistribution import redistribute_tasks
from models import ExistingTask, Redistribution, RosterMember
from utils.validators import (
    find_unknown_assignees,
    validate_redistributions,
    validate_roster,
    validate_tasks,
)


def test_validate_roster(example_roster):
    assert validate_roster(example_roster)
    assert not validate_roster([])
    assert not validate_roster(example_roster + [RosterMember(name="A", capacity=3)])
    assert not validate_roster([RosterMember(name="Z", capacity=0)])


def test_unknown_assignees_only_warn(example_roster, make_tasks):
    tasks = make_tasks("A", 1) + make_tasks("Gone", 2)

    assert find_unknown_assignees(tasks, example_roster) == ["Gone"]
    assert validate_tasks(tasks, example_roster)


def test_duplicate_task_ids_are_invalid(example_roster):
    tasks = [ExistingTask(id="1", assigned_to="A"), ExistingTask(id="1", assigned_to="B")]

    assert not validate_tasks(tasks, example_roster)


def test_engine_output_validates(make_tasks):
    roster = [RosterMember(name="A", capacity=10), RosterMember(name="B", capacity=10)]
    tasks = make_tasks("A", 20)

    moves = redistribute_tasks(tasks, roster)

    assert moves
    assert validate_redistributions(moves, tasks, roster)


def test_invalid_redistributions(example_roster, make_tasks):
    tasks = make_tasks("A", 2) + make_tasks("B", 1, status="completed")

    assert not validate_redistributions(
        [Redistribution(task_id="missing", from_member="A", to_member="B")], tasks, example_roster
    )
    assert not validate_redistributions(
        [Redistribution(task_id="B-0", from_member="B", to_member="A")], tasks, example_roster
    )
    assert not validate_redistributions(
        [Redistribution(task_id="A-0", from_member="A", to_member="A")], tasks, example_roster
    )
    assert not validate_redistributions(
        [
            Redistribution(task_id="A-0", from_member="A", to_member="B"),
            Redistribution(task_id="A-0", from_member="A", to_member="B"),
        ],
        tasks,
        example_roster,
    )
