from assignment.redistribution import find_best_redistribution_target, redistribute_tasks
from analysis.workload import analyze_workload
from models import ExistingTask, RosterMember


def overloaded_scenario(make_tasks):
    roster = [
        RosterMember(name="Busy", specialties={"cancellation"}, capacity=10),
        RosterMember(name="Idle", specialties=set(), capacity=10),
    ]
    tasks = (
        make_tasks("Busy", 12, priority="high", prefix="high")
        + make_tasks("Busy", 5, priority="medium", prefix="medium")
        + make_tasks("Busy", 3, priority="low", prefix="low")
        + make_tasks("Idle", 1, prefix="idle")
    )
    return roster, tasks


def test_moves_twenty_percent_from_overloaded_member(make_tasks):
    roster, tasks = overloaded_scenario(make_tasks)

    moves = redistribute_tasks(tasks, roster, max_imbalance_percent=50)

    assert len(moves) == 4
    assert all(m.from_member == "Busy" for m in moves)
    assert all(m.to_member == "Idle" for m in moves)
    assert all(m.reason == "Load balancing" for m in moves)


def test_lowest_priority_tasks_move_first(make_tasks):
    roster, tasks = overloaded_scenario(make_tasks)

    moves = redistribute_tasks(tasks, roster)

    assert [m.task_id for m in moves] == ["low-0", "low-1", "low-2", "medium-0"]


def test_prefers_underloaded_specialist(make_tasks):
    roster = [
        RosterMember(name="Busy", capacity=10),
        RosterMember(name="Least", capacity=20),
        RosterMember(name="Specialist", specialties={"nsf"}, capacity=10),
    ]
    tasks = make_tasks("Busy", 20, task_type="nsf") + make_tasks("Specialist", 1)

    moves = redistribute_tasks(tasks, roster)

    assert len(moves) == 4
    assert {m.to_member for m in moves} == {"Specialist"}


def test_falls_back_to_most_underloaded_member(make_tasks):
    roster = [
        RosterMember(name="Busy", capacity=10),
        RosterMember(name="Some", capacity=10),
        RosterMember(name="Least", capacity=10),
    ]
    tasks = make_tasks("Busy", 20, task_type="commercial") + make_tasks("Some", 3)

    moves = redistribute_tasks(tasks, roster)

    assert {m.to_member for m in moves} == {"Least"}


def test_small_target_still_receives_every_move(make_tasks):
    roster = [
        RosterMember(name="Busy", capacity=10),
        RosterMember(name="Tiny", capacity=2),
    ]
    tasks = make_tasks("Busy", 20)

    moves = redistribute_tasks(tasks, roster)

    assert len(moves) == 4
    assert {m.to_member for m in moves} == {"Tiny"}


def test_accepts_raw_snapshot_rows():
    roster = [RosterMember(name="Busy", capacity=5), RosterMember(name="Idle", capacity=5)]
    rows = [
        {"id": i, "type": "nsf", "priority": "low", "assignedTo": "Busy", "status": "open"}
        for i in range(10)
    ]

    moves = redistribute_tasks(rows, roster)

    assert [m.task_id for m in moves] == ["0", "1"]
    assert {m.to_member for m in moves} == {"Idle"}


def test_nothing_to_do_without_overload(example_roster, example_tasks):
    assert redistribute_tasks(example_tasks, example_roster) == []


def test_no_moves_without_underloaded_members(make_tasks):
    roster = [RosterMember(name="Busy", capacity=10), RosterMember(name="Full", capacity=10)]
    tasks = make_tasks("Busy", 20) + make_tasks("Full", 8)

    assert redistribute_tasks(tasks, roster) == []


def test_closed_tasks_are_never_moved(make_tasks):
    roster, tasks = overloaded_scenario(make_tasks)
    tasks = make_tasks("Busy", 5, status="completed", priority="low", prefix="done") + tasks

    moves = redistribute_tasks(tasks, roster)

    assert not any(m.task_id.startswith("done") for m in moves)


def test_threshold_controls_what_counts_as_overloaded(make_tasks):
    roster, tasks = overloaded_scenario(make_tasks)

    assert redistribute_tasks(tasks, roster, max_imbalance_percent=100) == []


def test_find_target_without_candidates():
    task = ExistingTask(id="t", type="nsf", assigned_to="Busy", status="open")
    roster = [RosterMember(name="Busy", capacity=1)]

    assert find_best_redistribution_target(task, [], roster) is None


def test_find_target_prefers_specialist_regardless_of_capacity():
    roster = [
        RosterMember(name="Other", capacity=10),
        RosterMember(name="Spec", specialties={"nsf"}, capacity=2),
    ]
    underloaded = list(analyze_workload(roster, []).values())
    nsf = ExistingTask(id="t", type="nsf", assigned_to="Busy", status="open")
    commercial = ExistingTask(id="u", type="commercial", assigned_to="Busy", status="open")

    assert find_best_redistribution_target(nsf, underloaded, roster) == "Spec"
    assert find_best_redistribution_target(commercial, underloaded, roster) == "Other"
