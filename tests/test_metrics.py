import pytest

from analysis.metrics import (
    calculate_balance_score,
    compare_strategies,
    compute_distribution_metrics,
    generate_distribution_report,
    generate_recommendations,
)
from analysis.workload import analyze_workload
from config import ReportConfig
from models import RosterMember


def roster_of(*capacities):
    return [RosterMember(name=f"M{i}", capacity=c) for i, c in enumerate(capacities)]


def test_balance_score_example(make_tasks):
    roster = roster_of(10, 10)
    analysis = analyze_workload(roster, make_tasks("M1", 10))

    assert calculate_balance_score(analysis) == pytest.approx(50.0)


def test_balance_score_perfect_and_floored(make_tasks):
    roster = roster_of(10, 10)

    even = analyze_workload(roster, make_tasks("M0", 5) + make_tasks("M1", 5))
    skewed = analyze_workload(roster, make_tasks("M1", 40))

    assert calculate_balance_score(even) == pytest.approx(100.0)
    assert calculate_balance_score(skewed) == 0.0
    assert calculate_balance_score({}) == 100.0


def test_recommendations_by_band(make_tasks):
    roster = roster_of(10, 10, 10, 10)
    tasks = make_tasks("M0", 16) + make_tasks("M1", 12) + make_tasks("M2", 3) + make_tasks("M3", 7)

    recs = generate_recommendations(analyze_workload(roster, tasks))

    assert [(r.member, r.type, r.priority) for r in recs] == [
        ("M0", "overload_critical", "high"),
        ("M1", "overload_warning", "medium"),
        ("M2", "underutilized", "low"),
    ]
    assert "160.0%" in recs[0].message


def test_recommendation_boundaries(make_tasks):
    roster = roster_of(10, 10, 10)
    tasks = make_tasks("M0", 15) + make_tasks("M1", 10) + make_tasks("M2", 5)

    recs = generate_recommendations(analyze_workload(roster, tasks))

    assert [(r.member, r.type) for r in recs] == [("M0", "overload_warning")]


def test_recommendation_thresholds_are_configurable(make_tasks):
    roster = roster_of(10)
    config = ReportConfig(underutilized_threshold=80.0)

    recs = generate_recommendations(analyze_workload(roster, make_tasks("M0", 7)), config)

    assert recs[0].type == "underutilized"


def test_distribution_report(make_tasks):
    roster = roster_of(10, 10)
    tasks = (
        make_tasks("M0", 20)
        + make_tasks("M0", 3, status="completed", prefix="closed")
        + make_tasks("Ghost", 2)
    )

    report = generate_distribution_report(tasks, roster, strategy="load_balanced")

    assert report.strategy == "load_balanced"
    assert report.team_summary.total_tasks == 22
    assert report.team_summary.average_utilization == pytest.approx(100.0)
    assert report.team_summary.balance_score == pytest.approx(0.0)
    assert len(report.redistribution_suggestions) == 4
    assert [r.type for r in report.recommendations] == ["overload_critical", "underutilized"]
    assert set(report.to_dict()["members"]) == {"M0", "M1"}


def test_compare_strategies():
    metrics = {
        "hybrid": {"balance_score": 80.0, "max_utilization": 110.0, "overloaded_members": 1.0},
        "round_robin": {"balance_score": 70.0, "max_utilization": 95.0, "overloaded_members": 0.0},
    }

    assert compare_strategies(metrics) == {
        "balance_score": "hybrid",
        "max_utilization": "round_robin",
        "overloaded_members": "round_robin",
    }
    assert compare_strategies({}) == {}


def test_compute_distribution_metrics(make_tasks):
    roster = roster_of(10, 10)
    analysis = analyze_workload(roster, make_tasks("M0", 12))

    metrics = compute_distribution_metrics(analysis)

    assert metrics["max_utilization"] == pytest.approx(120.0)
    assert metrics["overloaded_members"] == 1.0
