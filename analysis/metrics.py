"""
Metrics and reporting for team workload distribution.
"""
import numpy as np
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence

from config import ReportConfig
from models import (
    DistributionReport,
    Recommendation,
    RosterMember,
    TeamSummary,
    WorkloadStat,
    tasks_from_records,
)
from analysis.workload import analyze_workload
from assignment.redistribution import redistribute_tasks
from utils.logger import logger


def calculate_balance_score(analysis: Dict[str, WorkloadStat]) -> float:
    """
    Score how evenly work is spread (0-100, 100 is perfectly balanced).

    Computed as 100 minus the population standard deviation of utilization.
    """
    utilizations = [stat.utilization_percent for stat in analysis.values()]
    if not utilizations:
        return 100.0
    return max(0.0, 100.0 - float(np.std(utilizations)))


def calculate_average_utilization(analysis: Dict[str, WorkloadStat]) -> float:
    utilizations = [stat.utilization_percent for stat in analysis.values()]
    return float(np.mean(utilizations)) if utilizations else 0.0


def generate_recommendations(
    analysis: Dict[str, WorkloadStat], config: Optional[ReportConfig] = None
) -> List[Recommendation]:
    """
    Flag overloaded and underutilized members.

    Members between the underutilized and warning thresholds get nothing.
    """
    config = config or ReportConfig()
    recommendations = []

    for stat in analysis.values():
        utilization = stat.utilization_percent

        if utilization > config.critical_threshold:
            recommendations.append(
                Recommendation(
                    type="overload_critical",
                    member=stat.name,
                    message=(
                        f"{stat.name} is critically overloaded at {utilization:.1f}%. "
                        "Consider redistributing tasks or increasing capacity."
                    ),
                    priority="high",
                )
            )
        elif utilization > config.warning_threshold:
            recommendations.append(
                Recommendation(
                    type="overload_warning",
                    member=stat.name,
                    message=(
                        f"{stat.name} is over capacity at {utilization:.1f}%. "
                        "Monitor workload closely."
                    ),
                    priority="medium",
                )
            )
        elif utilization < config.underutilized_threshold:
            recommendations.append(
                Recommendation(
                    type="underutilized",
                    member=stat.name,
                    message=(
                        f"{stat.name} is underutilized at {utilization:.1f}%. "
                        "Consider assigning more tasks."
                    ),
                    priority="low",
                )
            )

    return recommendations


def generate_distribution_report(
    existing_tasks: Iterable[Any],
    roster: Sequence[RosterMember],
    strategy: str = "hybrid",
    max_imbalance_percent: float = 50,
    move_fraction: float = 0.2,
    config: Optional[ReportConfig] = None,
) -> DistributionReport:
    """
    Build the team distribution report shown on the dashboard.

    Args:
        existing_tasks: Snapshot of tasks already in flight
        roster: Ordered roster members
        strategy: Name of the active assignment strategy
        max_imbalance_percent: Threshold passed to the redistribution engine
        move_fraction: Share of tasks the redistribution engine may move
        config: Recommendation thresholds

    Returns:
        DistributionReport for the current snapshot
    """
    existing_tasks = tasks_from_records(existing_tasks)
    analysis = analyze_workload(roster, existing_tasks)
    suggestions = redistribute_tasks(
        existing_tasks,
        roster,
        max_imbalance_percent=max_imbalance_percent,
        move_fraction=move_fraction,
    )

    summary = TeamSummary(
        total_tasks=sum(1 for t in existing_tasks if t.is_open),
        average_utilization=calculate_average_utilization(analysis),
        balance_score=calculate_balance_score(analysis),
    )
    logger.debug(
        f"Report: {summary.total_tasks} open tasks, "
        f"balance score {summary.balance_score:.1f}"
    )

    return DistributionReport(
        timestamp=datetime.now(),
        strategy=strategy,
        team_summary=summary,
        members=analysis,
        redistribution_suggestions=suggestions,
        recommendations=generate_recommendations(analysis, config),
    )


def compute_distribution_metrics(analysis: Dict[str, WorkloadStat]) -> Dict[str, float]:
    """Summary numbers used to compare strategies against each other."""
    utilizations = [stat.utilization_percent for stat in analysis.values()]
    return {
        "balance_score": calculate_balance_score(analysis),
        "max_utilization": float(max(utilizations)) if utilizations else 0.0,
        "overloaded_members": float(sum(1 for u in utilizations if u > 100)),
    }


def compare_strategies(
    strategy_metrics: Dict[str, Dict[str, float]]
) -> Dict[str, str]:
    """
    Compare strategies based on multiple metrics.

    Args:
        strategy_metrics: Dictionary mapping strategy names to metric dictionaries

    Returns:
        Dict mapping metric names to best strategy names
    """
    if not strategy_metrics:
        return {}

    lower_is_better = {"max_utilization", "overloaded_members"}
    best_strategies = {}
    all_metrics = set()

    for metrics in strategy_metrics.values():
        all_metrics.update(metrics.keys())

    for metric in sorted(all_metrics):
        best_strategy = None
        best_value = None

        for strategy, metrics in strategy_metrics.items():
            if metric not in metrics:
                continue

            value = metrics[metric]
            if metric in lower_is_better:
                better = best_value is None or value < best_value
            else:
                better = best_value is None or value > best_value

            if better:
                best_value = value
                best_strategy = strategy

        if best_strategy:
            best_strategies[metric] = best_strategy

    return best_strategies
