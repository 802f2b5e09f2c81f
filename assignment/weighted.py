"""
Score-based task assignment: priority weighted and hybrid.
"""
from typing import Dict, Iterable, Optional, Sequence

from config import ScoringConfig
from models import PRIORITY_HIGH, ExistingTask, RosterMember, TaskDescriptor, WorkloadStat
from analysis.workload import analyze_workload
from assignment.interfaces import AssignmentStrategy, TaskLike, coerce_task, ensure_roster
from assignment.specialty import find_specialty_matches
from utils.logger import logger


def pick_best(scores: Dict[str, float]) -> str:
    """Highest score wins; ties go to the earlier roster entry."""
    return sorted(scores.items(), key=lambda item: -item[1])[0][0]


class PriorityWeightedAssigner(AssignmentStrategy):
    """
    Score members by free slots plus fixed bonuses.

    score = available + specialty bonus + high priority bonus + premium bonus,
    floored at zero.
    """

    name = "priority_weighted"

    def __init__(self, config: Optional[ScoringConfig] = None):
        self.config = config or ScoringConfig()

    def score_members(
        self,
        task: TaskDescriptor,
        analysis: Dict[str, WorkloadStat],
        roster: Sequence[RosterMember],
    ) -> Dict[str, float]:
        matches = set(find_specialty_matches(task, roster))
        scores = {}

        for name, workload in analysis.items():
            score = float(workload.available)

            if name in matches:
                score += self.config.weighted_specialty_bonus

            if task.priority == PRIORITY_HIGH:
                score += self.config.weighted_high_priority_bonus

            if task.is_high_value:
                score += self.config.weighted_premium_bonus

            scores[name] = max(0.0, score)

        return scores

    def assign(
        self,
        task: TaskLike,
        existing_tasks: Iterable[ExistingTask],
        roster: Sequence[RosterMember],
    ) -> str:
        roster = ensure_roster(roster)
        task = coerce_task(task)
        analysis = analyze_workload(roster, existing_tasks)
        scores = self.score_members(task, analysis, roster)
        logger.debug(f"Priority weighted scores: {scores}")
        return pick_best(scores)


class HybridAssigner(AssignmentStrategy):
    """
    Combine availability, specialty match and priority into one score.

    This is the default strategy. Per member:

    1. base = max(0, 100 - utilization)
    2. + specialty bonus when the member matches the task
    3. + high-value bonus when the member has the ``high-value`` specialty
       and the premium is high value
    4. x priority multiplier
    5. x overload penalty above 100% utilization, and again x critical
       penalty above 150%
    """

    name = "hybrid"

    def __init__(self, config: Optional[ScoringConfig] = None):
        self.config = config or ScoringConfig()

    def score_member(
        self, task: TaskDescriptor, workload: WorkloadStat, is_specialist: bool
    ) -> float:
        utilization = workload.utilization_percent
        score = max(0.0, 100 - utilization)

        if is_specialist:
            score += self.config.hybrid_specialty_bonus

        if "high-value" in workload.specialties and task.is_high_value:
            score += self.config.hybrid_high_value_bonus

        score *= self.config.priority_multiplier(task.priority)

        if utilization > 100:
            score *= self.config.overload_penalty

        if utilization > 150:
            score *= self.config.critical_overload_penalty

        return score

    def score_members(
        self,
        task: TaskDescriptor,
        analysis: Dict[str, WorkloadStat],
        roster: Sequence[RosterMember],
    ) -> Dict[str, float]:
        matches = set(find_specialty_matches(task, roster))
        return {
            name: self.score_member(task, workload, name in matches)
            for name, workload in analysis.items()
        }

    def assign(
        self,
        task: TaskLike,
        existing_tasks: Iterable[ExistingTask],
        roster: Sequence[RosterMember],
    ) -> str:
        roster = ensure_roster(roster)
        task = coerce_task(task)
        analysis = analyze_workload(roster, existing_tasks)
        scores = self.score_members(task, analysis, roster)
        logger.debug(f"Hybrid scores: {scores}")
        return pick_best(scores)
