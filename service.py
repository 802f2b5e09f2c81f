"""
Task distribution service tying strategies, redistribution and reporting together.
"""
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from config import AppConfig, DEFAULT_ROSTER
from models import (
    DistributionReport,
    HIGH_VALUE_PREMIUM,
    Redistribution,
    RosterMember,
    TaskDescriptor,
    roster_from_dict,
    tasks_from_records,
)
from analysis.metrics import generate_distribution_report
from assignment.interfaces import AssignmentStrategy, EmptyRosterError, TaskLike, coerce_task
from assignment.load_balanced import LoadBalancedAssigner, SpecialtyFirstAssigner
from assignment.redistribution import redistribute_tasks
from assignment.round_robin import RoundRobinAssigner, RoundRobinCounter
from assignment.weighted import HybridAssigner, PriorityWeightedAssigner
from utils.logger import logger

STRATEGIES = {
    "ROUND_ROBIN": "round_robin",
    "LOAD_BALANCED": "load_balanced",
    "SPECIALTY_FIRST": "specialty_first",
    "PRIORITY_WEIGHTED": "priority_weighted",
    "HYBRID": "hybrid",
}

STRATEGY_DESCRIPTIONS = {
    "round_robin": "Rotate assignments evenly through team members",
    "load_balanced": "Assign to team member with lowest current workload",
    "specialty_first": "Prioritize team members with matching specialties",
    "priority_weighted": "Higher priority tasks go to more available specialists",
    "hybrid": "Combines specialty matching with load balancing (recommended)",
}

SnapshotProvider = Callable[[], Iterable[Any]]


def fallback_assign_task(
    roster: Sequence[RosterMember], task_type: str, premium: float = 0
) -> str:
    """
    Simple deterministic assignment used when the distribution engine fails.

    The first member specialized in the task type wins; for high-value
    premiums a ``high-value`` member also qualifies. Otherwise the first
    roster member gets the task.
    """
    if not roster:
        raise EmptyRosterError()

    for member in roster:
        if member.has_specialty(task_type):
            return member.name
        if premium >= HIGH_VALUE_PREMIUM and member.has_specialty("high-value"):
            return member.name

    return roster[0].name


class TaskDistributionService:
    """
    Assign retention tasks to roster members with a selectable strategy.

    The service holds the roster, the active strategy and the round robin
    counter; every call receives a fresh task snapshot.
    """

    def __init__(
        self,
        roster: Optional[Sequence[RosterMember]] = None,
        config: Optional[AppConfig] = None,
        counter: Optional[RoundRobinCounter] = None,
    ):
        """
        Initialize the service.

        Args:
            roster: Ordered roster members, the default retention team if None
            config: Application configuration
            counter: Round robin counter, the process-wide one if None
        """
        self.config = config or AppConfig()
        self.roster: List[RosterMember] = (
            list(roster) if roster is not None else roster_from_dict(DEFAULT_ROSTER)
        )
        self.strategies: Dict[str, AssignmentStrategy] = {
            "round_robin": RoundRobinAssigner(counter),
            "load_balanced": LoadBalancedAssigner(),
            "specialty_first": SpecialtyFirstAssigner(),
            "priority_weighted": PriorityWeightedAssigner(self.config.scoring),
            "hybrid": HybridAssigner(self.config.scoring),
        }
        self.current_strategy = STRATEGIES["HYBRID"]
        if not self.set_distribution_strategy(self.config.default_strategy):
            logger.warning(
                f"Unknown default strategy '{self.config.default_strategy}', using hybrid"
            )
        self.assignment_history: List[Dict[str, Any]] = []

    def distribute_task(
        self,
        task: TaskLike,
        existing_tasks: Optional[Iterable[Any]] = None,
        strategy: Optional[str] = None,
    ) -> str:
        """
        Assign a task with the given or the active strategy.

        Args:
            task: Task to assign
            existing_tasks: Snapshot rows or ExistingTask objects
            strategy: Strategy name overriding the active one

        Returns:
            Name of the chosen roster member
        """
        active = strategy or self.current_strategy
        assigner = self.strategies.get(active)
        if assigner is None:
            logger.warning(f"Unknown strategy '{active}', using hybrid")
            assigner = self.strategies["hybrid"]

        snapshot = tasks_from_records(existing_tasks or [])
        member = assigner.assign(task, snapshot, self.roster)
        logger.debug(f"Task assigned to {member} using {assigner.name} strategy")
        return member

    def set_distribution_strategy(self, strategy: str) -> bool:
        if strategy in STRATEGIES.values():
            self.current_strategy = strategy
            return True
        return False

    def get_current_strategy(self) -> str:
        return self.current_strategy

    def get_available_strategies(self) -> Dict[str, str]:
        return dict(STRATEGIES)

    def redistribute_tasks(
        self,
        existing_tasks: Iterable[Any],
        max_imbalance_percent: Optional[float] = None,
    ) -> List[Redistribution]:
        if max_imbalance_percent is None:
            max_imbalance_percent = self.config.redistribution.max_imbalance_percent
        return redistribute_tasks(
            tasks_from_records(existing_tasks),
            self.roster,
            max_imbalance_percent=max_imbalance_percent,
            move_fraction=self.config.redistribution.move_fraction,
        )

    def generate_distribution_report(
        self, existing_tasks: Iterable[Any]
    ) -> DistributionReport:
        return generate_distribution_report(
            tasks_from_records(existing_tasks),
            self.roster,
            strategy=self.current_strategy,
            max_imbalance_percent=self.config.redistribution.max_imbalance_percent,
            move_fraction=self.config.redistribution.move_fraction,
            config=self.config.report,
        )

    def assign_task(
        self,
        task_type: str,
        premium: float = 0,
        priority: str = "medium",
        snapshot_provider: Optional[SnapshotProvider] = None,
    ) -> str:
        """
        Assign a new task, falling back to a simple rule if anything fails.

        Args:
            task_type: Task category, e.g. "nsf" or "cancellation"
            premium: Annual premium of the policy
            priority: Task priority
            snapshot_provider: Callable returning the current task snapshot

        Returns:
            Name of the chosen roster member
        """
        task = coerce_task({"type": task_type, "premium": premium, "priority": priority})

        try:
            existing_tasks = list(snapshot_provider()) if snapshot_provider else []
            member = self.distribute_task(task, existing_tasks)
        except Exception as e:
            logger.error(f"Error in task assignment, using fallback: {e}")
            return fallback_assign_task(self.roster, task_type, task.premium)

        self._record_assignment(member, task)
        return member

    def _record_assignment(self, member: str, task: TaskDescriptor) -> None:
        self.assignment_history.append(
            {
                "assignedTo": member,
                "taskType": task.type,
                "premium": task.premium,
                "priority": task.priority,
                "strategy": self.current_strategy,
                "timestamp": datetime.now(),
            }
        )
