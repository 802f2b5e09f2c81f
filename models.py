"""
Core data models for the retention task distribution system.
"""
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set

PRIORITY_HIGH = "high"
PRIORITY_MEDIUM = "medium"
PRIORITY_LOW = "low"
PRIORITIES = (PRIORITY_HIGH, PRIORITY_MEDIUM, PRIORITY_LOW)

STATUS_OPEN = "open"

# Premium at or above this value marks a high-value policy
HIGH_VALUE_PREMIUM = 5000


def coerce_number(value: Any, default: float = 0.0) -> float:
    """Convert a loosely typed numeric field to float, never raising."""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(number):
        return default
    return number


def coerce_priority(value: Any) -> str:
    """Normalize a priority value; missing priorities count as medium."""
    if value is None:
        return PRIORITY_MEDIUM
    text = str(value).strip().lower()
    return text or PRIORITY_MEDIUM


def _coerce_specialties(value: Any) -> Set[str]:
    if not value:
        return set()
    if isinstance(value, str):
        return {s.strip() for s in value.split(",") if s.strip()}
    return {str(s).strip() for s in value if str(s).strip()}


@dataclass
class RosterMember:
    """A retention team member that tasks can be assigned to."""

    name: str
    specialties: Set[str] = field(default_factory=set)
    capacity: int = 0
    email: Optional[str] = None

    def __repr__(self) -> str:
        return (
            f"RosterMember({self.name}, specialties={sorted(self.specialties)}, "
            f"capacity={self.capacity})"
        )

    @classmethod
    def from_dict(cls, name: str, data: Mapping[str, Any]) -> "RosterMember":
        """Build a member from the roster configuration shape."""
        return cls(
            name=name,
            specialties=_coerce_specialties(data.get("specialties")),
            capacity=int(coerce_number(data.get("capacity"))),
            email=data.get("email"),
        )

    def has_specialty(self, specialty: str) -> bool:
        return specialty in self.specialties


def roster_from_dict(config: Mapping[str, Mapping[str, Any]]) -> List[RosterMember]:
    """Build an ordered roster from a ``name -> {specialties, capacity}`` mapping."""
    return [RosterMember.from_dict(name, data or {}) for name, data in config.items()]


@dataclass
class TaskDescriptor:
    """A new task waiting to be assigned."""

    type: str = ""
    priority: str = PRIORITY_MEDIUM
    premium: float = 0.0

    def __post_init__(self):
        self.type = str(self.type or "")
        self.priority = coerce_priority(self.priority)
        self.premium = coerce_number(self.premium)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TaskDescriptor":
        return cls(
            type=data.get("type"),
            priority=data.get("priority"),
            premium=data.get("premium"),
        )

    @property
    def is_high_value(self) -> bool:
        return self.premium >= HIGH_VALUE_PREMIUM


@dataclass
class ExistingTask:
    """A task already in flight, as found in the task store snapshot."""

    id: str
    type: str = ""
    priority: str = PRIORITY_MEDIUM
    premium: float = 0.0
    assigned_to: Optional[str] = None
    # Only an explicit "open" status counts towards workload
    status: str = ""

    def __post_init__(self):
        self.id = str(self.id) if self.id is not None else ""
        self.type = str(self.type or "")
        self.priority = coerce_priority(self.priority)
        self.premium = coerce_number(self.premium)
        self.assigned_to = str(self.assigned_to) if self.assigned_to else None
        self.status = str(self.status or "").strip().lower()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ExistingTask":
        """Build a task from a snapshot row, accepting camelCase and snake_case keys."""
        return cls(
            id=data.get("id", data.get("task_id", data.get("taskId"))),
            type=data.get("type"),
            priority=data.get("priority"),
            premium=data.get("premium"),
            assigned_to=data.get("assignedTo", data.get("assigned_to")),
            status=data.get("status"),
        )

    @property
    def is_open(self) -> bool:
        return self.status == STATUS_OPEN

    def to_descriptor(self) -> TaskDescriptor:
        return TaskDescriptor(type=self.type, priority=self.priority, premium=self.premium)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "priority": self.priority,
            "premium": self.premium,
            "assignedTo": self.assigned_to,
            "status": self.status,
        }


def tasks_from_records(records: Optional[Iterable[Any]]) -> List[ExistingTask]:
    """Convert raw snapshot rows to ExistingTask objects."""
    return [
        r if isinstance(r, ExistingTask) else ExistingTask.from_dict(r)
        for r in records or []
    ]


@dataclass
class PriorityBreakdown:
    high: int = 0
    medium: int = 0
    low: int = 0
    total: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {"high": self.high, "medium": self.medium, "low": self.low, "total": self.total}


@dataclass
class WorkloadStat:
    """Workload of one roster member derived from a task snapshot."""

    name: str
    capacity: int
    assigned: int
    utilization_percent: float
    available: int
    tasks: PriorityBreakdown
    avg_premium: float
    total_premium: float
    specialties: Set[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "capacity": self.capacity,
            "assigned": self.assigned,
            "utilizationPercent": self.utilization_percent,
            "available": self.available,
            "tasks": self.tasks.to_dict(),
            "avgPremium": self.avg_premium,
            "totalPremium": self.total_premium,
            "specialties": sorted(self.specialties),
        }


@dataclass
class Redistribution:
    """A proposed, not executed, move of an open task."""

    task_id: str
    from_member: str
    to_member: str
    reason: str = "Load balancing"

    def to_dict(self) -> Dict[str, str]:
        return {
            "taskId": self.task_id,
            "from": self.from_member,
            "to": self.to_member,
            "reason": self.reason,
        }


@dataclass
class Recommendation:
    type: str
    member: str
    message: str
    priority: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "type": self.type,
            "member": self.member,
            "message": self.message,
            "priority": self.priority,
        }


@dataclass
class TeamSummary:
    total_tasks: int
    average_utilization: float
    balance_score: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalTasks": self.total_tasks,
            "averageUtilization": self.average_utilization,
            "balanceScore": self.balance_score,
        }


@dataclass
class DistributionReport:
    """Team workload summary produced for display by the dashboard."""

    timestamp: datetime
    strategy: str
    team_summary: TeamSummary
    members: Dict[str, WorkloadStat]
    redistribution_suggestions: List[Redistribution]
    recommendations: List[Recommendation]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "strategy": self.strategy,
            "teamSummary": self.team_summary.to_dict(),
            "members": {name: stat.to_dict() for name, stat in self.members.items()},
            "redistributionSuggestions": [r.to_dict() for r in self.redistribution_suggestions],
            "recommendations": [r.to_dict() for r in self.recommendations],
        }
