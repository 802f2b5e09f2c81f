"""
Utility functions for generating rosters and task snapshots.
"""
import random
from typing import Any, Dict, List, Optional, Tuple

from faker import Faker

from models import ExistingTask, RosterMember, TaskDescriptor
from utils.logger import logger


class DataGenerator:
    """Generator for demo and test data: rosters, snapshots and new tasks."""

    def __init__(self, seed: int = 42, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the generator with a specific seed and optional configuration.

        Args:
            seed: Random seed for reproducibility
            config: Optional configuration settings
        """
        self.seed = seed
        self.fake = Faker()
        self.fake.seed_instance(seed)
        self.random = random.Random(seed)

        self.config = config or {
            "specialties": [
                "nsf",
                "cancellation",
                "retention",
                "high-value",
                "payment-issues",
                "commercial",
            ],
            "task_types": [
                "nsf",
                "nsf_followup",
                "cancellation",
                "cancellation_review",
                "retention_call",
                "payment_reminder",
                "commercial_review",
            ],
            "priorities": ["high", "medium", "low"],
            "capacity_min": 10,
            "capacity_max": 20,
            "specialties_per_member": 2,
            "premium_min": 500,
            "premium_max": 12000,
            "open_ratio": 0.8,
        }

    def generate_roster(self, num_members: int) -> List[RosterMember]:
        """
        Generate a roster, cycling specialties so every tag is covered.

        Args:
            num_members: Number of members to generate

        Returns:
            List[RosterMember]: Generated members
        """
        specialties = self.config["specialties"]
        per_member = self.config["specialties_per_member"]
        roster = []
        used_names = set()

        for i in range(num_members):
            name = self.fake.name()
            while name in used_names:
                name = self.fake.name()
            used_names.add(name)

            tags = {specialties[(i * per_member + k) % len(specialties)] for k in range(per_member)}
            member = RosterMember(
                name=name,
                specialties=tags,
                capacity=self.fake.random_int(
                    min=self.config["capacity_min"], max=self.config["capacity_max"]
                ),
                email=self.fake.email(),
            )
            roster.append(member)
            logger.debug(f"Created member: {member}")

        logger.info(f"Generated roster of {len(roster)} members")
        return roster

    def generate_task_descriptor(self) -> TaskDescriptor:
        return TaskDescriptor(
            type=self.random.choice(self.config["task_types"]),
            priority=self.random.choice(self.config["priorities"]),
            premium=float(
                self.fake.random_int(
                    min=self.config["premium_min"], max=self.config["premium_max"]
                )
            ),
        )

    def generate_task_descriptors(self, num_tasks: int) -> List[TaskDescriptor]:
        return [self.generate_task_descriptor() for _ in range(num_tasks)]

    def generate_existing_tasks(
        self,
        roster: List[RosterMember],
        num_tasks: int,
        open_ratio: Optional[float] = None,
        skew: float = 0.0,
    ) -> List[ExistingTask]:
        """
        Generate a snapshot of tasks already assigned to roster members.

        Args:
            roster: Members to assign the tasks to
            num_tasks: Number of tasks to generate
            open_ratio: Share of tasks that are still open
            skew: Extra weight for the first member, 0 means uniform

        Returns:
            List[ExistingTask]: Generated tasks
        """
        if open_ratio is None:
            open_ratio = self.config["open_ratio"]

        weights = [1.0 + (skew if i == 0 else 0.0) for i in range(len(roster))]
        tasks = []

        for i in range(num_tasks):
            descriptor = self.generate_task_descriptor()
            member = self.random.choices(roster, weights=weights)[0]
            tasks.append(
                ExistingTask(
                    id=f"T{i + 1}",
                    type=descriptor.type,
                    priority=descriptor.priority,
                    premium=descriptor.premium,
                    assigned_to=member.name,
                    status="open" if self.random.random() < open_ratio else "completed",
                )
            )

        open_count = sum(1 for t in tasks if t.is_open)
        logger.info(f"Generated {len(tasks)} tasks, {open_count} open")
        return tasks

    def generate_scenario(
        self, num_members: int, num_tasks: int, skew: float = 0.0
    ) -> Tuple[List[RosterMember], List[ExistingTask]]:
        """
        Generate a roster together with a task snapshot for it.

        Args:
            num_members: Number of roster members
            num_tasks: Number of existing tasks
            skew: Extra weight for the first member

        Returns:
            Tuple of roster and snapshot
        """
        roster = self.generate_roster(num_members)
        tasks = self.generate_existing_tasks(roster, num_tasks, skew=skew)
        return roster, tasks
