"""
Loading rosters and task snapshots from files.
"""
import json
import os
from typing import List

import pandas as pd

from models import ExistingTask, RosterMember, roster_from_dict
from utils.logger import logger

# Snapshot columns as exported by the task store, mapped to ExistingTask fields
COLUMN_ALIASES = {
    "task_id": "id",
    "taskId": "id",
    "assignedTo": "assigned_to",
    "assigned to": "assigned_to",
    "task_type": "type",
    "annual_premium": "premium",
}

SNAPSHOT_COLUMNS = ["id", "type", "priority", "premium", "assigned_to", "status"]


def load_roster(path: str) -> List[RosterMember]:
    """
    Load a roster from a JSON file shaped as ``{name: {specialties, capacity}}``.

    Args:
        path: Path to the roster file

    Returns:
        List[RosterMember]: Members in file order
    """
    with open(path, "r") as f:
        data = json.load(f)

    roster = roster_from_dict(data)
    logger.info(f"Loaded {len(roster)} roster members from {path}")
    return roster


def normalize_snapshot(df: pd.DataFrame) -> pd.DataFrame:
    """Rename known column aliases and fill missing values leniently."""
    df = df.rename(columns={k: v for k, v in COLUMN_ALIASES.items() if k in df.columns})

    for column in SNAPSHOT_COLUMNS:
        if column not in df.columns:
            df[column] = None

    df["premium"] = pd.to_numeric(df["premium"], errors="coerce").fillna(0.0)
    df["priority"] = df["priority"].fillna("medium").astype(str).str.strip().str.lower()
    df["status"] = df["status"].fillna("").astype(str).str.strip().str.lower()
    df["type"] = df["type"].fillna("").astype(str)
    df["id"] = df["id"].astype(str)
    df["assigned_to"] = df["assigned_to"].astype(object).where(df["assigned_to"].notna(), None)

    return df[SNAPSHOT_COLUMNS]


def load_tasks(path: str) -> List[ExistingTask]:
    """
    Load a task snapshot from a CSV file.

    Args:
        path: Path to the snapshot CSV

    Returns:
        List[ExistingTask]: Snapshot tasks
    """
    if not os.path.exists(path):
        logger.error(f"Task snapshot {path} not found")
        raise FileNotFoundError(path)

    df = normalize_snapshot(pd.read_csv(path))
    tasks = [ExistingTask.from_dict(row) for row in df.to_dict(orient="records")]
    logger.info(f"Loaded {len(tasks)} tasks from {path}")
    return tasks


def tasks_to_frame(tasks: List[ExistingTask]) -> pd.DataFrame:
    """Convert tasks back to a DataFrame in snapshot column order."""
    return pd.DataFrame(
        [
            {
                "id": t.id,
                "type": t.type,
                "priority": t.priority,
                "premium": t.premium,
                "assigned_to": t.assigned_to,
                "status": t.status,
            }
            for t in tasks
        ],
        columns=SNAPSHOT_COLUMNS,
    )
