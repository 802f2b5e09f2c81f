"""
Command line entry point for the retention task distribution engine.
"""
import argparse
import json
import logging
import os
from copy import deepcopy
from typing import Any, Dict, List, Optional

from config import AppConfig
from models import ExistingTask, RosterMember, TaskDescriptor
from analysis.metrics import compare_strategies, compute_distribution_metrics
from analysis.workload import analyze_workload
from assignment.round_robin import RoundRobinCounter
from export import export_report_to_excel
from service import STRATEGIES, STRATEGY_DESCRIPTIONS, TaskDistributionService
from utils.generators import DataGenerator
from utils.loaders import load_roster, load_tasks
from utils.logger import logger, setup_logger
from utils.validators import validate_redistributions, validate_roster, validate_tasks


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """
    Load configuration from file or use defaults.

    Args:
        config_path: Path to configuration file

    Returns:
        AppConfig: Application configuration
    """
    if config_path and os.path.exists(config_path):
        try:
            with open(config_path, "r") as f:
                config_dict = json.load(f)
            return AppConfig.from_dict(config_dict)
        except (OSError, ValueError, TypeError) as e:
            logger.error(f"Error loading config from {config_path}: {e}")
            logger.info("Using default configuration.")
            return AppConfig()
    else:
        return AppConfig()


def write_json(data: Any, output_dir: str, filename: str) -> str:
    """Write a JSON result file and return its path."""
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, filename)
    with open(path, "w") as f:
        json.dump(data, f, indent=2, default=str)
    logger.info(f"Results saved to {path}")
    return path


def run_simulation(
    config: AppConfig,
    num_members: int = 5,
    num_existing: int = 60,
    num_new: int = 40,
) -> Dict[str, Any]:
    """
    Route the same batch of new tasks through every strategy and compare.

    Each strategy starts from the same generated snapshot; every assignment
    is appended to that strategy's own copy as an open task so later
    decisions see the growing workload.

    Args:
        config: Application configuration
        num_members: Roster size
        num_existing: Tasks already in flight
        num_new: New tasks to distribute

    Returns:
        Dict[str, Any]: Simulation results
    """
    generator = DataGenerator(seed=config.seed)
    roster, snapshot = generator.generate_scenario(num_members, num_existing, skew=1.0)
    new_tasks = generator.generate_task_descriptors(num_new)

    assignments: Dict[str, List[str]] = {}
    metrics: Dict[str, Dict[str, float]] = {}

    for strategy in STRATEGIES.values():
        service = TaskDistributionService(roster, config, counter=RoundRobinCounter())
        tasks: List[ExistingTask] = deepcopy(snapshot)
        chosen = []

        for i, task in enumerate(new_tasks):
            member = service.distribute_task(task, tasks, strategy=strategy)
            chosen.append(member)
            tasks.append(
                ExistingTask(
                    id=f"N{i + 1}",
                    type=task.type,
                    priority=task.priority,
                    premium=task.premium,
                    assigned_to=member,
                    status="open",
                )
            )

        assignments[strategy] = chosen
        metrics[strategy] = compute_distribution_metrics(analyze_workload(roster, tasks))
        logger.info(f"{strategy} metrics: {metrics[strategy]}")

    best = compare_strategies(metrics)
    logger.info(f"Best strategies by metric: {best}")

    return {
        "roster": [m.name for m in roster],
        "assignments": assignments,
        "metrics": metrics,
        "best_strategies": best,
    }


def build_parser() -> argparse.ArgumentParser:
    strategy_help = "; ".join(f"{k}: {v}" for k, v in STRATEGY_DESCRIPTIONS.items())
    parser = argparse.ArgumentParser(
        description="Retention task distribution and workload balancing"
    )
    parser.add_argument(
        "command",
        choices=["assign", "redistribute", "report", "simulate"],
        help="Action to run",
    )
    parser.add_argument("--config", help="Path to configuration file")
    parser.add_argument("--roster", help="Path to roster JSON (default team if omitted)")
    parser.add_argument("--tasks", help="Path to task snapshot CSV")
    parser.add_argument(
        "--strategy", choices=list(STRATEGIES.values()), help=strategy_help
    )
    parser.add_argument("--type", default="", help="Type of the task to assign")
    parser.add_argument(
        "--priority", default="medium", help="Priority of the task to assign"
    )
    parser.add_argument(
        "--premium", type=float, default=0.0, help="Premium of the task to assign"
    )
    parser.add_argument(
        "--excel", action="store_true", help="Also export the report to Excel"
    )
    parser.add_argument("--output-dir", default="output", help="Directory for results")
    parser.add_argument("--log-file", help="Also write log messages to this file")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Set the logging level",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    args = build_parser().parse_args(argv)

    setup_logger(level=getattr(logging, args.log_level), log_file=args.log_file)

    config = load_config(args.config)
    if args.strategy:
        config.default_strategy = args.strategy

    if args.command == "simulate":
        results = run_simulation(config)
        write_json(results, args.output_dir, "simulation_summary.json")
        return 0

    roster: Optional[List[RosterMember]] = load_roster(args.roster) if args.roster else None
    service = TaskDistributionService(roster, config)
    if not validate_roster(service.roster):
        logger.error("Invalid roster. Exiting.")
        return 1

    tasks = load_tasks(args.tasks) if args.tasks else []
    if not validate_tasks(tasks, service.roster):
        logger.error("Invalid task snapshot. Exiting.")
        return 1

    if args.command == "assign":
        task = TaskDescriptor.from_dict(
            {"type": args.type, "priority": args.priority, "premium": args.premium}
        )
        member = service.distribute_task(task, tasks)
        logger.info(f"Task assigned to {member} using {service.get_current_strategy()} strategy")
        write_json(
            {"assignedTo": member, "strategy": service.get_current_strategy()},
            args.output_dir,
            "assignment.json",
        )
    elif args.command == "redistribute":
        moves = service.redistribute_tasks(tasks)
        if not validate_redistributions(moves, tasks, service.roster):
            logger.error("Redistribution produced invalid moves.")
            return 1
        write_json([m.to_dict() for m in moves], args.output_dir, "redistributions.json")
    else:
        report = service.generate_distribution_report(tasks)
        write_json(report.to_dict(), args.output_dir, "distribution_report.json")
        if args.excel:
            export_report_to_excel(
                report, os.path.join(args.output_dir, "distribution_report.xlsx")
            )

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
