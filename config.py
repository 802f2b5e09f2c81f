"""
Configuration management for the application.
"""
from dataclasses import dataclass, field, fields
from typing import Dict, Any

from utils.logger import logger


# Retention team used when no roster file is supplied
DEFAULT_ROSTER: Dict[str, Dict[str, Any]] = {
    "Mark Vallejo": {
        "email": "mark@company.com",
        "specialties": ["high-value", "commercial"],
        "capacity": 15,
    },
    "Monica Archuleta": {
        "email": "monica@company.com",
        "specialties": ["nsf", "payment-issues"],
        "capacity": 20,
    },
    "Stephen Brown": {
        "email": "stephen@company.com",
        "specialties": ["cancellation", "retention"],
        "capacity": 18,
    },
}


@dataclass
class ScoringConfig:
    """Weights used by the scoring strategies."""

    hybrid_specialty_bonus: float = 50.0
    hybrid_high_value_bonus: float = 30.0
    high_priority_multiplier: float = 1.5
    medium_priority_multiplier: float = 1.0
    low_priority_multiplier: float = 0.8
    overload_penalty: float = 0.5
    critical_overload_penalty: float = 0.3
    weighted_specialty_bonus: float = 10.0
    weighted_high_priority_bonus: float = 5.0
    weighted_premium_bonus: float = 3.0

    def priority_multiplier(self, priority: str) -> float:
        """Return the hybrid multiplier for a priority; unknown values are neutral."""
        return {
            "high": self.high_priority_multiplier,
            "medium": self.medium_priority_multiplier,
            "low": self.low_priority_multiplier,
        }.get(priority, 1.0)


@dataclass
class RedistributionConfig:
    """Configuration for workload redistribution."""

    max_imbalance_percent: float = 50.0
    move_fraction: float = 0.2


@dataclass
class ReportConfig:
    """Utilization thresholds for report recommendations."""

    critical_threshold: float = 150.0
    warning_threshold: float = 100.0
    underutilized_threshold: float = 50.0


@dataclass
class AppConfig:
    """Main application configuration."""

    seed: int = 42
    default_strategy: str = "hybrid"
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    redistribution: RedistributionConfig = field(default_factory=RedistributionConfig)
    report: ReportConfig = field(default_factory=ReportConfig)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "AppConfig":
        """Create a configuration from a flat dictionary; unknown keys are ignored."""
        scoring_fields = {f.name for f in fields(ScoringConfig)}
        scoring_values = {}
        for key, value in config_dict.items():
            if not key.startswith("SCORING_"):
                continue
            name = key.split("_", 1)[1].lower()
            if name in scoring_fields:
                scoring_values[name] = value
            else:
                logger.warning(f"Ignoring unknown configuration key {key}")
        scoring_config = ScoringConfig(**scoring_values)

        redistribution_config = RedistributionConfig(
            max_imbalance_percent=config_dict.get("MAX_IMBALANCE_PERCENT", 50.0),
            move_fraction=config_dict.get("MOVE_FRACTION", 0.2),
        )

        report_config = ReportConfig(
            critical_threshold=config_dict.get("REPORT_CRITICAL_THRESHOLD", 150.0),
            warning_threshold=config_dict.get("REPORT_WARNING_THRESHOLD", 100.0),
            underutilized_threshold=config_dict.get(
                "REPORT_UNDERUTILIZED_THRESHOLD", 50.0
            ),
        )

        return cls(
            seed=config_dict.get("SEED", 42),
            default_strategy=config_dict.get("DEFAULT_STRATEGY", "hybrid"),
            scoring=scoring_config,
            redistribution=redistribution_config,
            report=report_config,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a flat dictionary."""
        result = {"SEED": self.seed, "DEFAULT_STRATEGY": self.default_strategy}

        for key, value in vars(self.scoring).items():
            result[f"SCORING_{key.upper()}"] = value

        result["MAX_IMBALANCE_PERCENT"] = self.redistribution.max_imbalance_percent
        result["MOVE_FRACTION"] = self.redistribution.move_fraction

        for key, value in vars(self.report).items():
            result[f"REPORT_{key.upper()}"] = value

        return result
