"""
Configuration Loading System

Loads YAML configuration files and converts them to the immutable
configuration values threaded through both planning stages.
"""

import yaml
from dataclasses import dataclass, asdict, fields
from typing import Dict, List, Any, Optional, Union
from pathlib import Path

from ga_engine.data_models import SearchParams


class ConfigurationError(Exception):
    """Raised when configuration is invalid"""
    pass


@dataclass(frozen=True)
class PlanningConfig:
    """Cost and capacity constants shared by batching and waving"""
    max_weight_per_batch: int = 1000
    max_articles_per_wave: int = 250
    cost_per_wave: int = 10
    cost_per_batch: int = 5
    cost_per_warehouse: int = 10
    cost_per_aisle: int = 5


@dataclass(frozen=True)
class RunConfig:
    """Everything a planning run needs besides the input itself"""
    planning: PlanningConfig = PlanningConfig()
    batching: SearchParams = SearchParams()
    waving: SearchParams = SearchParams()
    random_seed: Optional[int] = None

    def with_search_overrides(self,
                              batch_individuals: Optional[int] = None,
                              batch_generations: Optional[int] = None,
                              wave_individuals: Optional[int] = None,
                              wave_generations: Optional[int] = None,
                              random_seed: Optional[int] = None) -> 'RunConfig':
        """Apply command line overrides; None keeps the configured value"""
        return RunConfig(
            planning=self.planning,
            batching=self.batching.with_overrides(
                population_size=batch_individuals, generations=batch_generations
            ),
            waving=self.waving.with_overrides(
                population_size=wave_individuals, generations=wave_generations
            ),
            random_seed=self.random_seed if random_seed is None else random_seed
        )


SECTIONS = {
    "planning": PlanningConfig,
    "batching": SearchParams,
    "waving": SearchParams,
}

POSITIVE_PLANNING_KEYS = ("max_weight_per_batch", "max_articles_per_wave")


def load_config(config_path: Union[str, Path] = "config.yaml") -> RunConfig:
    """Load configuration from YAML file"""
    try:
        with open(config_path, 'r') as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigurationError(f"Configuration file not found: {config_path}")
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in configuration file: {e}")

    return config_from_dict(data or {})


def config_from_dict(data: Dict[str, Any]) -> RunConfig:
    """
    Convert a parsed configuration dictionary into a RunConfig

    Args:
        data: Dictionary with optional 'planning', 'batching', 'waving'
              and 'random_seed' keys

    Returns:
        Validated RunConfig
    """
    issues = validate_config(data)
    if issues:
        raise ConfigurationError("; ".join(issues))

    try:
        return RunConfig(
            planning=PlanningConfig(**(data.get("planning") or {})),
            batching=SearchParams(**(data.get("batching") or {})),
            waving=SearchParams(**(data.get("waving") or {})),
            random_seed=data.get("random_seed")
        )
    except (TypeError, ValueError) as e:
        raise ConfigurationError(str(e))


def validate_config(data: Dict[str, Any]) -> List[str]:
    """
    Validate configuration and return list of issues

    Returns:
        List of validation error messages (empty if valid)
    """
    issues = []

    if not isinstance(data, dict):
        return ["Configuration must be a mapping"]

    for key in data:
        if key not in SECTIONS and key != "random_seed":
            issues.append(f"Unknown section: {key}")

    for section, section_type in SECTIONS.items():
        section_data = data.get(section) or {}
        if not isinstance(section_data, dict):
            issues.append(f"Section '{section}' must be a mapping")
            continue

        known = {f.name for f in fields(section_type)}
        for key, value in section_data.items():
            if key not in known:
                issues.append(f"Unknown key in '{section}': {key}")
            elif isinstance(value, bool) or not isinstance(value, (int, float)):
                issues.append(f"'{section}.{key}' must be a number, got: {value!r}")

    planning = data.get("planning") or {}
    if isinstance(planning, dict):
        for key in POSITIVE_PLANNING_KEYS:
            value = planning.get(key, 1)
            if isinstance(value, (int, float)) and value <= 0:
                issues.append(f"'planning.{key}' must be positive")
        for key, value in planning.items():
            if key.startswith("cost_per_") and isinstance(value, (int, float)) and value < 0:
                issues.append(f"'planning.{key}' must not be negative")

    seed = data.get("random_seed")
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int) or seed < 0):
        issues.append(f"'random_seed' must be a non-negative integer or null, got: {seed!r}")

    return issues


def config_to_dict(config: RunConfig) -> Dict[str, Any]:
    """Plain dictionary view of a RunConfig, e.g. for run metadata sidecars"""
    return asdict(config)


def print_config_summary(config: RunConfig):
    """Print a summary of the configuration"""
    planning = config.planning

    print("=" * 50)
    print("CONFIGURATION SUMMARY")
    print("=" * 50)

    print(f"Max weight per batch: {planning.max_weight_per_batch}")
    print(f"Max articles per wave: {planning.max_articles_per_wave}")
    print(f"Costs: warehouse={planning.cost_per_warehouse}, aisle={planning.cost_per_aisle}, "
          f"batch={planning.cost_per_batch}, wave={planning.cost_per_wave}")

    for name, params in (("Batching", config.batching), ("Waving", config.waving)):
        print(f"\n{name} search:")
        print(f"  population={params.population_size}, generations={params.generations}")
        print(f"  selection_ratio={params.selection_ratio}, mutation_rate={params.mutation_rate}, "
              f"replace_ratio={params.replace_ratio}")

    print(f"\nRandom seed: {config.random_seed if config.random_seed is not None else 'random'}")
    print("=" * 50)
