"""
I/O utilities for the GA engine.

Handles fitness history logging (CSV) and run metadata sidecars (YAML).
"""

import csv
from pathlib import Path
from typing import Union
import yaml

from .data_models import EvolutionResult, GenerationRecord

HISTORY_FIELDS = [
    'generation', 'best_fitness', 'average_fitness',
    'worst_fitness', 'best_ever_fitness'
]


def save_history_log(
    history: list[GenerationRecord],
    output_path: Union[str, Path],
    overwrite: bool = False
) -> Path:
    """
    Save per-generation fitness statistics to CSV file.

    Args:
        history: List of GenerationRecord objects
        output_path: Path for output CSV
        overwrite: If True, overwrite existing file

    Returns:
        Path to saved history log

    Raises:
        FileExistsError: If file exists and overwrite=False
    """
    output_path = Path(output_path)

    if output_path.exists() and not overwrite:
        raise FileExistsError(f"History log already exists: {output_path}")

    # Create parent directory if needed
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=HISTORY_FIELDS)
        writer.writeheader()

        for record in history:
            writer.writerow(record.to_dict())

    return output_path


def load_history_log(csv_path: Union[str, Path]) -> list[GenerationRecord]:
    """
    Load a fitness history CSV written by save_history_log.

    Args:
        csv_path: Path to CSV file

    Returns:
        List of GenerationRecord objects in file order

    Raises:
        FileNotFoundError: If CSV file doesn't exist
        ValueError: If CSV format is invalid
    """
    csv_path = Path(csv_path)

    if not csv_path.exists():
        raise FileNotFoundError(f"History log not found: {csv_path}")

    with open(csv_path, 'r') as f:
        reader = csv.DictReader(f)

        if not set(HISTORY_FIELDS).issubset(set(reader.fieldnames or [])):
            raise ValueError(
                f"Invalid history format in {csv_path}. Expected columns: {','.join(HISTORY_FIELDS)}"
            )

        return [GenerationRecord.from_dict(row) for row in reader]


def save_run_metadata(
    result: EvolutionResult,
    output_path: Union[str, Path],
    extra: dict = None,
    overwrite: bool = False
) -> Path:
    """
    Save a run summary to a YAML sidecar file.

    Args:
        result: Finished search result
        output_path: Path for output YAML
        extra: Additional key/value pairs (seed, parameters, ...)
        overwrite: If True, overwrite existing file

    Returns:
        Path to saved metadata file

    Raises:
        FileExistsError: If file exists and overwrite=False
    """
    output_path = Path(output_path)

    if output_path.exists() and not overwrite:
        raise FileExistsError(f"Metadata file already exists: {output_path}")

    output_path.parent.mkdir(parents=True, exist_ok=True)

    metadata = {
        'best_fitness': result.best_fitness,
        'best_found_in_generation': result.best.metadata.get('generation'),
        'generations': result.generation,
        'stop_reason': result.stop_reason,
        'duration_seconds': round(result.duration, 6),
    }
    if extra:
        metadata.update(extra)

    with open(output_path, 'w') as f:
        yaml.dump(metadata, f, default_flow_style=False, sort_keys=False)

    return output_path
