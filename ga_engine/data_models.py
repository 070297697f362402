"""
Data models for the GA engine.

Core data structures representing genome layouts, individuals, per-generation
history records and the outcome of a search run.
"""

from dataclasses import dataclass, field, replace
from typing import Optional, Any

import numpy as np


@dataclass(frozen=True)
class GenomeSpec:
    """
    Shape of a value-encoded genome.

    Every gene is an integer in the closed range [min_value, max_value].

    Attributes:
        length: Number of genes
        min_value: Smallest allowed gene value
        max_value: Largest allowed gene value
    """
    length: int
    min_value: int
    max_value: int

    def __post_init__(self):
        """Validate genome bounds."""
        if self.length < 0:
            raise ValueError(f"Genome length must be non-negative, got {self.length}")
        if self.max_value < self.min_value:
            raise ValueError(
                f"Invalid gene range [{self.min_value}, {self.max_value}]"
            )

    def random_genome(self, rng: np.random.Generator) -> np.ndarray:
        """
        Draw one genome uniformly at random.

        Args:
            rng: Random number generator

        Returns:
            Integer array of shape (length,)
        """
        return rng.integers(self.min_value, self.max_value + 1, size=self.length)

    def contains(self, genome: np.ndarray) -> bool:
        """Check that a genome has the right length and every gene is in range."""
        if len(genome) != self.length:
            return False
        if self.length == 0:
            return True
        return bool(genome.min() >= self.min_value and genome.max() <= self.max_value)


@dataclass(frozen=True)
class SearchParams:
    """
    Tuning knobs of one genetic search run.

    Attributes:
        population_size: Number of individuals per generation
        generations: Generation budget (0 scores the initial population only)
        selection_ratio: Parent groups per generation as a fraction of population_size
        parents_per_group: Parents combined by each crossover
        mutation_rate: Per-gene mutation probability
        replace_ratio: Fraction of the population replaced by offspring
    """
    population_size: int = 100
    generations: int = 100
    selection_ratio: float = 0.7
    parents_per_group: int = 2
    mutation_rate: float = 0.05
    replace_ratio: float = 0.7

    def __post_init__(self):
        """Validate search parameters."""
        if not isinstance(self.population_size, int) or self.population_size <= 0:
            raise ValueError(
                f"population_size must be a positive integer, got: {self.population_size}"
            )
        if not isinstance(self.generations, int) or self.generations < 0:
            raise ValueError(
                f"generations must be a non-negative integer, got: {self.generations}"
            )
        if not isinstance(self.parents_per_group, int) or self.parents_per_group <= 0:
            raise ValueError(
                f"parents_per_group must be a positive integer, got: {self.parents_per_group}"
            )
        for name in ("selection_ratio", "mutation_rate", "replace_ratio"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got: {value}")

    def with_overrides(self, **overrides: Any) -> "SearchParams":
        """
        Copy with selected fields replaced; None values are ignored.

        Returns:
            New SearchParams instance
        """
        values = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **values)


@dataclass
class Individual:
    """
    A single candidate solution in the population.

    Attributes:
        genome: Integer array encoding the candidate
        fitness: Score assigned by the fitness function (None until evaluated)
        metadata: Additional information (origin, generation born, etc.)
    """
    genome: np.ndarray
    fitness: Optional[int] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def copy(self) -> "Individual":
        """
        Create a deep copy of this individual.

        Returns:
            New Individual with copied genome and metadata
        """
        return Individual(
            genome=self.genome.copy(),
            fitness=self.fitness,
            metadata=self.metadata.copy()
        )

    @property
    def is_evaluated(self) -> bool:
        return self.fitness is not None

    def __len__(self) -> int:
        """Number of genes."""
        return len(self.genome)


@dataclass
class GenerationRecord:
    """
    Fitness statistics of one generation.

    Attributes:
        generation: Generation number (0 is the initial population)
        best_fitness: Highest fitness in the population
        average_fitness: Average fitness as computed by the fitness function
        worst_fitness: Lowest fitness in the population
        best_ever_fitness: Highest fitness seen so far in the run
    """
    generation: int
    best_fitness: int
    average_fitness: int
    worst_fitness: int
    best_ever_fitness: int

    def to_dict(self) -> dict[str, Any]:
        """
        Convert record to dictionary for CSV export.

        Returns:
            Dictionary with string-serializable values
        """
        return {
            "generation": self.generation,
            "best_fitness": self.best_fitness,
            "average_fitness": self.average_fitness,
            "worst_fitness": self.worst_fitness,
            "best_ever_fitness": self.best_ever_fitness,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GenerationRecord":
        """
        Create record from dictionary (e.g., from CSV).

        Args:
            data: Dictionary with history values

        Returns:
            GenerationRecord instance
        """
        return cls(
            generation=int(data["generation"]),
            best_fitness=int(data["best_fitness"]),
            average_fitness=int(data["average_fitness"]),
            worst_fitness=int(data["worst_fitness"]),
            best_ever_fitness=int(data["best_ever_fitness"]),
        )


@dataclass
class EvolutionResult:
    """
    Outcome of a genetic search run.

    Attributes:
        best: Best individual ever evaluated during the run
        generation: Generation at which the search stopped
        stop_reason: Human readable termination reason
        duration: Wall clock seconds spent in the search
        history: Per-generation fitness statistics
    """
    best: Individual
    generation: int
    stop_reason: str
    duration: float = 0.0
    history: list[GenerationRecord] = field(default_factory=list)

    @property
    def best_genome(self) -> np.ndarray:
        return self.best.genome

    @property
    def best_fitness(self) -> int:
        return self.best.fitness
