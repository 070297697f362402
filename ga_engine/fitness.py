"""
Fitness function contract for the GA engine.

The engine never interprets a genome itself. Every problem plugs in a
FitnessFunction that scores genomes on a bounded integer scale where
higher is better.
"""

from abc import ABC, abstractmethod
from typing import Sequence

import numpy as np


class FitnessFunction(ABC):
    """
    Scores genomes for the genetic search.

    Implementations must be pure: the score may only depend on the genome
    and on immutable problem data held by the instance.
    """

    @abstractmethod
    def fitness_of(self, genome: np.ndarray) -> int:
        """
        Score a single genome.

        Args:
            genome: Integer array to score

        Returns:
            Fitness in [lowest_possible_fitness(), highest_possible_fitness()]
        """

    def average(self, fitnesses: Sequence[int]) -> int:
        """Integer mean of a population's fitness values."""
        if not fitnesses:
            return self.lowest_possible_fitness()
        return sum(fitnesses) // len(fitnesses)

    def highest_possible_fitness(self) -> int:
        return 100

    def lowest_possible_fitness(self) -> int:
        return 0
