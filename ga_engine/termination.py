"""
Termination conditions for the GA engine.

A condition inspects the current search state and returns a stop reason
when the search should end, or None to keep going.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass
class SearchState:
    """Snapshot handed to termination conditions after each generation."""
    generation: int
    best_fitness: int


class StopCondition(ABC):
    """Base class for termination conditions."""

    @abstractmethod
    def check(self, state: SearchState) -> Optional[str]:
        """
        Evaluate the condition.

        Args:
            state: Current search state

        Returns:
            Stop reason if the search should end, None otherwise
        """


class GenerationLimit(StopCondition):
    """Stop once the given number of generations has been produced."""

    def __init__(self, max_generations: int):
        if max_generations < 0:
            raise ValueError(f"Generation limit must be non-negative, got {max_generations}")
        self.max_generations = max_generations

    def check(self, state: SearchState) -> Optional[str]:
        if state.generation >= self.max_generations:
            return f"Generation limit of {self.max_generations} reached"
        return None


class FitnessLimit(StopCondition):
    """Stop once the best fitness reaches the target."""

    def __init__(self, target_fitness: int):
        self.target_fitness = target_fitness

    def check(self, state: SearchState) -> Optional[str]:
        if state.best_fitness >= self.target_fitness:
            return f"Fitness limit of {self.target_fitness} reached"
        return None


class Or(StopCondition):
    """Stop when any of the wrapped conditions is met (first one wins)."""

    def __init__(self, *conditions: StopCondition):
        if not conditions:
            raise ValueError("Or requires at least one condition")
        self.conditions = conditions

    def check(self, state: SearchState) -> Optional[str]:
        for condition in self.conditions:
            reason = condition.check(state)
            if reason is not None:
                return reason
        return None
