"""
Orchestration module for the GA engine.

Implements the generation loop shared by every problem: evaluate, select,
breed, mutate, reinsert, until a termination condition fires.
"""

import logging
import time
from typing import List, Optional

import numpy as np

from .data_models import (
    EvolutionResult,
    GenerationRecord,
    GenomeSpec,
    Individual,
    SearchParams,
)
from .fitness import FitnessFunction
from .selection import roulette_wheel_selection, elitist_reinsertion
from .crossover import apply_crossover
from .mutation import mutate
from .termination import FitnessLimit, GenerationLimit, Or, SearchState, StopCondition

logger = logging.getLogger(__name__)


class SearchError(Exception):
    """Raised when the search machinery itself fails."""
    pass


class GeneticSearch:
    """
    Generic genetic search over value-encoded integer genomes.

    The search is parameterized by a GenomeSpec (what a genome looks like)
    and a FitnessFunction (how good it is). Each generation is fully
    evaluated before the next one is produced.
    """

    def __init__(
        self,
        fitness_function: FitnessFunction,
        genome_spec: GenomeSpec,
        params: SearchParams,
        rng: np.random.Generator,
        stop_condition: Optional[StopCondition] = None,
        name: str = "search"
    ):
        """
        Initialize the search.

        Args:
            fitness_function: Scores genomes
            genome_spec: Genome length and gene value range
            params: Population size, generation budget and operator rates
            rng: Random number generator used by every operator
            stop_condition: Termination condition (default: generation budget
                or highest possible fitness, whichever first)
            name: Label used in log messages
        """
        if genome_spec.length == 0:
            raise SearchError(f"{name}: cannot search over zero-length genomes")

        self.fitness_function = fitness_function
        self.genome_spec = genome_spec
        self.params = params
        self.rng = rng
        self.name = name

        if stop_condition is None:
            stop_condition = Or(
                GenerationLimit(params.generations),
                FitnessLimit(fitness_function.highest_possible_fitness())
            )
        self.stop_condition = stop_condition

        self.population: List[Individual] = []
        self.best: Optional[Individual] = None
        self.generation = 0
        self.history: List[GenerationRecord] = []

    def initialize_population(self) -> List[Individual]:
        """
        Create and evaluate the initial population uniformly at random.

        Returns:
            Evaluated initial population
        """
        self.population = [
            Individual(
                genome=self.genome_spec.random_genome(self.rng),
                metadata={'origin': 'initial'}
            )
            for _ in range(self.params.population_size)
        ]
        self.evaluate(self.population)
        self.generation = 0
        self._record_generation()
        return self.population

    def evaluate(self, individuals: List[Individual]) -> None:
        """
        Score every unevaluated individual in place.

        Raises:
            SearchError: If the fitness function returns an invalid score
        """
        lowest = self.fitness_function.lowest_possible_fitness()
        highest = self.fitness_function.highest_possible_fitness()

        for individual in individuals:
            if individual.is_evaluated:
                continue

            fitness = self.fitness_function.fitness_of(individual.genome)

            if isinstance(fitness, (bool, float)) or not isinstance(fitness, (int, np.integer)):
                raise SearchError(
                    f"{self.name}: fitness function returned non-integer score {fitness!r}"
                )
            if not lowest <= fitness <= highest:
                raise SearchError(
                    f"{self.name}: fitness {fitness} outside [{lowest}, {highest}]"
                )

            individual.fitness = int(fitness)

    def step(self) -> List[Individual]:
        """
        Produce and evaluate the next generation.

        Returns:
            The new population
        """
        if not self.population:
            raise SearchError(f"{self.name}: population is empty, initialize it first")

        parent_groups = roulette_wheel_selection(
            self.population,
            self.params.selection_ratio,
            self.params.parents_per_group,
            self.rng
        )
        offspring = apply_crossover(parent_groups, self.rng)
        mutate(offspring, self.genome_spec, self.params.mutation_rate, self.rng)
        self.evaluate(offspring)

        self.population = elitist_reinsertion(
            self.population, offspring, self.params.replace_ratio
        )
        self.generation += 1
        self._record_generation()

        return self.population

    def run(self) -> EvolutionResult:
        """
        Run the search until the stop condition fires.

        Returns:
            EvolutionResult holding the best individual ever evaluated
        """
        start_time = time.perf_counter()

        self.initialize_population()
        stop_reason = self.stop_condition.check(self._state())

        while stop_reason is None:
            self.step()
            stop_reason = self.stop_condition.check(self._state())

        duration = time.perf_counter() - start_time

        logger.info(
            "%s: generation %d fitness %d",
            self.name, self.generation, self.best.fitness
        )
        logger.info(
            "%s: duration %.3fs, stop reason: %s",
            self.name, duration, stop_reason
        )

        return EvolutionResult(
            best=self.best.copy(),
            generation=self.generation,
            stop_reason=stop_reason,
            duration=duration,
            history=list(self.history)
        )

    def _state(self) -> SearchState:
        return SearchState(generation=self.generation, best_fitness=self.best.fitness)

    def _record_generation(self) -> None:
        """Update the best-ever individual and append a history row."""
        fitnesses = [ind.fitness for ind in self.population]
        generation_best = max(self.population, key=lambda ind: ind.fitness)

        if self.best is None or generation_best.fitness > self.best.fitness:
            self.best = generation_best.copy()
            self.best.metadata['generation'] = self.generation

        record = GenerationRecord(
            generation=self.generation,
            best_fitness=generation_best.fitness,
            average_fitness=self.fitness_function.average(fitnesses),
            worst_fitness=min(fitnesses),
            best_ever_fitness=self.best.fitness
        )
        self.history.append(record)

        logger.debug(
            "%s: generation %d fitness %d (avg %d)",
            self.name, record.generation, record.best_fitness, record.average_fitness
        )


def run_genetic_search(
    fitness_function: FitnessFunction,
    genome_spec: GenomeSpec,
    params: SearchParams,
    rng: np.random.Generator,
    name: str = "search"
) -> EvolutionResult:
    """
    Convenience wrapper: build a GeneticSearch and run it.

    Args:
        fitness_function: Scores genomes
        genome_spec: Genome length and gene value range
        params: Search parameters
        rng: Random number generator
        name: Label used in log messages

    Returns:
        EvolutionResult of the run

    Raises:
        SearchError: If the search machinery fails
    """
    search = GeneticSearch(fitness_function, genome_spec, params, rng, name=name)
    return search.run()
