"""
Selection and reinsertion operators for the GA engine.

Implements fitness-proportional (roulette wheel) parent selection and
elitist reinsertion of offspring into the next generation.
"""

from typing import List

import numpy as np

from .data_models import Individual


def roulette_wheel_selection(
    population: List[Individual],
    selection_ratio: float,
    parents_per_group: int,
    rng: np.random.Generator
) -> List[List[Individual]]:
    """
    Select parent groups with probability proportional to fitness.

    The number of groups is round(len(population) * selection_ratio), but at
    least one. Parents are drawn with replacement, so an individual may
    appear in several groups (or twice in the same group).

    Args:
        population: Evaluated individuals
        selection_ratio: Fraction of the population size used as group count
        parents_per_group: Number of parents in each group
        rng: Random number generator

    Returns:
        List of parent groups, each a list of parents_per_group individuals

    Raises:
        ValueError: If the population is empty or not evaluated
    """
    if not population:
        raise ValueError("Cannot select parents from an empty population")

    fitnesses = np.array([ind.fitness for ind in population], dtype=object)
    if any(f is None for f in fitnesses):
        raise ValueError("All individuals must be evaluated before selection")

    weights = fitnesses.astype(float)
    total = weights.sum()

    # Zero total fitness: every individual is equally (un)fit
    if total > 0:
        probabilities = weights / total
    else:
        probabilities = np.full(len(population), 1.0 / len(population))

    num_groups = max(1, int(round(len(population) * selection_ratio)))

    indices = rng.choice(
        len(population),
        size=(num_groups, parents_per_group),
        replace=True,
        p=probabilities
    )

    return [[population[i] for i in group] for group in indices]


def elitist_reinsertion(
    population: List[Individual],
    offspring: List[Individual],
    replace_ratio: float
) -> List[Individual]:
    """
    Build the next generation, keeping the best of the current one.

    The best population_size - round(population_size * replace_ratio)
    individuals survive unconditionally (at least one). Remaining slots are
    filled with the best offspring, then with the next best survivors of the
    current population if there are not enough offspring.

    Args:
        population: Current evaluated population
        offspring: Evaluated offspring
        replace_ratio: Fraction of the population replaced by offspring

    Returns:
        New population of the same size, sorted best first
    """
    population_size = len(population)
    num_replaced = int(round(population_size * replace_ratio))
    num_elites = max(1, population_size - num_replaced)

    ranked_population = sorted(population, key=lambda ind: ind.fitness, reverse=True)
    ranked_offspring = sorted(offspring, key=lambda ind: ind.fitness, reverse=True)

    next_generation = ranked_population[:num_elites]
    next_generation.extend(ranked_offspring[:population_size - len(next_generation)])

    # Not enough offspring: keep further survivors
    if len(next_generation) < population_size:
        shortfall = population_size - len(next_generation)
        next_generation.extend(ranked_population[num_elites:num_elites + shortfall])

    next_generation.sort(key=lambda ind: ind.fitness, reverse=True)
    return next_generation
