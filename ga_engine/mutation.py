"""
Mutation operators for the GA engine.

Implements per-gene random value mutation over value-encoded genomes.
"""

from typing import List

import numpy as np

from .data_models import GenomeSpec, Individual


def random_value_mutation(
    individual: Individual,
    genome_spec: GenomeSpec,
    mutation_rate: float,
    rng: np.random.Generator
) -> Individual:
    """
    Resample genes independently with a small probability.

    Each gene is replaced, with probability mutation_rate, by a value drawn
    uniformly from [genome_spec.min_value, genome_spec.max_value]. The
    individual is mutated in place and its fitness reset when any gene
    was touched.

    Args:
        individual: Individual to mutate
        genome_spec: Gene value range
        mutation_rate: Per-gene mutation probability
        rng: Random number generator

    Returns:
        The mutated individual
    """
    length = len(individual.genome)
    if length == 0:
        return individual

    mask = rng.random(length) < mutation_rate
    num_mutated = int(mask.sum())

    if num_mutated:
        individual.genome[mask] = rng.integers(
            genome_spec.min_value, genome_spec.max_value + 1, size=num_mutated
        )
        individual.fitness = None
        individual.metadata['mutated_genes'] = num_mutated

    return individual


def mutate(
    offspring: List[Individual],
    genome_spec: GenomeSpec,
    mutation_rate: float,
    rng: np.random.Generator
) -> List[Individual]:
    """
    Apply random value mutation to every child.

    Args:
        offspring: Children produced by crossover
        genome_spec: Gene value range
        mutation_rate: Per-gene mutation probability
        rng: Random number generator

    Returns:
        The same list, mutated in place
    """
    for child in offspring:
        random_value_mutation(child, genome_spec, mutation_rate, rng)
    return offspring
