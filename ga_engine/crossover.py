"""
Crossover operators for the GA engine.

Implements uniform crossover over value-encoded genomes.
"""

from typing import List, Sequence

import numpy as np

from .data_models import Individual


def uniform_crossover(
    parents: Sequence[Individual],
    rng: np.random.Generator
) -> List[Individual]:
    """
    Combine a parent group using uniform crossover.

    The group produces as many children as it has parents. For every gene
    position of every child, the value is copied from a parent chosen
    uniformly at random.

    Args:
        parents: Parent group (all genomes of equal length)
        rng: Random number generator

    Returns:
        List of unevaluated children

    Raises:
        ValueError: If the group is empty or genome lengths differ
    """
    if not parents:
        raise ValueError("Crossover requires at least one parent")

    genomes = np.stack([parent.genome for parent in parents])
    num_parents, length = genomes.shape

    children = []
    for _ in range(num_parents):
        # Row index per gene position picks the donating parent
        donors = rng.integers(0, num_parents, size=length)
        child_genome = genomes[donors, np.arange(length)]
        children.append(Individual(genome=child_genome, metadata={'origin': 'crossover'}))

    return children


def apply_crossover(
    parent_groups: Sequence[Sequence[Individual]],
    rng: np.random.Generator
) -> List[Individual]:
    """
    Breed every selected parent group.

    Args:
        parent_groups: Output of the selection operator
        rng: Random number generator

    Returns:
        Flat list of children from all groups
    """
    offspring = []
    for group in parent_groups:
        offspring.extend(uniform_crossover(group, rng))
    return offspring
