"""
Batch Assignment (stage 1)

Genetic search for partitioning ordered-article units into picking batches.
A genome maps every unit (by catalog position) to a batch id; batches are
bounded by a maximum total volume and scored by the warehouses and aisles
they touch.
"""

import logging
from typing import List, Optional, Set

import numpy as np

from ga_engine import FitnessFunction, GenomeSpec, SearchParams, run_genetic_search
from ga_engine.data_models import EvolutionResult

from .catalog import Catalog, OrderedArticleUnit
from .config_loader import PlanningConfig

logger = logging.getLogger(__name__)

BatchId = int

# Fixed weights of the fitness normaliser, independent of the configured costs
REFERENCE_COST_PER_WAREHOUSE = 10
REFERENCE_COST_PER_AISLE = 5


class Batch:
    """A single batch of ordered-article units, picked together"""

    def __init__(self, batch_id: BatchId, units: Optional[List[OrderedArticleUnit]] = None):
        self.id = batch_id
        self.units: List[OrderedArticleUnit] = list(units) if units else []

    def push(self, unit: OrderedArticleUnit):
        self.units.append(unit)

    @property
    def num_articles(self) -> int:
        return len(self.units)

    @property
    def volume(self) -> int:
        return sum(unit.volume for unit in self.units)

    @property
    def num_warehouses(self) -> int:
        return len({unit.location.warehouse for unit in self.units})

    @property
    def num_aisles(self) -> int:
        return len({(unit.location.warehouse, unit.location.aisle) for unit in self.units})

    @property
    def order_ids(self) -> Set[int]:
        return {unit.order_id for unit in self.units}

    def is_feasible(self, config: PlanningConfig) -> bool:
        return self.volume <= config.max_weight_per_batch

    def tour_cost(self, config: PlanningConfig) -> Optional[int]:
        """Travel cost proxy of this batch, None if it exceeds the weight limit"""
        if not self.is_feasible(config):
            return None
        return (self.num_warehouses * config.cost_per_warehouse
                + self.num_aisles * config.cost_per_aisle
                + config.cost_per_batch)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Batch):
            return NotImplemented
        return self.id == other.id and self.units == other.units

    def __repr__(self) -> str:
        return f"Batch(id={self.id}, articles={self.num_articles}, volume={self.volume})"


def materialize_batches(batch_mapping: np.ndarray, catalog: Catalog) -> List[Batch]:
    """
    Decode a batch mapping into concrete batches

    Batches are ordered by batch id and empty batches are dropped, so the
    batch id is a label rather than a list position.
    """
    if len(batch_mapping) != catalog.num_units:
        raise ValueError(
            f"Batch mapping has {len(batch_mapping)} genes, catalog has {catalog.num_units} units"
        )

    batches = {}
    for unit, batch_id in zip(catalog.units, batch_mapping):
        batch_id = int(batch_id)
        if not 0 <= batch_id < catalog.max_batches:
            raise ValueError(f"Batch id {batch_id} outside [0, {catalog.max_batches})")
        if batch_id not in batches:
            batches[batch_id] = Batch(batch_id)
        batches[batch_id].push(unit)

    return [batches[batch_id] for batch_id in sorted(batches)]


class BatchedArticles:
    """
    A mapping from ordered-article units to batches

    Wraps the best genome of stage 1 together with its decoded batches.
    """

    def __init__(self, batch_mapping: np.ndarray, catalog: Catalog):
        self.batch_mapping = np.asarray(batch_mapping, dtype=np.int64)
        self._batches = materialize_batches(self.batch_mapping, catalog)

    def __len__(self) -> int:
        return len(self.batch_mapping)

    def to_batches(self) -> List[Batch]:
        return list(self._batches)

    @property
    def num_batches(self) -> int:
        return len(self._batches)

    def tour_cost(self, config: PlanningConfig) -> Optional[int]:
        """Summed tour cost of all batches, None if any batch is overweight"""
        total = 0
        for batch in self._batches:
            cost = batch.tour_cost(config)
            if cost is None:
                return None
            total += cost
        return total

    def rest_cost(self, config: PlanningConfig) -> int:
        """Fixed cost for every distinct batch id in use (reporting only)"""
        return len(set(self.batch_mapping.tolist())) * config.cost_per_batch


class BatchFitness(FitnessFunction):
    """Scores batch mappings by tour cost relative to an optimistic lower bound"""

    def __init__(self, catalog: Catalog, config: PlanningConfig):
        self.catalog = catalog
        self.config = config

    def reference_cost(self) -> int:
        """Cost of visiting every warehouse and aisle once, ignoring batch costs"""
        return (self.catalog.num_warehouses * REFERENCE_COST_PER_WAREHOUSE
                + self.catalog.num_aisles * REFERENCE_COST_PER_AISLE)

    def fitness_of(self, genome: np.ndarray) -> int:
        batches = materialize_batches(genome, self.catalog)

        total_cost = 0
        for batch in batches:
            cost = batch.tour_cost(self.config)
            if cost is None:
                return self.lowest_possible_fitness()
            total_cost += cost

        if total_cost == 0:
            return self.highest_possible_fitness()

        fitness = self.reference_cost() * 100 // total_cost
        return max(self.lowest_possible_fitness(), min(self.highest_possible_fitness(), fitness))


def batch_genome_spec(catalog: Catalog) -> GenomeSpec:
    return GenomeSpec(length=catalog.num_units, min_value=0, max_value=catalog.max_batches - 1)


def find_best_batches(
    catalog: Catalog,
    params: SearchParams,
    config: PlanningConfig,
    rng: np.random.Generator
) -> tuple:
    """
    Search for a low-cost batch mapping

    Args:
        catalog: Ordered-article units to batch
        params: Population size, generation budget and operator rates
        config: Cost and capacity constants
        rng: Random number generator

    Returns:
        Tuple of (BatchedArticles, EvolutionResult or None when there was
        nothing to search)
    """
    if catalog.num_units == 0:
        logger.info("No ordered articles, skipping batch search")
        return BatchedArticles(np.zeros(0, dtype=np.int64), catalog), None

    fitness = BatchFitness(catalog, config)
    logger.info("Best possible tour cost: %d", fitness.reference_cost())

    result: EvolutionResult = run_genetic_search(
        fitness, batch_genome_spec(catalog), params, rng, name="batching"
    )

    return BatchedArticles(result.best_genome, catalog), result
