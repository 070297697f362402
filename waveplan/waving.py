"""
Wave Assignment (stage 2)

Genetic search for partitioning batches into dispatch waves. A genome maps
every batch (by position in the stage 1 result) to a wave id. Waves are
bounded by a maximum number of units, and splitting one order across
several waves is discouraged through a bonus for unsplit orders.
"""

import logging
from collections import Counter
from typing import List, Optional, Sequence, Set

import numpy as np

from ga_engine import FitnessFunction, GenomeSpec, SearchParams, run_genetic_search
from ga_engine.data_models import EvolutionResult

from .batching import Batch
from .config_loader import PlanningConfig

logger = logging.getLogger(__name__)

WaveId = int


class Wave:
    """A group of batches released together"""

    def __init__(self, wave_id: WaveId, batches: Optional[List[Batch]] = None):
        self.id = wave_id
        self.batches: List[Batch] = list(batches) if batches else []

    def push(self, batch: Batch):
        self.batches.append(batch)

    @property
    def num_batches(self) -> int:
        return len(self.batches)

    @property
    def num_articles(self) -> int:
        return sum(batch.num_articles for batch in self.batches)

    @property
    def order_ids(self) -> Set[int]:
        order_ids = set()
        for batch in self.batches:
            order_ids |= batch.order_ids
        return order_ids

    def is_feasible(self, config: PlanningConfig) -> bool:
        return self.num_articles <= config.max_articles_per_wave

    def __eq__(self, other) -> bool:
        if not isinstance(other, Wave):
            return NotImplemented
        return self.id == other.id and self.batches == other.batches

    def __repr__(self) -> str:
        return f"Wave(id={self.id}, batches={self.num_batches}, articles={self.num_articles})"


def materialize_waves(wave_mapping: np.ndarray, batches: Sequence[Batch]) -> List[Wave]:
    """
    Decode a wave mapping into concrete waves

    Waves are ordered by wave id, empty waves are dropped.
    """
    if len(wave_mapping) != len(batches):
        raise ValueError(
            f"Wave mapping has {len(wave_mapping)} genes, there are {len(batches)} batches"
        )

    waves = {}
    for batch, wave_id in zip(batches, wave_mapping):
        wave_id = int(wave_id)
        if not 0 <= wave_id < len(batches):
            raise ValueError(f"Wave id {wave_id} outside [0, {len(batches)})")
        if wave_id not in waves:
            waves[wave_id] = Wave(wave_id)
        waves[wave_id].push(batch)

    return [waves[wave_id] for wave_id in sorted(waves)]


def split_orders(waves: Sequence[Wave]) -> Set[int]:
    """Order ids that appear in two or more waves"""
    waves_per_order = Counter(
        order_id for wave in waves for order_id in wave.order_ids
    )
    return {order_id for order_id, count in waves_per_order.items() if count > 1}


class WavedBatches:
    """
    A mapping from batches to waves

    Wraps the best genome of stage 2 together with its decoded waves.
    """

    def __init__(self, wave_mapping: np.ndarray, batches: Sequence[Batch]):
        self.wave_mapping = np.asarray(wave_mapping, dtype=np.int64)
        self.batches = list(batches)
        self._waves = materialize_waves(self.wave_mapping, self.batches)

    def __len__(self) -> int:
        return len(self.wave_mapping)

    def to_waves(self) -> List[Wave]:
        return list(self._waves)

    @property
    def num_waves(self) -> int:
        return len(self._waves)

    def split_orders(self) -> Set[int]:
        return split_orders(self._waves)

    def has_split_orders(self) -> bool:
        return len(self.split_orders()) > 0

    def rest_cost(self, config: PlanningConfig) -> int:
        """Fixed cost for every distinct wave id in use"""
        return len(set(self.wave_mapping.tolist())) * config.cost_per_wave


class WaveFitness(FitnessFunction):
    """
    Scores wave mappings by wave count, with a bonus for unsplit orders

    Any wave over capacity scores 0. Otherwise the base score is
    100 // wave_count. The split bonus (orders not split across waves) is
    only added while it exceeds the base score, so a small wave count is
    never masked by the bonus.
    """

    def __init__(self, batches: Sequence[Batch], num_orders: int, config: PlanningConfig):
        self.batches = list(batches)
        self.num_orders = num_orders
        self.config = config

    def fitness_of(self, genome: np.ndarray) -> int:
        waves = materialize_waves(genome, self.batches)

        if any(not wave.is_feasible(self.config) for wave in waves):
            return self.lowest_possible_fitness()

        base_fitness = self.highest_possible_fitness() // max(len(waves), 1)

        split_bonus = max(0, self.num_orders - len(split_orders(waves)))

        if base_fitness < split_bonus:
            return min(self.highest_possible_fitness(), base_fitness + split_bonus)
        return min(self.highest_possible_fitness(), base_fitness)


def wave_genome_spec(batches: Sequence[Batch]) -> GenomeSpec:
    return GenomeSpec(length=len(batches), min_value=0, max_value=len(batches) - 1)


def find_best_waves(
    batches: Sequence[Batch],
    num_orders: int,
    params: SearchParams,
    config: PlanningConfig,
    rng: np.random.Generator
) -> tuple:
    """
    Search for a wave mapping with few waves and no split orders

    Args:
        batches: Final batches of stage 1
        num_orders: Total number of orders in the catalog
        params: Population size, generation budget and operator rates
        config: Cost and capacity constants
        rng: Random number generator

    Returns:
        Tuple of (WavedBatches, EvolutionResult or None when there was
        nothing to search)
    """
    if not batches:
        logger.info("No batches, skipping wave search")
        return WavedBatches(np.zeros(0, dtype=np.int64), []), None

    fitness = WaveFitness(batches, num_orders, config)

    result: EvolutionResult = run_genetic_search(
        fitness, wave_genome_spec(batches), params, rng, name="waving"
    )

    waved = WavedBatches(result.best_genome, batches)
    if waved.has_split_orders():
        logger.warning("Best wave assignment splits %d orders", len(waved.split_orders()))

    return waved, result
