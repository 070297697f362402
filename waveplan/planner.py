"""
Fulfillment Planner

Runs both optimization stages in sequence: units are batched first, and the
finished batches are then grouped into waves. Stage 2 only reads the
immutable result of stage 1.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from ga_engine.data_models import EvolutionResult

from .batching import BatchedArticles, find_best_batches
from .catalog import Catalog
from .config_loader import RunConfig
from .waving import WavedBatches, find_best_waves

logger = logging.getLogger(__name__)


class PlanningError(Exception):
    """Raised when the planner produces an unusable result"""
    pass


@dataclass
class PlanResult:
    """Final batches and waves of one planning run, with their costs"""
    catalog: Catalog
    config: RunConfig
    batched_articles: BatchedArticles
    waved_batches: WavedBatches
    tour_cost: int
    rest_cost_batches: int
    rest_cost_waves: int
    seed: Optional[int]
    batch_search: Optional[EvolutionResult] = None
    wave_search: Optional[EvolutionResult] = None

    @property
    def overall_cost(self) -> int:
        return self.tour_cost + self.rest_cost_batches + self.rest_cost_waves

    @property
    def num_batches(self) -> int:
        return self.batched_articles.num_batches

    @property
    def num_waves(self) -> int:
        return self.waved_batches.num_waves


def create_rng(seed: Optional[int] = None) -> Tuple[int, np.random.Generator]:
    """
    Create the run's random number generator

    A missing seed is drawn once so the run can be reproduced later.
    """
    if seed is None:
        seed = int(np.random.randint(0, 2**31))
    return seed, np.random.default_rng(seed)


def plan_fulfillment(catalog: Catalog,
                     config: RunConfig,
                     rng: Optional[np.random.Generator] = None) -> PlanResult:
    """
    Plan batches and waves for all ordered units of a catalog

    Args:
        catalog: Resolved ordered-article units
        config: Planning constants and search parameters for both stages
        rng: Random number generator (default: seeded from config.random_seed)

    Returns:
        PlanResult with final batches, waves and costs
    """
    seed = config.random_seed
    if rng is None:
        seed, rng = create_rng(seed)
    logger.info("Random seed: %s", seed)

    planning = config.planning

    logger.info("Got %d different articles ordered", catalog.num_articles)
    logger.info("Max number of batches %d", catalog.max_batches)
    logger.info("Max number of articles in batch %d",
                catalog.max_items_per_batch(planning.max_weight_per_batch))

    batched_articles, batch_search = find_best_batches(
        catalog, config.batching, planning, rng
    )

    tour_cost = batched_articles.tour_cost(planning)
    if tour_cost is None:
        overweight = [batch.id for batch in batched_articles.to_batches()
                      if not batch.is_feasible(planning)]
        raise PlanningError(
            f"Calculated invalid batches: batches {overweight} exceed "
            f"max weight {planning.max_weight_per_batch}"
        )

    waved_batches, wave_search = find_best_waves(
        batched_articles.to_batches(), catalog.num_orders, config.waving, planning, rng
    )

    result = PlanResult(
        catalog=catalog,
        config=config,
        batched_articles=batched_articles,
        waved_batches=waved_batches,
        tour_cost=tour_cost,
        rest_cost_batches=batched_articles.rest_cost(planning),
        rest_cost_waves=waved_batches.rest_cost(planning),
        seed=seed,
        batch_search=batch_search,
        wave_search=wave_search
    )

    logger.info("Planned %d batches in %d waves, overall cost %d",
                result.num_batches, result.num_waves, result.overall_cost)

    return result
