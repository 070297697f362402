"""
Tests for batch materialization, cost and fitness.
"""

import unittest
import numpy as np

from ga_engine import SearchParams
from waveplan.batching import (
    Batch,
    BatchedArticles,
    BatchFitness,
    batch_genome_spec,
    find_best_batches,
    materialize_batches,
)
from waveplan.catalog import Catalog
from waveplan.config_loader import PlanningConfig


def build_catalog(orders, articles):
    """Catalog from {order_id: [article_id]} and {article_id: (volume, wh, aisle)}"""
    return Catalog.from_input({
        "ArticleLocations": [
            {"Warehouse": wh, "Aisle": aisle, "Position": 1, "ArticleId": article_id}
            for article_id, (_, wh, aisle) in articles.items()
        ],
        "Orders": [
            {"OrderId": order_id, "ArticleIds": ids} for order_id, ids in orders.items()
        ],
        "Articles": [
            {"ArticleId": article_id, "Volume": volume}
            for article_id, (volume, _, _) in articles.items()
        ],
    })


class TestMaterializeBatches(unittest.TestCase):
    """Test decoding of batch mappings."""

    def setUp(self):
        self.catalog = build_catalog(
            orders={1: [1, 2, 3], 2: [2, 4]},
            articles={1: (100, 1, 1), 2: (200, 1, 2), 3: (50, 2, 1), 4: (300, 2, 1)}
        )

    def test_partition(self):
        """Every unit lands in exactly one batch for any valid mapping."""
        rng = np.random.default_rng(7)
        spec = batch_genome_spec(self.catalog)

        for _ in range(25):
            batches = materialize_batches(spec.random_genome(rng), self.catalog)
            self.assertEqual(sum(b.num_articles for b in batches), self.catalog.num_units)
            placed = [unit for batch in batches for unit in batch.units]
            self.assertEqual(sorted(placed, key=self.catalog.units.index),
                             list(self.catalog.units))

    def test_ids_are_labels(self):
        """Batches are ordered by id, empty batches are dropped."""
        batches = materialize_batches(np.array([4, 4, 2, 4, 2]), self.catalog)

        self.assertEqual([b.id for b in batches], [2, 4])
        self.assertEqual(batches[0].num_articles, 2)
        self.assertEqual(batches[1].num_articles, 3)

    def test_deterministic(self):
        mapping = np.array([0, 1, 0, 3, 1])
        self.assertEqual(materialize_batches(mapping, self.catalog),
                         materialize_batches(mapping.copy(), self.catalog))

    def test_invalid_mapping(self):
        with self.assertRaises(ValueError):
            materialize_batches(np.array([0, 0]), self.catalog)
        with self.assertRaises(ValueError):
            materialize_batches(np.array([0, 0, 0, 0, 5]), self.catalog)


class TestBatchCost(unittest.TestCase):
    """Test batch statistics and cost model."""

    def setUp(self):
        self.config = PlanningConfig()
        self.catalog = build_catalog(
            orders={1: [1, 2], 2: [3]},
            articles={1: (300, 1, 1), 2: (300, 1, 2), 3: (300, 2, 1)}
        )

    def test_batch_statistics(self):
        batch = Batch(0, list(self.catalog.units))

        self.assertEqual(batch.volume, 900)
        self.assertEqual(batch.num_warehouses, 2)
        self.assertEqual(batch.num_aisles, 3)
        self.assertEqual(batch.order_ids, {1, 2})
        # 2 * 10 + 3 * 5 + 5
        self.assertEqual(batch.tour_cost(self.config), 40)

    def test_overweight_batch_has_no_cost(self):
        config = PlanningConfig(max_weight_per_batch=899)
        batch = Batch(0, list(self.catalog.units))

        self.assertFalse(batch.is_feasible(config))
        self.assertIsNone(batch.tour_cost(config))
        self.assertIsNone(BatchedArticles(np.array([0, 0, 0]), self.catalog).tour_cost(config))

    def test_batched_articles_costs(self):
        batched = BatchedArticles(np.array([0, 0, 2]), self.catalog)

        self.assertEqual(batched.num_batches, 2)
        # (10 + 10 + 5) + (10 + 5 + 5)
        self.assertEqual(batched.tour_cost(self.config), 45)
        self.assertEqual(batched.rest_cost(self.config), 10)


class TestBatchFitness(unittest.TestCase):
    """Test stage 1 fitness."""

    def setUp(self):
        self.config = PlanningConfig()

    def make_fitness(self, second_volume):
        catalog = build_catalog(
            orders={1: [1], 2: [2]},
            articles={1: (600, 1, 1), 2: (second_volume, 1, 1)}
        )
        return BatchFitness(catalog, self.config)

    def test_reference_cost(self):
        self.assertEqual(self.make_fitness(400).reference_cost(), 15)

    def test_weight_limit_is_inclusive(self):
        """A batch of exactly the maximum weight is feasible."""
        fitness = self.make_fitness(400)
        # 15 * 100 // 20
        self.assertEqual(fitness.fitness_of(np.array([0, 0])), 75)
        # 15 * 100 // 40
        self.assertEqual(fitness.fitness_of(np.array([0, 1])), 37)

    def test_overweight_scores_zero(self):
        fitness = self.make_fitness(401)
        self.assertEqual(fitness.fitness_of(np.array([1, 1])), 0)
        self.assertEqual(fitness.fitness_of(np.array([1, 0])), 37)

    def test_reference_cost_ignores_configured_costs(self):
        """The normaliser keeps its fixed weights whatever the configured costs."""
        catalog = build_catalog({1: [1], 2: [2]}, {1: (600, 1, 1), 2: (600, 1, 1)})
        config = PlanningConfig(cost_per_warehouse=0, cost_per_aisle=0, cost_per_batch=5)
        fitness = BatchFitness(catalog, config)

        self.assertEqual(fitness.reference_cost(), 15)
        # Separate batches cost 5 + 5, 15 * 100 // 10 is clamped
        self.assertEqual(fitness.fitness_of(np.array([0, 1])), 100)
        self.assertEqual(fitness.fitness_of(np.array([0, 0])), 0)

    def test_higher_configured_costs(self):
        catalog = build_catalog({1: [1]}, {1: (100, 1, 1)})
        config = PlanningConfig(cost_per_warehouse=20, cost_per_aisle=10)
        fitness = BatchFitness(catalog, config)

        self.assertEqual(fitness.reference_cost(), 15)
        # 15 * 100 // (20 + 10 + 5)
        self.assertEqual(fitness.fitness_of(np.array([0])), 42)

    def test_zero_costs_score_highest(self):
        catalog = build_catalog({1: [1]}, {1: (10, 1, 1)})
        config = PlanningConfig(cost_per_batch=0, cost_per_warehouse=0, cost_per_aisle=0)
        self.assertEqual(BatchFitness(catalog, config).fitness_of(np.array([0])), 100)


class TestFindBestBatches(unittest.TestCase):
    """Test the stage 1 search."""

    def setUp(self):
        self.config = PlanningConfig()
        self.rng = np.random.default_rng(11)

    def test_merges_units_of_same_aisle(self):
        """Two light units in one aisle end up in a single batch."""
        catalog = build_catalog({1: [1], 2: [2]}, {1: (600, 1, 1), 2: (400, 1, 1)})
        params = SearchParams(population_size=20, generations=30)

        batched, result = find_best_batches(catalog, params, self.config, self.rng)

        self.assertEqual(batched.num_batches, 1)
        self.assertEqual(result.best_fitness, 75)
        self.assertEqual(batched.tour_cost(self.config), 20)

    def test_genome_bounds(self):
        catalog = build_catalog(
            {order_id: [order_id, order_id + 1] for order_id in range(1, 7)},
            {article_id: (150, article_id % 2 + 1, article_id % 3)
             for article_id in range(1, 8)}
        )
        for generations in (0, 5):
            params = SearchParams(population_size=10, generations=generations)
            batched, result = find_best_batches(catalog, params, self.config, self.rng)

            self.assertEqual(len(batched), 12)
            self.assertTrue(batch_genome_spec(catalog).contains(result.best_genome))
            self.assertEqual(sum(b.num_articles for b in batched.to_batches()), 12)

    def test_zero_location_costs_stay_feasible(self):
        """Without warehouse or aisle costs the search still avoids overweight batches."""
        catalog = build_catalog({1: [1], 2: [2]}, {1: (600, 1, 1), 2: (600, 1, 1)})
        config = PlanningConfig(cost_per_warehouse=0, cost_per_aisle=0, cost_per_batch=5)
        params = SearchParams(population_size=20, generations=20)

        for seed in range(10):
            batched, result = find_best_batches(
                catalog, params, config, np.random.default_rng(seed)
            )
            self.assertEqual(result.best_fitness, 100)
            self.assertEqual(batched.num_batches, 2)
            self.assertEqual(batched.tour_cost(config), 10)

    def test_no_units(self):
        catalog = build_catalog({1: []}, {})
        batched, result = find_best_batches(catalog, SearchParams(), self.config, self.rng)

        self.assertIsNone(result)
        self.assertEqual(batched.num_batches, 0)
        self.assertEqual(batched.tour_cost(self.config), 0)
        self.assertEqual(batched.rest_cost(self.config), 0)


if __name__ == '__main__':
    unittest.main()
