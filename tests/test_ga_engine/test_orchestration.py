"""
Tests for the generation loop of the GA engine.
"""

import unittest
import numpy as np

from ga_engine import (
    FitnessFunction,
    GeneticSearch,
    GenomeSpec,
    SearchError,
    SearchParams,
    run_genetic_search,
)


class CountOnes(FitnessFunction):
    """Ten points per gene set to one (genomes of length 10)."""

    def fitness_of(self, genome):
        return int(genome.sum()) * 10


class ConstantFitness(FitnessFunction):
    def __init__(self, value):
        self.value = value

    def fitness_of(self, genome):
        return self.value


class TestGeneticSearch(unittest.TestCase):
    """Test the search loop end to end on toy problems."""

    def setUp(self):
        self.spec = GenomeSpec(length=10, min_value=0, max_value=1)
        self.params = SearchParams(population_size=20, generations=15)

    def test_zero_generations(self):
        """A budget of zero returns the best of the initial population."""
        params = SearchParams(population_size=10, generations=0)
        search = GeneticSearch(CountOnes(), self.spec, params, np.random.default_rng(1))
        result = search.run()

        self.assertEqual(result.generation, 0)
        self.assertEqual(len(result.history), 1)
        best_initial = max(ind.fitness for ind in search.population)
        self.assertEqual(result.best_fitness, best_initial)
        self.assertTrue(self.spec.contains(result.best_genome))

    def test_generation_limit(self):
        """The search stops after exactly the given number of generations."""
        params = SearchParams(population_size=10, generations=5)
        result = run_genetic_search(ConstantFitness(50), self.spec, params,
                                    np.random.default_rng(2))

        self.assertEqual(result.generation, 5)
        self.assertEqual(len(result.history), 6)
        self.assertIn("Generation limit", result.stop_reason)

    def test_fitness_limit(self):
        """Reaching the highest possible fitness stops the search early."""
        result = run_genetic_search(ConstantFitness(100), self.spec, self.params,
                                    np.random.default_rng(3))

        self.assertEqual(result.generation, 0)
        self.assertIn("Fitness limit", result.stop_reason)

    def test_best_ever_is_monotonic(self):
        """The best-ever fitness never decreases and matches the result."""
        result = run_genetic_search(CountOnes(), self.spec, self.params,
                                    np.random.default_rng(4))

        best_ever = [record.best_ever_fitness for record in result.history]
        self.assertEqual(best_ever, sorted(best_ever))
        self.assertEqual(result.best_fitness, best_ever[-1])
        self.assertEqual(result.best_fitness, CountOnes().fitness_of(result.best_genome))

    def test_population_size_kept(self):
        search = GeneticSearch(CountOnes(), self.spec, self.params, np.random.default_rng(5))
        search.initialize_population()
        for _ in range(3):
            population = search.step()
            self.assertEqual(len(population), 20)
            for individual in population:
                self.assertTrue(self.spec.contains(individual.genome))

    def test_seeded_runs_are_reproducible(self):
        """Equal seeds give equal results."""
        first = run_genetic_search(CountOnes(), self.spec, self.params,
                                   np.random.default_rng(99))
        second = run_genetic_search(CountOnes(), self.spec, self.params,
                                    np.random.default_rng(99))

        np.testing.assert_array_equal(first.best_genome, second.best_genome)
        self.assertEqual(
            [r.to_dict() for r in first.history],
            [r.to_dict() for r in second.history]
        )


class TestSearchErrors(unittest.TestCase):
    """Test failures of the search machinery."""

    def setUp(self):
        self.spec = GenomeSpec(length=4, min_value=0, max_value=3)
        self.params = SearchParams(population_size=5, generations=2)
        self.rng = np.random.default_rng(0)

    def test_zero_length_genome(self):
        with self.assertRaises(SearchError):
            GeneticSearch(CountOnes(), GenomeSpec(0, 0, 0), self.params, self.rng)

    def test_score_out_of_range(self):
        with self.assertRaises(SearchError):
            run_genetic_search(ConstantFitness(150), self.spec, self.params, self.rng)

    def test_non_integer_score(self):
        with self.assertRaises(SearchError):
            run_genetic_search(ConstantFitness(1.5), self.spec, self.params, self.rng)

    def test_step_before_initialize(self):
        search = GeneticSearch(CountOnes(), self.spec, self.params, self.rng)
        with self.assertRaises(SearchError):
            search.step()


if __name__ == '__main__':
    unittest.main()
