"""
GA Engine for the Wave Planner

This package provides a generic genetic algorithm driver for value-encoded
integer genomes. It knows nothing about warehouses: problems plug in a
GenomeSpec and a FitnessFunction.

Key Features:
- Roulette wheel selection (fitness proportional)
- Uniform crossover and per-gene random value mutation
- Elitist reinsertion (best individuals always survive)
- Generation-limit / fitness-limit termination
- Seeded numpy Generator threaded through every operator

Modules:
- data_models: Core data structures (GenomeSpec, SearchParams, Individual, ...)
- fitness: FitnessFunction contract
- selection: Roulette wheel selection and elitist reinsertion
- crossover: Uniform crossover
- mutation: Random value mutation
- termination: Stop conditions
- orchestration: Generation loop (GeneticSearch)
- io_utils: History CSV and run metadata I/O
"""

__version__ = "0.1.0"
__author__ = "Warehouse Planning Team"

from .data_models import GenomeSpec, SearchParams, Individual, GenerationRecord, EvolutionResult
from .fitness import FitnessFunction
from .orchestration import GeneticSearch, SearchError, run_genetic_search

__all__ = [
    "GenomeSpec",
    "SearchParams",
    "Individual",
    "GenerationRecord",
    "EvolutionResult",
    "FitnessFunction",
    "GeneticSearch",
    "SearchError",
    "run_genetic_search",
]
