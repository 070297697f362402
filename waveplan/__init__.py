"""
Warehouse Wave Planner

Two-stage genetic planning of warehouse order fulfillment: ordered units
are grouped into weight-bounded picking batches, and batches into
capacity-bounded dispatch waves that keep orders together.
"""

__version__ = "1.0.0"
__author__ = "Warehouse Planning Team"

# Export main classes for easy importing
from .catalog import (
    Article,
    ArticleLocation,
    OrderedArticleUnit,
    Catalog,
    CatalogError,
    InputError,
    load_input
)

from .config_loader import (
    PlanningConfig,
    RunConfig,
    ConfigurationError,
    load_config,
    config_from_dict
)
from .batching import Batch, BatchedArticles, BatchFitness, find_best_batches
from .waving import Wave, WavedBatches, WaveFitness, find_best_waves
from .planner import PlanResult, PlanningError, plan_fulfillment
from .report_exporter import ReportExporter, build_report, create_report_file

__all__ = [
    'Article',
    'ArticleLocation',
    'OrderedArticleUnit',
    'Catalog',
    'CatalogError',
    'InputError',
    'load_input',
    'PlanningConfig',
    'RunConfig',
    'ConfigurationError',
    'load_config',
    'config_from_dict',
    'Batch',
    'BatchedArticles',
    'BatchFitness',
    'find_best_batches',
    'Wave',
    'WavedBatches',
    'WaveFitness',
    'find_best_waves',
    'PlanResult',
    'PlanningError',
    'plan_fulfillment',
    'ReportExporter',
    'build_report',
    'create_report_file'
]
