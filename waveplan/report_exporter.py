"""
Plan Report Export

Renders the final batch and wave assignment into the output record and
writes it as JSON for downstream warehouse systems.
"""

import json
import sys
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Dict, List, Any, Optional, TextIO, Union

from .planner import PlanResult


@dataclass
class ItemRecord:
    """One ordered unit inside a batch"""
    OrderId: int
    ArticleId: int


@dataclass
class BatchRecord:
    """Output entry of a single batch"""
    BatchId: int
    Items: List[ItemRecord]
    BatchVolume: int


@dataclass
class WaveRecord:
    """Output entry of a single wave"""
    WaveId: int
    BatchIds: List[int]
    OrderIds: List[int]
    WaveSize: int


@dataclass
class PlanReport:
    """Complete output record"""
    Waves: List[WaveRecord]
    Batches: List[BatchRecord]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class ReportExporter:
    """Exports planning results to the JSON output format"""

    def create_report(self, plan: PlanResult) -> PlanReport:
        """
        Convert a planning result to the output record

        Args:
            plan: Finished planning result

        Returns:
            PlanReport with waves (numbered by position) and batches
        """
        waves = [
            WaveRecord(
                WaveId=idx,
                BatchIds=[batch.id for batch in wave.batches],
                OrderIds=sorted(wave.order_ids),
                WaveSize=wave.num_articles
            )
            for idx, wave in enumerate(plan.waved_batches.to_waves())
        ]

        batches = [
            BatchRecord(
                BatchId=batch.id,
                Items=[
                    ItemRecord(OrderId=unit.order_id, ArticleId=unit.article_id)
                    for unit in batch.units
                ],
                BatchVolume=batch.volume
            )
            for batch in plan.batched_articles.to_batches()
        ]

        return PlanReport(Waves=waves, Batches=batches)

    def export_json(self, report: PlanReport, output_path: Union[str, Path]) -> str:
        """Write the report as pretty printed JSON"""
        output_file = Path(output_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)

        with open(output_file, 'w') as f:
            json.dump(report.to_dict(), f, indent=2)

        return str(output_file)

    def write_json(self, report: PlanReport, stream: Optional[TextIO] = None):
        """Write the report to a text stream (stdout by default)"""
        stream = stream or sys.stdout
        json.dump(report.to_dict(), stream, indent=2)
        stream.write("\n")


def build_report(plan: PlanResult) -> Dict[str, Any]:
    """Output record of a planning result as plain dictionary"""
    return ReportExporter().create_report(plan).to_dict()


def create_report_file(plan: PlanResult, output_path: Union[str, Path]) -> str:
    """
    Convenience function to create the JSON report file

    Args:
        plan: Planning result
        output_path: Target JSON file

    Returns:
        Path to generated JSON file
    """
    exporter = ReportExporter()
    return exporter.export_json(exporter.create_report(plan), output_path)


def print_plan_summary(plan: PlanResult):
    """Print the cost breakdown of a planning result"""
    print("")
    print("[RESULTS]")
    print(f"#Waves {plan.num_waves}")
    print(f"#Batches {plan.num_batches}")
    print(f"Tour cost {plan.tour_cost}")
    print(f"Rest cost (batches) {plan.rest_cost_batches}")
    print(f"Rest cost (waves) {plan.rest_cost_waves}")
    if plan.waved_batches.has_split_orders():
        print(f"Split orders {sorted(plan.waved_batches.split_orders())}")
    print("")
    print(f"Overall cost {plan.overall_cost}")
