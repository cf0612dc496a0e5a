"""
Area statistics export.

Writes a snapshot of area statistics as a CSV table plus a metadata JSON.
"""

import json
import logging
import os
from datetime import datetime, timezone
from typing import List

import pandas as pd

from cleanmap.engine.classification import rating_label
from cleanmap.models.area import AreaStatistic

logger = logging.getLogger(__name__)

COLUMNS = [
    "Cell",
    "Latitude",
    "Longitude",
    "Average Rating",
    "Label",
    "Total Reports",
    "Radius",
    "Contributors",
    "Last Evaluation",
]


class AreaStatisticsExporter:
    """
    Exports area statistics to CSV.
    """

    def to_dataframe(self, statistics: List[AreaStatistic]) -> pd.DataFrame:
        """
        Build one row per cell, busiest cells first.

        Args:
            statistics: Output of an aggregation pass

        Returns:
            DataFrame with COLUMNS
        """
        rows = []
        for stat in statistics:
            rows.append({
                "Cell": stat.cell_id,
                "Latitude": stat.latitude,
                "Longitude": stat.longitude,
                "Average Rating": round(stat.average_rating, 2),
                "Label": rating_label(stat.average_rating),
                "Total Reports": stat.total_reports,
                "Radius": stat.radius,
                "Contributors": "; ".join(stat.contributors),
                "Last Evaluation": (
                    stat.last_evaluation_date.isoformat()
                    if stat.last_evaluation_date else ""
                ),
            })

        if not rows:
            return pd.DataFrame(columns=COLUMNS)

        df = pd.DataFrame(rows, columns=COLUMNS)
        # Stable sort keeps first-seen order among equal counts
        return df.sort_values("Total Reports", ascending=False, kind="mergesort")

    def export(
        self,
        statistics: List[AreaStatistic],
        output_dir: str = "output",
        name: str = "areas"
    ) -> str:
        """
        Write <name>.csv and <name>_metadata.json to output_dir.

        Returns:
            Path to generated CSV file
        """
        df = self.to_dataframe(statistics)

        os.makedirs(output_dir, exist_ok=True)
        output_path = os.path.join(output_dir, f"{name}.csv")
        df.to_csv(output_path, index=False)

        total_reports = sum(stat.total_reports for stat in statistics)
        rating_sum = sum(stat.average_rating * stat.total_reports for stat in statistics)

        metadata = {
            "total_cells": len(statistics),
            "total_reports": total_reports,
            "overall_average_rating": (
                round(rating_sum / total_reports, 2) if total_reports else None
            ),
            "generated_at": datetime.now(timezone.utc).isoformat(),
        }
        metadata_path = os.path.join(output_dir, f"{name}_metadata.json")
        with open(metadata_path, 'w') as f:
            json.dump(metadata, f, indent=2)

        logger.info(
            f"Area table saved to {output_path} "
            f"({len(statistics)} cells, {total_reports} reports)"
        )

        return output_path
