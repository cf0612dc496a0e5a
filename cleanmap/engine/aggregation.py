"""
Area Aggregator.

Reduces a snapshot of point reports into one AreaStatistic per grid cell.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from cleanmap.engine.grid import grid_key
from cleanmap.engine.timestamps import to_datetime
from cleanmap.models.area import AreaStatistic
from cleanmap.models.report import Report
import config.settings as settings

logger = logging.getLogger(__name__)


@dataclass
class CellAccumulator:
    """
    Running state of one grid cell during an aggregation pass.

    Anchored on the first report seen for the cell: its latitude, longitude
    and radius are kept for display and never overwritten.
    """
    cell_id: str
    latitude: float
    longitude: float
    radius: float
    last_date: datetime
    ratings: List[float] = field(default_factory=list)
    contributors: Dict[str, None] = field(default_factory=dict)  # Ordered set

    @classmethod
    def start(cls, cell_id: str, report: Report, report_date: datetime) -> "CellAccumulator":
        """Open a cell from its first report."""
        return cls(
            cell_id=cell_id,
            latitude=report.latitude,
            longitude=report.longitude,
            radius=report.radius,
            last_date=report_date,
        )

    def add(self, report: Report, report_date: datetime) -> None:
        """Fold one report into the cell."""
        self.ratings.append(report.rating)
        if report.user_name:
            self.contributors.setdefault(report.user_name, None)
        # Strict: an equal timestamp keeps the current date
        if report_date > self.last_date:
            self.last_date = report_date

    def to_statistic(self) -> AreaStatistic:
        """Materialize the cell; a started cell always holds one rating."""
        return AreaStatistic(
            cell_id=self.cell_id,
            latitude=self.latitude,
            longitude=self.longitude,
            average_rating=sum(self.ratings) / len(self.ratings),
            total_reports=len(self.ratings),
            radius=self.radius,
            contributors=list(self.contributors),
            last_evaluation_date=self.last_date,
        )


class AreaAggregator:
    """
    Groups reports by grid cell and folds each group into an AreaStatistic.

    Stateless between calls: each aggregate() receives the full report
    snapshot and rebuilds every statistic from scratch.
    """

    def __init__(
        self,
        grid_size: float = settings.GRID_SIZE_DEGREES,
        decimals: int = settings.GRID_KEY_DECIMALS
    ):
        """
        Initialize aggregator.

        Args:
            grid_size: Cell size in degrees
            decimals: Digits kept when rendering cell coordinates
        """
        self.grid_size = grid_size
        self.decimals = decimals

    def cell_id(self, report: Report) -> str:
        """Grid cell identifier of a report."""
        return grid_key(report.latitude, report.longitude, self.grid_size, self.decimals)

    def aggregate(
        self,
        reports: Iterable[Report],
        now: Optional[datetime] = None
    ) -> List[AreaStatistic]:
        """
        Aggregate reports into per-cell statistics.

        Output order follows the first appearance of each cell in `reports`.

        Args:
            reports: Report snapshot, typically most recent first
            now: Fallback instant for unrecognized timestamps

        Returns:
            One AreaStatistic per distinct cell (empty for empty input)
        """
        cells: Dict[str, CellAccumulator] = {}
        total = 0

        for report in reports:
            key = self.cell_id(report)
            report_date = to_datetime(report.timestamp, now=now)

            cell = cells.get(key)
            if cell is None:
                cell = CellAccumulator.start(key, report, report_date)
                cells[key] = cell
            cell.add(report, report_date)
            total += 1

        statistics = [cell.to_statistic() for cell in cells.values()]

        logger.info(f"Aggregated {total} reports into {len(statistics)} area cells")
        return statistics


def calculate_area_statistics(
    reports: Iterable[Report],
    now: Optional[datetime] = None
) -> List[AreaStatistic]:
    """Aggregate reports with the default grid settings."""
    return AreaAggregator().aggregate(reports, now=now)
