"""
Report Service.

Coordinates the store and the aggregator: reads report snapshots, keeps the
latest area statistics, and forwards new reports to the store.
"""

import logging
import math
from datetime import datetime, timezone
from typing import Callable, List, Optional

from cleanmap.engine.aggregation import AreaAggregator
from cleanmap.models.area import AreaStatistic
from cleanmap.models.report import Report
from cleanmap.storage.report_store import ReportStore, ReportStoreError
import config.settings as settings

logger = logging.getLogger(__name__)

StatisticsListener = Callable[[List[AreaStatistic]], None]


class ReportService:
    """
    Boundary between the store and the map surface.

    Every refresh recomputes all statistics from the full report snapshot.
    Store failures are logged and leave the last good statistics in place.
    """

    def __init__(self, store: ReportStore, aggregator: AreaAggregator = None):
        """
        Initialize report service.

        Args:
            store: Report persistence
            aggregator: Aggregator to use (default grid settings if omitted)
        """
        self.store = store
        self.aggregator = aggregator or AreaAggregator()
        self.area_statistics: List[AreaStatistic] = []
        self.is_loading = True
        self._listeners: List[StatisticsListener] = []

    def get_reports(self) -> List[Report]:
        """
        Current report snapshot, most recent first.

        Raises:
            ReportStoreError: If the store cannot be read
        """
        return self.store.list_reports()

    def refresh(self) -> Optional[List[AreaStatistic]]:
        """
        Reload reports and recompute area statistics.

        Returns:
            The new statistics, or None if the store failed (previous
            statistics are kept)
        """
        try:
            reports = self.get_reports()
        except ReportStoreError as e:
            logger.error(f"Error loading reports: {e}")
            self.is_loading = False
            return None

        statistics = self.aggregator.aggregate(reports)
        self.area_statistics = statistics
        self.is_loading = False

        for listener in list(self._listeners):
            listener(statistics)

        return statistics

    def submit_report(self, candidate: Report) -> Optional[str]:
        """
        Forward a new report to the store.

        The report is stamped with the current time. On success the
        statistics are recomputed and listeners notified.

        Args:
            candidate: Report without id

        Returns:
            Assigned report id, or None if the store failed

        Raises:
            ValueError: If the candidate already has an id or is out of range
        """
        self._validate(candidate)

        report = Report(
            latitude=candidate.latitude,
            longitude=candidate.longitude,
            rating=candidate.rating,
            radius=candidate.radius,
            timestamp=datetime.now(timezone.utc),
            user_id=candidate.user_id,
            user_name=candidate.user_name,
        )

        try:
            report_id = self.store.add_report(report)
        except ReportStoreError as e:
            logger.error(f"Error submitting report: {e}")
            return None

        logger.info(
            f"Submitted report {report_id} "
            f"(rating={report.rating}, lat={report.latitude}, lng={report.longitude})"
        )
        self.refresh()
        return report_id

    def subscribe(self, listener: StatisticsListener) -> None:
        """Call `listener` with fresh statistics after every refresh."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: StatisticsListener) -> None:
        """Stop notifying `listener`. Unknown listeners are ignored."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    @staticmethod
    def _validate(candidate: Report) -> None:
        if candidate.id is not None:
            raise ValueError(f"Report already persisted with id {candidate.id}")
        if not (math.isfinite(candidate.latitude) and math.isfinite(candidate.longitude)):
            raise ValueError(
                f"Invalid coordinates: ({candidate.latitude}, {candidate.longitude})"
            )
        if not (settings.MIN_RATING <= candidate.rating <= settings.MAX_RATING):
            raise ValueError(
                f"Invalid rating: {candidate.rating}. "
                f"Must be {settings.MIN_RATING}-{settings.MAX_RATING}"
            )
        if not candidate.radius > 0:
            raise ValueError(f"Invalid radius: {candidate.radius}. Must be positive")


def new_report(
    latitude: float,
    longitude: float,
    rating: int,
    user_id: Optional[str] = None,
    user_name: Optional[str] = None,
    radius: float = settings.DEFAULT_RADIUS_METERS
) -> Report:
    """Build a submission candidate with the default display radius."""
    return Report(
        latitude=latitude,
        longitude=longitude,
        rating=rating,
        radius=radius,
        user_id=user_id,
        user_name=user_name,
    )
