"""
Report store.

Append-only persistence for report records. The aggregation engine only
consumes the list returned by list_reports().
"""

import json
import logging
import os
import tempfile
import uuid
from datetime import datetime
from typing import Dict, List

from cleanmap.engine.timestamps import to_datetime
from cleanmap.models.report import Report
import config.settings as settings

logger = logging.getLogger(__name__)


class ReportStoreError(Exception):
    """Raised when a store cannot read or write report records."""


class ReportStore:
    """
    Interface for report persistence.

    Reports are never updated or deleted once added.
    """

    def list_reports(self) -> List[Report]:
        """Return every report, most recent timestamp first."""
        raise NotImplementedError

    def add_report(self, report: Report) -> str:
        """Persist a report without id and return the assigned id."""
        raise NotImplementedError

    @staticmethod
    def _newest_first(reports: List[Report]) -> List[Report]:
        return sorted(reports, key=lambda r: to_datetime(r.timestamp), reverse=True)


class InMemoryReportStore(ReportStore):
    """Process-local store, used by tests and embedders."""

    def __init__(self, reports: List[Report] = None):
        self._reports: List[Report] = []
        for report in reports or []:
            self.add_report(report)

    def list_reports(self) -> List[Report]:
        return self._newest_first(self._reports)

    def add_report(self, report: Report) -> str:
        report_id = report.id or str(uuid.uuid4())
        self._reports.append(report.with_id(report_id))
        return report_id


class JsonReportStore(ReportStore):
    """
    Stores reports as a JSON list in <data_root>/reports.json.
    """

    def __init__(self, data_root: str, filename: str = settings.REPORTS_FILENAME):
        """
        Initialize JSON report store.

        Args:
            data_root: Root data directory (created if missing)
            filename: Name of the JSON file inside data_root
        """
        self.data_root = data_root
        self.filepath = os.path.join(data_root, filename)

        os.makedirs(data_root, exist_ok=True)

        logger.info(f"Initialized JsonReportStore at {self.filepath}")

    def list_reports(self) -> List[Report]:
        """
        Load all reports, most recent first.

        Records missing coordinates or rating are skipped.

        Raises:
            ReportStoreError: If the file cannot be read or decoded
        """
        reports = []
        for record in self._read_records():
            try:
                reports.append(Report.from_dict(record))
            except (ValueError, TypeError, AttributeError) as e:
                logger.warning(f"Skipping malformed report record {record!r}: {e}")

        logger.debug(f"Loaded {len(reports)} reports from {self.filepath}")
        return self._newest_first(reports)

    def add_report(self, report: Report) -> str:
        """
        Append a report and return its new id.

        Raises:
            ReportStoreError: If the file cannot be read or written
        """
        records = self._read_records()
        report_id = str(uuid.uuid4())
        records.append(self._to_record(report.with_id(report_id)))

        try:
            payload = json.dumps(records, indent=2)
        except (TypeError, ValueError) as e:
            logger.error(f"Report {report_id} is not serializable: {e}")
            raise ReportStoreError(f"Cannot serialize report {report_id}") from e

        # A failed write never touches the existing file
        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(dir=self.data_root, suffix=".tmp")
            with os.fdopen(fd, 'w') as f:
                f.write(payload)
            os.replace(tmp_path, self.filepath)
        except OSError as e:
            logger.error(f"Failed to save report to {self.filepath}: {e}")
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise ReportStoreError(f"Cannot write {self.filepath}") from e

        logger.info(f"Saved report {report_id} to {self.filepath}")
        return report_id

    def _read_records(self) -> List[Dict]:
        if not os.path.exists(self.filepath):
            return []

        try:
            with open(self.filepath, 'r') as f:
                records = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to load reports from {self.filepath}: {e}")
            raise ReportStoreError(f"Cannot read {self.filepath}") from e

        if not isinstance(records, list):
            logger.error(f"Expected a JSON list in {self.filepath}")
            raise ReportStoreError(f"Malformed report file {self.filepath}")
        return records

    @staticmethod
    def _to_record(report: Report) -> Dict:
        record = report.to_dict()
        if isinstance(record["timestamp"], datetime):
            record["timestamp"] = record["timestamp"].isoformat()
        return record
