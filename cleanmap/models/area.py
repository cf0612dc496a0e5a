"""
Area statistic data model.

One aggregate per grid cell, recomputed on every aggregation pass.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass
class AreaStatistic:
    """
    Aggregated cleanliness of one grid cell.

    latitude/longitude/radius come from the first report encountered for the
    cell (the display anchor), not from a centroid.
    """
    cell_id: str
    latitude: float
    longitude: float
    average_rating: float
    total_reports: int
    radius: float
    contributors: List[str] = field(default_factory=list)  # Insertion order
    last_evaluation_date: Optional[datetime] = None
