"""
Configuration settings for CleanMap.

Centralized configuration for the aggregation engine, storage and CLI.
"""

import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
DATA_ROOT = Path(os.getenv("CLEANMAP_DATA_ROOT", str(PROJECT_ROOT / "data")))
OUTPUT_ROOT = PROJECT_ROOT / "output"
REPORTS_FILENAME = "reports.json"

# Grid (planar lat/lng quantization, ~1 km at the equator)
GRID_SIZE_DEGREES = 0.009
GRID_KEY_DECIMALS = 3

# Reports
DEFAULT_RADIUS_METERS = 500
MIN_RATING = 0
MAX_RATING = 10

# Overlay presentation
MAX_LISTED_CONTRIBUTORS = 3
CONTRIBUTORS_PLACEHOLDER = "No contributors yet"
EVALUATION_DATE_FORMAT = "%d/%m/%Y"
OVERLAY_FILL_OPACITY = 0.35
OVERLAY_STROKE_WEIGHT = 2

# Band token -> fill color
RATING_PALETTE = {
    "success": "#22c55e",
    "good": "#84cc16",
    "warning": "#eab308",
    "poor": "#f97316",
    "critical": "#ef4444",
}

# Logging
LOG_LEVEL = "INFO"  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
