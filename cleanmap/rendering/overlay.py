"""
Map overlay mapping.

Turns area statistics into drawable circles with a fill color and popup
summary. Drawing itself belongs to the map surface.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List

from cleanmap.engine.classification import rating_band
from cleanmap.engine.grid import to_fixed
from cleanmap.models.area import AreaStatistic
import config.settings as settings


@dataclass
class OverlaySummary:
    """Popup text for one area."""
    average: str  # e.g. "7.5/10"
    label: str
    reports: str  # e.g. "3 reports"
    contributors: str
    last_evaluation: str  # dd/mm/YYYY, empty if unknown


@dataclass
class OverlayShape:
    """A circle to draw for one area."""
    latitude: float
    longitude: float
    radius: float
    color_token: str
    fill_color: str
    fill_opacity: float
    stroke_weight: int
    popup: OverlaySummary


def format_contributors(
    contributors: List[str],
    limit: int = settings.MAX_LISTED_CONTRIBUTORS,
    placeholder: str = settings.CONTRIBUTORS_PLACEHOLDER
) -> str:
    """First `limit` names, with "..." when more exist."""
    if not contributors:
        return placeholder
    text = ", ".join(contributors[:limit])
    if len(contributors) > limit:
        text += "..."
    return text


def summarize(stat: AreaStatistic) -> OverlaySummary:
    """Build the popup summary of an area statistic."""
    count = stat.total_reports
    last_evaluation = ""
    if stat.last_evaluation_date is not None:
        last_evaluation = stat.last_evaluation_date.strftime(settings.EVALUATION_DATE_FORMAT)

    return OverlaySummary(
        average=f"{to_fixed(stat.average_rating, 1)}/10",
        label=rating_band(stat.average_rating).label,
        reports=f"{count} report{'' if count == 1 else 's'}",
        contributors=format_contributors(stat.contributors),
        last_evaluation=last_evaluation,
    )


def build_overlay(
    stat: AreaStatistic,
    palette: Dict[str, str] = settings.RATING_PALETTE
) -> OverlayShape:
    """
    Map an area statistic to a drawable shape.

    Args:
        stat: Area statistic
        palette: Color token -> fill color

    Returns:
        OverlayShape anchored on the statistic's coordinates
    """
    token = rating_band(stat.average_rating).color
    return OverlayShape(
        latitude=stat.latitude,
        longitude=stat.longitude,
        radius=stat.radius,
        color_token=token,
        fill_color=palette[token],
        fill_opacity=settings.OVERLAY_FILL_OPACITY,
        stroke_weight=settings.OVERLAY_STROKE_WEIGHT,
        popup=summarize(stat),
    )


def build_overlays(statistics: Iterable[AreaStatistic]) -> List[OverlayShape]:
    return [build_overlay(stat) for stat in statistics]
