"""
Timestamp normalization.

Reports arrive with timestamps in several shapes depending on where they
were read from. Everything is normalized to a timezone-aware UTC datetime
before comparison.
"""

import logging
import math
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Optional

import pandas as pd

logger = logging.getLogger(__name__)


def to_datetime(value: Any, now: Optional[datetime] = None) -> datetime:
    """
    Normalize a report timestamp to an aware UTC datetime.

    Supported shapes:
    - datetime / pandas Timestamp (naive values are taken as UTC)
    - store timestamps: mapping with a "seconds" key or object with a
      `seconds` attribute (epoch seconds)
    - int / float: epoch milliseconds
    - str: anything pandas can parse

    Any other shape, or a value the parser rejects, falls back to `now`.
    The fallback is lossy on purpose: a bad timestamp never fails aggregation.

    Args:
        value: Raw timestamp
        now: Fallback instant (defaults to the current time)

    Returns:
        Timezone-aware datetime in UTC
    """
    if value is pd.NaT:
        return _fallback(value, now)
    if isinstance(value, pd.Timestamp):
        value = value.to_pydatetime()

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    seconds = _store_seconds(value)
    if seconds is not None:
        return _from_epoch_millis(seconds * 1000, value, now)

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return _from_epoch_millis(value, value, now)

    if isinstance(value, str):
        try:
            parsed = pd.to_datetime(value, utc=True)
        except (ValueError, OverflowError) as e:
            logger.debug(f"Unparseable timestamp {value!r}: {e}")
            return _fallback(value, now)
        if parsed is pd.NaT:
            return _fallback(value, now)
        return parsed.to_pydatetime()

    return _fallback(value, now)


def _store_seconds(value: Any) -> Optional[float]:
    """Extract epoch seconds from a store-native timestamp, if it is one."""
    if isinstance(value, Mapping):
        seconds = value.get("seconds")
    elif value is not None and not isinstance(value, (str, int, float)):
        seconds = getattr(value, "seconds", None)
    else:
        return None

    if isinstance(seconds, (int, float)) and not isinstance(seconds, bool):
        return seconds
    return None


def _from_epoch_millis(millis: float, raw: Any, now: Optional[datetime]) -> datetime:
    if not math.isfinite(millis):
        return _fallback(raw, now)
    try:
        return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
    except (ValueError, OverflowError, OSError) as e:
        logger.debug(f"Epoch timestamp {raw!r} out of range: {e}")
        return _fallback(raw, now)


def _fallback(raw: Any, now: Optional[datetime]) -> datetime:
    logger.debug(f"Unrecognized timestamp {raw!r}, using current time")
    if now is None:
        return datetime.now(timezone.utc)
    return to_datetime(now)
