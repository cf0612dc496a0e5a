"""
CleanMap - neighborhood cleanliness aggregation.

Reduces point cleanliness ratings into per-cell area statistics
for rendering as colored map overlays.
"""

__version__ = "1.0.0"
