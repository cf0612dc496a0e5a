"""
Presentation helpers for the map surface.

- Overlay: shape, color and popup text per area statistic
- Export: CSV + metadata snapshot of area statistics
"""
