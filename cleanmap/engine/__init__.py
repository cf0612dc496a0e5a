"""
Spatial aggregation engine.

- Grid: deterministic lat/lng -> cell identifier
- Timestamps: normalization of store timestamp shapes
- Aggregation: per-cell reduction of reports
- Classification: rating bands (color token + label)
"""
