"""
Data models for CleanMap.

- Report: raw point rating supplied by the store
- AreaStatistic: per-cell aggregate consumed by the map
"""
