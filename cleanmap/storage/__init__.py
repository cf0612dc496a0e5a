"""
Report store adapters.

Append-only persistence of report records (in-memory and JSON file).
"""
