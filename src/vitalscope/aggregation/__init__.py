"""Aggregation module for origin summaries.

- Combines per-metric tiers into an overall label
- Builds the classified origin report from a remote record
- Forbidden: fetching, caching, rendering
"""
