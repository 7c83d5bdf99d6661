"""API module for vitalscope.

API layer:
- Validates inputs, reads/writes the cache
- Returns report payloads for the popup UI
- Forbidden: classification logic, direct SQL, rendering
"""
