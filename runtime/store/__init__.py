"""
Storage abstractions for the Easly assistant runtime.

Includes:
- SessionStore: per-user interaction history (in-memory + file-mirrored)
- LocalDataCounts: read-only order / inventory counts from local JSON files
"""
