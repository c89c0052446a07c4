"""
Pydantic models used by the Easly assistant runtime.

Split into:
- session_models: SessionEntry + SessionHistory
- api_models: HTTP response schemas (availability, health, events feed)
"""
