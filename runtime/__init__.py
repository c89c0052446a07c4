"""
Runtime package for the Easly assistant backend.

This package contains:
- API layer (FastAPI server + routes)
- Agents (webhook fulfillment)
- Stores (session history, dashboard counts)
- Events (in-process bus and its sinks)
- Probes (retrieval-backend availability)
- Models (Pydantic models for sessions and API responses)
"""
