"""
HTTP request/response models for the Easly assistant runtime API.

The fulfillment request/response shapes live with the resolver in
core/intent/models.py; this module holds the rest.
"""

from pydantic import BaseModel, ConfigDict
from typing import Any, Dict, List, Optional


class AvailabilityResult(BaseModel):
    """
    Outcome of the retrieval-backend availability probe.

    available:
      - True when the Chroma collection could be opened / created
    reason:
      - None when available, otherwise a human-readable cause
    """
    model_config = ConfigDict(frozen=True)

    available: bool
    reason: Optional[str] = None
    collection: str
    url: str


class HealthResponse(BaseModel):
    ok: bool
    rag: AvailabilityResult


class RecentEventsResponse(BaseModel):
    events: List[Dict[str, Any]]
