"""
Session-related models for the Easly assistant runtime.

These describe:
- a single SessionEntry (what the user said, what we answered, when)
- SessionHistory, the HTTP view of one user's log
"""

import time
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field


def now_ms() -> int:
    return int(time.time() * 1000)


class SessionEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    message: Any = None
    result: Any = None
    time: int = Field(default_factory=now_ms)  # epoch milliseconds


class SessionHistory(BaseModel):
    userId: str
    entries: List[SessionEntry] = Field(default_factory=list)
