from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """
    Central configuration for the Easly assistant runtime.

    Values are loaded once from environment variables (with sensible defaults)
    and then exposed via typed properties.
    """

    def __init__(self) -> None:
        # Local data files (sessions mirror, orders/inventory snapshots)
        self._data_dir = Path(os.getenv("EASLY_DATA_DIR", "data"))
        sessions_path: Optional[str] = os.getenv("EASLY_SESSIONS_PATH") or None
        self._sessions_path = (
            Path(sessions_path) if sessions_path else self._data_dir / "sessions.json"
        )
        self._hydrate_sessions = _env_bool("EASLY_SESSIONS_HYDRATE", True)

        # Retrieval backend (Chroma) used by the availability probe
        self._chroma_url = os.getenv("CHROMA_URL", "http://localhost:8000")
        self._chroma_collection = os.getenv("CHROMA_COLLECTION", "shopeasly_data")
        self._rag_timeout_seconds = float(
            os.getenv("EASLY_RAG_TIMEOUT_SECONDS", "5")
        )

        # Operational health check
        self._ai_health_url = os.getenv(
            "AI_HEALTH_URL", "http://127.0.0.1:3001/ai/health"
        )
        self._ai_health_timeout_ms = int(os.getenv("AI_HEALTH_TIMEOUT_MS", "3000"))

        self._recent_events = int(os.getenv("EASLY_RECENT_EVENTS", "20"))
        self._log_level = os.getenv("EASLY_LOG_LEVEL", "INFO").upper()

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    @property
    def sessions_path(self) -> Path:
        return self._sessions_path

    @property
    def hydrate_sessions(self) -> bool:
        return self._hydrate_sessions

    # ------------------------------------------------------------------
    # Retrieval backend
    # ------------------------------------------------------------------

    @property
    def chroma_url(self) -> str:
        return self._chroma_url

    @property
    def chroma_collection(self) -> str:
        return self._chroma_collection

    @property
    def rag_timeout_seconds(self) -> float:
        return self._rag_timeout_seconds

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    @property
    def ai_health_url(self) -> str:
        return self._ai_health_url

    @property
    def ai_health_timeout_ms(self) -> int:
        return self._ai_health_timeout_ms

    @property
    def recent_events(self) -> int:
        return self._recent_events

    @property
    def log_level(self) -> str:
        return self._log_level


settings = Settings()
