"""Per-user interaction memory for the Easly assistant.

An in-memory dict of user_id -> [SessionEntry], mirrored to a single JSON
file after every write.

The design is intentionally simple:
- In-memory access is the primary source of truth during a run.
- Every `remember` overwrites the backing file with the full log, so it can
  be inspected offline or used to hydrate the next process.
- Writing the file is best-effort: failures are logged and the in-memory
  log keeps going.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from exceptions.exceptions import SessionPersistenceError
from ..models.session_models import SessionEntry


logger = logging.getLogger(__name__)


class SessionStore:
    """Append-only, file-mirrored interaction log keyed by user.

    Parameters
    ----------
    path:
        Backing JSON file. If None, the store is memory-only.
    hydrate:
        When True, an existing backing file is loaded at construction so
        history survives a restart. When False and the file already holds
        history, a warning is logged because the next write replaces it.
    """

    def __init__(self, path: Optional[str] = None, hydrate: bool = True) -> None:
        self._sessions: Dict[str, List[SessionEntry]] = {}
        self._path: Optional[Path] = Path(path) if path else None

        if self._path is not None and self._path.is_file():
            if hydrate:
                self._hydrate()
            else:
                logger.warning(
                    "[SESSIONS] %s already holds history; hydration is disabled, "
                    "so the next write will overwrite it",
                    self._path,
                )

    @property
    def path(self) -> Optional[Path]:
        return self._path

    def remember(self, user_id: str, message: Any, result: Any) -> SessionEntry:
        """Append an entry for `user_id` and mirror the whole log to disk."""
        entry = SessionEntry(message=message, result=result)
        self._sessions.setdefault(user_id, []).append(entry)

        try:
            self._persist()
        except SessionPersistenceError:
            logger.exception("[SESSIONS] Keeping in-memory history for user_id=%s", user_id)

        return entry

    def recall(self, user_id: str) -> List[SessionEntry]:
        """Return a copy of the user's entries in insertion order."""
        return list(self._sessions.get(user_id, []))

    def users(self) -> List[str]:
        return list(self._sessions)

    def snapshot(self) -> Dict[str, List[Dict[str, Any]]]:
        """Return the full log as plain JSON-ready data."""
        return {
            user_id: [entry.model_dump() for entry in entries]
            for user_id, entries in self._sessions.items()
        }

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _persist(self) -> None:
        """Overwrite the backing file with the full log, if one is configured.

        The log is serialized in full before anything touches disk, then
        written to a sibling temp file and swapped in, so a failed write
        leaves the previous file intact. Values JSON cannot encode are
        stored as their str() form.
        """
        if self._path is None:
            return

        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            text = json.dumps(self.snapshot(), ensure_ascii=False, indent=2, default=str)
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(text, encoding="utf-8")
            os.replace(tmp_path, self._path)
        except (OSError, TypeError, ValueError) as exc:
            tmp_path.unlink(missing_ok=True)
            raise SessionPersistenceError(self._path, str(exc)) from exc

    def _hydrate(self) -> None:
        try:
            with self._path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning(
                "[SESSIONS] Could not read %s (%s); starting empty, "
                "the next write will overwrite it",
                self._path,
                exc,
            )
            return

        if not isinstance(data, dict):
            logger.warning(
                "[SESSIONS] %s is not a user -> entries mapping; starting empty",
                self._path,
            )
            return

        loaded: Dict[str, List[SessionEntry]] = {}
        try:
            for user_id, entries in data.items():
                if not isinstance(entries, list):
                    continue
                loaded[str(user_id)] = [
                    SessionEntry(**entry) for entry in entries if isinstance(entry, dict)
                ]
        except ValueError as exc:
            logger.warning(
                "[SESSIONS] Malformed entry in %s (%s); starting empty",
                self._path,
                exc,
            )
            return

        self._sessions = loaded
        logger.info(
            "[SESSIONS] Hydrated %d user(s) from %s", len(self._sessions), self._path
        )
