#!/usr/bin/env python3
"""
Easly CLI

Small operational commands around the assistant runtime.

1) health
   - GET the assistant health endpoint (AI_HEALTH_URL) and exit with:
       0  endpoint answered 2xx with {"ok": true}
       2  endpoint answered 2xx, but not ok (including non-JSON bodies)
       1  endpoint unreachable, timed out or answered non-2xx

2) rag-check
   - Run the retrieval-backend availability probe once and print the result.
     Exit 0 when available, 2 otherwise.

3) recall
   - Print one user's recorded exchanges from the sessions file.

The HTTP runtime itself is started separately, e.g.:

    uvicorn runtime.api.server:app --reload
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

import httpx

# Ensure project root is on sys.path when running as a script
ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from configs.logging_config import configure_logging
from configs.settings import settings
from exceptions.exceptions import HealthCheckError
from runtime.probe.rag_availability import AvailabilityProbe
from runtime.store.session_store import SessionStore


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NOT_OK = 2


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


# ---------------------------------------------------------------------------
# health – probe the running assistant
# ---------------------------------------------------------------------------


def fetch_health(
    url: str,
    timeout_ms: int,
    transport: Optional[httpx.BaseTransport] = None,
) -> Any:
    """
    GET the health endpoint and return its body.

    The body is the decoded JSON when it parses, otherwise the raw text.
    Raises HealthCheckError when the endpoint is unreachable, times out or
    answers with a non-2xx status.
    """
    try:
        with httpx.Client(
            timeout=timeout_ms / 1000, transport=transport, follow_redirects=True
        ) as client:
            response = client.get(url)
            response.raise_for_status()
    except httpx.HTTPError as exc:
        raise HealthCheckError(url, str(exc) or exc.__class__.__name__) from exc

    try:
        return response.json()
    except ValueError:
        return response.text


def cmd_health(
    url: str,
    timeout_ms: int,
    transport: Optional[httpx.BaseTransport] = None,
) -> int:
    try:
        data = fetch_health(url, timeout_ms, transport=transport)
    except HealthCheckError as exc:
        print(f"AI health check failed: {exc.details}", file=sys.stderr)
        return EXIT_ERROR

    _print_json(data)
    if isinstance(data, dict) and data.get("ok") is True:
        return EXIT_OK
    return EXIT_NOT_OK


# ---------------------------------------------------------------------------
# rag-check – run the availability probe once
# ---------------------------------------------------------------------------


def cmd_rag_check(force: bool, timeout: Optional[float] = None) -> int:
    probe = AvailabilityProbe(
        url=settings.chroma_url,
        collection=settings.chroma_collection,
        timeout_seconds=settings.rag_timeout_seconds,
    )
    result = asyncio.run(probe.check(force=force, timeout=timeout))
    _print_json(result.model_dump())
    return EXIT_OK if result.available else EXIT_NOT_OK


# ---------------------------------------------------------------------------
# recall – read one user's history from the sessions file
# ---------------------------------------------------------------------------


def cmd_recall(user_id: str, sessions_path: str) -> int:
    store = SessionStore(path=sessions_path, hydrate=True)
    entries = store.recall(user_id)
    _print_json([entry.model_dump() for entry in entries])
    return EXIT_OK


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Easly assistant CLI")
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help="Logging level (default: EASLY_LOG_LEVEL or INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # health
    p_health = subparsers.add_parser(
        "health", help="Check the assistant health endpoint"
    )
    p_health.add_argument(
        "--url",
        default=settings.ai_health_url,
        help="Health endpoint (default: AI_HEALTH_URL or http://127.0.0.1:3001/ai/health)",
    )
    p_health.add_argument(
        "--timeout-ms",
        type=int,
        default=settings.ai_health_timeout_ms,
        help="Request timeout in milliseconds (default: 3000)",
    )

    # rag-check
    p_rag = subparsers.add_parser(
        "rag-check", help="Check whether the Chroma retrieval backend is reachable"
    )
    p_rag.add_argument(
        "--force",
        action="store_true",
        help="Ignore any cached result",
    )
    p_rag.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds to wait for the backend (default: EASLY_RAG_TIMEOUT_SECONDS)",
    )

    # recall
    p_recall = subparsers.add_parser(
        "recall", help="Print a user's recorded exchanges"
    )
    p_recall.add_argument("user_id", help="User / session id")
    p_recall.add_argument(
        "--sessions-path",
        default=str(settings.sessions_path),
        help="Sessions file (default: EASLY_SESSIONS_PATH or data/sessions.json)",
    )

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    command: str = args.command
    # Keep stdout clean for JSON; logs go to stderr via StreamHandler.
    configure_logging(args.log_level.upper())

    if command == "health":
        return cmd_health(url=args.url, timeout_ms=args.timeout_ms)
    elif command == "rag-check":
        return cmd_rag_check(force=args.force, timeout=args.timeout)
    elif command == "recall":
        return cmd_recall(user_id=args.user_id, sessions_path=args.sessions_path)

    parser.error(f"Unknown command: {command}")
    return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
