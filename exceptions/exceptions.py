"""
Custom exceptions for the Easly assistant runtime.

These exceptions are intentionally simple and descriptive.
They are used across:

  - runtime/store/
  - runtime/data/
  - cli/

Placing them at the project root (exceptions/) avoids circular imports
and keeps exception types consistent across modules.
"""


class SessionPersistenceError(Exception):
    """
    Raised when the session log cannot be mirrored to its backing file.

    The in-memory log is still authoritative; callers that own the
    persistence step log this and carry on.
    """

    def __init__(self, path, details=None):
        self.path = path
        self.details = details or "Unknown write failure."
        msg = f"Could not persist sessions to {path}: {self.details}"
        super().__init__(msg)


class CountsUnavailableError(Exception):
    """
    Raised when a dashboard data file exists but cannot be read or parsed.

    A missing file is not an error (it simply counts as zero).
    """

    def __init__(self, source, details=None):
        self.source = source
        self.details = details or "Unreadable data file."
        msg = f"Dashboard counts unavailable from {source}: {self.details}"
        super().__init__(msg)


class HealthCheckError(Exception):
    """
    Raised by the health-check command when the endpoint cannot be reached
    or does not answer with a JSON object.
    """

    def __init__(self, url, details=None):
        self.url = url
        self.details = details or "Health endpoint unreachable."
        msg = f"Health check against {url} failed: {self.details}"
        super().__init__(msg)
