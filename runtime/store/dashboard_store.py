"""Dashboard counts: order / inventory totals for the status reply.

Expected layout (by convention):

    <data_dir>/orders.json
    <data_dir>/inventory.json

Each file is a JSON array of records:

    [
      {"orderNumber": "SE-1001", "status": "Pending", ...},
      ...
    ]

Only the number of records matters here. This store provides a simple API:

    counts() -> DashboardCounts

and hides the details of locating and parsing the files.
"""

import json
import logging
from pathlib import Path
from typing import Protocol

from core.intent.models import DashboardCounts
from exceptions.exceptions import CountsUnavailableError


logger = logging.getLogger(__name__)


class CountsProvider(Protocol):
    """Anything that can report the current dashboard counts."""

    def counts(self) -> DashboardCounts:
        ...


class StaticCounts:
    """Fixed counts, for offline use and tests."""

    def __init__(self, orders: int = 0, inventory_items: int = 0) -> None:
        self._counts = DashboardCounts(orders=orders, inventory_items=inventory_items)

    def counts(self) -> DashboardCounts:
        return self._counts


class LocalDataCounts:
    """Read-only counts from the local orders / inventory JSON files.

    Parameters
    ----------
    data_dir:
        Directory holding `orders.json` and `inventory.json`. A missing
        file counts as zero records; so does a file whose top level is
        not an array.
    """

    ORDERS_FILE = "orders.json"
    INVENTORY_FILE = "inventory.json"

    def __init__(self, data_dir: str = "data") -> None:
        self.data_dir = Path(data_dir)

    def _count_records(self, filename: str) -> int:
        """Return the number of records in one data file.

        Raises
        ------
        CountsUnavailableError
            If the file exists but cannot be read or is not valid JSON.
        """
        path = self.data_dir / filename
        if not path.is_file():
            return 0

        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            raise CountsUnavailableError(path, str(exc)) from exc

        if not isinstance(data, list):
            logger.warning("[COUNTS] %s is not a JSON array; counting 0", path)
            return 0
        return len(data)

    def counts(self) -> DashboardCounts:
        return DashboardCounts(
            orders=self._count_records(self.ORDERS_FILE),
            inventory_items=self._count_records(self.INVENTORY_FILE),
        )
