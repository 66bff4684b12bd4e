"""Live almanac table for the service.

Holds the current table as an immutable, versioned snapshot. A refresh
builds a complete new table and swaps it in one step; readers keep using
the snapshot they picked up.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from threading import RLock
from typing import Any, Mapping, Optional
import logging

from ..core.daylight import Daylight
from ..core.errors import NotConfiguredError
from ..core.table import build_table
from ..model.almanac import AlmanacTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AlmanacSnapshot:
    """One committed version of the almanac table."""
    version: int
    table: AlmanacTable
    updated: datetime

    @property
    def daylight(self) -> Daylight:
        return Daylight(self.table)


class AlmanacStore:
    """Thread-safe owner of the live almanac snapshot."""

    def __init__(self):
        """Initialize an unconfigured store."""
        self._snapshot: Optional[AlmanacSnapshot] = None
        self._lock = RLock()

    def refresh(self, config: Mapping[str, Any]) -> AlmanacSnapshot:
        """Rebuild the table from a configuration and commit it.

        Args:
            config: Parsed configuration holding an "almanac" section

        Returns:
            The newly committed snapshot

        Raises:
            ConfigError: The configuration is structurally invalid; the
                previous snapshot stays in place
        """
        logger.debug("Refreshing the almanac database")
        with self._lock:
            old = self._snapshot
            table = build_table(config, old.table if old else None)
            new = AlmanacSnapshot(
                version=(old.version + 1) if old else 1,
                table=table,
                updated=datetime.now(timezone.utc),
            )
            self._snapshot = new

        logger.info(f"Almanac table updated to version {new.version}")
        return new

    def snapshot(self) -> AlmanacSnapshot:
        """Get the current snapshot.

        Raises:
            NotConfiguredError: No configuration was ever loaded
        """
        with self._lock:
            if self._snapshot is None:
                raise NotConfiguredError()
            return self._snapshot

    def is_configured(self) -> bool:
        """Check if a table was ever committed."""
        with self._lock:
            return self._snapshot is not None
