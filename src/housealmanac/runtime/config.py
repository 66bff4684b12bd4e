"""Configuration file source with change notification.

The file is YAML (JSON files are accepted as well). poll() is meant to be
called from the periodic background task: it reloads the file when its
modification time changes and hands the parsed content to subscribers.
"""
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional
import logging

import yaml

logger = logging.getLogger(__name__)


class ConfigSource:
    """Almanac configuration loaded from a file."""

    def __init__(self, path: str):
        """Initialize the source.

        Args:
            path: Configuration file path
        """
        self.path = Path(path)
        self._mtime: Optional[float] = None
        self._subscribers: List[Callable[[Dict[str, Any]], None]] = []

    def load(self) -> Dict[str, Any]:
        """Read and parse the configuration file.

        Raises:
            OSError: The file cannot be read
            yaml.YAMLError: The file is not valid YAML
        """
        self._mtime = self.path.stat().st_mtime
        data = yaml.safe_load(self.path.read_text(encoding="utf-8"))
        return data if isinstance(data, dict) else {}

    def subscribe(self, callback: Callable[[Dict[str, Any]], None]) -> None:
        """Register a callback receiving each newly loaded configuration."""
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def changed(self) -> bool:
        """Check if the file changed since it was last loaded."""
        try:
            return self.path.stat().st_mtime != self._mtime
        except OSError:
            return False

    def publish(self) -> Dict[str, Any]:
        """Load the file and notify every subscriber."""
        logger.info(f"Loading configuration from {self.path}")
        data = self.load()
        for callback in self._subscribers:
            callback(data)
        return data

    def poll(self) -> bool:
        """Reload and publish the configuration if the file changed.

        Returns:
            True if a new configuration was published
        """
        if not self.changed():
            return False
        self.publish()
        return True
