"""Main service coordinator that ties all components together."""

from datetime import timedelta
from typing import Any, Dict, List, Mapping, Optional, Tuple
import logging
import socket

import yaml

from .runtime import AlmanacStore, ConfigSource, EventLoop, HouseClock
from .api import AlmanacRestAPI
from .core import query
from .core.errors import ConfigError

logger = logging.getLogger(__name__)


class HouseAlmanac:
    """Almanac service: configuration, live table, queries and API."""

    def __init__(
        self,
        config_path: Optional[str] = None,
        clock: Optional[HouseClock] = None,
        poll_interval: timedelta = timedelta(seconds=10),
        host: Optional[str] = None,
        proxy: Optional[str] = None,
        static_root: Optional[str] = None,
    ):
        """Initialize the service.

        Args:
            config_path: Almanac configuration file (YAML or JSON)
            clock: House clock (default: system clock, /etc/timezone)
            poll_interval: Interval between configuration change checks
            host: Host name reported in responses (default: this host)
            proxy: Proxy name reported in responses (default: host)
            static_root: Directory of static files served at /
        """
        self.clock = clock or HouseClock()
        self.store = AlmanacStore()
        self.event_loop = EventLoop()
        self.poll_interval = poll_interval
        self.host = host or socket.gethostname()
        self.proxy = proxy or self.host

        self.config_source: Optional[ConfigSource] = None
        if config_path:
            self.config_source = ConfigSource(config_path)
            self.config_source.subscribe(self._on_config)

        self.rest_api = AlmanacRestAPI(self, static_root=static_root)

        self._running = False

        logger.info("House almanac initialized")

    def refresh(self, config: Mapping[str, Any]) -> Optional[str]:
        """Rebuild the live table from a parsed configuration.

        Args:
            config: Parsed configuration holding an "almanac" section

        Returns:
            None on success, otherwise the reason the table was not updated
        """
        try:
            self.store.refresh(config)
        except ConfigError as e:
            logger.error(f"Cannot load config: {e}")
            return str(e)
        return None

    def _on_config(self, data: Dict[str, Any]) -> None:
        self.refresh(data)

    def load_config(self) -> Optional[str]:
        """Load the configuration file once and refresh the table.

        Returns:
            None on success, otherwise the reason the load failed
        """
        if not self.config_source:
            return "no configuration file"
        try:
            self.config_source.publish()
        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.error(f"Cannot load {self.config_source.path}: {e}")
            return str(e)
        return None if self.store.is_configured() else "invalid configuration"

    def _poll_config(self) -> None:
        try:
            self.config_source.poll()
        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.error(f"Cannot reload {self.config_source.path}: {e}")

    def timezone(self) -> str:
        """Get the house timezone name."""
        return self.clock.timezone_name()

    def today(self) -> Tuple[int, int]:
        """Today's sunrise and sunset, as epoch seconds.

        Raises:
            NotConfiguredError: No configuration was loaded yet
        """
        snapshot = self.store.snapshot()
        return query.today(snapshot.daylight, self.clock.now())

    def tonight(self) -> Tuple[int, int]:
        """The sunset and sunrise around the coming (or current) night.

        Raises:
            NotConfiguredError: No configuration was loaded yet
        """
        snapshot = self.store.snapshot()
        return query.tonight(snapshot.daylight, self.clock.now())

    def full_year(self) -> Tuple[List[str], List[str]]:
        """Sunrise and sunset for every day of the year.

        Raises:
            NotConfiguredError: No configuration was loaded yet
        """
        snapshot = self.store.snapshot()
        return query.full_year(snapshot.daylight)

    def start(self) -> None:
        """Start background processing."""
        if self._running:
            logger.warning("House almanac already running")
            return

        if self.config_source:
            self.event_loop.schedule_interval(
                self.poll_interval,
                self._poll_config,
                task_id="config_poll",
            )
        self.event_loop.start()

        self._running = True
        logger.info(f"House almanac started on {self.host}")

    def stop(self) -> None:
        """Stop background processing."""
        if not self._running:
            return

        self.event_loop.stop()
        # A later start() schedules the poll again.
        self.event_loop.cancel_task("config_poll")
        self._running = False
        logger.info("House almanac stopped")

    def is_running(self) -> bool:
        """Check if the service is running."""
        return self._running

    def get_api_app(self):
        """Get the FastAPI app for the REST API."""
        return self.rest_api.get_app()

    def get_stats(self) -> Dict[str, Any]:
        """Get service statistics.

        Returns:
            Dictionary of statistics
        """
        configured = self.store.is_configured()
        return {
            "running": self._running,
            "configured": configured,
            "version": self.store.snapshot().version if configured else 0,
            "host": self.host,
            "paused": self.clock.is_paused(),
            "pending_tasks": self.event_loop.get_pending_tasks(),
        }
