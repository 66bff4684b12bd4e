"""REST API serving the almanac estimates."""

from pathlib import Path
from typing import Any, Dict, Optional
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
import logging

from ..core.errors import NotConfiguredError

logger = logging.getLogger(__name__)

PRIORITY = 1


class AlmanacRestAPI:
    """Almanac REST API."""

    def __init__(self, almanac: Any, static_root: Optional[str] = None):
        """Initialize REST API.

        Args:
            almanac: The HouseAlmanac service answering queries
            static_root: Directory of static files served at / (optional)
        """
        self.almanac = almanac
        self.app = FastAPI(
            title="House Almanac",
            description="Rough sunrise and sunset estimates from a static configuration",
            version="1.0.0",
        )
        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_methods=["GET"],
            allow_headers=["*"],
        )

        # Setup routes
        self._setup_routes()

        # Static files last so that they do not shadow the API.
        if static_root:
            if Path(static_root).is_dir():
                self.app.mount("/", StaticFiles(directory=static_root, html=True), name="static")
            else:
                logger.warning(f"Static root {static_root} is not a directory")

    def _now(self) -> int:
        return int(self.almanac.clock.now().timestamp())

    def _envelope(self, now: int) -> Dict[str, Any]:
        return {
            "host": self.almanac.host,
            "proxy": self.almanac.proxy,
            "timestamp": now,
        }

    def _header(self, now: int) -> Dict[str, Any]:
        body = self._envelope(now)
        body["location"] = {"timezone": self.almanac.timezone()}
        body["almanac"] = {"priority": PRIORITY, "updated": now}
        return body

    def _setup_routes(self) -> None:
        """Setup all API routes."""

        @self.app.get("/almanac/today")
        def get_today():
            """Today's sunrise and sunset."""
            try:
                sunrise, sunset = self.almanac.today()
            except NotConfiguredError as e:
                raise HTTPException(status_code=500, detail=str(e))
            body = self._header(self._now())
            body["almanac"]["sunrise"] = sunrise
            body["almanac"]["sunset"] = sunset
            return body

        @self.app.get("/almanac/tonight")
        def get_tonight():
            """Next sunset and sunrise around now."""
            try:
                sunset, sunrise = self.almanac.tonight()
            except NotConfiguredError as e:
                raise HTTPException(status_code=500, detail=str(e))
            body = self._header(self._now())
            body["almanac"]["sunset"] = sunset
            body["almanac"]["sunrise"] = sunrise
            return body

        @self.app.get("/almanac/selftest")
        def get_selftest():
            """Sunrise and sunset for every day of the year."""
            try:
                sunrises, sunsets = self.almanac.full_year()
            except NotConfiguredError as e:
                raise HTTPException(status_code=500, detail=str(e))
            body = self._envelope(self._now())
            body["almanac"] = {
                "priority": PRIORITY,
                "sunrise": sunrises,
                "sunset": sunsets,
            }
            return body

        @self.app.get("/health")
        def health_check():
            """Health check endpoint."""
            return {
                "status": "healthy" if self.almanac.store.is_configured() else "initializing",
                **self.almanac.get_stats(),
            }

    def get_app(self) -> FastAPI:
        """Get the FastAPI app instance."""
        return self.app
