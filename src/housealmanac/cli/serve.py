"""CLI command to start the almanac web service."""

from datetime import datetime, timedelta
import logging
import sys
import click
import uvicorn

from ..almanac import HouseAlmanac
from ..core.errors import TimezoneUnavailableError
from ..runtime import HouseClock
from ..runtime.clock import DEFAULT_TIMEZONE_FILE

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@click.command()
@click.option(
    "--config",
    type=click.Path(),
    default="/etc/house/almanac.yaml",
    show_default=True,
    help="Almanac configuration file (YAML or JSON)",
)
@click.option(
    "--host",
    default="0.0.0.0",
    help="Host to bind to (default: 0.0.0.0)",
)
@click.option(
    "--port",
    default=8080,
    type=int,
    help="Port to bind to (default: 8080)",
)
@click.option(
    "--proxy",
    type=str,
    help="Proxy name reported in responses (default: this host)",
)
@click.option(
    "--timezone-file",
    default=DEFAULT_TIMEZONE_FILE,
    show_default=True,
    help="File holding the house timezone name",
)
@click.option(
    "--static-root",
    type=click.Path(),
    help="Directory of static files served at /",
)
@click.option(
    "--poll-interval",
    default=10.0,
    type=float,
    help="Seconds between configuration change checks (default: 10)",
)
@click.option(
    "--start-time",
    type=str,
    help="Initial clock time (ISO format, default: current time)",
)
@click.option(
    "--debug",
    is_flag=True,
    help="Log estimation details",
)
def main(config, host, port, proxy, timezone_file, static_root, poll_interval, start_time, debug):
    """Start the almanac web service.

    Serves rough sunrise and sunset estimates interpolated from the twelve
    monthly values of the configuration file, which is reloaded whenever it
    changes.

    Examples:
        # Start with default settings
        housealmanac-serve

        # Use a local configuration file
        housealmanac-serve --config examples/almanac.yaml

        # Pretend it is a winter night
        housealmanac-serve --start-time "2025-01-01T22:00:00-08:00"
    """
    if debug:
        logging.getLogger().setLevel(logging.DEBUG)

    start_dt = None
    if start_time:
        try:
            start_dt = datetime.fromisoformat(start_time.replace("Z", "+00:00"))
        except ValueError as e:
            click.echo(f"Error parsing start time: {e}", err=True)
            sys.exit(2)
        if start_dt.tzinfo is None:
            click.echo("Start time must include a UTC offset", err=True)
            sys.exit(2)

    clock = HouseClock(start_time=start_dt, timezone_file=timezone_file)
    try:
        tz = clock.timezone_name()
        clock.now()
    except TimezoneUnavailableError as e:
        logger.critical(f"Cannot determine the house timezone: {e}")
        sys.exit(1)
    click.echo(f"Timezone: {tz}")

    almanac = HouseAlmanac(
        config_path=config,
        clock=clock,
        poll_interval=timedelta(seconds=poll_interval),
        proxy=proxy,
        static_root=static_root,
    )

    error = almanac.load_config()
    if error:
        logger.error(f"Cannot load {config}: {error}")

    almanac.start()
    app = almanac.get_api_app()

    click.echo(f"Starting API server on http://{host}:{port}")
    click.echo(f"   Today:     http://{host}:{port}/almanac/today")
    click.echo(f"   Tonight:   http://{host}:{port}/almanac/tonight")
    click.echo(f"   Self test: http://{host}:{port}/almanac/selftest")

    try:
        uvicorn.run(
            app,
            host=host,
            port=port,
            log_level="debug" if debug else "info",
        )
    except KeyboardInterrupt:
        click.echo("\nShutting down...")
    finally:
        almanac.stop()


if __name__ == "__main__":
    main()
