import sys
from pathlib import Path

import click
import yaml

from ..core.continuity import minutes_series, worst_jump
from ..core.daylight import Daylight
from ..core.errors import ConfigError
from ..core.query import format_entry
from ..core.table import build_table
from ..core.timebase import Timebase


@click.command()
@click.option("--config", required=True, type=click.Path(exists=True))
@click.option("--max-jump", default=5, type=int, show_default=True, help="Largest accepted day-to-day change, in minutes")
def main(config, max_jump):
  cfg = yaml.safe_load(Path(config).read_text(encoding="utf-8")) or {}
  try:
    table = build_table(cfg)
  except ConfigError as e:
    click.echo(f"ERROR: {e}", err=True)
    sys.exit(1)
  daylight = Daylight(table)
  tb = Timebase()
  days = list(tb.days())
  failed = False
  for label, fn in (("sunrise", daylight.sunrise), ("sunset", daylight.sunset)):
    estimates = [fn(month, day) for month, day in days]
    idx, jump = worst_jump(minutes_series(estimates), table.dst, tb)
    month, day = days[idx]
    click.echo(f"{label}: largest daily change {jump} min on {format_entry(month, day, *estimates[idx])}")
    if jump > max_jump:
      click.echo(f"ERROR: {label} jumps by more than {max_jump} minutes", err=True)
      failed = True
  if failed:
    sys.exit(1)
  click.echo("Validation OK")


if __name__ == "__main__":
  main()
