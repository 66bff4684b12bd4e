import sys
from pathlib import Path
from typing import Optional

import click
import yaml

from ..core.daylight import Daylight
from ..core.errors import ConfigError
from ..core.query import format_entry
from ..core.table import build_table
from ..core.timebase import Timebase
from ..io.schema import AlmanacRow
from ..io.write_jsonl import write_almanac_jsonl
from ..io.write_parquet import write_almanac_parquet


def year_rows(daylight: Daylight, tb: Optional[Timebase] = None):
  for month, day in (tb or Timebase()).days():
    rh, rm = daylight.sunrise(month, day)
    sh, sm = daylight.sunset(month, day)
    yield AlmanacRow(
      month=month + 1,
      day=day,
      sunrise=format_entry(month, day, rh, rm),
      sunset=format_entry(month, day, sh, sm),
      sunrise_minutes=rh * 60 + rm,
      sunset_minutes=sh * 60 + sm,
    )


@click.command()
@click.option("--config", required=True, type=click.Path(exists=True))
@click.option("--out", required=True, type=click.Path(), help="Output file (.parquet or .jsonl)")
def main(config, out):
  cfg = yaml.safe_load(Path(config).read_text(encoding="utf-8")) or {}
  try:
    table = build_table(cfg)
  except ConfigError as e:
    click.echo(f"ERROR: {e}", err=True)
    sys.exit(1)
  rows = year_rows(Daylight(table))
  if out.endswith(".parquet"):
    count = write_almanac_parquet(rows, out)
  else:
    count = write_almanac_jsonl(rows, out)
  click.echo(f"Done. Wrote {count} days to {out}")


if __name__ == "__main__":
  main()
