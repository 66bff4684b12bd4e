import os
from typing import Iterable

import pyarrow as pa
import pyarrow.parquet as pq

from .schema import AlmanacRow

SCHEMA = pa.schema([
  ("month", pa.int8()),
  ("day", pa.int8()),
  ("sunrise", pa.string()),
  ("sunset", pa.string()),
  ("sunrise_minutes", pa.int16()),
  ("sunset_minutes", pa.int16()),
])


def write_almanac_parquet(rows_iter: Iterable[AlmanacRow], path: str) -> int:
  parent = os.path.dirname(path)
  if parent:
    os.makedirs(parent, exist_ok=True)
  rows = [r.model_dump() for r in rows_iter]
  table = pa.Table.from_pylist(rows, schema=SCHEMA)
  pq.write_table(table, path, compression="snappy")
  return len(rows)
