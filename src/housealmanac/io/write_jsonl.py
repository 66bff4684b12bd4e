import json
import os
from typing import Iterable

from .schema import AlmanacRow


def write_almanac_jsonl(rows_iter: Iterable[AlmanacRow], path: str) -> int:
  parent = os.path.dirname(path)
  if parent:
    os.makedirs(parent, exist_ok=True)
  count = 0
  with open(path, "w", encoding="utf-8") as f:
    for r in rows_iter:
      f.write(json.dumps(r.model_dump(), ensure_ascii=False) + "\n")
      count += 1
  return count
