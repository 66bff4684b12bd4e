"""Build the almanac table from the monthly sunrise, sunset and DST entries.

Each sunrise/sunset entry is "H" or "H:MM" and applies to the 15th of its
month. Each DST entry is "M" or "M/D" and marks a transition at 2:00.
"""
from typing import Any, List, Mapping, Optional, Sequence
import logging
import re

from pydantic import ValidationError

from ..model.almanac import AlmanacTable, DayTimePoint
from .errors import InvalidLengthError, MissingFieldError

logger = logging.getLogger(__name__)

MONTHS = 12
DST_SLOTS = 2
ANCHOR_DAY = 15
DST_HOUR = 2

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _leading_int(text: str) -> Optional[int]:
  m = _LEADING_INT.match(text)
  return int(m.group(1)) if m else None


def _split(text: Any, sep: str):
  # "H:MM" -> (H, MM); the part after the separator is optional.
  # Unquoted YAML entries such as 7 arrive as integers.
  if isinstance(text, int) and not isinstance(text, bool):
    return text, None
  if not isinstance(text, str):
    return None
  first = _leading_int(text)
  if first is None:
    return None
  second = None
  if sep in text:
    second = _leading_int(text.split(sep, 1)[1])
    if second is None:
      return None
  return first, second


def parse_daytime(text: Any, month: int) -> Optional[DayTimePoint]:
  """Parse a "H" or "H:MM" entry into the anchor for the 15th of month.

  Returns None when the entry cannot be used.
  """
  parts = _split(text, ":")
  if parts is None:
    return None
  hour, minute = parts
  try:
    return DayTimePoint(month=month, day=ANCHOR_DAY, hour=hour, minute=minute or 0)
  except ValidationError:
    return None


def parse_dst(text: Any) -> Optional[DayTimePoint]:
  """Parse a "M" or "M/D" DST entry. The day defaults to the 15th."""
  parts = _split(text, "/")
  if parts is None:
    return None
  month, day = parts
  try:
    return DayTimePoint(month=month, day=ANCHOR_DAY if day is None else day, hour=DST_HOUR, minute=0)
  except ValidationError:
    return None


def _array(section: Mapping[str, Any], name: str, expected: int) -> List[Any]:
  values = section.get(name)
  if not isinstance(values, (list, tuple)):
    raise MissingFieldError(name)
  if len(values) != expected:
    raise InvalidLengthError(name, expected, len(values))
  return list(values)


def _anchors(label: str, values: Sequence[Any], previous: Sequence[DayTimePoint]) -> tuple:
  out = []
  for i, text in enumerate(values):
    point = parse_daytime(text, i + 1)
    if point is None:
      logger.warning("Ignoring invalid %s[%d] entry %r", label, i, text)
      point = previous[i]
    logger.debug("%s[%d]: month %d, day %d, hour %d, minute %d", label, i, point.month, point.day, point.hour, point.minute)
    out.append(point)
  return tuple(out)


def build_table(config: Mapping[str, Any], previous: Optional[AlmanacTable] = None) -> AlmanacTable:
  """Build a new table from a parsed configuration.

  Args:
    config: Parsed configuration holding an "almanac" section
    previous: Table whose entries are kept where a new entry is invalid

  Raises:
    MissingFieldError: An array is absent
    InvalidLengthError: An array has the wrong number of entries
  """
  previous = previous or AlmanacTable()
  section = config.get("almanac") if isinstance(config, Mapping) else None
  if not isinstance(section, Mapping):
    section = {}

  sunrise = _array(section, "sunrise", MONTHS)
  sunset = _array(section, "sunset", MONTHS)
  dst = _array(section, "dst", DST_SLOTS)

  markers = []
  for i, text in enumerate(dst):
    point = parse_dst(text)
    if text is None or (isinstance(text, str) and not text.strip()):
      # Blank entry: no transition configured for this slot.
      point = None
    elif point is None:
      logger.warning("Ignoring invalid dst[%d] entry %r", i, text)
      point = previous.dst[i]
    else:
      logger.debug("dst[%d]: month %d, day %d, hour %d, minute %d", i, point.month, point.day, point.hour, point.minute)
    markers.append(point)

  return AlmanacTable(
    sunrises=_anchors("sunrises", sunrise, previous.sunrises),
    sunsets=_anchors("sunsets", sunset, previous.sunsets),
    dst=tuple(markers),
  )
