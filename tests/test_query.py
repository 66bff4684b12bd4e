from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from housealmanac.core import query
from housealmanac.core.daylight import Daylight
from housealmanac.core.table import build_table
from housealmanac.core.timebase import Timebase

from conftest import make_config


def _ts(*args, tz=timezone.utc):
  return int(datetime(*args, tzinfo=tz).timestamp())


def test_today(table):
  now = datetime(2025, 1, 20, 12, 0, tzinfo=timezone.utc)
  assert query.today(Daylight(table), now) == (_ts(2025, 1, 20, 7, 28), _ts(2025, 1, 20, 17, 4))


def test_tonight_after_sunrise(table):
  now = datetime(2025, 1, 20, 12, 0, tzinfo=timezone.utc)
  sunset, sunrise = query.tonight(Daylight(table), now)
  assert sunset == _ts(2025, 1, 20, 17, 4)
  assert sunrise == _ts(2025, 1, 21, 7, 27)


def test_tonight_before_sunrise(table):
  now = datetime(2025, 1, 20, 5, 0, tzinfo=timezone.utc)
  sunset, sunrise = query.tonight(Daylight(table), now)
  assert sunset == _ts(2025, 1, 19, 17, 3)
  assert sunrise == _ts(2025, 1, 20, 7, 28)


def test_tonight_crosses_year_end(table):
  now = datetime(2024, 12, 31, 23, 0, tzinfo=timezone.utc)
  sunset, sunrise = query.tonight(Daylight(table), now)
  assert datetime.fromtimestamp(sunrise, timezone.utc).date() == datetime(2025, 1, 1).date()
  assert sunset < now.timestamp() < sunrise


def test_today_in_local_timezone(table):
  tz = ZoneInfo("America/Los_Angeles")
  now = datetime(2025, 7, 4, 9, 0, tzinfo=tz)
  sunrise, sunset = query.today(Daylight(table), now)
  assert sunrise == _ts(2025, 7, 4, 5, 18, tz=tz)
  assert datetime.fromtimestamp(sunset, tz).hour == 20


def test_full_year_has_every_day(table):
  sunrises, sunsets = query.full_year(Daylight(table))
  assert len(sunrises) == len(sunsets) == 365 == len(Timebase())
  assert sunrises[0] == "01/01 07:32"
  assert sunsets[14] == "01/15 17:00"


def test_full_year_entries_match_their_date(table):
  daylight = Daylight(table)
  sunrises, sunsets = query.full_year(daylight)
  for (month, day), rise, set_ in zip(Timebase().days(), sunrises, sunsets):
    for text, estimate in ((rise, daylight.sunrise), (set_, daylight.sunset)):
      mmdd, hhmm = text.split(" ")
      m, d = (int(x) for x in mmdd.split("/"))
      h, mi = (int(x) for x in hhmm.split(":"))
      assert (m - 1, d) == (month, day)
      assert (h, mi) == estimate(month, day)


def test_full_year_with_dst():
  daylight = Daylight(build_table(make_config(dst=["3/9", "11/2"])))
  sunrises, _ = query.full_year(daylight)
  assert len(sunrises) == 365
  assert "02/29" not in " ".join(sunrises)
