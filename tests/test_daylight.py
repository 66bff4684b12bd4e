from datetime import date, datetime, timezone

import pytest

from housealmanac.core.daylight import Daylight, _tdiv, bracket, estimate
from housealmanac.core.errors import InvalidDateError
from housealmanac.core.table import build_table
from housealmanac.core.timebase import DAYS_PER_MONTH

from conftest import make_config


def _minutes(hm):
  return hm[0] * 60 + hm[1]


def test_anchor_identity(table):
  for m in range(12):
    p = table.sunrises[m]
    assert estimate(table.sunrises, m, 15) == (p.hour, p.minute)
    p = table.sunsets[m]
    assert estimate(table.sunsets, m, 15) == (p.hour, p.minute)


def test_bracket_wraps_year():
  assert bracket(0, 1) == (11, 0, -1, 0)
  assert bracket(11, 20) == (11, 0, 11, 12)
  assert bracket(5, 10) == (4, 5, 4, 5)
  assert bracket(5, 20) == (5, 6, 5, 6)


def test_january_first_between_december_and_january(table):
  # December 7:35, January 7:30.
  a = 450 - 455
  b = 30 * 455 - a * (-1 * 30 + 15)
  expected = _tdiv(a * 0 + b, 30)
  result = estimate(table.sunrises, 0, 1)
  assert _minutes(result) == expected == 452
  assert result == (7, 32)
  assert 450 < _minutes(result) < 455


def test_interpolation_after_anchor(table):
  # January 17:00 to February 17:30, day 20.
  assert estimate(table.sunsets, 0, 20) == (17, 4)


def test_truncating_division():
  assert _tdiv(45, 30) == 1
  assert _tdiv(-45, 30) == -1
  assert _tdiv(-60, 30) == -2


def test_year_boundary_continuity(table):
  dec_31 = _minutes(estimate(table.sunrises, 11, 31))
  jan_1 = _minutes(estimate(table.sunrises, 0, 1))
  # One day's slope between 7:35 and 7:30 is well under a minute.
  assert abs(dec_31 - jan_1) <= 1


def test_monotonic_between_anchors(table):
  for monthly in (table.sunrises, table.sunsets):
    for m in range(12):
      nxt = (m + 1) % 12
      days = [(m, d) for d in range(15, DAYS_PER_MONTH[m] + 1)] + [(nxt, d) for d in range(1, 16)]
      values = [_minutes(estimate(monthly, mm, d)) for mm, d in days]
      if monthly[nxt].minutes >= monthly[m].minutes:
        assert values == sorted(values)
      else:
        assert values == sorted(values, reverse=True)


def _flat_table(feb, mar, dst):
  sunrise = ["7:00"] * 12
  sunrise[1] = feb
  sunrise[2] = mar
  return build_table(make_config(sunrise=sunrise, dst=dst))


def test_spring_change_is_compensated():
  # Same solar time in February (standard) and March (daylight time).
  t = _flat_table("7:00", "8:00", ["3/9", ""])
  before = [estimate(t.sunrises, m, d, t.dst) for m, d in [(1, 16), (1, 28), (2, 1), (2, 8)]]
  after = [estimate(t.sunrises, m, d, t.dst) for m, d in [(2, 9), (2, 12), (2, 14), (2, 15)]]
  assert set(before) == {(7, 0)}
  assert set(after) == {(8, 0)}


def test_without_dst_the_same_table_ramps():
  t = _flat_table("7:00", "8:00", ["", ""])
  values = [_minutes(estimate(t.sunrises, 1, d, t.dst)) for d in range(16, 29)]
  assert values == sorted(values)
  assert values[0] < values[-1]


def test_fall_change_is_compensated():
  sunrise = ["7:00"] * 12
  sunrise[9] = "7:00"
  sunrise[10] = "6:00"
  t = build_table(make_config(sunrise=sunrise, dst=["", "11/3"]))
  assert estimate(t.sunrises, 9, 20, t.dst) == (7, 0)
  assert estimate(t.sunrises, 10, 2, t.dst) == (7, 0)
  assert estimate(t.sunrises, 10, 3, t.dst) == (6, 0)
  assert estimate(t.sunrises, 10, 14, t.dst) == (6, 0)


def test_first_dst_marker_wins():
  t = _flat_table("7:00", "8:00", ["3/1", "3/10"])
  # Marker 0 applies (date on/after it): February is raised to 8:00.
  assert estimate(t.sunrises, 2, 5, t.dst) == (8, 0)


@pytest.mark.parametrize("month,day", [(-1, 10), (12, 1), (0, 0), (0, 32)])
def test_invalid_date(table, month, day):
  with pytest.raises(InvalidDateError):
    estimate(table.sunrises, month, day)


def test_sunrise_sunset_datetimes(table):
  sunrise, sunset = Daylight(table).sunrise_sunset(date(2025, 1, 20), timezone.utc)
  assert sunrise == datetime(2025, 1, 20, 7, 28, tzinfo=timezone.utc)
  assert sunset == datetime(2025, 1, 20, 17, 4, tzinfo=timezone.utc)


def test_step_into_anchor_spans_two_days(table):
  # March 18:00 to April 19:30: the 14th sits two slope-days below the anchor.
  assert estimate(table.sunsets, 3, 14) == (19, 24)
  assert estimate(table.sunsets, 3, 15) == (19, 30)
  assert estimate(table.sunsets, 3, 16) == (19, 30)


def test_dst_change_between_december_and_january():
  sunrise = ["7:00"] * 12
  sunrise[0] = "8:00"
  t = build_table(make_config(sunrise=sunrise, dst=["1/5", ""]))
  assert [estimate(t.sunrises, 0, d, t.dst) for d in range(1, 5)] == [(7, 0)] * 4
  assert [estimate(t.sunrises, 0, d, t.dst) for d in range(5, 16)] == [(8, 0)] * 11
  # December is compared against this year's January marker: no adjustment.
  december = [_minutes(estimate(t.sunrises, 11, d, t.dst)) for d in range(16, 32)]
  assert december[0] == 420
  assert december[-1] == 450
  assert december == sorted(december)
