import pytest

from housealmanac.core.table import build_table

SUNRISE = ["7:30", "7:15", "6:45", "6:00", "5:30", "5:15", "5:20", "5:45", "6:15", "6:45", "7:15", "7:35"]
SUNSET = ["17:00", "17:30", "18:00", "19:30", "20:00", "20:20", "20:15", "19:45", "19:00", "18:15", "16:45", "16:40"]


def make_config(sunrise=None, sunset=None, dst=None):
  return {
    "almanac": {
      "sunrise": list(SUNRISE if sunrise is None else sunrise),
      "sunset": list(SUNSET if sunset is None else sunset),
      "dst": list(["", ""] if dst is None else dst),
    }
  }


@pytest.fixture
def config():
  return make_config()


@pytest.fixture
def table(config):
  return build_table(config)
