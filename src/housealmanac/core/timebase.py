from dataclasses import dataclass, field
from typing import Tuple

# February is always 28 days here.
DAYS_PER_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


@dataclass
class Timebase:
  days_per_month: Tuple[int, ...] = field(default=DAYS_PER_MONTH)

  def days(self):
    # Yields (zero-based month, day) for every day of the year.
    for month, count in enumerate(self.days_per_month):
      for day in range(1, count + 1):
        yield month, day

  def __len__(self):
    return sum(self.days_per_month)
