from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class DayTimePoint(BaseModel):
  model_config = ConfigDict(frozen=True)

  month: int = Field(ge=1, le=12)
  day: int = Field(ge=1, le=31)
  hour: int = Field(default=0, ge=0, le=23)
  minute: int = Field(default=0, ge=0, le=59)

  @property
  def minutes(self) -> int:
    return self.hour * 60 + self.minute


def default_anchors() -> Tuple[DayTimePoint, ...]:
  return tuple(DayTimePoint(month=i + 1, day=15) for i in range(12))


class AlmanacTable(BaseModel):
  """Twelve monthly sunrise anchors, twelve sunset anchors and two DST slots.

  DST slot 0 is the spring transition (lose an hour), slot 1 the fall
  transition (gain an hour). A slot left at None is not configured.
  """
  model_config = ConfigDict(frozen=True)

  sunrises: Tuple[DayTimePoint, ...] = Field(default_factory=default_anchors, min_length=12, max_length=12)
  sunsets: Tuple[DayTimePoint, ...] = Field(default_factory=default_anchors, min_length=12, max_length=12)
  dst: Tuple[Optional[DayTimePoint], Optional[DayTimePoint]] = (None, None)
