from pydantic import BaseModel, Field


class AlmanacRow(BaseModel):
  month: int = Field(ge=1, le=12)
  day: int = Field(ge=1, le=31)
  sunrise: str
  sunset: str
  sunrise_minutes: int
  sunset_minutes: int
