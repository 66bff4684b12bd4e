class AlmanacError(Exception):
  """Base error."""

class ConfigError(AlmanacError):
  """Raised when the almanac configuration cannot be turned into a table."""

class MissingFieldError(ConfigError):
  """Raised when one of the sunrise, sunset or dst arrays is absent."""

  def __init__(self, field: str):
    super().__init__(f"cannot find {field} array")
    self.field = field

class InvalidLengthError(ConfigError):
  """Raised when an array does not have the expected number of entries."""

  def __init__(self, field: str, expected: int, actual: int):
    super().__init__(f"not a valid {field} array: expected {expected} entries, got {actual}")
    self.field = field
    self.expected = expected
    self.actual = actual

class NotConfiguredError(AlmanacError):
  """Raised when a query runs before any configuration was loaded."""

  def __init__(self):
    super().__init__("Service initializing")

class InvalidDateError(AlmanacError, ValueError):
  """Raised when a month index or day is outside the calendar."""

class TimezoneUnavailableError(AlmanacError, OSError):
  """Raised when the local timezone cannot be determined."""
