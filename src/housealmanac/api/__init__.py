"""HTTP API for the almanac service."""

from .rest import AlmanacRestAPI

__all__ = ["AlmanacRestAPI"]
