"""Terminal presentation for acquisition results."""

from .dashboard import WeatherDashboard
from .map_view import MapSession
from .models import Notice
from .notices import NoticeFeed

__all__ = ["MapSession", "Notice", "NoticeFeed", "WeatherDashboard"]
