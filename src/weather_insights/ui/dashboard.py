"""Rich-rendered terminal dashboard for weather and location insights."""

from __future__ import annotations

from rich.columns import Columns
from rich.console import Console, Group
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text

from ..models import AcquisitionResult
from .forecast import (
    CurrentConditions,
    ForecastChart,
    build_current_conditions,
    build_forecast_chart,
    build_forecast_days,
    build_hourly_slots,
    build_location_insights,
)
from .map_view import MapSession
from .notices import NoticeFeed

_SEVERITY_STYLES = {"INFO": "white", "WARN": "yellow", "ERROR": "red"}


def _temp(value: int | None, unit: str = "°") -> str:
    return "-" if value is None else f"{value}{unit}"


def _linked(description: str, icon: str | None) -> Text:
    """Condition text that links to its OpenWeather icon where the terminal supports it."""
    return Text(description, style=f"link {icon}" if icon else "")


class WeatherDashboard:
    """Renders one acquisition result, or an error, to a rich Console."""

    def __init__(self, *, console: Console, units: str = "metric") -> None:
        self.console = console
        self.units = units
        self.notices = NoticeFeed()

    def notify(self, message: str, *, severity: str = "WARN") -> None:
        self.notices.add(severity=severity, message=message)  # type: ignore[arg-type]

    def render_loading(self, description: str) -> None:
        self.console.print(Text(f"Loading weather for {description}...", style="dim"))

    def render_error(self, message: str) -> None:
        self.notify(message, severity="ERROR")
        self.console.print(Panel(Text(message, style="bold red"), title="Error", border_style="red"))
        if len(self.notices.snapshot()) > 1:
            self.console.print(self._build_notices_panel())

    def render_result(self, result: AcquisitionResult, map_session: MapSession) -> None:
        current = build_current_conditions(result.weather, result.location, units=self.units)
        header = self._build_header_panel(current)
        conditions = self._build_conditions_panel(current)
        location = self._build_location_panel(result, current)
        forecast = self._build_forecast_panel(result)
        hourly = self._build_hourly_panel(result)
        chart = self._build_chart_panel(build_forecast_chart(result.weather, units=self.units))
        map_panel = self._build_map_panel(map_session)

        if self.console.width < 110:
            body = Group(header, conditions, location, forecast, hourly, chart, map_panel)
        else:
            body = Group(
                header,
                Columns([conditions, location], equal=True, expand=True),
                Columns([forecast, hourly], equal=True, expand=True),
                chart,
                map_panel,
            )
        self.console.print(body)
        if self.notices.snapshot():
            self.console.print(self._build_notices_panel())

    def _build_header_panel(self, current: CurrentConditions) -> Panel:
        text = Text()
        text.append(current.location_name, style="bold white")
        text.append("  |  ")
        text.append(current.date_text, style="cyan")
        return Panel(text, border_style="blue", title="Weather & Location Insights")

    def _build_conditions_panel(self, current: CurrentConditions) -> Panel:
        table = Table.grid(padding=(0, 1))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Temperature", _temp(current.temperature, current.temperature_unit))
        table.add_row("Feels like", _temp(current.feels_like, current.temperature_unit))
        table.add_row("Conditions", current.description)
        if current.icon:
            table.add_row("Icon", Text(current.icon, style=f"link {current.icon}"))
        table.add_row("Wind", current.wind)
        table.add_row("Humidity", current.humidity)
        table.add_row("Pressure", current.pressure)
        table.add_row("Visibility", current.visibility)
        table.add_row("Sunrise", current.sunrise)
        table.add_row("Sunset", current.sunset)
        if current.sun_progress is not None:
            bar = ProgressBar(total=100, completed=current.sun_progress, width=24)
            table.add_row("Daylight", Group(bar, Text(f"{current.sun_progress:.0f}%", style="dim")))
        return Panel(table, title="Current Weather", border_style="cyan")

    def _build_location_panel(
        self, result: AcquisitionResult, current: CurrentConditions
    ) -> Panel:
        insights = build_location_insights(result.location)
        table = Table.grid(padding=(0, 1))
        table.add_column(style="bold")
        table.add_column(overflow="fold")
        table.add_row("Country", f"{insights.country} {insights.flag}".rstrip())
        table.add_row("Region", insights.region)
        table.add_row("Coordinates", insights.coordinates)
        table.add_row("Timezone", insights.timezone)
        table.add_row("Current Time", current.local_time)
        table.add_row("Currency", insights.currency)
        table.add_row("Calling Code", insights.calling_code)
        table.add_row("Population", insights.population)
        return Panel(table, title="Location Insights", border_style="magenta")

    def _build_forecast_panel(self, result: AcquisitionResult) -> Panel:
        table = Table(show_header=True, header_style="bold")
        table.add_column("Day", width=5)
        table.add_column("High / Low", justify="right")
        table.add_column("Conditions", overflow="fold")
        days = build_forecast_days(result.weather)
        for day in days:
            table.add_row(
                day.label,
                f"{_temp(day.max_temp)} / {_temp(day.min_temp)}",
                _linked(day.description, day.icon),
            )
        if not days:
            table.add_row("-", "-", "No daily forecast available")
        return Panel(table, title="5-Day Forecast", border_style="green")

    def _build_hourly_panel(self, result: AcquisitionResult) -> Panel:
        table = Table(show_header=True, header_style="bold")
        table.add_column("Time", width=8)
        table.add_column("Temp", justify="right", width=5)
        table.add_column("Conditions", overflow="fold")
        slots = build_hourly_slots(result.weather)
        for slot in slots:
            table.add_row(slot.label, _temp(slot.temp), _linked(slot.description, slot.icon))
        if not slots:
            table.add_row("-", "-", "No hourly forecast available")
        return Panel(table, title="Next 24 Hours", border_style="green")

    def _build_chart_panel(self, chart: ForecastChart) -> Panel:
        table = Table(show_header=True, header_style="bold")
        table.add_column("Day", width=5)
        table.add_column("Min", justify="right", width=5)
        table.add_column("Range", ratio=1)
        table.add_column("Max", justify="right", width=5)

        known = [t for t in chart.min_temps + chart.max_temps if t is not None]
        low = min(known) if known else 0
        span = max((max(known) - low) if known else 0, 1)
        width = 30
        for label, t_min, t_max in zip(chart.labels, chart.min_temps, chart.max_temps):
            bar = Text()
            if t_min is not None and t_max is not None:
                start = round((t_min - low) / span * width)
                end = max(round((t_max - low) / span * width), start + 1)
                bar.append(" " * start)
                bar.append("█" * (end - start), style="red")
            table.add_row(label, _temp(t_min), bar, _temp(t_max))
        return Panel(table, title=chart.title, border_style="yellow")

    def _build_map_panel(self, map_session: MapSession) -> Panel:
        table = Table.grid(padding=(0, 1))
        table.add_column(style="bold")
        table.add_column(overflow="fold")
        table.add_row("Style", map_session.tile_layer.style)
        if map_session.marker is not None:
            marker = map_session.marker
            table.add_row("Marker", f"{marker.label} ({marker.latitude:.4f}, {marker.longitude:.4f})")
        link = map_session.osm_link()
        if link:
            table.add_row("Open", link)
        table.add_row("Tiles", Text(map_session.tile_layer.attribution, style="dim"))
        return Panel(table, title="Map", border_style="white")

    def _build_notices_panel(self) -> Panel:
        table = Table(show_header=True, header_style="bold")
        table.add_column("UTC", width=9)
        table.add_column("Severity", width=9)
        table.add_column("Message", overflow="fold")
        for notice in self.notices.snapshot()[-8:]:
            style = _SEVERITY_STYLES[notice.severity]
            table.add_row(
                notice.ts.strftime("%H:%M:%S"),
                f"[{style}]{notice.severity}[/{style}]",
                notice.display_text,
            )
        return Panel(table, title="Notices", border_style="yellow")
