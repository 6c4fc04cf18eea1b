"""Map session value objects handed to the map-rendering collaborator."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

MapStyle = Literal["standard", "satellite"]
DEFAULT_ZOOM = 10


class TileLayer(BaseModel):
    model_config = ConfigDict(frozen=True)

    style: MapStyle
    url_template: str
    attribution: str


TILE_LAYERS: dict[str, TileLayer] = {
    "standard": TileLayer(
        style="standard",
        url_template="https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png",
        attribution="© OpenStreetMap contributors",
    ),
    "satellite": TileLayer(
        style="satellite",
        url_template=(
            "https://server.arcgisonline.com/ArcGIS/rest/services/"
            "World_Imagery/MapServer/tile/{z}/{y}/{x}"
        ),
        attribution=(
            "Tiles © Esri. Source: Esri, i-cubed, USDA, USGS, AEX, GeoEye, Getmapping, "
            "Aerogrid, IGN, IGP, UPR-EGP, and the GIS User Community"
        ),
    ),
}


class MapMarker(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float
    label: str


class MapSession(BaseModel):
    """Current map view; every change returns a new session."""

    model_config = ConfigDict(frozen=True)

    tile_layer: TileLayer = TILE_LAYERS["standard"]
    center: tuple[float, float] | None = None
    zoom: int = DEFAULT_ZOOM
    marker: MapMarker | None = None

    def place_marker(self, latitude: float, longitude: float, label: str) -> MapSession:
        """Centre on a location and replace any previous marker."""
        return self.model_copy(
            update={
                "center": (latitude, longitude),
                "zoom": DEFAULT_ZOOM,
                "marker": MapMarker(latitude=latitude, longitude=longitude, label=label),
            }
        )

    def with_style(self, style: MapStyle) -> MapSession:
        """Swap the tile layer; the marker and view are kept."""
        if style not in TILE_LAYERS:
            raise ValueError(f"Unknown map style {style!r}; expected one of {sorted(TILE_LAYERS)}.")
        return self.model_copy(update={"tile_layer": TILE_LAYERS[style]})

    def tile_url(self, x: int, y: int, z: int, subdomain: str = "a") -> str:
        return self.tile_layer.url_template.format(s=subdomain, x=x, y=y, z=z)

    def osm_link(self) -> str | None:
        """Browser link to the current view, for terminals that can open URLs."""
        if self.center is None:
            return None
        lat, lon = self.center
        return f"https://www.openstreetmap.org/?mlat={lat:.4f}&mlon={lon:.4f}#map={self.zoom}/{lat:.4f}/{lon:.4f}"
