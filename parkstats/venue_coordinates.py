from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping

from .numeric_utils import as_float
from .records import Coordinate
from .storage import read_json


logger = logging.getLogger(__name__)

MIN_MAP_SPAN = 0.01
MAP_PADDING_FACTOR = 1.2
PARKRUN_SUFFIX = "parkrun"

DEFAULT_UK_CENTER = Coordinate(52.3555, -1.1743)
DEFAULT_UK_SPAN = 8.0

DEFAULT_VENUE_COORDINATES: dict[str, Coordinate] = {
    # Hampshire and the south coast
    "Whiteley parkrun": Coordinate(50.8591, -1.2956),
    "Southampton parkrun": Coordinate(50.9097, -1.4044),
    "Netley Abbey parkrun": Coordinate(50.8717, -1.3569),
    "Lee-on-the-Solent parkrun": Coordinate(50.8032, -1.2048),
    "Southsea parkrun": Coordinate(50.7798, -1.0851),
    "Portsmouth Lakeside parkrun": Coordinate(50.8362, -1.0541),
    "Eastleigh parkrun": Coordinate(50.9627, -1.3491),
    "Ganger Farm parkrun": Coordinate(50.9913, -1.4817),
    "Winchester parkrun": Coordinate(51.0667, -1.3266),
    "Brighton & Hove parkrun": Coordinate(50.8419, -0.1716),
    "Worthing parkrun": Coordinate(50.8098, -0.3712),
    "Guildford parkrun": Coordinate(51.2410, -0.5705),
    "Canterbury parkrun": Coordinate(51.2802, 1.0789),
    # London
    "Bushy parkrun": Coordinate(51.4108, -0.3340),
    "Richmond parkrun": Coordinate(51.4613, -0.2909),
    "Hackney Marshes parkrun": Coordinate(51.5563, -0.0283),
    # Rest of England
    "Lydiard parkrun": Coordinate(51.5617, -1.8531),
    "Bristol Ashton Court parkrun": Coordinate(51.4420, -2.6376),
    "Exeter Riverside parkrun": Coordinate(50.7159, -3.5201),
    "Cannon Hill parkrun": Coordinate(52.4514, -1.8978),
    "Colwick parkrun": Coordinate(52.9490, -1.0932),
    "Norwich parkrun": Coordinate(52.6366, 1.2804),
    "Sheffield Hallam parkrun": Coordinate(53.3671, -1.5053),
    "Leeds parkrun": Coordinate(53.8419, -1.5794),
    "Newcastle parkrun": Coordinate(54.9811, -1.6218),
    "Heaton parkrun": Coordinate(53.5339, -2.2508),
    "Keswick parkrun": Coordinate(54.6002, -3.1300),
    # Rest of the UK and Ireland
    "Cardiff parkrun": Coordinate(51.4882, -3.1843),
    "Edinburgh parkrun": Coordinate(55.9811, -3.2811),
    "Belfast Victoria parkrun": Coordinate(54.6063, -5.8997),
    "Marlay parkrun": Coordinate(53.2743, -6.2697),
    # International
    "Crissy Field parkrun": Coordinate(37.8055, -122.4662),
    "Crissy Field": Coordinate(37.8055, -122.4662),
    "Faelledparken parkrun": Coordinate(55.7001, 12.5683),
    "Hasenheide parkrun": Coordinate(52.4833, 13.4129),
    "Warsaw Praga parkrun": Coordinate(52.2455, 21.0459),
    "High Park parkrun": Coordinate(43.6465, -79.4637),
    "Cunningham parkrun": Coordinate(40.7319, -73.7701),
    "Wollongong parkrun": Coordinate(-34.4243, 150.8986),
    "Lower Hutt parkrun": Coordinate(-41.2090, 174.9050),
    "Zwartkops parkrun": Coordinate(-25.8090, 28.1130),
    "East Coast Park parkrun": Coordinate(1.3008, 103.9122),
}


@dataclass(frozen=True)
class MapRegion:
    center: Coordinate
    latitude_span: float
    longitude_span: float


def normalize_venue_name(name: str) -> str:
    normalized = name.strip().lower()
    if normalized.endswith(PARKRUN_SUFFIX):
        normalized = normalized[: -len(PARKRUN_SUFFIX)]
    return normalized.strip()


def default_uk_region() -> MapRegion:
    return MapRegion(
        center=DEFAULT_UK_CENTER,
        latitude_span=DEFAULT_UK_SPAN,
        longitude_span=DEFAULT_UK_SPAN,
    )


class VenueCoordinateRegistry:
    """Read-only lookup from venue name to coordinate.

    Lookup tries the exact name first, then a containment match between
    normalized names (lower-cased, trailing "parkrun" removed) in table order.
    A miss in this table is retried against ``fallback`` when one is set.
    """

    def __init__(
        self,
        table: Mapping[str, Coordinate] | None = None,
        fallback: "VenueCoordinateRegistry | None" = None,
    ) -> None:
        self.fallback = fallback
        source = DEFAULT_VENUE_COORDINATES if table is None else table
        self._table: dict[str, Coordinate] = {
            name: Coordinate(float(coord[0]), float(coord[1])) for name, coord in source.items()
        }
        self._normalized: list[tuple[str, Coordinate]] = []
        self._rebuild_index()

    def _rebuild_index(self) -> None:
        self._normalized = [
            (normalize_venue_name(name), coordinate) for name, coordinate in self._table.items()
        ]

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, venue_name: object) -> bool:
        return isinstance(venue_name, str) and self.coordinate(venue_name) is not None

    def coordinate(self, venue_name: str) -> Coordinate | None:
        found = self._lookup(venue_name)
        if found is None and self.fallback is not None:
            return self.fallback.coordinate(venue_name)
        return found

    def _lookup(self, venue_name: str) -> Coordinate | None:
        exact = self._table.get(venue_name)
        if exact is not None:
            return exact

        query = normalize_venue_name(venue_name)
        if not query:
            return None
        for candidate, coordinate in self._normalized:
            if not candidate:
                continue
            if candidate in query or query in candidate:
                return coordinate
        return None

    def has_coordinate(self, venue_name: str) -> bool:
        return self.coordinate(venue_name) is not None

    def register(self, venue_name: str, latitude: float, longitude: float) -> None:
        self._table[venue_name] = Coordinate(float(latitude), float(longitude))
        self._rebuild_index()

    def map_region(self, venue_names: Iterable[str]) -> MapRegion | None:
        coordinates = [
            coordinate
            for coordinate in (self.coordinate(name) for name in venue_names)
            if coordinate is not None
        ]
        if not coordinates:
            return None

        if len(coordinates) == 1:
            return MapRegion(
                center=coordinates[0],
                latitude_span=MIN_MAP_SPAN,
                longitude_span=MIN_MAP_SPAN,
            )

        latitudes = [coordinate.latitude for coordinate in coordinates]
        longitudes = [coordinate.longitude for coordinate in coordinates]
        min_lat, max_lat = min(latitudes), max(latitudes)
        min_lon, max_lon = min(longitudes), max(longitudes)

        return MapRegion(
            center=Coordinate((min_lat + max_lat) / 2, (min_lon + max_lon) / 2),
            latitude_span=max(MIN_MAP_SPAN, (max_lat - min_lat) * MAP_PADDING_FACTOR),
            longitude_span=max(MIN_MAP_SPAN, (max_lon - min_lon) * MAP_PADDING_FACTOR),
        )

    @classmethod
    def from_events_payload(
        cls,
        payload: dict[str, Any],
        fallback: "VenueCoordinateRegistry | None" = None,
    ) -> "VenueCoordinateRegistry":
        events = payload.get("events")
        features = events.get("features") if isinstance(events, dict) else None
        table: dict[str, Coordinate] = {}
        for feature in features if isinstance(features, list) else []:
            if not isinstance(feature, dict):
                continue
            geometry = feature.get("geometry") or {}
            properties = feature.get("properties") or {}
            raw_coordinates = geometry.get("coordinates") if isinstance(geometry, dict) else None
            if not isinstance(raw_coordinates, list) or len(raw_coordinates) < 2:
                continue
            # GeoJSON order is [longitude, latitude].
            longitude = as_float(raw_coordinates[0])
            latitude = as_float(raw_coordinates[1])
            if latitude is None or longitude is None or not isinstance(properties, dict):
                continue
            coordinate = Coordinate(latitude, longitude)

            long_name = str(properties.get("EventLongName") or "").strip()
            short_name = str(properties.get("EventShortName") or "").strip()
            if long_name:
                table[long_name] = coordinate
                if long_name.endswith(" parkrun"):
                    table[long_name[: -len(" parkrun")]] = coordinate
            if short_name:
                table[f"{short_name} parkrun"] = coordinate
                table[short_name] = coordinate
        return cls(table, fallback=fallback)


def load_registry(path: Path | None) -> VenueCoordinateRegistry:
    if path is None:
        return VenueCoordinateRegistry()
    payload = read_json(path)
    if payload is None:
        logger.warning("Venue coordinates file %s unavailable; using bundled table.", path)
        return VenueCoordinateRegistry()
    registry = VenueCoordinateRegistry.from_events_payload(payload, fallback=VenueCoordinateRegistry())
    if len(registry) == 0:
        logger.warning("No usable venues in %s; using bundled table.", path)
        return VenueCoordinateRegistry()
    logger.info("Loaded %d venue coordinates from %s", len(registry), path)
    return registry
