from __future__ import annotations

import logging
from typing import Callable

from .records import Coordinate
from .venue_coordinates import VenueCoordinateRegistry


logger = logging.getLogger(__name__)

DEFAULT_REGION = "England"
INTERNATIONAL_REGION = "International"

CoordinatePredicate = Callable[[Coordinate], bool]
RegionRule = tuple[CoordinatePredicate, str]


def _box(min_lat: float, max_lat: float, min_lon: float, max_lon: float) -> CoordinatePredicate:
    def contains(point: Coordinate) -> bool:
        return min_lat <= point.latitude <= max_lat and min_lon <= point.longitude <= max_lon

    return contains


def _any_box(*boxes: CoordinatePredicate) -> CoordinatePredicate:
    def contains(point: Coordinate) -> bool:
        return any(box(point) for box in boxes)

    return contains


UK_BOUNDS = _box(49.5, 61.0, -8.5, 2.0)

# Evaluated top to bottom; the first matching rule wins, so later boxes may
# overlap earlier ones.
UK_REGION_RULES: list[RegionRule] = [
    (lambda point: point.latitude >= 55.0, "Scotland"),
    (_box(54.0, 55.4, -8.2, -5.4), "Northern Ireland"),
    (_box(51.4, 55.4, -8.5, -5.9), "Ireland"),
    (_box(51.35, 53.45, -5.4, -2.95), "Wales"),
    (
        _any_box(
            _box(54.65, 55.0, -3.6, 0.0),
            _box(53.3, 54.1, -3.2, -2.05),
        ),
        "North England",
    ),
    (_box(53.45, 54.65, -2.2, 0.2), "Yorkshire & Humber"),
    (_box(53.0, 53.45, -2.1, -1.4), "Peak District"),
    (_box(54.1, 54.65, -3.6, -2.65), "Lake District"),
    (_box(52.0, 53.3, -3.1, -1.5), "West Midlands"),
    (_box(52.0, 53.3, -1.5, 0.0), "East Midlands"),
    (
        _any_box(
            _box(51.7, 53.0, 0.0, 1.8),
            _box(51.45, 51.7, 0.35, 1.0),
        ),
        "East England",
    ),
    (_box(51.28, 51.7, -0.51, 0.33), "London"),
    (_box(49.8, 51.75, -6.0, -1.75), "South West England"),
    (_box(50.7, 51.4, -1.75, -0.75), "Hampshire"),
    (_box(51.07, 51.45, -0.85, -0.05), "Surrey"),
    (_box(50.75, 51.07, -0.95, -0.2), "West Sussex"),
    (_box(50.7, 51.5, -0.2, 1.6), "Kent & East Sussex"),
    (_box(50.5, 50.95, -3.5, 1.5), "South Coast"),
]

INTERNATIONAL_REGION_RULES: list[RegionRule] = [
    (_box(55.0, 71.5, 4.5, 31.5), "Scandinavia"),
    (_box(36.0, 55.0, -10.0, 15.0), "Western Europe"),
    (_box(36.0, 60.0, 15.0, 40.0), "Eastern Europe"),
    (
        _any_box(
            _box(49.0, 83.0, -141.0, -52.0),
            _box(43.5, 49.0, -83.5, -76.0),
            _box(45.0, 49.0, -76.0, -66.0),
            _box(43.4, 49.0, -66.0, -52.0),
        ),
        "Canada",
    ),
    (
        _any_box(
            _box(24.0, 49.0, -125.0, -104.0),
            _box(51.0, 72.0, -170.0, -141.0),
            _box(18.0, 23.0, -161.0, -154.0),
        ),
        "USA West",
    ),
    (_box(24.0, 49.0, -104.0, -87.0), "USA Central"),
    (_box(24.0, 49.0, -87.0, -66.0), "USA East"),
    (
        lambda point: point.latitude < -30.0 and 165.0 <= point.longitude <= 180.0,
        "New Zealand",
    ),
    (_box(-44.0, -10.0, 112.0, 155.0), "Australia"),
    (_box(-35.0, -22.0, 16.0, 33.0), "South Africa"),
    (_box(-11.0, 55.0, 60.0, 150.0), "Asia"),
]

KEYWORD_REGION_RULES: list[tuple[tuple[str, ...], str]] = [
    (("crissy", "san francisco", "california", "los angeles", "seattle", "oregon"), "USA West"),
    (("chicago", "texas", "minnesota", "colorado"), "USA Central"),
    (("new york", "boston", "florida", "virginia", "washington dc", "maryland"), "USA East"),
    (("canada", "toronto", "vancouver", "ottawa", "montreal", "calgary"), "Canada"),
    (("new zealand", "auckland", "wellington", "christchurch"), "New Zealand"),
    (("australia", "new south wales", "sydney", "melbourne", "brisbane", "adelaide", "gold coast"), "Australia"),
    (("south africa", "johannesburg", "cape town", "durban", "pretoria"), "South Africa"),
    (("singapore", "japan", "tokyo", "malaysia", "kuala lumpur"), "Asia"),
    (("denmark", "sweden", "norway", "finland", "copenhagen", "stockholm", "oslo", "helsinki"), "Scandinavia"),
    (("germany", "netherlands", "france", "italy", "berlin", "amsterdam", "paris"), "Western Europe"),
    (("poland", "warsaw", "krakow", "lithuania", "russia"), "Eastern Europe"),
    (("northern ireland", "belfast", "londonderry", "antrim", "lisburn"), "Northern Ireland"),
    (("ireland", "dublin", "cork", "galway", "limerick", "marlay"), "Ireland"),
    (("scotland", "edinburgh", "glasgow", "aberdeen", "dundee", "inverness", "stirling"), "Scotland"),
    (("wales", "cardiff", "swansea", "newport", "wrexham", "aberystwyth"), "Wales"),
    (("keswick", "ambleside", "windermere", "kendal", "cockermouth"), "Lake District"),
    (
        (
            "newcastle", "sunderland", "durham", "carlisle", "manchester", "liverpool",
            "preston", "lancaster", "blackpool", "bolton", "wigan", "gateshead", "northumberland",
        ),
        "North England",
    ),
    (
        ("yorkshire", "leeds", "york", "sheffield", "humber", "bradford", "harrogate", "huddersfield", "doncaster"),
        "Yorkshire & Humber",
    ),
    (("peak", "buxton", "bakewell", "castleton", "hathersage"), "Peak District"),
    (
        ("birmingham", "coventry", "wolverhampton", "worcester", "shrewsbury", "stoke-on-trent", "solihull"),
        "West Midlands",
    ),
    (("nottingham", "leicester", "derby", "lincoln", "northampton"), "East Midlands"),
    (
        ("norwich", "cambridge", "ipswich", "norfolk", "suffolk", "essex", "colchester", "chelmsford", "peterborough"),
        "East England",
    ),
    (
        ("london", "bushy", "richmond", "hackney", "wimbledon", "greenwich", "hampstead", "clapham", "battersea"),
        "London",
    ),
    (
        (
            "bristol", "exeter", "plymouth", "cornwall", "devon", "somerset", "dorset", "bournemouth",
            "swindon", "lydiard", "gloucester", "cheltenham", "torquay", "taunton", "bath",
        ),
        "South West England",
    ),
    (
        (
            "whiteley", "southampton", "portsmouth", "southsea", "netley", "eastleigh", "winchester",
            "basingstoke", "lee-on-the-solent", "fareham", "havant", "gosport", "ganger", "andover",
            "hampshire", "new forest",
        ),
        "Hampshire",
    ),
    (("surrey", "guildford", "woking", "epsom", "reigate", "dorking", "farnham"), "Surrey"),
    (("chichester", "worthing", "crawley", "horsham", "bognor"), "West Sussex"),
    (
        ("kent", "canterbury", "maidstone", "brighton", "hastings", "eastbourne", "dover", "folkestone", "tunbridge"),
        "Kent & East Sussex",
    ),
    (("seafront", "promenade", "beach", "coast"), "South Coast"),
]


def _first_match(rules: list[RegionRule], point: Coordinate, default: str) -> str:
    for predicate, label in rules:
        if predicate(point):
            return label
    return default


def is_in_uk(point: Coordinate) -> bool:
    return UK_BOUNDS(point)


def classify_international(point: Coordinate) -> str:
    return _first_match(INTERNATIONAL_REGION_RULES, point, INTERNATIONAL_REGION)


def classify_coordinate(point: Coordinate) -> str:
    if not is_in_uk(point):
        return classify_international(point)
    return _first_match(UK_REGION_RULES, point, DEFAULT_REGION)


def classify_keywords(venue_name: str) -> str:
    lowered = venue_name.lower()
    for keywords, label in KEYWORD_REGION_RULES:
        if any(keyword in lowered for keyword in keywords):
            return label
    return DEFAULT_REGION


def classify_region(venue_name: str, registry: VenueCoordinateRegistry | None = None) -> str:
    """Resolve a venue name to a human-readable region label.

    A known coordinate is classified geographically; otherwise the venue name
    is matched against keyword lists. Both paths fall back to "England".
    """
    coordinate = registry.coordinate(venue_name) if registry is not None else None
    if coordinate is not None:
        return classify_coordinate(coordinate)
    return classify_keywords(venue_name)
