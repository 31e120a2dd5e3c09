import json
import tempfile
import unittest
from pathlib import Path

from parkstats.records import Coordinate
from parkstats.venue_coordinates import (
    MIN_MAP_SPAN,
    VenueCoordinateRegistry,
    default_uk_region,
    load_registry,
    normalize_venue_name,
)


def _events_payload() -> dict:
    return {
        "events": {
            "features": [
                {
                    "geometry": {"coordinates": [-1.2956, 50.8591]},
                    "properties": {
                        "eventname": "whiteley",
                        "EventLongName": "Whiteley parkrun",
                        "EventShortName": "Whiteley",
                    },
                },
                {
                    "geometry": {"coordinates": [-3.13]},
                    "properties": {"EventLongName": "Broken parkrun", "EventShortName": "Broken"},
                },
                "not-a-feature",
            ]
        }
    }


class TestVenueCoordinateRegistry(unittest.TestCase):
    def test_exact_match(self) -> None:
        registry = VenueCoordinateRegistry()
        self.assertEqual(registry.coordinate("Whiteley parkrun"), Coordinate(50.8591, -1.2956))

    def test_fuzzy_variant_resolves_to_same_coordinate(self) -> None:
        registry = VenueCoordinateRegistry()
        self.assertEqual(registry.coordinate("Whiteley"), registry.coordinate("Whiteley parkrun"))
        self.assertEqual(registry.coordinate("  whiteley PARKRUN "), registry.coordinate("Whiteley parkrun"))

    def test_unknown_venue_returns_none(self) -> None:
        registry = VenueCoordinateRegistry()
        self.assertIsNone(registry.coordinate("Some Unknown Village parkrun"))
        self.assertIsNone(registry.coordinate(""))
        self.assertIsNone(registry.coordinate("parkrun"))
        self.assertFalse(registry.has_coordinate("Some Unknown Village parkrun"))

    def test_first_table_entry_wins_for_containment_matches(self) -> None:
        registry = VenueCoordinateRegistry(
            {
                "Abbey parkrun": Coordinate(1.0, 1.0),
                "Netley Abbey parkrun": Coordinate(2.0, 2.0),
            }
        )
        self.assertEqual(registry.coordinate("Netley Abbey"), Coordinate(1.0, 1.0))

    def test_normalize_venue_name(self) -> None:
        self.assertEqual(normalize_venue_name("Keswick parkrun"), "keswick")
        self.assertEqual(normalize_venue_name(" Keswick "), "keswick")

    def test_map_region_none_when_nothing_resolves(self) -> None:
        registry = VenueCoordinateRegistry()
        self.assertIsNone(registry.map_region([]))
        self.assertIsNone(registry.map_region(["Some Unknown Village parkrun"]))

    def test_map_region_single_point_uses_minimum_span(self) -> None:
        registry = VenueCoordinateRegistry()
        region = registry.map_region(["Whiteley parkrun", "Nowhere at all"])
        self.assertEqual(region.center, Coordinate(50.8591, -1.2956))
        self.assertEqual(region.latitude_span, MIN_MAP_SPAN)
        self.assertEqual(region.longitude_span, MIN_MAP_SPAN)

    def test_map_region_pads_bounding_box(self) -> None:
        registry = VenueCoordinateRegistry(
            {
                "A parkrun": Coordinate(50.0, -2.0),
                "B parkrun": Coordinate(52.0, -1.0),
            }
        )
        region = registry.map_region(["A parkrun", "B parkrun"])
        self.assertAlmostEqual(region.center.latitude, 51.0)
        self.assertAlmostEqual(region.center.longitude, -1.5)
        self.assertAlmostEqual(region.latitude_span, 2.4)
        self.assertAlmostEqual(region.longitude_span, 1.2)

    def test_map_region_floors_span_for_clustered_points(self) -> None:
        registry = VenueCoordinateRegistry(
            {
                "A parkrun": Coordinate(50.0, -2.0),
                "B parkrun": Coordinate(50.001, -2.001),
            }
        )
        region = registry.map_region(["A parkrun", "B parkrun"])
        self.assertEqual(region.latitude_span, MIN_MAP_SPAN)
        self.assertEqual(region.longitude_span, MIN_MAP_SPAN)

    def test_default_uk_region(self) -> None:
        region = default_uk_region()
        self.assertEqual(region.center, Coordinate(52.3555, -1.1743))
        self.assertEqual(region.latitude_span, 8.0)

    def test_register_adds_lookup_entry(self) -> None:
        registry = VenueCoordinateRegistry({})
        self.assertIsNone(registry.coordinate("Tollcross parkrun"))
        registry.register("Tollcross parkrun", 55.845, -4.177)
        self.assertEqual(registry.coordinate("Tollcross"), Coordinate(55.845, -4.177))

    def test_from_events_payload_stores_name_variants(self) -> None:
        registry = VenueCoordinateRegistry.from_events_payload(_events_payload())
        expected = Coordinate(50.8591, -1.2956)
        self.assertEqual(len(registry), 2)
        self.assertEqual(registry.coordinate("Whiteley parkrun"), expected)
        self.assertEqual(registry.coordinate("Whiteley"), expected)
        self.assertIsNone(registry.coordinate("Broken parkrun"))

    def test_load_registry_reads_events_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "events.json"
            path.write_text(json.dumps(_events_payload()), encoding="utf-8")
            registry = load_registry(path)
        self.assertEqual(len(registry), 2)

    def test_events_registry_keeps_bundled_venues_as_second_tier(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "events.json"
            path.write_text(json.dumps(_events_payload()), encoding="utf-8")
            registry = load_registry(path)
        self.assertEqual(registry.coordinate("Crissy Field parkrun"), Coordinate(37.8055, -122.4662))
        self.assertEqual(registry.coordinate("Bushy parkrun"), Coordinate(51.4108, -0.3340))
        self.assertIsNotNone(registry.map_region(["Whiteley parkrun", "Crissy Field parkrun"]))

    def test_primary_table_wins_over_fallback(self) -> None:
        registry = VenueCoordinateRegistry(
            {"Bushy Park parkrun": Coordinate(1.0, 1.0)},
            fallback=VenueCoordinateRegistry(),
        )
        # Containment on the primary table beats an exact fallback entry.
        self.assertEqual(registry.coordinate("Bushy parkrun"), Coordinate(1.0, 1.0))
        self.assertEqual(registry.coordinate("Keswick parkrun"), Coordinate(54.6002, -3.1300))
        self.assertIsNone(registry.coordinate("Some Unknown Village parkrun"))
        self.assertEqual(len(registry), 1)

    def test_load_registry_falls_back_to_bundled_table(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            missing = Path(tmpdir) / "missing.json"
            with self.assertLogs("parkstats.venue_coordinates", level="WARNING"):
                registry = load_registry(missing)
        self.assertTrue(registry.has_coordinate("Keswick parkrun"))
        self.assertTrue(load_registry(None).has_coordinate("Bushy parkrun"))


if __name__ == "__main__":
    unittest.main()
