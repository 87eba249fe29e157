import unittest
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from emissions_insight.models import Asset, EmissionDataPoint, SectorEmission, SectorEmissionResponse
from emissions_insight.services.context import NO_DATA_CONTEXT, build_context
from emissions_insight.services.emissions import synthesize_series


class TestBuildContext(unittest.TestCase):

    def setUp(self):
        self.data = synthesize_series(5.0)
        self.assets = [
            Asset(id="a1", name="Plant A", country="USA", sector="electricity-generation", emissions=9e6),
            Asset(id="a2", name="Plant B", country="USA", sector="cement", emissions=1e6),
        ]
        self.sectors = SectorEmissionResponse(
            all=[SectorEmission(emissions=1_000_000, sector="cement"), SectorEmission(emissions=500_000, sector="steel")]
        )

    def test_empty_data_short_circuits(self):
        self.assertEqual(build_context([], self.assets, self.sectors), NO_DATA_CONTEXT)

    def test_describes_range_latest_values_and_watchlist(self):
        context = build_context(self.data, self.assets, self.sectors)

        self.assertIn("from 2015 to 2023", context)
        self.assertIn("Data Summary (Latest Data - 2023)", context)
        self.assertIn("- Energy: 2.0 Gt", context)
        self.assertIn("- Industry: 1.25 Gt", context)
        self.assertIn("- Waste: 0.25 Gt", context)
        self.assertIn("Top High-Emission Asset on Watchlist: Plant A (USA)", context)
        self.assertIn("Sector Emissions (Sum): 1.5 Mt CO2e", context)
        self.assertIn("United States", context)

    def test_flags_modelled_series(self):
        self.assertIn("estimates, not measured", build_context(self.data, self.assets, self.sectors))

        measured = [EmissionDataPoint(year=2022, energy=1.0), EmissionDataPoint(year=2023, energy=1.1)]
        self.assertNotIn("estimates, not measured", build_context(measured, [], None))

    def test_missing_assets_and_sectors(self):
        context = build_context(self.data, [], SectorEmissionResponse())

        self.assertIn("Watchlist: N/A", context)
        self.assertIn("Sector Emissions (Sum): 0 Mt CO2e", context)


if __name__ == '__main__':
    unittest.main()
