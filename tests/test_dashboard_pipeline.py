import unittest
from unittest.mock import patch
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from emissions_insight.models import Asset, SectorEmission, SectorEmissionResponse
from emissions_insight.services.emissions import FetchOutcome, synthesize_series
from emissions_insight.workflows.dashboard_pipeline import EmptyDatasetError, load_dashboard, run

MODULE = 'emissions_insight.workflows.dashboard_pipeline'


class TestDashboardPipeline(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.series = FetchOutcome(synthesize_series(5.0))
        self.assets = FetchOutcome([Asset(id="1", name="Plant A", country="USA", emissions=10.0)])
        self.sectors = FetchOutcome(SectorEmissionResponse(all=[SectorEmission(emissions=2.0, sector="cement")]))

    @patch(f'{MODULE}.load_sector_breakdown')
    @patch(f'{MODULE}.load_top_assets')
    @patch(f'{MODULE}.load_country_totals')
    async def test_all_sources_loaded(self, mock_totals, mock_assets, mock_sectors):
        mock_totals.return_value = self.series
        mock_assets.return_value = self.assets
        mock_sectors.return_value = self.sectors

        snapshot = await load_dashboard()

        self.assertIsNone(snapshot.error)
        self.assertEqual(len(snapshot.data), 9)
        self.assertEqual(snapshot.assets[0].name, "Plant A")
        self.assertIn("Plant A (USA)", snapshot.context)
        self.assertEqual(set(snapshot.outcomes.values()), {"ok"})
        mock_totals.assert_called_once()
        mock_assets.assert_called_once()
        mock_sectors.assert_called_once()

    @patch(f'{MODULE}.load_sector_breakdown')
    @patch(f'{MODULE}.load_top_assets')
    @patch(f'{MODULE}.load_country_totals')
    async def test_one_failure_does_not_abort_others(self, mock_totals, mock_assets, mock_sectors):
        mock_totals.return_value = FetchOutcome([], "unreachable", "offline")
        mock_assets.return_value = self.assets
        mock_sectors.return_value = self.sectors

        snapshot = await load_dashboard()

        self.assertIsNone(snapshot.error)
        self.assertEqual(snapshot.data, [])
        self.assertEqual(len(snapshot.assets), 1)
        self.assertEqual(snapshot.outcomes["countryTotals"], "unreachable")
        self.assertEqual(snapshot.context, "No data available. The API might be down.")

    @patch(f'{MODULE}.load_sector_breakdown')
    @patch(f'{MODULE}.load_top_assets')
    @patch(f'{MODULE}.load_country_totals')
    async def test_all_empty_is_reported(self, mock_totals, mock_assets, mock_sectors):
        mock_totals.return_value = FetchOutcome([], "unreachable", "offline")
        mock_assets.return_value = FetchOutcome([], "malformed", "bad")
        mock_sectors.return_value = FetchOutcome(SectorEmissionResponse(), "empty")

        snapshot = await load_dashboard()

        self.assertTrue(snapshot.is_empty)
        self.assertIsNotNone(snapshot.error)
        self.assertTrue(snapshot.context.startswith("Data unavailable. Error:"))

        with self.assertRaises(EmptyDatasetError):
            await load_dashboard(strict=True)

    @patch('emissions_insight.services.emissions.fetch_json')
    async def test_string_quantities_do_not_break_load(self, mock_fetch_json):
        payloads = {
            "country": {"emissions": {"co2e_100yr": 5_000_000_000}},
            "assets": {"assets": [{"Id": 1, "Name": "Plant A", "Country": "USA",
                                   "EmissionsSummary": [{"Gas": "co2e_100yr", "EmissionsQuantity": "9e6"}]}]},
            "sectors": {"all": [{"Emissions": "1.5e9", "Sector": "cement"}, {"Emissions": "bad", "Sector": "steel"}]},
        }

        def fake_fetch(url, session=None):
            if "country" in url:
                return payloads["country"]
            if url.endswith("/assets/emissions"):
                return payloads["sectors"]
            return payloads["assets"]

        mock_fetch_json.side_effect = fake_fetch

        snapshot = await load_dashboard()

        self.assertIsNone(snapshot.error)
        self.assertEqual(snapshot.sectors.total_emissions(), 1.5e9)
        self.assertEqual(snapshot.assets[0].emissions, 9e6)
        self.assertIn("Sector Emissions (Sum): 1,500 Mt CO2e", snapshot.context)


class TestRun(unittest.TestCase):

    @patch(f'{MODULE}.load_sector_breakdown')
    @patch(f'{MODULE}.load_top_assets')
    @patch(f'{MODULE}.load_country_totals')
    def test_run_logs_statistics(self, mock_totals, mock_assets, mock_sectors):
        mock_totals.return_value = FetchOutcome(synthesize_series(1.0))
        mock_assets.return_value = FetchOutcome([])
        mock_sectors.return_value = FetchOutcome(SectorEmissionResponse())

        with self.assertLogs(MODULE, level='INFO') as logs:
            snapshot = run()

        self.assertEqual(len(snapshot.data), 9)
        self.assertTrue(any("Yearly points: 9" in line for line in logs.output))


if __name__ == '__main__':
    unittest.main()
