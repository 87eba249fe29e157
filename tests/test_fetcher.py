import unittest
from unittest.mock import MagicMock
import os
import sys

import requests

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from emissions_insight.services.fetcher import FetchFailure, fetch_json, proxied_url

URL = "https://api.climatetrace.org/v6/assets?limit=20"


def _response(status_code=200, payload=None, reason="OK"):
    response = MagicMock()
    response.status_code = status_code
    response.reason = reason
    response.json.return_value = payload
    return response


class TestFetcher(unittest.TestCase):

    def setUp(self):
        self.session = MagicMock()

    def test_direct_success_skips_proxy(self):
        self.session.get.return_value = _response(payload={"assets": []})

        result = fetch_json(URL, session=self.session)

        self.assertEqual(result, {"assets": []})
        self.session.get.assert_called_once()
        self.assertEqual(self.session.get.call_args.args[0], URL)

    def test_network_error_falls_back_to_proxy(self):
        self.session.get.side_effect = [
            requests.ConnectionError("connection refused"),
            _response(payload={"emissions": {"co2e_100yr": 1}}),
        ]

        result = fetch_json(URL, session=self.session)

        self.assertEqual(result, {"emissions": {"co2e_100yr": 1}})
        self.assertEqual(self.session.get.call_count, 2)
        self.assertEqual(self.session.get.call_args_list[1].args[0], proxied_url(URL))

    def test_non_2xx_falls_back_to_proxy(self):
        self.session.get.side_effect = [
            _response(status_code=403, reason="Forbidden"),
            _response(payload=[1, 2, 3]),
        ]

        self.assertEqual(fetch_json(URL, session=self.session), [1, 2, 3])
        self.assertEqual(self.session.get.call_count, 2)

    def test_unparsable_direct_body_falls_back_to_proxy(self):
        broken = _response()
        broken.json.side_effect = ValueError("Expecting value")
        self.session.get.side_effect = [broken, _response(payload={"ok": True})]

        self.assertEqual(fetch_json(URL, session=self.session), {"ok": True})

    def test_both_attempts_failing_raises_with_direct_error(self):
        direct_error = requests.ConnectionError("dns failure")
        self.session.get.side_effect = [direct_error, _response(status_code=500, reason="Server Error")]

        with self.assertRaises(FetchFailure) as ctx:
            fetch_json(URL, session=self.session)

        self.assertIs(ctx.exception.direct_error, direct_error)
        self.assertIsInstance(ctx.exception.proxy_error, requests.HTTPError)
        # exactly one proxy retry, no backoff loop
        self.assertEqual(self.session.get.call_count, 2)

    def test_proxied_url_encodes_target(self):
        self.assertEqual(
            proxied_url("https://a.org/x?iso=USA&to=2023", "https://corsproxy.io/?"),
            "https://corsproxy.io/?https%3A%2F%2Fa.org%2Fx%3Fiso%3DUSA%26to%3D2023",
        )


if __name__ == '__main__':
    unittest.main()
