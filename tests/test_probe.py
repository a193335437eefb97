import unittest
from unittest import mock

import requests

from m3u8watch.probe import ProbeError, UrlValidator, fetch_text, is_playlist


def fake_response(text="", status=200):
    r = mock.Mock()
    r.text = text
    r.status_code = status
    if status >= 400:
        r.raise_for_status.side_effect = requests.HTTPError(f"{status} error")
    else:
        r.raise_for_status.return_value = None
    return r


class FetchTextTests(unittest.TestCase):
    def test_returns_body(self):
        with mock.patch("m3u8watch.probe.requests.get", return_value=fake_response("#EXTM3U\n")):
            self.assertEqual(fetch_text("http://a"), "#EXTM3U\n")

    def test_http_error_raises_probe_error(self):
        with mock.patch("m3u8watch.probe.requests.get", return_value=fake_response("nope", 404)):
            with self.assertRaises(ProbeError):
                fetch_text("http://a")

    def test_connection_error_raises_probe_error(self):
        with mock.patch("m3u8watch.probe.requests.get", side_effect=requests.ConnectionError("down")):
            with self.assertRaises(ProbeError):
                fetch_text("http://a")

    def test_empty_body_raises_probe_error(self):
        with mock.patch("m3u8watch.probe.requests.get", return_value=fake_response("")):
            with self.assertRaises(ProbeError):
                fetch_text("http://a")


class UrlValidatorTests(unittest.TestCase):
    def test_signature_required(self):
        self.assertTrue(is_playlist("#EXTM3U\n#EXT-X-VERSION:3"))
        self.assertFalse(is_playlist("<html></html>"))
        self.assertFalse(is_playlist(None))

    def test_live_and_dead(self):
        bodies = {"http://live": "#EXTM3U", "http://html": "<html>"}
        validator = UrlValidator(lambda url: bodies[url])
        self.assertTrue(validator.probe("http://live"))
        self.assertFalse(validator.probe("http://html"))

    def test_second_probe_skips_network(self):
        fetch = mock.Mock(return_value="#EXTM3U")
        validator = UrlValidator(fetch)
        self.assertTrue(validator.probe("http://a"))
        self.assertFalse(validator.probe("http://a"))
        fetch.assert_called_once_with("http://a")

    def test_failed_url_is_remembered_too(self):
        fetch = mock.Mock(side_effect=ProbeError("timeout"))
        validator = UrlValidator(fetch)
        self.assertFalse(validator.probe("http://a"))
        self.assertFalse(validator.probe("http://a"))
        self.assertEqual(fetch.call_count, 1)
        self.assertEqual(validator.checked, {"http://a"})

    def test_transport_failure_through_requests(self):
        with mock.patch("m3u8watch.probe.requests.get", side_effect=requests.Timeout("slow")):
            self.assertFalse(UrlValidator().probe("http://slow"))


if __name__ == "__main__":
    unittest.main()
