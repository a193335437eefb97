"""
probe.py

Liveness probing for playlist URLs. A URL is live when a GET returns a
non-empty body containing the EXTM3U signature.
"""
import logging

import requests

from m3u8watch import config

logger = logging.getLogger(__name__)

SIGNATURE = "EXTM3U"


class ProbeError(RuntimeError):
    pass


def fetch_text(url, headers=None, timeout=None):
    try:
        r = requests.get(
            url,
            headers=headers or config.HEADERS,
            timeout=timeout or config.TIMEOUT,
            allow_redirects=True,
        )
        r.raise_for_status()
    except requests.RequestException as e:
        raise ProbeError(f"Failed to fetch {url}: {e}") from e
    if not r.text:
        raise ProbeError(f"Empty body from {url}")
    return r.text


def is_playlist(body):
    if not body:
        return False
    return SIGNATURE in body


class UrlValidator:
    """Probes URLs, testing each one at most once.

    One validator is meant to live for a single check run; a URL seen a
    second time is reported dead without touching the network.
    """

    def __init__(self, fetch=fetch_text):
        self.fetch = fetch
        self.checked = set()

    def probe(self, url):
        if url in self.checked:
            logger.debug("[-] already probed %s", url)
            return False
        self.checked.add(url)

        logger.debug("[*] probing %s", url)
        try:
            body = self.fetch(url)
        except ProbeError as e:
            logger.debug("[-] %s", e)
            return False
        return is_playlist(body)

    __call__ = probe
