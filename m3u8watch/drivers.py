"""
drivers.py

Sources of replacement playlist urls ("drivers"), consulted only when the
history url stops working.

 - StaticDriver        : a fixed list of urls
 - PageScrapeDriver    : regex over a page's html, plus CDN heuristics (fast)
 - BrowserCaptureDriver: headless browser, captures .m3u8 network requests
                         (robust for JS sites, needs MODE=playwright)
"""
import logging
import re
from urllib.parse import urljoin

from m3u8watch import config
from m3u8watch.probe import ProbeError, fetch_text

logger = logging.getLogger(__name__)

M3U8_REGEX = re.compile(
    r"https?://[^\s'\"<>]+\.m3u8(?:\?[^\s'\"<>]*)?|/[^\s'\"<>]+\.m3u8(?:\?[^\s'\"<>]*)?",
    re.IGNORECASE,
)

DEFAULT_HEURISTICS = (
    "playlist.m3u8",
    "index.m3u8",
    "master.m3u8",
    "chunks_dvr.m3u8",
    "playlist_dvr.m3u8",
)


class CandidateSource:
    """Something that can list candidate urls, best first."""

    name = None

    def list_candidates(self):
        raise NotImplementedError

    def __repr__(self):
        return self.name or type(self).__name__


class StaticDriver(CandidateSource):
    def __init__(self, urls, name=None):
        self.urls = list(urls)
        self.name = name

    def list_candidates(self):
        return list(self.urls)


class PageScrapeDriver(CandidateSource):
    """Pulls .m3u8 links out of a page and adds well-known CDN file names.

    Root-relative matches are resolved against cdn_base. A page that can't
    be fetched still yields the heuristic candidates.
    """

    def __init__(self, page_url, cdn_base="", heuristics=DEFAULT_HEURISTICS,
                 pattern=M3U8_REGEX, headers=None, fetch=fetch_text, name=None):
        self.page_url = page_url
        self.cdn_base = cdn_base
        self.heuristics = heuristics
        self.pattern = pattern
        self.headers = headers
        self.fetch = fetch
        self.name = name

    def list_candidates(self):
        found = set()
        try:
            html = self.fetch(self.page_url, headers=self.headers)
            found.update(self.pattern.findall(html))
        except ProbeError as e:
            logger.info("[-] page fetch failed: %s", e)
        if self.cdn_base:
            for h in self.heuristics:
                found.add(self.cdn_base + h)

        candidates = set()
        for f in found:
            if not f:
                continue
            if f.startswith("/"):
                if not self.cdn_base:
                    continue
                candidates.add(urljoin(self.cdn_base, f))
            else:
                candidates.add(f)
        return sorted(candidates)


class BrowserCaptureDriver(CandidateSource):
    """Opens the page in headless chromium and records .m3u8 requests in order."""

    def __init__(self, page_url, enabled=None, settle_ms=4000, name=None):
        self.page_url = page_url
        self.enabled = config.MODE == "playwright" if enabled is None else enabled
        self.settle_ms = settle_ms
        self.name = name

    def list_candidates(self):
        if not self.enabled:
            return []
        try:
            from playwright.sync_api import sync_playwright
        except ImportError as e:
            logger.warning("[-] Playwright not available: %s", e)
            return []

        seen = []

        def on_request(request):
            url = request.url
            if ".m3u8" in url.lower() and url not in seen:
                logger.debug("[NET] m3u8 requested: %s", url)
                seen.append(url)

        with sync_playwright() as p:
            browser = p.chromium.launch(headless=True, args=["--no-sandbox"])
            try:
                context = browser.new_context(user_agent=config.USER_AGENT)
                page = context.new_page()
                page.on("request", on_request)
                logger.info("[*] opening page: %s", self.page_url)
                try:
                    page.goto(self.page_url, wait_until="networkidle", timeout=30000)
                except Exception as e:
                    # players often keep the network busy; keep whatever fired
                    logger.info("[-] page.goto error (ignored): %s", e)
                page.wait_for_timeout(self.settle_ms)
            finally:
                browser.close()
        return seen


def find_first_live_candidate(drivers, probe):
    """Return the first candidate, driver order then candidate order, that
    passes probe; None when nothing does."""
    for driver in drivers:
        try:
            candidates = driver.list_candidates()
        except Exception:
            logger.exception("[-] driver %r failed, skipping", driver)
            continue
        logger.info("[*] %r candidates=%s", driver, candidates)
        for url in candidates:
            if probe(url):
                logger.info("[+] %r found live url %s", driver, url)
                return url
    return None
