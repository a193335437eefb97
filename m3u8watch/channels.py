"""
channels.py

Registered channels. Add a Channel subclass here and list it in CHANNELS.
"""
import os

from m3u8watch import config
from m3u8watch.checker import Channel
from m3u8watch.drivers import BrowserCaptureDriver, PageScrapeDriver

RDXGOA_PAGE = os.getenv("RDXGOA_PAGE", "https://rdxgoa.com/live-tv/")
RDXGOA_CDN_BASE = os.getenv("RDXGOA_CDN_BASE", "https://g5nl6xoalpq6-hls-live.5centscdn.com/rdxgoa/")


class RdxGoa(Channel):
    name = "rdxgoa"
    history_path = "rdxgoa_history.json"
    err_counter_path = "rdxgoa_err_counter.json"
    group_title = "Goa"
    tvg_id = "rdxgoa"

    def drivers(self):
        headers = dict(config.HEADERS, Origin="https://rdxgoa.com", Referer="https://rdxgoa.com/")
        return [
            PageScrapeDriver(RDXGOA_PAGE, cdn_base=RDXGOA_CDN_BASE, headers=headers, fetch=self.fetch,
                             name="rdxgoa-page"),
            BrowserCaptureDriver(RDXGOA_PAGE, name="rdxgoa-browser"),
        ]


CHANNELS = [RdxGoa]
