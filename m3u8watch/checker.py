#!/usr/bin/env python3
"""
checker.py

Keeps one playable url per channel. Each run:
 - probes the url that worked last time (history)
 - if it is dead, asks the channel's drivers for a replacement
 - if nothing works, counts the failure; the old url keeps being served
   until more than max_err_count checks in a row have failed, then the
   history is cleared

Every registered channel is checked and the usable ones are written into a
single playlist under OUT_DIR.
"""
import argparse
import logging
import os
import sys
from dataclasses import dataclass

from m3u8watch import config
from m3u8watch.drivers import find_first_live_candidate
from m3u8watch.playlist import build_playlist, m3u_line, write_playlist
from m3u8watch.probe import UrlValidator, fetch_text
from m3u8watch.stores import ErrorCounterStore, HistoryStore

logger = logging.getLogger(__name__)


@dataclass
class CheckResult:
    state: bool = False    # url is usable
    changed: bool = False  # url differs from the persisted one, or history was evicted
    url: str = ""


class Channel:
    """One tv channel and the state kept for it between runs.

    Subclasses set name, history_path and err_counter_path (relative to
    state_dir) and return their drivers in the order they should be tried.
    """

    name = None
    history_path = None
    err_counter_path = None
    max_err_count = config.MAX_ERR_COUNT
    group_title = ""
    tvg_id = ""
    tvg_logo = ""

    def __init__(self, state_dir=None, fetch=fetch_text):
        self.state_dir = config.STATE_DIR if state_dir is None else state_dir
        self.fetch = fetch
        self.history = HistoryStore(os.path.join(self.state_dir, self.history_path))
        self.err_counter = ErrorCounterStore(os.path.join(self.state_dir, self.err_counter_path))

    def drivers(self):
        raise NotImplementedError

    def m3u_content(self, url, group_prefix=""):
        return m3u_line(
            self.name,
            url,
            group_title=group_prefix + self.group_title,
            tvg_name=self.name,
            tvg_id=self.tvg_id,
            tvg_logo=self.tvg_logo,
        )

    def check(self):
        validator = UrlValidator(self.fetch)
        history_url = self.history.load()
        err_count = self.err_counter.load()

        if history_url and validator.probe(history_url):
            logger.info("[+] %s: history url still live", self.name)
            if err_count > 0:
                self._save_err_count(0)
            return CheckResult(True, False, history_url)

        try:
            drivers = self.drivers()
        except Exception:
            logger.exception("[-] %s: could not build drivers", self.name)
            drivers = []
        url = find_first_live_candidate(drivers, validator.probe)
        if url:
            logger.info("[+] %s: switched to %s", self.name, url)
            self._save_history(url)
            if err_count > 0:
                self._save_err_count(0)
            return CheckResult(True, True, url)

        if not history_url:
            logger.info("[-] %s: no history and no live candidate", self.name)
            return CheckResult(False, False, "")

        err_count += 1
        if err_count > self.max_err_count:
            logger.info("[-] %s: %d failed checks, evicting %s", self.name, err_count, history_url)
            result = CheckResult(False, True, history_url)
            self._save_history("")
        else:
            # still serve the old url; one bad probe shouldn't force a switch
            logger.info("[-] %s: check failed (%d/%d), keeping %s",
                        self.name, err_count, self.max_err_count, history_url)
            result = CheckResult(True, False, history_url)
        self._save_err_count(err_count)
        return result

    def _save_history(self, url):
        try:
            self.history.save(url)
        except OSError as e:
            logger.warning("[-] %s: could not save history: %s", self.name, e)

    def _save_err_count(self, count):
        try:
            self.err_counter.save(count)
        except OSError as e:
            logger.warning("[-] %s: could not save error count: %s", self.name, e)


def run(channels, out_path, group_prefix="", dry_run=False):
    """Check every channel; write the usable ones. Returns the usable count."""
    entries = []
    for channel in channels:
        logger.info("[*] checking %s", channel.name)
        result = channel.check()
        logger.info("[*] %s: state=%s changed=%s url=%s",
                    channel.name, result.state, result.changed, result.url)
        if result.state:
            entries.append(channel.m3u_content(result.url, group_prefix))

    if dry_run:
        logger.info("[*] dry run, not writing %s", out_path)
    elif entries:
        write_playlist(out_path, build_playlist(entries))
        logger.info("[+] wrote %d channel(s) to %s", len(entries), out_path)
    else:
        logger.info("[-] no usable channel, %s left untouched", out_path)
    return len(entries)


def main(argv=None):
    from m3u8watch.channels import CHANNELS

    parser = argparse.ArgumentParser(prog="m3u8watch", description="Resolve live urls for tv channels.")
    parser.add_argument("channels", nargs="*", help="channel names to check (default: all)")
    parser.add_argument("--list", action="store_true", help="print registered channel names and exit")
    parser.add_argument("--dry-run", action="store_true", help="check but don't write the playlist")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    if args.list:
        for cls in CHANNELS:
            print(cls.name)
        return 0

    selected = [cls for cls in CHANNELS if not args.channels or cls.name in args.channels]
    unknown = set(args.channels) - {cls.name for cls in CHANNELS}
    if unknown:
        parser.error("unknown channel(s): " + ", ".join(sorted(unknown)))

    out_path = os.path.join(config.OUT_DIR, config.PLAYLIST_NAME)
    usable = run([cls() for cls in selected], out_path, config.GROUP_PREFIX, args.dry_run)
    if usable:
        print("[+] done")
        return 0
    print("[-] finished without a usable channel")
    return 1


if __name__ == "__main__":
    sys.exit(main())
