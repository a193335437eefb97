"""
stores.py

Small json records persisted between runs:
 - history     : {"url": ..., "time": epoch, "date": "YYYY-MM-DD HH:MM:SS"}
 - err counter : {"err_count": ..., "time": epoch}

Reads never fail. A missing, truncated or malformed file reads back as the
record's zero value ("" for the url, 0 for the count).
"""
import json
import logging
import os
import time

logger = logging.getLogger(__name__)


def atomic_write(path, text):
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    tmp = path + ".tmp"
    with open(tmp, "w", encoding="utf-8") as f:
        f.write(text)
    os.replace(tmp, path)


def read_json(path):
    """Return the decoded json object at path, or None if it can't be read."""
    if not os.path.isfile(path):
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
    except (OSError, ValueError) as e:
        logger.debug("[-] cannot read %s: %s", path, e)
        return None
    if not content:
        return None
    try:
        return json.loads(content)
    except (ValueError, RecursionError) as e:
        logger.debug("[-] malformed json in %s: %s", path, e)
        return None


def write_json(path, data):
    atomic_write(path, json.dumps(data, ensure_ascii=False))


class HistoryStore:
    """Last url that validated. An empty url means the history was evicted."""

    def __init__(self, path):
        self.path = path

    def load(self):
        data = read_json(self.path)
        if isinstance(data, dict) and isinstance(data.get("url"), str):
            return data["url"]
        return ""

    def save(self, url):
        now = int(time.time())
        write_json(self.path, {
            "url": url,
            "time": now,
            "date": time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(now)),
        })


class ErrorCounterStore:
    """Consecutive failed checks of the history url."""

    def __init__(self, path):
        self.path = path

    def load(self):
        data = read_json(self.path)
        if not isinstance(data, dict):
            return 0
        count = data.get("err_count")
        # bool is an int subclass; true/false in the file is not a count
        if not isinstance(count, int) or isinstance(count, bool):
            return 0
        return max(count, 0)

    def save(self, count):
        write_json(self.path, {"err_count": count, "time": int(time.time())})
