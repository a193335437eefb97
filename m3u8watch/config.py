"""
config.py

Settings read from the environment. Every value has a default so the
checker runs with no environment at all.

Environment vars:
 - STATE_DIR (optional)     : where history / error counter json files live (default: state)
 - OUT_DIR (optional)       : output directory for playlists (default: streams)
 - PLAYLIST_NAME (optional) : combined playlist file name (default: tv.m3u)
 - GROUP_PREFIX (optional)  : prefix for every group-title (default: empty)
 - MAX_ERR_COUNT (optional) : failed checks tolerated before eviction (default: 3)
 - MODE (optional)          : simple | playwright (default: simple)
 - USER_AGENT / REFERER / ORIGIN / HTTP_TIMEOUT optional
 - LOG_LEVEL (optional)     : default INFO
"""
import os

STATE_DIR = os.getenv("STATE_DIR", "state")
OUT_DIR = os.getenv("OUT_DIR", "streams")
PLAYLIST_NAME = os.getenv("PLAYLIST_NAME", "tv.m3u")
GROUP_PREFIX = os.getenv("GROUP_PREFIX", "")
MAX_ERR_COUNT = int(os.getenv("MAX_ERR_COUNT", "3"))
MODE = os.getenv("MODE", "simple").lower()
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

USER_AGENT = os.getenv("USER_AGENT", "Mozilla/5.0 (Windows NT 10.0; Win64; x64) Gecko/20100101 Firefox/114.0")
HEADERS = {"User-Agent": USER_AGENT}
if os.getenv("REFERER"):
    HEADERS["Referer"] = os.getenv("REFERER")
if os.getenv("ORIGIN"):
    HEADERS["Origin"] = os.getenv("ORIGIN")
TIMEOUT = int(os.getenv("HTTP_TIMEOUT", "10"))
