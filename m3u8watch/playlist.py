"""
playlist.py

m3u output: one #EXTINF record per channel, collected under an #EXTM3U header.
"""
from m3u8watch.stores import atomic_write

HEADER = "#EXTM3U\n"

LINE = '#EXTINF:-1 tvg-id="%s" tvg-name="%s" tvg-logo="%s" group-title="%s", %s\n%s\n'


def m3u_line(name, url, group_title="", tvg_name="", tvg_id="", tvg_logo=""):
    return LINE % (tvg_id, tvg_name, tvg_logo, group_title, name, url)


def build_playlist(entries):
    return HEADER + "".join(entries)


def write_playlist(path, text):
    atomic_write(path, text)
