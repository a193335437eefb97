import os
import tempfile
import unittest

from m3u8watch.playlist import build_playlist, m3u_line, write_playlist


class PlaylistTests(unittest.TestCase):
    def test_line_defaults(self):
        self.assertEqual(
            m3u_line("CCTV-1", "http://u/1.m3u8"),
            '#EXTINF:-1 tvg-id="" tvg-name="" tvg-logo="" group-title="", CCTV-1\nhttp://u/1.m3u8\n',
        )

    def test_line_attributes(self):
        line = m3u_line("News", "http://u", group_title="G", tvg_name="N", tvg_id="id1", tvg_logo="http://l.png")
        self.assertEqual(
            line.splitlines()[0],
            '#EXTINF:-1 tvg-id="id1" tvg-name="N" tvg-logo="http://l.png" group-title="G", News',
        )

    def test_build_and_write(self):
        text = build_playlist([m3u_line("a", "http://a"), m3u_line("b", "http://b")])
        self.assertEqual(text.count("#EXTINF"), 2)
        with tempfile.TemporaryDirectory() as d:
            path = os.path.join(d, "streams", "tv.m3u")
            write_playlist(path, text)
            with open(path, encoding="utf-8") as f:
                self.assertEqual(f.read(), text)
            self.assertFalse(os.path.exists(path + ".tmp"))


if __name__ == "__main__":
    unittest.main()
