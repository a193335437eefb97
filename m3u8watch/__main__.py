import sys

from m3u8watch.checker import main

sys.exit(main())
