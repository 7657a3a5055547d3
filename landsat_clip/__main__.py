import sys

from landsat_clip.cli import main

sys.exit(main())
