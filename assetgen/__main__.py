"""Allow ``python -m assetgen``."""

import sys

from .cli import main

main(sys.argv[1:])
