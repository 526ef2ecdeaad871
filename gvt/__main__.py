"""Entry point for running gvt via: python3 -m gvt <command>"""

from __future__ import annotations

import sys

from .app.cli import main


if __name__ == "__main__":
    sys.exit(main())
