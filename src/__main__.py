"""
Entry point for zipapp packaging of iso-chooser-menu.

This file becomes the __main__.py of the zipapp; the actual entry logic is
in entry.py.
"""

import sys

from entry import main

if __name__ == "__main__":
    sys.exit(main())
