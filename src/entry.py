"""
Entry point for zipapp packaging of iso-chooser-menu.
"""

import os
import sys

# When running as zipapp or when imported as src.entry, ensure the parent
# directory is in sys.path so the iso_chooser package can be found
if __name__ == "__main__" or __name__ == "src.entry":
    if not any(os.path.dirname(__file__) in p for p in sys.path):
        sys.path.insert(0, os.path.dirname(__file__))

from iso_chooser.cli import main as cli_main  # noqa: E402


def main() -> int:
    """Entry point for zipapp."""
    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
