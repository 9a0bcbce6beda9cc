"""
Core application logic for iso-chooser-menu.
"""

from .cli import main as cli_main


def main() -> int:
    """
    Core main function that delegates to the CLI module.
    """
    return cli_main()

