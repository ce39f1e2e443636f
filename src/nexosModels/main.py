"""
nexosModels main entry point.

This module serves as the primary entry point for the
opencode-nexos-models-config command.
"""

import sys
from typing import NoReturn

from nexosModels.main_cli import cli_main


def main() -> NoReturn:
    """
    Main entry point for nexosModels.

    Exits the program with the status code returned by the CLI.
    """
    sys.exit(cli_main())


if __name__ == "__main__":
    main()
