"""Entry point for python -m kvstart."""

import sys


def main():
    from kvstart.cli import main as cli_main

    sys.exit(cli_main())


if __name__ == "__main__":
    main()
