"""Entry point for `python -m xdgicons`."""

import sys


def main():
    from xdgicons.app import run_cli
    sys.exit(run_cli())


if __name__ == "__main__":
    main()
