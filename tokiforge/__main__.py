"""Entry point for `python -m tokiforge`."""

import sys


def main():
    from tokiforge.app import run_app
    sys.exit(run_app())


if __name__ == "__main__":
    main()
