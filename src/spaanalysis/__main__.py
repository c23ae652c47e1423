"""Command-line interface.

Usage:
    $ python -m spaanalysis [dataset_path]
"""
from spaanalysis.main import cli


if __name__ == "__main__":
    cli()
