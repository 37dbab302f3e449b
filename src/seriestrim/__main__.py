"""Entry point for ``python -m seriestrim``."""

from seriestrim.cli import cli

if __name__ == "__main__":
    cli()
