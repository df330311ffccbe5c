"""Module entry point: ``python -m safari_scanner``."""

from __future__ import annotations

from safari_scanner.app.cli import cli

__all__ = ["main"]


def main() -> None:
    """Run the command-line interface."""
    cli(prog_name="safari-scanner")


if __name__ == "__main__":
    main()
