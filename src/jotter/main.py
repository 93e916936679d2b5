"""Unified entry point for jotter."""

from jotter.interfaces.cli.app import run_cli


def main():
    """Main entry point."""
    run_cli()


if __name__ == "__main__":
    main()
