"""Entry point for doc-pilot.

Delegates to the Click command group; logging and settings are set
up by the group itself.
"""

from doc_pilot.cli.commands import cli


def main() -> None:
    """Launch the CLI."""
    cli(prog_name="doc-pilot")


if __name__ == "__main__":
    main()
