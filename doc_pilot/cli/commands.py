"""CLI commands for doc-pilot.

Provides the Click-based command group with the 'find' subcommand,
which asks Gemini to explain a library function, and the 'config'
subcommand, which manages the stored API key.
"""

import dataclasses
import logging
from typing import Optional

import click

from doc_pilot import __version__
from doc_pilot.generators.doc_lookup import DocLookup, DocQuery
from doc_pilot.generators.llm_client import LLMClient, LLMError, is_invalid_api_key_error
from doc_pilot.parsers.manifest import find_declared_version
from doc_pilot.utils.config import load_config
from doc_pilot.utils.config_store import ConfigStore
from doc_pilot.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def prompt_line(message: str) -> str:
    """Read one line from the terminal and strip surrounding whitespace.

    An empty answer is returned as "" instead of prompting again.
    """
    return click.prompt(message, default="", show_default=False).strip()


@click.group()
@click.version_option(version=__version__, prog_name="doc-pilot")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """AI-powered documentation fetcher for the terminal."""
    ctx.ensure_object(dict)
    config = ctx.obj.setdefault("settings", load_config())
    setup_logging(
        level="DEBUG" if verbose else config.logging.level,
        log_format=config.logging.format,
        log_file=config.logging.file,
    )
    ctx.obj.setdefault("store", ConfigStore())
    ctx.obj.setdefault("read_line", prompt_line)


@cli.command()
@click.argument("library")
@click.argument("func")
@click.option(
    "--lib-version",
    default=None,
    help="Library version to ask about. Overrides the version found in local manifests.",
)
@click.option("--model", default=None, help="Gemini model to use.")
@click.pass_context
def find(
    ctx: click.Context,
    library: str,
    func: str,
    lib_version: Optional[str],
    model: Optional[str],
) -> None:
    """Fetch documentation for a library function or method."""
    config = ctx.obj["settings"]
    store: ConfigStore = ctx.obj["store"]
    read_line = ctx.obj["read_line"]

    click.secho(f"🚀 Fetching docs for {library} > {func}...", fg="blue")

    version = lib_version or find_declared_version(library, config=config.manifest)
    if version:
        logger.debug("Using version %s for %s", version, library)

    api_key = store.get_api_key()
    if not api_key:
        click.secho("\nNo Gemini API key found.", fg="yellow")
        click.echo(
            f"Please enter your Gemini API key (get one from {config.api.api_key_url}):"
        )
        api_key = read_line("API Key")
        if not api_key:
            click.secho("\n✗ No API key provided. Exiting.\n", fg="red", err=True)
            ctx.exit(1)
        store.set_api_key(api_key)
        click.secho("\n✓ API key saved successfully!\n", fg="green")

    api_config = config.api
    if model:
        api_config = dataclasses.replace(api_config, model=model)

    lookup = DocLookup(LLMClient(api_key, config=api_config))
    query = DocQuery(library=library, function=func, version=version)

    click.secho("\n📚 Fetching documentation using Gemini AI...\n", fg="blue")
    try:
        result = lookup.lookup(query)
    except LLMError as e:
        if is_invalid_api_key_error(e):
            click.secho(
                "\n✗ Invalid API key. Please check your Gemini API key.",
                fg="red",
                err=True,
            )
            click.secho("Run the command again to re-enter your API key.\n", fg="yellow")
            store.clear_api_key()
        else:
            click.secho(f"\n✗ Error fetching from Gemini: {e}", fg="red", err=True)
        return

    click.echo(result.content)
    click.secho("\n✓ Documentation fetched successfully!\n", fg="green")


@cli.command("config")
@click.option("--set-api-key", is_flag=True, help="Set the Gemini API key.")
@click.option("--show-config", is_flag=True, help="Show the current configuration.")
@click.option("--reset", is_flag=True, help="Reset all configuration.")
@click.pass_context
def config_cmd(
    ctx: click.Context, set_api_key: bool, show_config: bool, reset: bool
) -> None:
    """Configure doc-pilot settings."""
    store: ConfigStore = ctx.obj["store"]

    if set_api_key:
        api_key = ctx.obj["read_line"]("Enter your Gemini API key")
        if api_key:
            store.set_api_key(api_key)
            click.secho("\n✓ API key saved successfully!\n", fg="green")
        else:
            click.secho("\n✗ No API key provided.\n", fg="red", err=True)
    elif show_config:
        click.secho("\nCurrent configuration:", fg="blue")
        click.echo(f"Config file: {store.path}")
        click.echo(f"Model: {ctx.obj['settings'].api.model}")
        if store.get_api_key():
            click.secho("✓ Gemini API Key: configured", fg="green")
        else:
            click.secho("✗ Gemini API Key: not configured", fg="yellow")
        click.echo()
    elif reset:
        if store.reset():
            click.secho("\n✓ Configuration reset successfully!\n", fg="green")
        else:
            click.secho("\nNo configuration found.\n", fg="yellow")
    else:
        click.secho(
            "\nPlease specify an option. Use --help for more information.\n",
            fg="yellow",
        )
