from pathlib import Path

import click
from loguru import logger

from gridbrowser.config import (
    ALLOWED_THEMES,
    CONFIG_FILE_PATH,
    BrowserConfig,
    load_config,
    merge_config_with_cli_args,
    save_config,
)
from gridbrowser.gateways.listings import ListingGateway
from gridbrowser.services.catalog import ListingCatalog
from gridbrowser.ui.app import GridBrowserApp


@click.group(invoke_without_command=True)
@click.pass_context
@click.option(
    "--data",
    "data_file",
    type=click.Path(exists=True, dir_okay=False, readable=True, path_type=str),
    help="JSON file with the listings to browse (default: built-in sample data)",
    default=None,
)
@click.option(
    "--debounce-ms",
    type=click.IntRange(min=0),
    help="Quiet period before a search is applied, in milliseconds",
    default=None,
)
@click.option(
    "--page-size",
    "items_per_page",
    type=click.IntRange(min=1),
    help="Initial number of rows per page",
    default=None,
)
@click.option(
    "--theme",
    type=click.Choice(ALLOWED_THEMES, case_sensitive=False),
    help="Theme to use for the UI",
    default=None,
)
@click.option(
    "--config",
    type=click.Path(exists=True, readable=True, path_type=str),
    help="Path to configuration file (default: ~/.gridbrowser.config)",
    default=None,
)
@click.option("--log-file", type=click.Path(path_type=str), help="Write debug logs to this file", default=None)
def cli(
    ctx,
    data_file: str | None = None,
    debounce_ms: int | None = None,
    items_per_page: int | None = None,
    theme: str | None = None,
    config: str | None = None,
    log_file: str | None = None,
):
    """Listings Browser - search and page through marketplace listings."""
    if ctx.invoked_subcommand is None:
        main(data_file, debounce_ms, items_per_page, theme, config, log_file)


@cli.command()
@click.option(
    "--config",
    type=click.Path(path_type=str),
    help="Path to configuration file (default: ~/.gridbrowser.config)",
    default=None,
)
def configure(config: str | None = None):
    """Interactive configuration setup for gridbrowser"""
    config_path = Path(config) if config else CONFIG_FILE_PATH

    click.echo("Listings Browser Configuration Setup")
    click.echo("=" * 36)
    click.echo("Leave fields empty to keep the current value.")
    click.echo()

    try:
        existing = load_config(str(config_path)) if config_path.exists() else BrowserConfig()
        if config_path.exists():
            click.echo(f"Found existing configuration at {config_path}")
            click.echo()
    except ValueError as e:
        click.echo(f"✗ Ignoring unreadable configuration: {e}")
        existing = BrowserConfig()

    data_file = click.prompt(
        "Listings JSON file", default=existing.data_file or "", show_default=bool(existing.data_file), type=str
    ).strip()
    debounce_ms = click.prompt("Search debounce (ms)", default=existing.debounce_ms, type=click.IntRange(min=0))
    items_per_page = click.prompt(
        "Rows per page",
        default=str(existing.items_per_page),
        type=click.Choice([str(size) for size in existing.items_per_page_options]),
    )

    click.echo()
    click.echo("Available themes:")
    for i, theme in enumerate(ALLOWED_THEMES, 1):
        marker = " (current)" if theme == existing.theme else ""
        click.echo(f"  {i}. {theme}{marker}")
    theme_choice = click.prompt(
        f"Select theme (1-{len(ALLOWED_THEMES)})",
        default=ALLOWED_THEMES.index(existing.theme) + 1,
        type=click.IntRange(1, len(ALLOWED_THEMES)),
    )

    click.echo()
    try:
        new_config = BrowserConfig(
            data_file=data_file or None,
            theme=ALLOWED_THEMES[theme_choice - 1],
            debounce_ms=debounce_ms,
            items_per_page=int(items_per_page),
            items_per_page_options=existing.items_per_page_options,
        )
        click.echo("✓ Configuration validated successfully!")
    except ValueError as e:
        raise click.ClickException(f"Configuration validation failed: {e}")

    try:
        saved_path = save_config(new_config, str(config_path))
        click.echo(f"✓ Configuration saved to {saved_path}")
    except OSError as e:
        raise click.ClickException(f"Failed to save configuration: {e}")


def main(
    data_file: str | None = None,
    debounce_ms: int | None = None,
    items_per_page: int | None = None,
    theme: str | None = None,
    config: str | None = None,
    log_file: str | None = None,
):
    """Listings Browser - search and page through marketplace listings."""
    # Log output would corrupt the terminal UI
    logger.remove()
    if log_file:
        logger.add(log_file, level="DEBUG")

    try:
        config_obj = load_config(config)

        # Merge with CLI arguments (CLI takes priority)
        config_obj = merge_config_with_cli_args(
            config_obj,
            data_file=data_file,
            debounce_ms=debounce_ms,
            items_per_page=items_per_page,
            theme=theme.lower() if theme else None,
        )
        if config_obj.data_file:
            gateway = ListingGateway.from_file(config_obj.data_file)
            source = config_obj.data_file
        else:
            gateway = ListingGateway()
            source = "sample data"
    except ValueError as e:
        raise click.ClickException(str(e))

    app = GridBrowserApp(
        ListingCatalog(gateway),
        source=source,
        debounce_ms=config_obj.debounce_ms,
        items_per_page=config_obj.items_per_page,
        items_per_page_options=config_obj.items_per_page_options,
        theme=config_obj.theme,
    )
    app.run()


if __name__ == "__main__":
    cli()
