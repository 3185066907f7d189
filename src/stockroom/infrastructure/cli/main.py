from pathlib import Path

import click

from stockroom.infrastructure.cli.article_commands import (
    article_create,
    article_delete,
    article_list,
    article_order,
    article_show,
    article_update,
)
from stockroom.infrastructure.config import (
    BACKENDS,
    DEFAULT_DATA_DIR,
    ENV_BACKEND,
    ENV_DATA_DIR,
    ENV_LOG_LEVEL,
    Settings,
)
from stockroom.infrastructure.logging_config import configure_logging


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=DEFAULT_DATA_DIR,
    envvar=ENV_DATA_DIR,
    show_default=True,
    help="Directory holding the article store.",
)
@click.option(
    "--backend",
    type=click.Choice(BACKENDS),
    default="json",
    envvar=ENV_BACKEND,
    show_default=True,
    help="Storage backend.",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    envvar=ENV_LOG_LEVEL,
    show_default=True,
    help="Log verbosity (logs go to stderr).",
)
@click.pass_context
def cli(ctx: click.Context, data_dir: Path, backend: str, log_level: str) -> None:
    """Stockroom: stocked materials and restock orders"""
    configure_logging(log_level)
    ctx.obj = Settings(data_dir=data_dir, backend=backend, log_level=log_level.upper())


@cli.group()
def article() -> None:
    """Manage articles."""


# Register subcommands
article.add_command(article_create)
article.add_command(article_delete)
article.add_command(article_list)
article.add_command(article_order)
article.add_command(article_show)
article.add_command(article_update)
