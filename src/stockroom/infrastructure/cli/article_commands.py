"""CLI commands for the Article aggregate."""

from __future__ import annotations

import json

import click
from click.core import ParameterSource

from stockroom.application.dto import CreateArticleDTO, UpdateArticleDTO
from stockroom.application.result import Failure, OperationResult
from stockroom.domain.model.article import Article, Unit
from stockroom.infrastructure.bootstrap import article_service
from stockroom.infrastructure.config import Settings
from stockroom.infrastructure.serialization import (
    article_to_dict,
    order_outcome_to_dict,
)

_UNITS = [unit.value for unit in Unit]


def _unwrap(result: OperationResult):
    """Return the success value or abort with the failure message."""
    if isinstance(result, Failure):
        raise click.ClickException(result.message)
    return result.value


def _echo_json(payload) -> None:
    click.echo(json.dumps(payload, indent=2))


def _display_article(article: Article) -> None:
    """Shared formatting for displaying one article."""
    click.echo(f"Article {article.id}")
    click.echo(f"  Material: {article.material_type}")
    click.echo(f"  Amount:   {article.amount}/{article.full_amount} {article.unit}")
    click.echo(f"  Status:   {article.status.value}")
    click.echo(f"  Ordered:  {'yes' if article.is_ordered else 'no'}")
    click.echo(f"  Updated:  {article.updated_at.strftime('%Y-%m-%d %H:%M UTC')}")


@click.command("create")
@click.option("--material-type", required=True, help="Material name, e.g. 'Mask'.")
@click.option("--amount", required=True, type=int, help="Quantity in stock.")
@click.option("--full-amount", required=True, type=int, help="Capacity.")
@click.option("--unit", type=click.Choice(_UNITS), default=Unit.PIECE.value, show_default=True)
@click.option("--ordered", is_flag=True, default=False, help="Mark as already ordered.")
@click.pass_obj
def article_create(
    settings: Settings,
    material_type: str,
    amount: int,
    full_amount: int,
    unit: str,
    ordered: bool,
) -> None:
    """Add a new article."""
    dto = CreateArticleDTO(
        material_type=material_type,
        amount=amount,
        full_amount=full_amount,
        unit=Unit(unit),
        is_ordered=ordered,
    )
    article = _unwrap(article_service(settings).create_article(dto))

    click.echo(f"Article '{article.material_type}' created  (status={article.status.value})")
    click.echo(f"ID: {article.id}")


@click.command("update")
@click.option("--id", "article_id", required=True, help="Article ID.")
@click.option("--material-type", required=True, help="Material name.")
@click.option("--amount", required=True, type=int, help="New quantity in stock.")
@click.option("--unit", type=click.Choice(_UNITS), default=None, help="New unit; kept if omitted.")
@click.option(
    "--ordered/--not-ordered", default=None, help="Whether a restock is on its way; kept if omitted."
)
@click.pass_obj
def article_update(
    settings: Settings,
    article_id: str,
    material_type: str,
    amount: int,
    unit: str | None,
    ordered: bool | None,
) -> None:
    """Update an article (capacity is fixed)."""
    if click.get_current_context().get_parameter_source("ordered") is ParameterSource.DEFAULT:
        ordered = None
    dto = UpdateArticleDTO(
        material_type=material_type,
        amount=amount,
        unit=Unit(unit) if unit else None,
        is_ordered=ordered,
    )
    article = _unwrap(article_service(settings).update_article(article_id, dto))

    click.echo(f"Article '{article.material_type}' updated  (status={article.status.value})")


@click.command("delete")
@click.option("--id", "article_id", required=True, help="Article ID.")
@click.pass_obj
def article_delete(settings: Settings, article_id: str) -> None:
    """Delete an article."""
    message = _unwrap(article_service(settings).delete_article(article_id))
    click.echo(message)


@click.command("show")
@click.option("--id", "article_id", required=True, help="Article ID to display.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print as JSON.")
@click.pass_obj
def article_show(settings: Settings, article_id: str, as_json: bool) -> None:
    """Show one article."""
    article = _unwrap(article_service(settings).get_article(article_id))

    if as_json:
        _echo_json(article_to_dict(article))
        return
    _display_article(article)


@click.command("list")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print as JSON.")
@click.pass_obj
def article_list(settings: Settings, as_json: bool) -> None:
    """List all articles, most depleted first."""
    articles = _unwrap(article_service(settings).list_articles())

    if as_json:
        _echo_json([article_to_dict(a) for a in articles])
        return

    click.echo(
        f"{'ID':<32} {'Material':<20} {'Amount':>8} {'Capacity':>8} {'Unit':<6} "
        f"{'Status':<8} {'Ordered':<7}"
    )
    click.echo("-" * 95)
    for a in articles:
        click.echo(
            f"{a.id:<32} {a.material_type:<20} {a.amount:>8} {a.full_amount:>8} "
            f"{a.unit.value:<6} {a.status.value:<8} {'yes' if a.is_ordered else 'no':<7}"
        )


@click.command("order")
@click.option("--id", "article_id", required=True, help="Article ID to restock.")
@click.option("--amount", required=True, type=int, help="Quantity to order.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print as JSON.")
@click.pass_obj
def article_order(settings: Settings, article_id: str, amount: int, as_json: bool) -> None:
    """Place a restock order (adds to the amount in stock)."""
    outcome = _unwrap(article_service(settings).order_article(article_id, amount))

    if as_json:
        _echo_json(order_outcome_to_dict(outcome))
        return

    article = outcome.article
    click.echo(
        f"Ordered {amount} {article.unit} of '{article.material_type}' "
        f"at {outcome.ordered_at.strftime('%Y-%m-%d %H:%M UTC')}"
    )
    click.echo(f"Now {article.amount}/{article.full_amount}  (status={article.status.value})")
