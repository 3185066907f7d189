"""Article <-> plain dict conversion.

Shared by the JSON repository and the CLI's ``--json`` output. Enums are
written as their wire values and timestamps as ISO-8601 in UTC.
"""

from __future__ import annotations

from datetime import datetime, timezone

from stockroom.application.dto import OrderOutcome
from stockroom.domain.model.article import Article, Unit
from stockroom.domain.model.status import ArticleStatus


def to_iso(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat()


def from_iso(raw: str) -> datetime:
    moment = datetime.fromisoformat(raw)
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def article_to_dict(article: Article) -> dict:
    return {
        "id": article.id,
        "material_type": article.material_type,
        "amount": article.amount,
        "full_amount": article.full_amount,
        "unit": article.unit.value,
        "is_ordered": article.is_ordered,
        "status": article.status.value,
        "created_at": to_iso(article.created_at),
        "updated_at": to_iso(article.updated_at),
        "version": article.version,
    }


def article_from_dict(raw: dict) -> Article:
    return Article(
        id=raw["id"],
        material_type=raw["material_type"],
        amount=raw["amount"],
        full_amount=raw["full_amount"],
        unit=Unit(raw.get("unit", Unit.PIECE.value)),
        is_ordered=bool(raw.get("is_ordered", False)),
        status=ArticleStatus(raw["status"]),
        created_at=from_iso(raw["created_at"]),
        updated_at=from_iso(raw["updated_at"]),
        version=raw.get("version", 0),
    )


def order_outcome_to_dict(outcome: OrderOutcome) -> dict:
    return {
        "ordered_at": to_iso(outcome.ordered_at),
        "article": article_to_dict(outcome.article),
    }
