"""Data Transfer Objects — plain containers that cross layer boundaries.

Input DTOs carry exactly what a caller may set. They are not validated on
construction; ArticleService reports the first rule they break.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from stockroom.domain.model.article import Article, Unit


@dataclass(frozen=True)
class CreateArticleDTO:
    """Input: a new article."""

    material_type: str
    amount: int
    full_amount: int
    unit: Unit = Unit.PIECE
    is_ordered: bool = False


@dataclass(frozen=True)
class UpdateArticleDTO:
    """Input: new values for an existing article.

    There is no ``full_amount``: capacity is fixed at creation. ``unit`` and
    ``is_ordered`` left as None keep the stored values.
    """

    material_type: str
    amount: int
    unit: Unit | None = None
    is_ordered: bool | None = None


@dataclass(frozen=True)
class OrderOutcome:
    """Output: a placed restock order and the article after it."""

    ordered_at: datetime
    article: Article
