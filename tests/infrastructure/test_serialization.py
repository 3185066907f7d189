"""Unit tests for Article <-> dict conversion."""

from datetime import datetime, timedelta, timezone

from stockroom.application.dto import OrderOutcome
from stockroom.domain.model.article import Article, Unit
from stockroom.infrastructure.serialization import (
    article_from_dict,
    article_to_dict,
    from_iso,
    order_outcome_to_dict,
    to_iso,
)

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


class TestTimestamps:

    def test_to_iso_is_utc(self):
        cet = timezone(timedelta(hours=1))
        assert to_iso(datetime(2026, 3, 1, 13, 0, tzinfo=cet)) == "2026-03-01T12:00:00+00:00"

    def test_naive_values_are_treated_as_utc(self):
        assert from_iso("2026-03-01T12:00:00") == NOW
        assert to_iso(datetime(2026, 3, 1, 12, 0)) == "2026-03-01T12:00:00+00:00"


class TestArticleDict:

    def test_article_to_dict(self):
        article = Article.create("Gloves", 3, 10, unit=Unit.PAIR, now=NOW)

        raw = article_to_dict(article)

        assert raw == {
            "id": article.id,
            "material_type": "Gloves",
            "amount": 3,
            "full_amount": 10,
            "unit": "pair",
            "is_ordered": False,
            "status": "Critical",
            "created_at": "2026-03-01T12:00:00+00:00",
            "updated_at": "2026-03-01T12:00:00+00:00",
            "version": 0,
        }

    def test_missing_optional_fields_get_defaults(self):
        raw = article_to_dict(Article.create("Gloves", 3, 10, now=NOW))
        del raw["unit"], raw["is_ordered"], raw["version"]

        article = article_from_dict(raw)

        assert article.unit == Unit.PIECE
        assert article.is_ordered is False
        assert article.version == 0

    def test_order_outcome_to_dict(self):
        article = Article.create("Gloves", 10, 10, now=NOW)
        raw = order_outcome_to_dict(OrderOutcome(ordered_at=NOW, article=article))
        assert raw["ordered_at"] == "2026-03-01T12:00:00+00:00"
        assert raw["article"]["status"] == "Full"
