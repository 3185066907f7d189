"""Integration tests for the order-article (restock) use case."""

from datetime import datetime, timezone

import pytest

from stockroom.application.article_service import ArticleService
from stockroom.application.dto import OrderOutcome
from stockroom.application.result import ErrorKind, Failure, Success
from stockroom.domain.model.article import Article, Unit
from stockroom.domain.model.status import ArticleStatus
from tests.fakes import FakeArticleRepository

CREATED = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
NOW = datetime(2026, 3, 7, 16, 45, tzinfo=timezone.utc)


def _setup(amount=9, full_amount=10, unit=Unit.PIECE):
    article = Article.create("Mask", amount, full_amount, unit=unit, now=CREATED)
    repo = FakeArticleRepository([article])
    return ArticleService(repo, clock=lambda: NOW), repo, article


class TestOrderArticleHappyPath:

    def test_order_fills_to_capacity(self):
        service, repo, article = _setup(amount=9)

        result = service.order_article(article.id, 1)

        assert isinstance(result, Success)
        outcome = result.value
        assert isinstance(outcome, OrderOutcome)
        assert outcome.ordered_at == NOW
        assert outcome.article.amount == 10
        assert outcome.article.status == ArticleStatus.FULL
        assert outcome.article.is_ordered is True
        assert outcome.article.updated_at == NOW
        assert repo.stored(article.id).amount == 10

    def test_order_is_additive(self):
        service, _, article = _setup(amount=2, full_amount=20)

        service.order_article(article.id, 5)
        outcome = service.order_article(article.id, 7).unwrap()

        assert outcome.article.amount == 14
        assert outcome.article.status == ArticleStatus.GOOD

    @pytest.mark.parametrize("amount", [0, 3, 6, 9])
    def test_order_exactly_space_left_is_full(self, amount):
        service, _, article = _setup(amount=amount)
        outcome = service.order_article(article.id, 10 - amount).unwrap()
        assert outcome.article.status == ArticleStatus.FULL


class TestOrderArticleRejections:

    @pytest.mark.parametrize("amount", [0, 3, 6, 9])
    def test_order_one_more_than_space_left_rejected(self, amount):
        service, repo, article = _setup(amount=amount)
        before_amount = repo.stored(article.id).amount

        result = service.order_article(article.id, 10 - amount + 1)

        assert isinstance(result, Failure)
        assert result.kind == ErrorKind.CONFLICT
        assert repo.update_calls == 0
        after = repo.stored(article.id)
        assert after.amount == before_amount
        assert after.is_ordered is False
        assert after.updated_at == CREATED

    def test_rejection_names_the_room_left(self):
        service, _, article = _setup(amount=6, unit=Unit.BOX)

        result = service.order_article(article.id, 5)

        assert result.message == (
            "Cannot order 5 box. Only 4 box can be ordered to reach full capacity."
        )

    def test_unknown_article_rejected(self):
        service, _, _ = _setup()
        result = service.order_article("missing", 1)
        assert result.kind == ErrorKind.NOT_FOUND
        assert result.message == "Article with Id missing not found."

    @pytest.mark.parametrize("amount", [0, -1])
    def test_non_positive_amount_rejected(self, amount):
        service, repo, article = _setup(amount=2)

        result = service.order_article(article.id, amount)

        assert result.kind == ErrorKind.VALIDATION
        assert result.message == "Order amount must be greater than zero."
        assert repo.stored(article.id).amount == 2
