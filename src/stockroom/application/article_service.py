"""Application service: Article use cases.

Orchestrates normalization, validation, duplicate and capacity checks,
persistence and status recomputation for every article operation.

Each public method returns an OperationResult and never raises. Inside,
rules are enforced by raising DomainException subclasses the way the rest
of the domain does; ``_run`` turns them into Failures at the boundary:

- ValidationError          -> VALIDATION
- ConcurrencyConflictError -> CONFLICT (retryable)
- ConflictError            -> CONFLICT
- EntityNotFoundError      -> NOT_FOUND
- PersistenceError         -> PERSISTENCE
- anything else            -> INTERNAL, with a generic message
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, TypeVar

from stockroom.application.dto import CreateArticleDTO, OrderOutcome, UpdateArticleDTO
from stockroom.application.result import ErrorKind, Failure, OperationResult, Success
from stockroom.domain.exceptions import (
    ConcurrencyConflictError,
    ConflictError,
    DomainException,
    DuplicateArticleError,
    EntityNotFoundError,
    PersistenceError,
    ValidationError,
)
from stockroom.domain.model.article import Article, ensure_within_capacity, utcnow
from stockroom.domain.model.material_type import (
    MAX_MATERIAL_TYPE_LENGTH,
    normalize_material_type,
)
from stockroom.domain.repository.article_repository import ArticleRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ArticleService:

    def __init__(
        self,
        article_repo: ArticleRepository,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._article_repo = article_repo
        self._clock = clock

    # --- Commands -------------------------------------------------------------

    def create_article(self, dto: CreateArticleDTO | None) -> OperationResult[Article]:
        return self._run("creating an article", lambda: self._create(dto))

    def update_article(
        self, article_id: str, dto: UpdateArticleDTO | None
    ) -> OperationResult[Article]:
        return self._run(
            f"updating article {article_id}", lambda: self._update(article_id, dto)
        )

    def delete_article(self, article_id: str) -> OperationResult[str]:
        return self._run(
            f"deleting article {article_id}", lambda: self._delete(article_id)
        )

    def order_article(self, article_id: str, amount: int) -> OperationResult[OrderOutcome]:
        """Place a restock order that adds *amount* to the article."""
        return self._run(
            f"ordering article {article_id}", lambda: self._order(article_id, amount)
        )

    # --- Queries --------------------------------------------------------------

    def get_article(self, article_id: str) -> OperationResult[Article]:
        return self._run(
            f"retrieving article {article_id}", lambda: self._get(article_id)
        )

    def list_articles(self) -> OperationResult[list[Article]]:
        """Return every article, most depleted status first.

        An empty store is reported as a NOT_FOUND failure.
        """
        return self._run("listing articles", self._list)

    # --- Use cases ------------------------------------------------------------

    def _create(self, dto: CreateArticleDTO | None) -> Article:
        if dto is None:
            raise ValidationError("Input data is required.")
        self._validate_fields(dto.material_type, dto.amount)
        if dto.full_amount < 0:
            raise ValidationError("FullAmount must be zero or greater.")
        ensure_within_capacity(dto.amount, dto.full_amount)

        material_type = normalize_material_type(dto.material_type)
        self._ensure_unique(material_type)

        article = Article.create(
            material_type=material_type,
            amount=dto.amount,
            full_amount=dto.full_amount,
            unit=dto.unit,
            is_ordered=dto.is_ordered,
            now=self._clock(),
        )
        stored = self._article_repo.add(article)
        if stored is None:
            raise PersistenceError(f"Failed to add the Article: {material_type}.")

        logger.info("Created article %s (%s)", stored.id, stored.material_type)
        return stored

    def _update(self, article_id: str, dto: UpdateArticleDTO | None) -> Article:
        if dto is None:
            raise ValidationError("Input data is required.")
        self._require_id(article_id)
        self._validate_fields(dto.material_type, dto.amount)

        article = self._get_existing(article_id)
        ensure_within_capacity(dto.amount, article.full_amount)

        material_type = normalize_material_type(dto.material_type)
        if material_type != normalize_material_type(article.material_type):
            self._ensure_unique(material_type, exclude_id=article.id)

        article.revise(
            material_type=material_type,
            amount=dto.amount,
            unit=article.unit if dto.unit is None else dto.unit,
            is_ordered=article.is_ordered if dto.is_ordered is None else dto.is_ordered,
            now=self._clock(),
        )
        stored = self._article_repo.update(article)
        if stored is None:
            raise PersistenceError(f"Failed to update the Article with Id: {article.id}.")

        logger.info("Updated article %s (status=%s)", stored.id, stored.status.value)
        return stored

    def _delete(self, article_id: str) -> str:
        self._require_id(article_id)
        article = self._get_existing(article_id)

        if not self._article_repo.delete_by_id(article.id):
            raise PersistenceError(f"Failed to delete Article {article.material_type}.")

        logger.info("Deleted article %s (%s)", article.id, article.material_type)
        return f"Article {article.material_type} was deleted successfully."

    def _order(self, article_id: str, amount: int) -> OrderOutcome:
        self._require_id(article_id)
        if amount <= 0:
            raise ValidationError("Order amount must be greater than zero.")

        article = self._get_existing(article_id)
        ordered_at = self._clock()
        article.restock(amount, now=ordered_at)

        stored = self._article_repo.update(article)
        if stored is None:
            raise PersistenceError(f"Failed to order the Article with Id: {article.id}.")

        logger.info(
            "Ordered %d %s of %s (now %d/%d)",
            amount, stored.unit, stored.material_type, stored.amount, stored.full_amount,
        )
        return OrderOutcome(ordered_at=ordered_at, article=stored)

    def _get(self, article_id: str) -> Article:
        self._require_id(article_id)
        article = self._article_repo.get_by_id(article_id)
        if article is None:
            raise EntityNotFoundError("Article not found.")
        return article

    def _list(self) -> list[Article]:
        articles = self._article_repo.list_all()
        if not articles:
            raise EntityNotFoundError("No articles found.")
        # sorted() is stable, so equal statuses keep repository order.
        return sorted(articles, key=lambda a: a.status.rank, reverse=True)

    # --- Rules ----------------------------------------------------------------

    @staticmethod
    def _require_id(article_id: str | None) -> None:
        if not article_id or not article_id.strip():
            raise ValidationError("Valid Article ID is required.")

    @staticmethod
    def _validate_fields(material_type: str | None, amount: int) -> None:
        normalized = normalize_material_type(material_type)
        if not normalized:
            raise ValidationError("MaterialType is required.")
        if len(normalized) > MAX_MATERIAL_TYPE_LENGTH:
            raise ValidationError(
                f"MaterialType must be at most {MAX_MATERIAL_TYPE_LENGTH} characters."
            )
        if amount < 0:
            raise ValidationError("Amount must be zero or greater.")

    def _ensure_unique(self, material_type: str, exclude_id: str | None = None) -> None:
        matches = self._article_repo.find_where(
            lambda a: normalize_material_type(a.material_type) == material_type
            and a.id != exclude_id
        )
        if matches:
            raise DuplicateArticleError(material_type)

    def _get_existing(self, article_id: str) -> Article:
        article = self._article_repo.get_by_id(article_id)
        if article is None:
            raise EntityNotFoundError(f"Article with Id {article_id} not found.")
        return article

    # --- Boundary -------------------------------------------------------------

    @staticmethod
    def _run(action: str, operation: Callable[[], T]) -> OperationResult[T]:
        try:
            return Success(operation())
        except ValidationError as exc:
            return _rejected(action, exc, ErrorKind.VALIDATION)
        except ConcurrencyConflictError as exc:
            return _rejected(action, exc, ErrorKind.CONFLICT, retryable=True)
        except ConflictError as exc:
            return _rejected(action, exc, ErrorKind.CONFLICT)
        except EntityNotFoundError as exc:
            return _rejected(action, exc, ErrorKind.NOT_FOUND)
        except PersistenceError as exc:
            logger.error("Storage failure while %s: %s", action, exc, exc_info=exc)
            return Failure(str(exc), ErrorKind.PERSISTENCE)
        except Exception:
            logger.exception("Unexpected error while %s", action)
            return Failure(f"An unexpected error occurred while {action}.")


def _rejected(
    action: str, exc: DomainException, kind: ErrorKind, retryable: bool = False
) -> Failure:
    logger.warning("Rejected %s: %s", action, exc)
    return Failure(str(exc), kind, retryable=retryable)
