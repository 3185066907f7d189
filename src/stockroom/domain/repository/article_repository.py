"""Abstract repository for the Article aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, SQLite, in-memory)
live in the infrastructure layer and in the test fakes.

Every article handed out is an independent copy: changes to it reach
storage only through ``update``. Implementations must enforce the unique
normalized material type (raise DuplicateArticleError) and the optimistic
``version`` token (raise ConcurrencyConflictError). Any other storage fault
may surface as PersistenceError or any other exception.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from stockroom.domain.model.article import Article

ArticlePredicate = Callable[[Article], bool]


class ArticleRepository(ABC):

    @abstractmethod
    def list_all(self) -> list[Article]:
        """Return every article, in no particular order."""

    @abstractmethod
    def get_by_id(self, article_id: str) -> Article | None:
        """Return an article by its ID, or None if not found."""

    @abstractmethod
    def find_where(self, predicate: ArticlePredicate) -> list[Article]:
        """Return every article the predicate accepts."""

    @abstractmethod
    def add(self, article: Article) -> Article | None:
        """Store a new article. Returns the stored copy, or None if not stored."""

    @abstractmethod
    def update(self, article: Article) -> Article | None:
        """Replace the stored record with the same ID.

        Returns the stored copy (with its version bumped), or None if
        nothing was written.
        """

    @abstractmethod
    def delete_by_id(self, article_id: str) -> bool:
        """Hard-delete an article. Returns True if a record was removed."""
