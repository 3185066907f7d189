"""In-memory fake repository for testing.

Implements the same abstract interface as the JSON and SQLite
repositories but keeps everything in a dict. No file I/O, no side effects.
It hands out copies and enforces the same constraints (unique material
type, version token) so the service sees realistic behaviour.
"""

from __future__ import annotations

from dataclasses import replace

from stockroom.domain.exceptions import ConcurrencyConflictError, DuplicateArticleError
from stockroom.domain.model.article import Article
from stockroom.domain.model.material_type import normalize_material_type
from stockroom.domain.repository.article_repository import (
    ArticlePredicate,
    ArticleRepository,
)


class FakeArticleRepository(ArticleRepository):

    def __init__(self, articles: list[Article] | None = None) -> None:
        self._store: dict[str, Article] = {}
        for a in articles or []:
            self._store[a.id] = replace(a)

        # Switches for simulating a misbehaving store
        self.reject_writes = False  # add/update return None, delete returns False
        self.error: Exception | None = None  # raised by every call

        self.add_calls = 0
        self.update_calls = 0

    def list_all(self) -> list[Article]:
        self._maybe_raise()
        return [replace(a) for a in self._store.values()]

    def get_by_id(self, article_id: str) -> Article | None:
        self._maybe_raise()
        article = self._store.get(article_id)
        return replace(article) if article else None

    def find_where(self, predicate: ArticlePredicate) -> list[Article]:
        return [a for a in self.list_all() if predicate(a)]

    def add(self, article: Article) -> Article | None:
        self.add_calls += 1
        self._maybe_raise()
        if self.reject_writes:
            return None
        self._check_unique(article)
        self._store[article.id] = replace(article)
        return replace(article)

    def update(self, article: Article) -> Article | None:
        self.update_calls += 1
        self._maybe_raise()
        current = self._store.get(article.id)
        if self.reject_writes or current is None:
            return None
        if current.version != article.version:
            raise ConcurrencyConflictError(article.id)
        self._check_unique(article)
        stored = replace(article, version=article.version + 1)
        self._store[article.id] = stored
        return replace(stored)

    def delete_by_id(self, article_id: str) -> bool:
        self._maybe_raise()
        if self.reject_writes or article_id not in self._store:
            return False
        del self._store[article_id]
        return True

    # --- Test helpers ---------------------------------------------------------

    def stored(self, article_id: str) -> Article:
        """Peek at the stored record without going through the interface."""
        return self._store[article_id]

    def bump_version(self, article_id: str) -> None:
        """Simulate a write from another request."""
        article = self._store[article_id]
        article.version += 1

    def _maybe_raise(self) -> None:
        if self.error is not None:
            raise self.error

    def _check_unique(self, article: Article) -> None:
        key = normalize_material_type(article.material_type)
        for other in self._store.values():
            if other.id != article.id and normalize_material_type(other.material_type) == key:
                raise DuplicateArticleError(article.material_type)
