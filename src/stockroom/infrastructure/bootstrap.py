"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import logging

from stockroom.application.article_service import ArticleService
from stockroom.domain.repository.article_repository import ArticleRepository
from stockroom.infrastructure.config import Settings
from stockroom.infrastructure.persistence.json_article_repository import (
    JsonArticleRepository,
)
from stockroom.infrastructure.persistence.sqlite_article_repository import (
    SqliteArticleRepository,
)

logger = logging.getLogger(__name__)


def article_repository(settings: Settings | None = None) -> ArticleRepository:
    settings = settings or Settings.from_env()
    logger.debug("Using %s article store in %s", settings.backend, settings.data_dir)
    if settings.backend == "sqlite":
        return SqliteArticleRepository(settings.data_dir / "articles.db")
    return JsonArticleRepository(settings.data_dir / "articles.json")


def article_service(settings: Settings | None = None) -> ArticleService:
    return ArticleService(article_repository(settings))
