"""SQLite implementation of ArticleRepository.

The table carries the invariants itself so they hold across processes:
a UNIQUE index on the normalized material type, CHECK constraints on the
quantities, and a ``version`` column that every UPDATE must match.
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, NoReturn

from stockroom.domain.exceptions import (
    ConcurrencyConflictError,
    DuplicateArticleError,
    PersistenceError,
)
from stockroom.domain.model.article import Article, Unit
from stockroom.domain.model.material_type import normalize_material_type
from stockroom.domain.model.status import ArticleStatus
from stockroom.domain.repository.article_repository import (
    ArticlePredicate,
    ArticleRepository,
)
from stockroom.infrastructure.serialization import from_iso, to_iso

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS articles (
    id            TEXT PRIMARY KEY,
    material_type TEXT NOT NULL,
    material_key  TEXT NOT NULL UNIQUE,
    amount        INTEGER NOT NULL CHECK (amount >= 0),
    full_amount   INTEGER NOT NULL CHECK (full_amount >= 0),
    unit          TEXT NOT NULL,
    is_ordered    INTEGER NOT NULL DEFAULT 0,
    status        TEXT NOT NULL,
    created_at    TEXT NOT NULL,
    updated_at    TEXT NOT NULL,
    version       INTEGER NOT NULL DEFAULT 0,
    CHECK (amount <= full_amount)
)
"""

_COLUMNS = (
    "id, material_type, material_key, amount, full_amount, unit, "
    "is_ordered, status, created_at, updated_at, version"
)


class SqliteArticleRepository(ArticleRepository):

    def __init__(self, db_path: Path | str) -> None:
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        with self._connect() as conn:
            conn.executescript(_SCHEMA)
        logger.debug("SQLite article store ready at %s", self.db_path)

    # --- ArticleRepository interface ------------------------------------------

    def list_all(self) -> list[Article]:
        with self._connect() as conn:
            rows = conn.execute(f"SELECT {_COLUMNS} FROM articles ORDER BY rowid").fetchall()
        return [self._to_domain(row) for row in rows]

    def get_by_id(self, article_id: str) -> Article | None:
        with self._connect() as conn:
            row = conn.execute(
                f"SELECT {_COLUMNS} FROM articles WHERE id = ?", (article_id,)
            ).fetchone()
        return self._to_domain(row) if row else None

    def find_where(self, predicate: ArticlePredicate) -> list[Article]:
        return [article for article in self.list_all() if predicate(article)]

    def add(self, article: Article) -> Article | None:
        try:
            with self._connect() as conn:
                conn.execute(
                    f"INSERT INTO articles ({_COLUMNS}) "
                    "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                    self._to_row(article),
                )
        except sqlite3.IntegrityError as exc:
            self._raise_integrity(exc, article)
        return self.get_by_id(article.id)

    def update(self, article: Article) -> Article | None:
        try:
            with self._connect() as conn:
                cursor = conn.execute(
                    "UPDATE articles SET material_type = ?, material_key = ?, "
                    "amount = ?, full_amount = ?, unit = ?, is_ordered = ?, "
                    "status = ?, updated_at = ?, version = version + 1 "
                    "WHERE id = ? AND version = ?",
                    (
                        article.material_type,
                        normalize_material_type(article.material_type),
                        article.amount,
                        article.full_amount,
                        article.unit.value,
                        int(article.is_ordered),
                        article.status.value,
                        to_iso(article.updated_at),
                        article.id,
                        article.version,
                    ),
                )
                if cursor.rowcount == 0:
                    exists = conn.execute(
                        "SELECT 1 FROM articles WHERE id = ?", (article.id,)
                    ).fetchone()
                    if exists:
                        raise ConcurrencyConflictError(article.id)
                    return None
        except sqlite3.IntegrityError as exc:
            self._raise_integrity(exc, article)
        return self.get_by_id(article.id)

    def delete_by_id(self, article_id: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM articles WHERE id = ?", (article_id,))
            return cursor.rowcount > 0

    # --- Connection -----------------------------------------------------------

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        """Open a connection for one unit of work; commit on success."""
        try:
            conn = sqlite3.connect(str(self.db_path))
        except sqlite3.Error as exc:
            raise PersistenceError("Article storage is unavailable.") from exc
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except sqlite3.IntegrityError:
            conn.rollback()
            raise
        except sqlite3.Error as exc:
            conn.rollback()
            raise PersistenceError("Article storage operation failed.") from exc
        except BaseException:
            conn.rollback()
            raise
        finally:
            conn.close()

    @staticmethod
    def _raise_integrity(exc: sqlite3.IntegrityError, article: Article) -> NoReturn:
        if "material_key" in str(exc):
            raise DuplicateArticleError(article.material_type) from exc
        raise PersistenceError("Article violates a storage constraint.") from exc

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_row(article: Article) -> tuple:
        return (
            article.id,
            article.material_type,
            normalize_material_type(article.material_type),
            article.amount,
            article.full_amount,
            article.unit.value,
            int(article.is_ordered),
            article.status.value,
            to_iso(article.created_at),
            to_iso(article.updated_at),
            article.version,
        )

    @staticmethod
    def _to_domain(row: sqlite3.Row) -> Article:
        return Article(
            id=row["id"],
            material_type=row["material_type"],
            amount=row["amount"],
            full_amount=row["full_amount"],
            unit=Unit(row["unit"]),
            is_ordered=bool(row["is_ordered"]),
            status=ArticleStatus(row["status"]),
            created_at=from_iso(row["created_at"]),
            updated_at=from_iso(row["updated_at"]),
            version=row["version"],
        )
