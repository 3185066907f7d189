"""JSON-file-backed implementation of ArticleRepository.

The whole store is one JSON list. Every write takes an OS-level lock on a
sibling ``.lock`` file, re-reads the store, checks the unique material type
and the version token against what is on disk, then replaces the file. The
lock is a file lock, so separate processes (and separate repository
instances) on the same store serialize their writes.
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from filelock import FileLock, Timeout

from stockroom.domain.exceptions import (
    ConcurrencyConflictError,
    DuplicateArticleError,
    PersistenceError,
)
from stockroom.domain.model.article import Article
from stockroom.domain.model.material_type import normalize_material_type
from stockroom.domain.repository.article_repository import (
    ArticlePredicate,
    ArticleRepository,
)
from stockroom.infrastructure.serialization import article_from_dict, article_to_dict

logger = logging.getLogger(__name__)

LOCK_TIMEOUT = 10.0


class JsonArticleRepository(ArticleRepository):

    def __init__(self, file_path: Path | str, lock_timeout: float = LOCK_TIMEOUT) -> None:
        self._file_path = Path(file_path)
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = FileLock(self.lock_path, timeout=lock_timeout)
        with self._locked():
            self._ensure_file()

    @property
    def lock_path(self) -> str:
        return str(self._file_path) + ".lock"

    # --- ArticleRepository interface ------------------------------------------

    def list_all(self) -> list[Article]:
        return [article_from_dict(raw) for raw in self._load_raw()]

    def get_by_id(self, article_id: str) -> Article | None:
        for raw in self._load_raw():
            if raw["id"] == article_id:
                return article_from_dict(raw)
        return None

    def find_where(self, predicate: ArticlePredicate) -> list[Article]:
        return [article for article in self.list_all() if predicate(article)]

    def add(self, article: Article) -> Article | None:
        with self._locked():
            records = self._load_raw()
            if self._index_of(records, article.id) is not None:
                logger.error("Refusing to add article %s: id already stored", article.id)
                return None
            self._check_unique(records, article)

            raw = article_to_dict(article)
            records.append(raw)
            self._persist_raw(records)
        return article_from_dict(raw)

    def update(self, article: Article) -> Article | None:
        with self._locked():
            records = self._load_raw()
            index = self._index_of(records, article.id)
            if index is None:
                return None
            if records[index].get("version", 0) != article.version:
                raise ConcurrencyConflictError(article.id)
            self._check_unique(records, article)

            raw = article_to_dict(article)
            raw["version"] = article.version + 1
            records[index] = raw
            self._persist_raw(records)
        return article_from_dict(raw)

    def delete_by_id(self, article_id: str) -> bool:
        with self._locked():
            records = self._load_raw()
            index = self._index_of(records, article_id)
            if index is None:
                return False
            del records[index]
            self._persist_raw(records)
        return True

    # --- Constraints ----------------------------------------------------------

    @staticmethod
    def _index_of(records: list[dict], article_id: str) -> int | None:
        for i, raw in enumerate(records):
            if raw["id"] == article_id:
                return i
        return None

    @staticmethod
    def _check_unique(records: list[dict], article: Article) -> None:
        key = normalize_material_type(article.material_type)
        for raw in records:
            if raw["id"] != article.id and normalize_material_type(raw["material_type"]) == key:
                raise DuplicateArticleError(article.material_type)

    # --- File helpers ---------------------------------------------------------

    @contextmanager
    def _locked(self) -> Iterator[None]:
        """Hold the store's file lock for one read-check-write cycle."""
        try:
            self._lock.acquire()
        except Timeout as exc:
            logger.error("Timed out waiting for %s", self.lock_path)
            raise PersistenceError("Article storage is busy. Try again later.") from exc
        try:
            yield
        finally:
            self._lock.release()

    def _load_raw(self) -> list[dict]:
        try:
            return json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise PersistenceError("Article storage could not be read.") from exc

    def _persist_raw(self, records: list[dict]) -> None:
        tmp_path = self._file_path.with_name(self._file_path.name + ".tmp")
        try:
            tmp_path.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
            tmp_path.replace(self._file_path)
        except OSError as exc:
            raise PersistenceError("Article storage could not be written.") from exc

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.write_text("[]", encoding="utf-8")
