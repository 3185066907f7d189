"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException.
They are raised inside the domain and storage layers and converted to an
OperationResult at the ArticleService boundary, so callers only ever see
results.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Input is missing or out of range."""


class ConflictError(DomainException):
    """The request contradicts the current state (duplicate, over capacity)."""


class DuplicateArticleError(ConflictError):
    """Another article already uses the same normalized material type."""

    def __init__(self, material_type: str) -> None:
        super().__init__(f"Article with MaterialType {material_type} already exists.")
        self.material_type = material_type


class ConcurrencyConflictError(ConflictError):
    """The stored article changed since it was read."""

    def __init__(self, article_id: str) -> None:
        super().__init__(
            f"Article {article_id} was modified by another request. Reload and retry."
        )
        self.article_id = article_id


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class PersistenceError(DomainException):
    """The storage adapter failed for a storage-specific reason.

    The message is shown to callers, so it never carries storage internals;
    adapters chain the underlying error as the cause instead.
    """
