"""Article aggregate — one stocked material and its capacity.

An Article knows how much of a material is on hand, how much fits, and
which stock-health band that puts it in. Every mutation goes through a
method here so the derived status can never drift from the quantities.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from stockroom.domain.exceptions import ConflictError
from stockroom.domain.model.status import ArticleStatus, classify_status


class Unit(Enum):
    PIECE = "piece"
    BOX = "box"
    PACK = "pack"
    PAIR = "pair"
    KG = "kg"
    G = "g"
    LITER = "liter"
    METER = "meter"
    ROLL = "roll"

    def __str__(self) -> str:
        return self.value


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ensure_within_capacity(amount: int, full_amount: int) -> None:
    """Raise ConflictError if *amount* does not fit in *full_amount*."""
    if amount > full_amount:
        raise ConflictError("Amount cannot exceed FullAmount.")


@dataclass
class Article:
    """Aggregate root for a stocked material.

    Invariants:
    - ``0 <= amount <= full_amount``
    - ``status == classify_status(amount, full_amount)``

    Use ``Article.create()`` for new articles. The ``__init__`` stays plain
    so repositories can reconstitute stored records as they are.
    """

    id: str
    material_type: str
    amount: int
    full_amount: int
    unit: Unit = Unit.PIECE
    is_ordered: bool = False
    status: ArticleStatus = ArticleStatus.EMPTY
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
    version: int = 0  # optimistic concurrency token, bumped by storage

    # --- Factory --------------------------------------------------------------

    @classmethod
    def create(
        cls,
        material_type: str,
        amount: int,
        full_amount: int,
        unit: Unit = Unit.PIECE,
        is_ordered: bool = False,
        now: datetime | None = None,
    ) -> Article:
        """Build a new article with a fresh id and a computed status.

        *material_type* is expected to be normalized already.
        """
        ensure_within_capacity(amount, full_amount)
        now = now or utcnow()
        return cls(
            id=uuid.uuid4().hex,
            material_type=material_type,
            amount=amount,
            full_amount=full_amount,
            unit=unit,
            is_ordered=is_ordered,
            status=classify_status(amount, full_amount),
            created_at=now,
            updated_at=now,
        )

    # --- Queries --------------------------------------------------------------

    @property
    def space_left(self) -> int:
        return self.full_amount - self.amount

    # --- Mutations ------------------------------------------------------------

    def refresh_status(self) -> None:
        self.status = classify_status(self.amount, self.full_amount)

    def revise(
        self,
        material_type: str,
        amount: int,
        unit: Unit,
        is_ordered: bool,
        now: datetime | None = None,
    ) -> None:
        """Replace the caller-editable fields.

        Capacity is not editable here; the new amount is checked against
        the stored ``full_amount``.
        """
        ensure_within_capacity(amount, self.full_amount)
        self.material_type = material_type
        self.amount = amount
        self.unit = unit
        self.is_ordered = is_ordered
        self.refresh_status()
        self.updated_at = now or utcnow()

    def restock(self, quantity: int, now: datetime | None = None) -> None:
        """Add an ordered *quantity* on top of the current amount."""
        space_left = self.space_left
        if quantity > space_left:
            raise ConflictError(
                f"Cannot order {quantity} {self.unit}. Only {space_left} "
                f"{self.unit} can be ordered to reach full capacity."
            )
        self.amount += quantity
        self.is_ordered = True
        self.refresh_status()
        self.updated_at = now or utcnow()
