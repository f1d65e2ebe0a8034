"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Self
from uuid import UUID, uuid4


@dataclass(frozen=True)
class EventId:
    """Unique identifier for an Event."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(str(value)))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class WaiverTemplateId:
    """Unique identifier for a WaiverTemplate."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(str(value)))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class RegistrationId:
    """Opaque identity of a registrant record, independent of its list position."""

    value: UUID

    @classmethod
    def new(cls) -> Self:
        return cls(value=uuid4())

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(str(value)))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class RegistrantRef:
    """Points at an adult (user only) or a child (parent user plus child id)."""

    user_id: str
    child_id: str | None = None

    @classmethod
    def adult(cls, user_id: str) -> Self:
        return cls(user_id=str(user_id))

    @classmethod
    def child(cls, parent_id: str, child_id: str) -> Self:
        return cls(user_id=str(parent_id), child_id=str(child_id))

    @property
    def is_child(self) -> bool:
        return self.child_id is not None

    def __str__(self) -> str:
        if self.child_id is None:
            return self.user_id
        return f"{self.user_id}/{self.child_id}"


@dataclass(frozen=True)
class Money:
    """Price representation with validation."""

    amount: Decimal

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    @property
    def is_free(self) -> bool:
        return self.amount == 0

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


@dataclass(frozen=True)
class Capacity:
    """Non-negative seat count. Zero means unlimited."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Capacity cannot be negative")

    @property
    def is_unlimited(self) -> bool:
        return self.value == 0

    def has_room_for_one_more(self, occupancy: int) -> bool:
        return self.is_unlimited or occupancy < self.value
