from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ServiceChargeKind(str, Enum):
    FIXED = "fixed"
    PERCENT = "percent"


@dataclass(frozen=True, slots=True)
class Item:
    id: int
    name: str
    price: float
    person: str


@dataclass(frozen=True, slots=True)
class SharedItem:
    id: int
    name: str
    price: float
    shared_by: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.shared_by:
            raise ValueError("shared item must be shared by at least one person")
        if len(set(self.shared_by)) != len(self.shared_by):
            raise ValueError("shared item lists the same person more than once")


@dataclass(frozen=True, slots=True)
class ServiceChargeConfig:
    # Raw user input; anything that does not parse counts as zero.
    value: str = ""
    kind: ServiceChargeKind = ServiceChargeKind.FIXED


@dataclass(frozen=True, slots=True)
class BillState:
    items: tuple[Item, ...] = ()
    shared_items: tuple[SharedItem, ...] = ()
    service_charge: ServiceChargeConfig = field(default_factory=ServiceChargeConfig)
    currency: str = "$"


@dataclass(frozen=True, slots=True)
class SharedShare:
    name: str
    price: float
    share: float


@dataclass(frozen=True, slots=True)
class PersonTotal:
    items: tuple[Item, ...]
    shared_items: tuple[SharedShare, ...]
    subtotal: float
    shared_subtotal: float
    service_charge: float
    total: float


@dataclass(frozen=True, slots=True)
class BillTotals:
    person_totals: dict[str, PersonTotal]
    subtotal: float
    service_charge: float
    grand_total: float
    # Part of grand_total that no participant row carries.
    unallocated: float = 0.0
