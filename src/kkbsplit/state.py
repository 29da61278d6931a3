"""Editing session for a single bill."""

from __future__ import annotations

from itertools import count
from typing import Optional, Sequence

from kkbsplit.config import get_settings
from kkbsplit.logging import get_logger
from kkbsplit.models import BillState, BillTotals, Item, ServiceChargeConfig, ServiceChargeKind, SharedItem
from kkbsplit.services.split import compute, unique_people
from kkbsplit.utils.parse import parse_amount


class BillSession:
    """
    Owns one bill while it is being edited.

    Invalid additions (empty name or owner, unreadable price, nobody to split
    with) leave the bill untouched and return None.
    """

    def __init__(self, state: Optional[BillState] = None) -> None:
        self._log = get_logger(__name__)
        self._items: list[Item] = []
        self._shared_items: list[SharedItem] = []
        self._service_charge = ServiceChargeConfig()
        self._currency = get_settings().currency
        self._selected: list[str] = []
        self._ids = count(1)
        self._last_id = 0
        if state is not None:
            self.load(state)

    def _next_id(self) -> int:
        self._last_id = next(self._ids)
        return self._last_id

    def load(self, state: BillState) -> None:
        self._items = list(state.items)
        self._shared_items = list(state.shared_items)
        self._service_charge = state.service_charge
        self._currency = state.currency
        self._selected = []
        # Ids never go backwards, even when the loaded bill is older than this session.
        loaded_id = max((entry.id for entry in (*state.items, *state.shared_items)), default=0)
        self._last_id = max(self._last_id, loaded_id)
        self._ids = count(self._last_id + 1)

    def snapshot(self) -> BillState:
        return BillState(
            items=tuple(self._items),
            shared_items=tuple(self._shared_items),
            service_charge=self._service_charge,
            currency=self._currency,
        )

    def totals(self) -> BillTotals:
        return compute(self.snapshot())

    def participants(self) -> list[str]:
        return unique_people(self._items)

    def add_item(self, name: str, price: object, person: str) -> Optional[Item]:
        name = (name or "").strip()
        person = (person or "").strip()
        amount = parse_amount(price)
        if not name or not person or amount is None:
            self._log.debug("session.item.rejected", name=name, person=person)
            return None

        item = Item(id=self._next_id(), name=name, price=amount, person=person)
        self._items.append(item)
        self._log.debug("session.item.added", item_id=item.id, person=person)
        return item

    def remove_item(self, item_id: int) -> None:
        self._items = [item for item in self._items if item.id != item_id]

    def add_shared_item(
        self, name: str, price: object, shared_by: Optional[Sequence[str]] = None
    ) -> Optional[SharedItem]:
        name = (name or "").strip()
        amount = parse_amount(price)
        people = list(dict.fromkeys(self._selected if shared_by is None else shared_by))
        if not name or amount is None or not people:
            self._log.debug("session.shared_item.rejected", name=name, people=len(people))
            return None

        item = SharedItem(id=self._next_id(), name=name, price=amount, shared_by=tuple(people))
        self._shared_items.append(item)
        self._selected = []
        self._log.debug("session.shared_item.added", item_id=item.id, people=len(people))
        return item

    def remove_shared_item(self, item_id: int) -> None:
        self._shared_items = [item for item in self._shared_items if item.id != item_id]

    def get_selection(self) -> list[str]:
        return list(self._selected)

    def toggle_person(self, person: str) -> None:
        if person in self._selected:
            self._selected.remove(person)
        else:
            self._selected.append(person)

    def toggle_select_all(self) -> None:
        people = self.participants()
        if len(self._selected) == len(people):
            self._selected = []
        else:
            self._selected = people

    def clear_selection(self) -> None:
        self._selected = []

    def set_service_charge(self, value: str, kind: Optional[ServiceChargeKind] = None) -> None:
        self._service_charge = ServiceChargeConfig(
            value=value,
            kind=self._service_charge.kind if kind is None else ServiceChargeKind(kind),
        )

    def set_currency(self, currency: str) -> None:
        self._currency = currency

    def get_currency(self) -> str:
        return self._currency
