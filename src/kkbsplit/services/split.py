from __future__ import annotations

from typing import Iterable, Sequence

from kkbsplit.models import (
    BillState,
    BillTotals,
    Item,
    PersonTotal,
    ServiceChargeConfig,
    ServiceChargeKind,
    SharedItem,
    SharedShare,
)
from kkbsplit.utils.parse import parse_amount_or_zero


def unique_people(items: Iterable[Item]) -> list[str]:
    people: dict[str, None] = {}
    for item in items:
        people.setdefault(item.person, None)
    return list(people)


def split_shared_item(item: SharedItem) -> dict[str, float]:
    if not item.shared_by:
        raise ValueError("shared item must be shared by at least one person")

    share = item.price / len(item.shared_by)
    return {person: share for person in item.shared_by}


def service_charge_amount(config: ServiceChargeConfig, bill_subtotal: float) -> float:
    value = parse_amount_or_zero(config.value)
    if config.kind == ServiceChargeKind.PERCENT:
        return bill_subtotal * (value / 100)
    return value


def _person_total(
    person: str,
    items: Sequence[Item],
    shared_items: Sequence[SharedItem],
    bill_subtotal: float,
    total_service_charge: float,
) -> PersonTotal:
    person_items = tuple(item for item in items if item.person == person)
    subtotal = sum(item.price for item in person_items)

    shared: list[SharedShare] = []
    for item in shared_items:
        if person in item.shared_by:
            shared.append(SharedShare(name=item.name, price=item.price, share=split_shared_item(item)[person]))
    shared_subtotal = sum(entry.share for entry in shared)

    before_service = subtotal + shared_subtotal
    # Service charge follows each person's share of the whole bill, shared items included.
    service_charge = (before_service / bill_subtotal) * total_service_charge if bill_subtotal > 0 else 0.0

    return PersonTotal(
        items=person_items,
        shared_items=tuple(shared),
        subtotal=subtotal,
        shared_subtotal=shared_subtotal,
        service_charge=service_charge,
        total=before_service + service_charge,
    )


def compute(state: BillState) -> BillTotals:
    item_subtotal = sum(item.price for item in state.items)
    shared_subtotal = sum(item.price for item in state.shared_items)
    bill_subtotal = item_subtotal + shared_subtotal

    total_service_charge = service_charge_amount(state.service_charge, bill_subtotal)

    person_totals = {
        person: _person_total(person, state.items, state.shared_items, bill_subtotal, total_service_charge)
        for person in unique_people(state.items)
    }

    grand_total = bill_subtotal + total_service_charge
    allocated = sum(total.total for total in person_totals.values())

    return BillTotals(
        person_totals=person_totals,
        subtotal=bill_subtotal,
        service_charge=total_service_charge,
        grand_total=grand_total,
        unallocated=grand_total - allocated,
    )
