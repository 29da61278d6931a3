from __future__ import annotations

from typing import Optional

from kkbsplit.models import BillState, BillTotals, PersonTotal
from kkbsplit.services.split import compute


def format_money(amount: float, currency: str) -> str:
    return f"{currency}{amount:.2f}"


def format_person(person: str, total: PersonTotal, currency: str) -> str:
    lines = [person]
    if total.items:
        lines.append("Individual items:")
        for item in total.items:
            lines.append(f"  {item.name}: {format_money(item.price, currency)}")
    if total.shared_items:
        lines.append("Shared items:")
        for entry in total.shared_items:
            lines.append(f"  {entry.name} (split): {format_money(entry.share, currency)}")
    lines.append(f"Individual subtotal: {format_money(total.subtotal, currency)}")
    if total.shared_subtotal > 0:
        lines.append(f"Shared subtotal: {format_money(total.shared_subtotal, currency)}")
    lines.append(f"Service charge (proportional): {format_money(total.service_charge, currency)}")
    lines.append(f"Total: {format_money(total.total, currency)}")
    return "\n".join(lines)


def format_summary(state: BillState, totals: Optional[BillTotals] = None) -> str:
    totals = totals or compute(state)
    currency = state.currency

    blocks = [format_person(person, total, currency) for person, total in totals.person_totals.items()]
    footer = [
        f"Total bill (subtotal): {format_money(totals.subtotal, currency)}",
        f"Total service charge: {format_money(totals.service_charge, currency)}",
        f"Grand total: {format_money(totals.grand_total, currency)}",
    ]
    # Below a cent the difference is float noise.
    if abs(totals.unallocated) > 0.005:
        footer.append(f"Not allocated: {format_money(totals.unallocated, currency)}")
    blocks.append("\n".join(footer))
    return "\n\n".join(blocks)
