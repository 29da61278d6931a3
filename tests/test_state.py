import pytest

from kkbsplit.config import get_settings
from kkbsplit.models import BillState, Item, ServiceChargeConfig, ServiceChargeKind, SharedItem
from kkbsplit.state import BillSession


@pytest.fixture(autouse=True)
def _settings(monkeypatch):
    monkeypatch.setenv("KKB_CURRENCY", "$")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_add_item_trims_and_parses():
    session = BillSession()

    item = session.add_item("  Adobo ", "120.50", " Juan ")

    assert item is not None
    assert (item.name, item.price, item.person) == ("Adobo", 120.5, "Juan")
    assert session.snapshot().items == (item,)


@pytest.mark.parametrize(
    ("name", "price", "person"),
    [
        ("", "10", "Juan"),
        ("   ", "10", "Juan"),
        ("Adobo", "", "Juan"),
        ("Adobo", "abc", "Juan"),
        ("Adobo", "10", ""),
        ("Adobo", "10", "  "),
    ],
)
def test_add_item_rejects_invalid_input(name, price, person):
    session = BillSession()

    assert session.add_item(name, price, person) is None
    assert session.snapshot() == BillState()


def test_ids_are_unique():
    session = BillSession()

    first = session.add_item("A", "1", "x")
    second = session.add_item("B", "1", "x")
    shared = session.add_shared_item("C", "2", ["x"])
    session.remove_item(second.id)
    third = session.add_item("D", "1", "x")

    ids = [first.id, second.id, shared.id, third.id]
    assert len(set(ids)) == len(ids)


def test_remove_items():
    session = BillSession()
    keep = session.add_item("Beer", "5", "A")
    drop = session.add_item("Wine", "9", "A")
    shared = session.add_shared_item("Nachos", "12", ["A"])

    session.remove_item(drop.id)
    session.remove_shared_item(shared.id)
    session.remove_item(9999)

    state = session.snapshot()
    assert state.items == (keep,)
    assert state.shared_items == ()


def test_add_shared_item_uses_selection_and_clears_it():
    session = BillSession()
    session.add_item("Beer", "5", "A")
    session.add_item("Soda", "3", "B")
    session.toggle_person("B")
    session.toggle_person("A")

    shared = session.add_shared_item("Pizza", "90", None)

    assert shared.shared_by == ("B", "A")
    assert session.get_selection() == []


def test_add_shared_item_without_people_is_ignored():
    session = BillSession()
    session.add_item("Beer", "5", "A")

    assert session.add_shared_item("Pizza", "90") is None
    assert session.add_shared_item("Pizza", "90", []) is None
    assert session.add_shared_item("", "90", ["A"]) is None
    assert session.add_shared_item("Pizza", "x", ["A"]) is None
    assert session.snapshot().shared_items == ()


def test_add_shared_item_collapses_duplicates():
    session = BillSession()

    shared = session.add_shared_item("Pizza", "90", ["A", "B", "A"])

    assert shared.shared_by == ("A", "B")


def test_toggle_person():
    session = BillSession()
    session.toggle_person("A")
    session.toggle_person("B")
    session.toggle_person("A")

    assert session.get_selection() == ["B"]


def test_toggle_select_all():
    session = BillSession()
    session.add_item("Beer", "5", "A")
    session.add_item("Soda", "3", "B")
    session.add_item("Wine", "3", "A")

    session.toggle_select_all()
    assert session.get_selection() == ["A", "B"]

    session.toggle_select_all()
    assert session.get_selection() == []


def test_service_charge_and_currency():
    session = BillSession()
    session.add_item("Beer", "100", "A")
    session.set_service_charge("10", ServiceChargeKind.PERCENT)
    session.set_currency("₱")

    state = session.snapshot()
    assert state.service_charge == ServiceChargeConfig("10", ServiceChargeKind.PERCENT)
    assert state.currency == "₱"
    assert session.totals().grand_total == pytest.approx(110)

    session.set_service_charge("5")
    assert session.snapshot().service_charge.kind == ServiceChargeKind.PERCENT


def test_load_continues_ids_past_loaded_state():
    state = BillState(
        items=(Item(41, "Beer", 5.0, "A"),),
        shared_items=(SharedItem(57, "Pizza", 9.0, ("A",)),),
        currency="€",
    )
    session = BillSession(state)

    item = session.add_item("Soda", "2", "A")

    assert item.id > 57
    assert session.get_currency() == "€"
    assert session.snapshot().items[0] == state.items[0]


def test_snapshot_is_recomputed_after_each_change():
    session = BillSession()
    session.add_item("Beer", "5", "A")
    assert session.totals().grand_total == pytest.approx(5)

    session.add_item("Soda", "3", "B")
    assert session.totals().grand_total == pytest.approx(8)


def test_load_never_reuses_issued_ids():
    session = BillSession()
    issued = [session.add_item(f"Item {n}", "1", "A").id for n in range(5)]

    session.load(BillState(items=(Item(1, "Beer", 5.0, "A"),)))
    item = session.add_item("Soda", "2", "A")
    shared = session.add_shared_item("Pizza", "9", ["A"])

    assert item.id not in issued
    assert shared.id not in issued
    assert item.id > max(issued)


def test_currency_defaults_to_settings(monkeypatch):
    monkeypatch.setenv("KKB_CURRENCY", "₱")
    get_settings.cache_clear()

    assert BillSession().get_currency() == "₱"
    assert BillSession().snapshot().currency == "₱"
