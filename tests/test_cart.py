import logging
from decimal import Decimal

import pytest

from spice_shop.db.storage import MemoryStorage, StorageError
from spice_shop.schemas.cart import CartLine
from spice_shop.schemas.product import CatalogItem
from spice_shop.services.cart import CartStore, CartDecodeError, decode_cart, encode_cart


class FailingStorage(MemoryStorage):
    def write(self, key, value):
        raise StorageError("disk full")


def test_initialize_without_persisted_cart_is_empty(store):
    assert store.lines == ()
    assert store.totals().item_count == 0
    assert store.totals().amount == Decimal("0")


def test_add_same_product_repeatedly_keeps_one_line(store, chilli):
    for _ in range(4):
        store.add_item(chilli)

    assert len(store.lines) == 1
    assert store.lines[0].quantity == 4


def test_add_new_product_appends_line(store, chilli, haldi):
    store.add_item(haldi)
    store.add_item(chilli)

    assert [line.id for line in store.lines] == [2, 1]
    assert store.lines[1] == CartLine(id=1, name="Lal Mirch Powder", price="₹150", weight="500g", quantity=1)


def test_line_keeps_price_from_first_add(store, chilli):
    store.add_item(chilli)
    repriced = CatalogItem(id=1, name="Lal Mirch Powder XL", price="₹999", weight="1kg")
    store.add_item(repriced)

    line = store.lines[0]
    assert line.quantity == 2
    assert line.price == "₹150"
    assert line.name == "Lal Mirch Powder"
    assert line.weight == "500g"


def test_decrement_never_goes_below_one(store, chilli):
    store.add_item(chilli)
    store.change_quantity(chilli.id, -1)

    assert len(store.lines) == 1
    assert store.lines[0].quantity == 1


def test_change_quantity_accepts_any_delta(store, chilli):
    store.add_item(chilli)
    store.change_quantity(chilli.id, 10)
    assert store.lines[0].quantity == 11

    store.change_quantity(chilli.id, -3)
    assert store.lines[0].quantity == 8

    store.change_quantity(chilli.id, -100)
    assert store.lines[0].quantity == 1


def test_remove_leaves_other_lines_untouched(store, chilli, haldi, lemon):
    store.add_item(chilli)
    store.add_item(haldi)
    store.add_item(haldi)
    store.add_item(lemon)
    before = {line.id: line for line in store.lines}

    store.remove_item(haldi.id)

    assert [line.id for line in store.lines] == [chilli.id, lemon.id]
    assert store.lines[0] == before[chilli.id]
    assert store.lines[1] == before[lemon.id]


def test_order_preserved_after_remove_and_readd(store, chilli, haldi, lemon):
    store.add_item(chilli)
    store.add_item(haldi)
    store.add_item(lemon)
    store.remove_item(haldi.id)
    store.add_item(chilli)

    assert [line.id for line in store.lines] == [chilli.id, lemon.id]
    assert store.lines[0].quantity == 2


def test_unknown_id_leaves_persisted_cart_unchanged(store, storage, chilli, haldi):
    store.add_item(chilli)
    store.add_item(haldi)
    before = storage.read(store.key)

    store.change_quantity(999, 1)
    assert storage.read(store.key) == before

    store.remove_item(999)
    assert storage.read(store.key) == before


def test_totals(store, chilli, lemon):
    store.add_item(chilli)
    store.add_item(chilli)
    store.add_item(lemon)

    totals = store.totals()

    assert totals.item_count == 3
    assert totals.amount == Decimal("520")


def test_totals_count_unparsable_price_as_zero(storage, caplog):
    storage.write("ddk_cart", encode_cart([
        CartLine(id=1, name="Lal Mirch Powder", price="₹150", weight="500g", quantity=2),
        CartLine(id=9, name="Mystery Masala", price="ask us", weight="100g", quantity=3),
    ]))
    store = CartStore(storage)
    store.initialize()

    with caplog.at_level(logging.WARNING, logger="spice_shop.services.pricing"):
        totals = store.totals()

    assert totals.item_count == 5
    assert totals.amount == Decimal("300")
    assert "Unparsable price 'ask us'" in caplog.text


def test_every_mutation_persists_full_cart(store, storage, chilli, haldi):
    store.add_item(chilli)
    store.add_item(haldi)
    store.change_quantity(haldi.id, 2)

    persisted = decode_cart(storage.read("ddk_cart"))

    assert persisted == list(store.lines)
    assert persisted[1].quantity == 3


def test_reload_restores_cart(storage, chilli, haldi):
    first = CartStore(storage)
    first.initialize()
    first.add_item(chilli)
    first.add_item(haldi)
    first.add_item(haldi)
    first.close()

    second = CartStore(storage)
    second.initialize()

    assert second.lines == first.lines
    assert second.just_added_id is None


@pytest.mark.parametrize("raw", [
    b"not json at all",
    b"{\"id\": 1}",
    b"null",
    b"[{\"id\": 1, \"name\": \"x\"}]",
    b"[{\"id\": 1, \"name\": \"x\", \"price\": \"\\u20b9150\", \"weight\": \"500g\", \"quantity\": 0}]",
    "[{\"id\": 1, \"name\": \"x\", \"price\": \"₹1\", \"weight\": \"1g\", \"quantity\": 1},"
    " {\"id\": 1, \"name\": \"x\", \"price\": \"₹1\", \"weight\": \"1g\", \"quantity\": 2}]".encode(),
    b"\xff\xfe\x00",
])
def test_corrupt_persisted_cart_starts_empty(raw, caplog):
    store = CartStore(MemoryStorage({"ddk_cart": raw}))

    with caplog.at_level(logging.WARNING, logger="spice_shop.services.cart"):
        store.initialize()

    assert store.lines == ()
    assert "Discarding unparsable persisted cart" in caplog.text


def test_decode_rejects_duplicate_ids():
    raw = encode_cart([
        CartLine(id=3, name="Cinnamon Powder", price="₹180", weight="500g", quantity=1),
        CartLine(id=3, name="Cinnamon Powder", price="₹180", weight="500g", quantity=2),
    ])

    with pytest.raises(CartDecodeError, match="Duplicate"):
        decode_cart(raw)


def test_encoded_cart_uses_wire_field_names(store, chilli):
    store.add_item(chilli)

    raw = encode_cart(store.lines)

    assert raw.decode("utf-8") == (
        '[{"id":1,"name":"Lal Mirch Powder","price":"₹150","weight":"500g","quantity":1}]'
    )
    assert decode_cart(raw) == list(store.lines)


def test_storage_failure_does_not_revert_mutation(chilli, caplog):
    store = CartStore(FailingStorage())
    store.initialize()

    with caplog.at_level(logging.ERROR, logger="spice_shop.services.cart"):
        store.add_item(chilli)
        store.change_quantity(chilli.id, 1)

    assert store.lines[0].quantity == 2
    assert caplog.text.count("Failed to persist cart: disk full") == 2


def test_add_sets_just_added_signal(store, chilli, haldi):
    store.add_item(chilli)
    assert store.just_added_id == chilli.id

    store.add_item(haldi)
    assert store.just_added_id == haldi.id


def test_lines_view_is_read_only(store, chilli):
    store.add_item(chilli)

    with pytest.raises(Exception):
        store.lines[0].quantity = 5

    assert store.lines[0].quantity == 1
