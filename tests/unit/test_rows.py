from estoque.datatables.rows import RowStore, TableRow


def make_store():
    rows = [
        TableRow(id="a", table_id="t", data={"Item": "Arroz", "Qtd": 10}),
        TableRow(id="b", table_id="t", data={"Item": "Feijão", "Qtd": 8}),
        TableRow(id="c", table_id="t", data={"Item": "Sal"}),
    ]
    return RowStore("t", rows)


def test_add_appends_without_checks():
    store = make_store()
    store.add(TableRow(id="a", table_id="other", data={}))

    assert [r.id for r in store] == ["a", "b", "c", "a"]


def test_update_replaces_data_wholly():
    store = make_store()
    updated = store.update("a", {"Item": "Arroz integral"})

    assert updated.data == {"Item": "Arroz integral"}
    assert store.get("a").data == {"Item": "Arroz integral"}


def test_update_unknown_id_is_noop():
    store = make_store()
    before = store.rows

    assert store.update("zzz", {"Item": "x"}) is None
    assert store.rows == before


def test_remove_keeps_order_of_others():
    store = make_store()
    removed = store.remove("b")

    assert removed.id == "b"
    assert [r.id for r in store] == ["a", "c"]
    assert store.remove("b") is None
    assert len(store) == 2


def test_adjust_quantity_clamps_at_zero():
    store = make_store()

    assert store.adjust_quantity("a", "Qtd", -15).data["Qtd"] == 0
    assert store.adjust_quantity("a", "Qtd", 3).data["Qtd"] == 3


def test_adjust_quantity_missing_value_starts_from_zero():
    store = make_store()

    assert store.adjust_quantity("c", "Qtd", 2).data["Qtd"] == 2
    assert store.adjust_quantity("c", "Qtd", -5).data["Qtd"] == 0


def test_adjust_quantity_zero_delta_is_idempotent():
    store = make_store()
    for _ in range(3):
        store.adjust_quantity("b", "Qtd", 0)

    assert store.get("b").data["Qtd"] == 8


def test_adjust_quantity_never_negative_for_any_sequence():
    store = make_store()
    for delta in [-3, -20, 5, -1, -100, 2, -2, -1]:
        row = store.adjust_quantity("a", "Qtd", delta)
        assert row.data["Qtd"] >= 0


def test_adjust_quantity_keeps_other_fields():
    store = make_store()
    store.adjust_quantity("a", "Qtd", 1)

    assert store.get("a").data == {"Item": "Arroz", "Qtd": 11}


def test_load_swaps_rows_wholesale():
    store = make_store()
    store.load("other", [TableRow(id="x", table_id="other")])

    assert store.table_id == "other"
    assert [r.id for r in store] == ["x"]

    store.clear()
    assert store.table_id is None
    assert len(store) == 0
