import pytest

from estoque.datatables.columns import Column, ColumnType
from estoque.datatables.forms import FormBinder, initial_values, missing_fields
from estoque.errors import RequiredFieldsMissing

COLUMNS = [
    Column(name="Item", type=ColumnType.TEXT, required=True),
    Column(name="Qtd", type=ColumnType.NUMBER, required=True),
    Column(name="Entrada", type=ColumnType.DATE),
]


def test_initial_values_use_column_defaults():
    assert initial_values(COLUMNS) == {"Item": "", "Qtd": 0, "Entrada": ""}


def test_initial_values_copy_existing_row():
    values = initial_values(COLUMNS, {"Item": "Sabão", "Qtd": 4, "Extra": "x"})

    assert values == {"Item": "Sabão", "Qtd": 4, "Entrada": ""}


def test_set_coerces_by_column_type():
    binder = FormBinder(COLUMNS)

    assert binder.set("Qtd", "12") == 12
    assert binder.set("Qtd", "doze") == 0
    assert binder.set("Item", 42) == "42"


def test_missing_fields_lists_required_names_in_order():
    assert missing_fields(COLUMNS, {"Item": "", "Qtd": None}) == ["Item", "Qtd"]
    assert missing_fields(COLUMNS, {"Item": "Sabão", "Qtd": 3}) == []


def test_numeric_zero_is_missing_by_default():
    assert missing_fields(COLUMNS, {"Item": "Sabão", "Qtd": 0}) == ["Qtd"]


def test_omitted_required_number_is_missing():
    binder = FormBinder(COLUMNS)
    binder.update({"Item": "Detergente"})

    assert binder.missing_fields() == ["Qtd"]
    with pytest.raises(RequiredFieldsMissing):
        binder.validate()


def test_relaxed_policy_accepts_zero_once_supplied():
    binder = FormBinder(COLUMNS, treat_zero_as_missing=False)
    binder.update({"Item": "Sabão", "Qtd": 0})

    assert binder.missing_fields() == []
    assert binder.validate()["Qtd"] == 0


def test_relaxed_policy_still_needs_the_key():
    binder = FormBinder(COLUMNS, treat_zero_as_missing=False)
    binder.update({"Item": "Sabão"})

    assert binder.missing_fields() == ["Qtd"]


def test_relaxed_policy_accepts_stored_zero_on_edit():
    binder = FormBinder(COLUMNS, {"Item": "Sabão", "Qtd": 0}, treat_zero_as_missing=False)

    assert binder.missing_fields() == []


def test_submit_rejects_with_every_missing_name():
    binder = FormBinder(COLUMNS)
    calls = []

    with pytest.raises(RequiredFieldsMissing) as excinfo:
        binder.submit(calls.append)

    assert excinfo.value.fields == ["Item", "Qtd"]
    assert "Item" in str(excinfo.value)
    assert calls == []
    assert binder.values == {"Item": "", "Qtd": 0, "Entrada": ""}


def test_submit_hands_values_over_and_clears_state():
    binder = FormBinder(COLUMNS)
    binder.update({"Item": "Detergente", "Qtd": "10"})

    result = binder.submit(lambda data: data)

    assert result == {"Item": "Detergente", "Qtd": 10, "Entrada": ""}
    assert binder.values == {}


def test_submit_keeps_state_when_callback_fails():
    binder = FormBinder(COLUMNS, {"Item": "Detergente", "Qtd": 1})

    def boom(data):
        raise RuntimeError("offline")

    with pytest.raises(RuntimeError):
        binder.submit(boom)
    assert binder.values["Item"] == "Detergente"
