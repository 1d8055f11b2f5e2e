import uuid

import pytest
from sqlalchemy.exc import OperationalError

from estoque.setores.service import setor as setor_crud

from tests.conftest import login

ESTOQUE_COLUMNS = [
    {"name": "Nome", "type": "text", "required": True},
    {"name": "Quantidade", "type": "number", "required": True},
    {"name": "Validade", "type": "date", "required": False},
]


@pytest.fixture()
def table(client, api, admin_headers):
    response = client.post(
        f"{api}/tables/",
        json={"name": "Cozinha", "description": "Mantimentos", "columns": ESTOQUE_COLUMNS},
        headers=admin_headers,
    )
    assert response.status_code == 200, response.text
    return response.json()["data"]


def add_row(client, api, headers, table_id, data):
    response = client.post(f"{api}/tables/{table_id}/rows", json={"data": data}, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()["data"]


def test_create_table(client, api, admin_headers):
    response = client.post(
        f"{api}/tables/",
        json={
            "name": "  Publicações ",
            "columns": [
                {"name": "Título", "type": "text", "required": True},
                {"name": "", "type": "number"},
            ],
        },
        headers=admin_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["notification"] == {
        "kind": "success",
        "title": "Sucesso",
        "description": "Tabela criada com sucesso!",
    }
    assert body["data"]["name"] == "Publicações"
    assert [c["name"] for c in body["data"]["columns"]] == ["Título"]
    assert body["data"]["row_count"] == 0


@pytest.mark.parametrize(
    "payload, message",
    [
        ({"name": "", "columns": ESTOQUE_COLUMNS}, "Nome da tabela é obrigatório"),
        ({"name": "Vazia", "columns": [{"name": "  "}]}, "Pelo menos uma coluna deve ser definida"),
    ],
)
def test_create_table_rejected(client, api, admin_headers, payload, message):
    response = client.post(f"{api}/tables/", json=payload, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["detail"]["kind"] == "error"
    assert response.json()["detail"]["description"] == message
    assert client.get(f"{api}/tables/", headers=admin_headers).json() == []


def test_list_tables_with_row_counts(client, api, admin_headers, table):
    add_row(client, api, admin_headers, table["id"], {"Nome": "Arroz", "Quantidade": 10})
    add_row(client, api, admin_headers, table["id"], {"Nome": "Feijão", "Quantidade": 8})

    tables = client.get(f"{api}/tables/", headers=admin_headers).json()

    assert [(t["name"], t["row_count"]) for t in tables] == [("Cozinha", 2)]


def test_add_row_coerces_values(client, api, admin_headers, table):
    row = add_row(
        client,
        api,
        admin_headers,
        table["id"],
        {"Nome": "Óleo", "Quantidade": "3", "Validade": "2025-03-01"},
    )

    assert row["data"] == {"Nome": "Óleo", "Quantidade": 3, "Validade": "2025-03-01"}


def test_add_row_fills_defaults_for_missing_optional_columns(client, api, admin_headers, table):
    row = add_row(client, api, admin_headers, table["id"], {"Nome": "Sal", "Quantidade": 1})

    assert row["data"]["Validade"] == ""


@pytest.mark.parametrize("data", [{"Nome": "Açúcar", "Quantidade": 0}, {"Nome": "Açúcar"}])
def test_required_quantity_must_be_given(client, api, admin_headers, table, data):
    response = client.post(
        f"{api}/tables/{table['id']}/rows", json={"data": data}, headers=admin_headers
    )

    assert response.status_code == 400
    assert response.json()["detail"]["description"] == (
        "Campos obrigatórios não preenchidos: Quantidade"
    )


def test_add_row_missing_required_field(client, api, admin_headers, table):
    response = client.post(
        f"{api}/tables/{table['id']}/rows",
        json={"data": {"Quantidade": 4}},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert "Nome" in response.json()["detail"]["description"]
    assert client.get(f"{api}/tables/{table['id']}/rows", headers=admin_headers).json() == []


def test_update_row(client, api, admin_headers, table):
    row = add_row(client, api, admin_headers, table["id"], {"Nome": "Arroz", "Quantidade": 10})

    response = client.put(
        f"{api}/tables/{table['id']}/rows/{row['id']}",
        json={"data": {"Nome": "Arroz integral", "Quantidade": 12}},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json()["data"]["data"]["Nome"] == "Arroz integral"
    assert response.json()["data"]["data"]["Quantidade"] == 12


def test_update_row_cannot_blank_required_field(client, api, admin_headers, table):
    row = add_row(client, api, admin_headers, table["id"], {"Nome": "Arroz", "Quantidade": 10})

    response = client.put(
        f"{api}/tables/{table['id']}/rows/{row['id']}",
        json={"data": {"Nome": ""}},
        headers=admin_headers,
    )

    assert response.status_code == 400
    rows = client.get(f"{api}/tables/{table['id']}/rows", headers=admin_headers).json()
    assert rows[0]["data"]["Nome"] == "Arroz"


def test_adjust_quantity_never_goes_negative(client, api, admin_headers, table):
    row = add_row(client, api, admin_headers, table["id"], {"Nome": "Feijão", "Quantidade": 2})
    url = f"{api}/tables/{table['id']}/rows/{row['id']}/quantity"

    up = client.post(url, json={"column": "Quantidade", "delta": 1}, headers=admin_headers)
    assert up.json()["data"]["data"]["Quantidade"] == 3

    down = client.post(url, json={"column": "Quantidade", "delta": -10}, headers=admin_headers)
    assert down.status_code == 200
    assert down.json()["notification"]["title"] == "Quantidade atualizada"
    assert down.json()["data"]["data"]["Quantidade"] == 0


def test_delete_row(client, api, admin_headers, table):
    keep = add_row(client, api, admin_headers, table["id"], {"Nome": "Arroz", "Quantidade": 1})
    gone = add_row(client, api, admin_headers, table["id"], {"Nome": "Sal", "Quantidade": 1})

    response = client.delete(f"{api}/tables/{table['id']}/rows/{gone['id']}", headers=admin_headers)

    assert response.status_code == 200
    rows = client.get(f"{api}/tables/{table['id']}/rows", headers=admin_headers).json()
    assert [r["id"] for r in rows] == [keep["id"]]


def test_unknown_row_is_404(client, api, admin_headers, table):
    response = client.delete(
        f"{api}/tables/{table['id']}/rows/{uuid.uuid4()}", headers=admin_headers
    )

    assert response.status_code == 404


def test_delete_table_removes_its_rows(client, api, admin_headers, table):
    add_row(client, api, admin_headers, table["id"], {"Nome": "Arroz", "Quantidade": 1})

    response = client.delete(f"{api}/tables/{table['id']}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["notification"]["title"] == "Tabela removida"
    assert client.get(f"{api}/tables/{table['id']}", headers=admin_headers).status_code == 404
    stats = client.get(f"{api}/setores/me/stats", headers=admin_headers).json()
    assert stats["tables"] == 0
    assert stats["products"] == 0


def test_tables_are_scoped_to_the_sector(client, api, session, admin_headers, table):
    limpeza = setor_crud.get_by_nome(session=session, nome="Limpeza")
    client.post(
        f"{api}/signup",
        json={
            "email": "joao@example.com",
            "password": "senha-segura",
            "full_name": "João",
            "setor_id": str(limpeza.id),
        },
    )
    headers = login(client, "joao@example.com", "senha-segura")

    assert client.get(f"{api}/tables/", headers=headers).json() == []
    assert client.get(f"{api}/tables/{table['id']}", headers=headers).status_code == 404
    assert client.delete(f"{api}/tables/{table['id']}", headers=headers).status_code == 404


def test_table_lists_its_quantity_columns(client, api, admin_headers, table):
    response = client.get(f"{api}/tables/{table['id']}", headers=admin_headers)

    assert table["quantity_columns"] == ["Quantidade"]
    assert response.json()["quantity_columns"] == ["Quantidade"]


def fail_commit(session, monkeypatch):
    def commit():
        raise OperationalError("COMMIT", {}, Exception("database is locked"))

    monkeypatch.setattr(session, "commit", commit)


def test_database_failure_on_create_is_reported(client, api, session, admin_headers, monkeypatch):
    fail_commit(session, monkeypatch)

    response = client.post(
        f"{api}/tables/", json={"name": "Cozinha", "columns": ESTOQUE_COLUMNS}, headers=admin_headers
    )

    assert response.status_code == 503
    assert response.json()["detail"]["kind"] == "error"
    monkeypatch.undo()
    assert client.get(f"{api}/tables/", headers=admin_headers).json() == []


def test_database_failure_on_row_write_is_reported(
    client, api, session, admin_headers, table, monkeypatch
):
    fail_commit(session, monkeypatch)

    response = client.post(
        f"{api}/tables/{table['id']}/rows",
        json={"data": {"Nome": "Arroz", "Quantidade": 1}},
        headers=admin_headers,
    )

    assert response.status_code == 503
    assert response.json()["detail"]["kind"] == "error"
    monkeypatch.undo()
    assert client.get(f"{api}/tables/{table['id']}/rows", headers=admin_headers).json() == []
