"""Sample tables and rows used for demos and first-run seeding.

Rows are keyed by table id, never by the table's display name.
"""

from datetime import date
from typing import Dict, List

from estoque.datatables.columns import Column, ColumnType, CustomTable
from estoque.datatables.rows import TableRow

PUBLICACOES_ID = "00000000-0000-4000-8000-000000000001"
ESCRITORIO_ID = "00000000-0000-4000-8000-000000000002"
COZINHA_ID = "00000000-0000-4000-8000-000000000003"


def _stock_columns() -> List[Column]:
    return [
        Column(name="Nome", type=ColumnType.TEXT, required=True),
        Column(name="Quantidade", type=ColumnType.NUMBER, required=True),
        Column(name="Data de Entrada", type=ColumnType.DATE),
        Column(name="Localização", type=ColumnType.TEXT),
    ]


def sample_tables() -> List[CustomTable]:
    return [
        CustomTable(
            id=PUBLICACOES_ID,
            name="Publicações CCB",
            description="Controle de hinários, revistas e folhetos",
            columns=_stock_columns(),
            created_at=date(2024, 1, 15),
        ),
        CustomTable(
            id=ESCRITORIO_ID,
            name="Material de Escritório",
            description="Canetas, papéis e outros materiais",
            columns=[
                Column(name="Item", type=ColumnType.TEXT, required=True),
                Column(name="Quantidade", type=ColumnType.NUMBER, required=True),
                Column(name="Fornecedor", type=ColumnType.TEXT),
                Column(name="Preço Unitário", type=ColumnType.NUMBER),
            ],
            created_at=date(2024, 1, 10),
        ),
        CustomTable(
            id=COZINHA_ID,
            name="Cozinha",
            description="Controle de alimentos e utensílios",
            columns=_stock_columns(),
            created_at=date(2024, 1, 8),
        ),
    ]


def sample_rows() -> Dict[str, List[TableRow]]:
    return {
        PUBLICACOES_ID: [
            TableRow(
                table_id=PUBLICACOES_ID,
                data={"Nome": "Hinário 5", "Quantidade": 45, "Data de Entrada": "2024-01-15", "Localização": "Estante A-1"},
                created_at=date(2024, 1, 15),
            ),
            TableRow(
                table_id=PUBLICACOES_ID,
                data={"Nome": "Revista O Mensageiro", "Quantidade": 120, "Data de Entrada": "2024-01-14", "Localização": "Estante A-2"},
                created_at=date(2024, 1, 14),
            ),
        ],
        ESCRITORIO_ID: [
            TableRow(
                table_id=ESCRITORIO_ID,
                data={"Item": "Canetas Azuis", "Quantidade": 15, "Fornecedor": "Bic", "Preço Unitário": 2.5},
                created_at=date(2024, 1, 13),
            ),
        ],
        COZINHA_ID: [
            TableRow(
                table_id=COZINHA_ID,
                data={"Nome": "Arroz", "Quantidade": 10, "Data de Entrada": "2024-01-10", "Localização": "Despensa A"},
                created_at=date(2024, 1, 10),
            ),
            TableRow(
                table_id=COZINHA_ID,
                data={"Nome": "Feijão", "Quantidade": 8, "Data de Entrada": "2024-01-12", "Localização": "Despensa A"},
                created_at=date(2024, 1, 12),
            ),
        ],
    }
