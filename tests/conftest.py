import pytest

from invcore.records import SkuRecord


GRAFANA_HEADER = [
    "SKU", "Descripcion", "Marca", "Proveedor", "Analista", "Deposito",
    "Costo", "Lead Time", "UXB", "VTAR", "Stock", "COMPRAS",
    "TOTAL VENDIDO 59", "Perfil",
    "-1", "-2", "-3", "-4", "-5", "-6", "-7",
]


@pytest.fixture
def grafana_sheet():
    """Primary sheet: A1 in three depots, B2 with blanks, plus rows to skip."""
    return [
        GRAFANA_HEADER,
        ["a1 ", "Widget", "Acme", "Prov Uno", "Ana", "Deposito 80 Full",
         "1.234,50", 15, 6, 10, 50, 5, 300, "Core",
         7, 6, 5, 4, 3, 2, 1],
        ["A1", "Widget", "Acme", "Prov Uno", "Ana", "Deposito 1 Central",
         1234.5, 15, 6, "5", "20", 0, "150", "Core",
         9, 9, 9, 9, 9, 9, 9],
        ["A1", None, "Acme", "Prov Uno", "Ana", "Sucursal 82",
         1234.5, 15, 6, 2, 3, None, 10, "Core",
         9, 9, 9, 9, 9, 9, 9],
        ["B2", None, None, None, None, "Sucursal 86",
         "$ 10", None, 0, 0, 4, None, None, None,
         None, None, None, None, None, None, None],
        ["TOTAL", None, None, None, None, None,
         None, None, None, 17, 77, None, None, None,
         None, None, None, None, None, None, None],
        [None, "orphan", None, None, None, "Deposito 1",
         None, None, None, 3, 3, None, None, None,
         None, None, None, None, None, None, None],
    ]


@pytest.fixture
def make_record():
    """Factory for SKU records with only the fields a test cares about."""

    def _make(sku="X", **fields):
        return SkuRecord(sku=sku, **fields)

    return _make
