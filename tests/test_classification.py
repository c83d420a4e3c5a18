import pytest

from invcore.classification import (
    HEALTH_LABELS,
    abc_class,
    classify_abc_and_health,
    health_bucket,
    xyz_class,
)


def test_uniform_values_hit_the_boundaries_exactly(make_record):
    records = [
        make_record(f"S{i:02d}", vtar_total=1, unit_cost=1, stability="Stable")
        for i in range(20)
    ]
    classify_abc_and_health(records)

    classes = [r.abc for r in records]
    # 16/20 == 0.8 and 19/20 == 0.95 fall on the inclusive side
    assert classes == ["A"] * 16 + ["B"] * 3 + ["C"]


def test_sorted_descending_with_stable_ties(make_record):
    records = [
        make_record("LOW", vtar_total=1, unit_cost=1),
        make_record("TIE1", vtar_total=5, unit_cost=2),
        make_record("TOP", vtar_total=100, unit_cost=1),
        make_record("TIE2", vtar_total=10, unit_cost=1),
    ]
    result = classify_abc_and_health(records)
    assert [r.sku for r in result.records] == ["TOP", "TIE1", "TIE2", "LOW"]
    assert result.records is records


def test_combined_classes_and_counts(make_record):
    records = [
        make_record("A1", vtar_total=80, unit_cost=1, stability="Stable"),
        make_record("B1", vtar_total=15, unit_cost=1, stability="Variable"),
        make_record("C1", vtar_total=5, unit_cost=1, stability="Erratic"),
        make_record("C2", vtar_total=0, unit_cost=1, stability="Inactive"),
    ]
    result = classify_abc_and_health(records)
    assert {r.sku: r.abc_xyz for r in records} == {
        "A1": "AX", "B1": "BY", "C1": "CZ", "C2": "CZ",
    }
    assert result.counts == {"AX": 1, "BY": 1, "CZ": 2}
    assert result.total_sales_value == 100


def test_matrix_total_equals_stock_value(make_record):
    records = [
        make_record("A", vtar_total=50, unit_cost=3, stock_grafana=10, days_of_stock=5),
        make_record("B", vtar_total=20, unit_cost=2, stock_grafana=40, days_of_stock=20),
        make_record("C", vtar_total=1, unit_cost=7.5, stock_grafana=3, days_of_stock=999),
        make_record("D", vtar_total=0, unit_cost=4, stock_grafana=0, days_of_stock=0),
    ]
    result = classify_abc_and_health(records)

    cells = sum(v for row in result.matrix.values() for v in row.values())
    assert cells == pytest.approx(sum(r.stock_grafana * r.unit_cost for r in records))
    assert result.total_stock_value == pytest.approx(cells)
    assert result.matrix["A"]["critical-low"] == pytest.approx(30)


def test_zero_sales_value_puts_everything_in_a(make_record):
    records = [make_record("X", vtar_total=0, unit_cost=5), make_record("Y", vtar_total=3, unit_cost=0)]
    classify_abc_and_health(records)
    assert [r.abc for r in records] == ["A", "A"]


def test_matrix_has_every_cell(make_record):
    result = classify_abc_and_health([])
    assert set(result.matrix) == {"A", "B", "C"}
    assert all(list(row) == HEALTH_LABELS for row in result.matrix.values())

    frame = result.matrix_frame()
    assert frame.shape == (3, 5)
    assert list(frame.columns) == HEALTH_LABELS
    assert list(frame.index) == ["A", "B", "C"]


@pytest.mark.parametrize(
    "days, bucket",
    [
        (0, "critical-low"),
        (10, "critical-low"),
        (10.5, "low"),
        (17, "low"),
        (30, "healthy"),
        (45, "excess"),
        (46, "obsolete"),
        (999, "obsolete"),
    ],
)
def test_health_bucket(days, bucket):
    assert health_bucket(days) == bucket


def test_abc_and_xyz_helpers():
    assert abc_class(0.8) == "A"
    assert abc_class(0.80001) == "B"
    assert abc_class(0.95) == "B"
    assert abc_class(1.0) == "C"
    assert xyz_class("Stable") == "X"
    assert xyz_class("Variable") == "Y"
    assert xyz_class("No-data") == "Z"
