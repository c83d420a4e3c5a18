from invcore.columns import ColumnIndex, find_column_index, resolve_offset_columns


def test_substring_case_insensitive_match():
    header = ["Código SKU", "Proveedor Principal", "stock total"]
    assert find_column_index(header, ["sku"]) == 0
    assert find_column_index(header, ["PROV"]) == 1
    assert find_column_index(header, ["Stock"]) == 2


def test_no_match_returns_minus_one():
    assert find_column_index(["SKU", "VTAR"], ["Stock", "Marca"]) == -1
    assert find_column_index([], ["SKU"]) == -1


def test_leftmost_column_wins_regardless_of_candidate_order():
    header = ["Stock Total", "Stock Dep", "Deposito"]
    assert find_column_index(header, ["dep", "stock"]) == 0
    assert find_column_index(header, ["stock", "dep"]) == 0


def test_idempotent_and_tolerates_blank_headers():
    header = [None, 12, "  vtar  ", float("nan")]
    first = find_column_index(header, ["VTAR"])
    assert first == 2
    assert find_column_index(header, ["VTAR"]) == first
    assert find_column_index(header, ["12"]) == 1


def test_offset_columns_are_ordered_by_day():
    header = ["SKU", "-3", "-1", "-2", "VTAR"]
    assert resolve_offset_columns(header, 60) == [(2, 1), (3, 2), (1, 3)]


def test_offset_columns_absent_when_not_exported():
    assert resolve_offset_columns(["SKU", "VTAR"], 60) == []


class TestColumnIndex:
    COLUMNS = {"sku": ["SKU"], "stock": ["Stock"], "brand": ["Marca"]}

    def test_positions_and_missing(self):
        index = ColumnIndex.resolve(["SKU", "VTAR", "Stock"], self.COLUMNS)
        assert index.sku == 0
        assert index["stock"] == 2
        assert index.has("stock")
        assert not index.has("brand")
        assert index.missing() == ["brand"]

    def test_cell_for_unresolved_or_short_rows(self):
        index = ColumnIndex.resolve(["SKU", "VTAR", "Stock"], self.COLUMNS)
        assert index.cell(["A1", 1, 7], "stock") == 7
        assert index.cell(["A1"], "stock") is None
        assert index.cell(["A1", 1, 7], "brand") is None
        assert index.cell(["A1", 1, 7], "unknown") is None
