import datetime

import pyarrow as pa
import pytest

from tabulary import (
    ColumnAlreadyExists,
    ColumnNotFound,
    DataKind,
    InvalidInputShape,
    InvalidMask,
    LengthMismatch,
    MixedTypeError,
    RecordList,
    SchemaMismatch,
    Table,
    UnsupportedValue,
)

RECORDS = [
    {"name": "Alice", "age": 30, "joined": datetime.date(2020, 1, 5)},
    {"name": "Bob", "age": 25, "joined": datetime.date(2021, 6, 1)},
    {"name": "Charlie", "age": None, "joined": datetime.date(2019, 3, 9)},
]


@pytest.fixture
def table():
    return Table(RECORDS)


def test_shape_and_dtypes():
    table = Table({"name": ["A", "B"], "age": [10, 20]})
    assert table.shape == (2, 2)
    assert table.nrows == 2
    assert table.ncols == 2
    assert len(table) == 2
    assert table.dtypes == {"name": DataKind.TEXT, "age": DataKind.INTEGER}


def test_records_round_trip(table):
    assert table.to_records() == RECORDS
    assert table.columns == ["name", "age", "joined"]
    assert table.dtypes == {
        "name": DataKind.TEXT,
        "age": DataKind.INTEGER,
        "joined": DataKind.DATE,
    }


def test_classified_input():
    assert Table(RecordList(RECORDS)) == Table(RECORDS)


def test_null_column():
    table = Table({"a": [None, None], "b": [1.5, 2.5]})
    assert table.dtypes == {"a": DataKind.NULL, "b": DataKind.FLOAT}


def test_empty_table():
    table = Table({})
    assert table.shape == (0, 0)
    assert table.to_records() == []
    assert Table([]).shape == (0, 0)


def test_columns_without_rows():
    table = Table({"a": [], "b": []})
    assert table.shape == (0, 2)
    assert table.dtypes == {"a": DataKind.NULL, "b": DataKind.NULL}


def test_mixed_column():
    with pytest.raises(MixedTypeError, match="'age'"):
        Table({"age": [10, "ten"]})


def test_unsupported_values():
    with pytest.raises(UnsupportedValue):
        Table({"flag": [True, False]})


def test_records_missing_column():
    with pytest.raises(SchemaMismatch):
        Table([{"a": 1, "b": 2}, {"a": 3}])


def test_construction_copies_input():
    data = {"a": [1, 2]}
    table = Table(data)
    table.change_values("a", 5, [True, False])
    assert data == {"a": [1, 2]}


def test_dtypes_is_a_copy(table):
    table.dtypes["name"] = DataKind.NULL
    assert table.dtypes["name"] is DataKind.TEXT


def test_to_columns_is_internal_storage(table):
    table.to_columns()["name"][0] = "Alicia"
    assert table.select("name")[0] == "Alicia"


def test_equality(table):
    assert table == Table(RECORDS)
    assert table != Table(RECORDS[:2])
    assert table != RECORDS


def test_repr(table):
    assert repr(table) == "Table(columns=['name', 'age', 'joined'], rows=3)"


def test_str(table):
    assert str(table).splitlines()[0] == "name    | age | joined    "


def test_select(table):
    assert table.select("age") == [30, 25, None]


def test_select_missing(table):
    with pytest.raises(ColumnNotFound, match="'height'"):
        table.select("height")


def test_select_columns(table):
    selected = table.select_columns(["joined", "name"])
    assert selected.columns == ["joined", "name"]
    assert selected.to_records()[0] == {"joined": datetime.date(2020, 1, 5), "name": "Alice"}
    assert selected.dtypes == {"joined": DataKind.DATE, "name": DataKind.TEXT}


def test_select_columns_is_independent(table):
    selected = table.select_columns(["name"])
    selected.change_values("name", "Zed", [True, True, True])
    assert table.select("name") == ["Alice", "Bob", "Charlie"]


def test_select_columns_errors(table):
    with pytest.raises(ColumnNotFound):
        table.select_columns(["name", "height"])
    with pytest.raises(ColumnAlreadyExists):
        table.select_columns(["name", "name"])
    with pytest.raises(InvalidInputShape):
        table.select_columns("name")


def test_select_rows(table):
    selected = table.select_rows([True, False, True])
    assert selected.select("name") == ["Alice", "Charlie"]
    assert selected.shape == (2, 3)


def test_select_rows_from_column(table):
    selected = table.select_rows([age is not None and age > 26 for age in table.select("age")])
    assert selected.to_records() == [RECORDS[0]]


def test_select_rows_infers_kinds_again(table):
    selected = table.select_rows([False, False, True])
    assert selected.dtypes["age"] is DataKind.NULL


def test_select_rows_errors(table):
    with pytest.raises(InvalidMask):
        table.select_rows([1, 0, 1])
    with pytest.raises(LengthMismatch):
        table.select_rows([True, False])
    with pytest.raises(InvalidMask):
        table.select_rows([True, False])


def test_unique_combinations():
    table = Table({"a": ["x", "x", "", "y"], "b": [1, 1, 2, None]})
    assert table.unique_combinations(["a", "b"]) == [
        {"a": "x", "b": 1},
        {"a": "", "b": 2},
        {"a": "y", "b": None},
    ]
    assert table.unique_combinations(["a", "b"], include_null=False) == [{"a": "x", "b": 1}]
    with pytest.raises(ColumnNotFound):
        table.unique_combinations(["c"])


def test_copy(table):
    copied = table.copy()
    assert copied == table
    copied.change_values("name", "Zed", [True, False, False])
    assert table.select("name")[0] == "Alice"


def test_copy_keeps_declared_kinds():
    table = Table({"a": ["", ""]})
    table.convert("a", DataKind.INTEGER)
    assert table.copy().dtypes == {"a": DataKind.INTEGER}


def test_to_arrow(table):
    arrow_table = table.to_arrow()
    assert arrow_table.schema == pa.schema(
        [("name", pa.string()), ("age", pa.int64()), ("joined", pa.date32())]
    )
    assert arrow_table.to_pydict() == table.to_columns()


def test_from_arrow():
    data = pa.table({"id": [1, 2], "score": [1.5, None], "label": ["a", "b"]})
    table = Table.from_arrow(data)
    assert table.to_columns() == {"id": [1, 2], "score": [1.5, None], "label": ["a", "b"]}
    assert table.dtypes == {
        "id": DataKind.INTEGER,
        "score": DataKind.FLOAT,
        "label": DataKind.TEXT,
    }
    assert Table.from_arrow(data.to_batches()[0]) == table


def test_from_arrow_invalid():
    with pytest.raises(InvalidInputShape):
        Table.from_arrow({"id": [1]})


def test_disp(table, capsys):
    table.disp(limit=1)
    out = capsys.readouterr().out
    assert "Alice" in out
    assert "Bob" not in out
    assert "... and 2 more rows" in out

    with pytest.raises(TypeError):
        table.disp(limit="1")
