import pytest

from tabulary import ColumnNotFound, InvalidInputShape, Table, merge

# Sample data for testing
LEFT_TEST_DATA = {
    "id": [1, 2, 3, 4],
    "name": ["Alice", "Bob", "Charlie", "David"],
}

RIGHT_TEST_DATA = {
    "id": [3, 4, 5, 6],
    "age": [25, 30, 35, 40],
}


@pytest.fixture
def left_table():
    return Table(LEFT_TEST_DATA)


@pytest.fixture
def right_table():
    return Table(RIGHT_TEST_DATA)


@pytest.mark.parametrize(
    "keys,expected_output",
    [
        (
            ["id"],
            {
                "id": [3, 4],
                "name": ["Charlie", "David"],
                "age": [25, 30],
            },
        ),
        (
            ("id",),
            {
                "id": [3, 4],
                "name": ["Charlie", "David"],
                "age": [25, 30],
            },
        ),
    ],
)
def test_merge(left_table, right_table, keys, expected_output):
    result = merge(left_table, right_table, keys)
    assert result.to_columns() == expected_output
    assert result.columns == ["id", "name", "age"]


def test_merge_method(left_table, right_table):
    assert left_table.merge(right_table, ["id"]) == merge(left_table, right_table, ["id"])


def test_merge_single_shared_row():
    left = Table({"id": [1, 2], "x": [10, 20]})
    right = Table({"id": [2, 3], "y": [30, 40]})

    result = merge(left, right, ["id"])
    assert result.to_records() == [{"id": 2, "x": 20, "y": 30}]


def test_merge_conflicting_columns():
    left = Table(
        {
            "id": [1, 2, 3, 4],
            "name": ["Alice", "Bob", "Charlie", "David"],
            "conflict": ["A", "B", "C", "D"],
        }
    )
    right = Table(
        {
            "id": [3, 4, 5, 6],
            "age": [25, 30, 35, 40],
            "conflict": ["X", "Y", "Z", "W"],
        }
    )

    result = merge(left, right, ["id"])

    # The left column gets the right suffix and viceversa.
    assert result.columns == ["id", "name", "conflict_x", "conflict_y", "age"]
    assert result.select("conflict_x") == ["C", "D"]
    assert result.select("conflict_y") == ["X", "Y"]


def test_merge_custom_suffixes():
    left = Table({"id": [1], "v": ["l"]})
    right = Table({"id": [1], "v": ["r"]})

    result = merge(left, right, ["id"], right_suffix="_from_left", left_suffix="_from_right")
    assert result.to_records() == [{"id": 1, "v_from_left": "l", "v_from_right": "r"}]


def test_merge_suffix_stringifies_names():
    left = Table({"id": [1], 2020: [10]})
    right = Table({"id": [1], 2020: [20]})

    result = merge(left, right, ["id"])
    assert result.columns == ["id", "2020_x", "2020_y"]


def test_merge_with_null_values():
    left = Table(
        {
            "id": [1, 2, None, 4],
            "name": ["Alice", "Bob", "Charlie", "David"],
        }
    )
    right = Table(
        {
            "id": [3, 4, None, 6],
            "age": [25, 30, 35, 40],
        }
    )

    result = merge(left, right, ["id"])
    assert result.to_columns() == {"id": [4], "name": ["David"], "age": [30]}


def test_merge_with_empty_string_keys():
    left = Table({"code": ["", "a"], "x": [1, 2]})
    right = Table({"code": ["", "a"], "y": [3, 4]})

    result = merge(left, right, ["code"])
    assert result.to_records() == [{"code": "a", "x": 2, "y": 4}]


def test_merge_keys_of_different_kinds_do_not_match():
    left = Table({"id": [1, 2], "x": [10, 20]})
    right = Table({"id": [1.0, 2.5], "y": [30, 40]})

    result = merge(left, right, ["id"])
    assert result.shape == (0, 3)
    assert result.columns == ["id", "x", "y"]


def test_merge_with_nonexistent_keys():
    left = Table(LEFT_TEST_DATA)
    right = Table({"id": [5, 6, 7, 8], "age": [25, 30, 35, 40]})

    result = merge(left, right, ["id"])
    assert result.nrows == 0
    assert result.columns == ["id", "name", "age"]


def test_merge_cartesian_product_of_matches():
    left = Table({"id": [1, 1, 2], "l": ["a", "b", "c"]})
    right = Table({"id": [1, 1, 1, 2], "r": ["x", "y", "z", "w"]})

    result = merge(left, right, ["id"])

    # 2 left rows * 3 right rows for id=1, 1 * 1 for id=2
    assert result.nrows == 7
    assert result.to_records()[:3] == [
        {"id": 1, "l": "a", "r": "x"},
        {"id": 1, "l": "a", "r": "y"},
        {"id": 1, "l": "a", "r": "z"},
    ]
    assert result.to_records()[-1] == {"id": 2, "l": "c", "r": "w"}


def test_merge_combinations_follow_left_order():
    left = Table({"id": [3, 1, 2], "l": ["c", "a", "b"]})
    right = Table({"id": [1, 2, 3], "r": ["x", "y", "z"]})

    result = merge(left, right, ["id"])
    assert result.select("id") == [3, 1, 2]


def test_merge_multiple_keys():
    left = Table(
        {
            "city": ["Rome", "Rome", "Oslo"],
            "year": [2020, 2021, 2020],
            "sales": [10, 20, 30],
        }
    )
    right = Table(
        {
            "city": ["Rome", "Oslo", "Oslo"],
            "year": [2021, 2020, 2021],
            "visits": [5, 6, 7],
        }
    )

    result = merge(left, right, ["city", "year"])
    assert result.to_records() == [
        {"city": "Rome", "year": 2021, "sales": 20, "visits": 5},
        {"city": "Oslo", "year": 2020, "sales": 30, "visits": 6},
    ]

    combos = {tuple(c.values()) for c in result.unique_combinations(["city", "year"])}
    left_combos = {tuple(c.values()) for c in left.unique_combinations(["city", "year"], include_null=False)}
    right_combos = {tuple(c.values()) for c in right.unique_combinations(["city", "year"], include_null=False)}
    assert combos == left_combos & right_combos


def test_merge_does_not_modify_inputs(left_table, right_table):
    result = merge(left_table, right_table, ["id"])
    result.change_values("name", "Zed", [True, True])

    assert left_table.to_columns() == LEFT_TEST_DATA
    assert right_table.to_columns() == RIGHT_TEST_DATA


def test_merge_missing_key(left_table, right_table):
    with pytest.raises(ColumnNotFound, match="left"):
        merge(left_table, right_table, ["age"])

    with pytest.raises(ColumnNotFound, match="right"):
        merge(left_table, right_table, ["name"])


def test_merge_requires_keys(left_table, right_table):
    with pytest.raises(InvalidInputShape):
        merge(left_table, right_table, [])

    with pytest.raises(InvalidInputShape):
        merge(left_table, right_table, "id")


def test_merge_requires_tables(left_table):
    with pytest.raises(TypeError):
        merge(left_table, RIGHT_TEST_DATA, ["id"])
