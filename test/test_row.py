import math

import pytest

from frosts import DataFrame
from frosts.dataframe import FrostRow
from frosts.errors import ColumnTypeError, MembershipError


@pytest.fixture
def row():
    return FrostRow(
        {"name": 0, "income": 1, "code": 2, "active": 3, "note": 4},
        ["Alice", 1000.0, "42", "TRUE", None],
    )


def test_mapping_access(row):
    assert row["name"] == "Alice"
    assert list(row) == ["name", "income", "code", "active", "note"]
    assert len(row) == 5
    assert dict(row)["income"] == 1000.0
    assert "code" in row


def test_missing_column(row):
    with pytest.raises(MembershipError, match="'age' not found in row"):
        row["age"]


def test_get_number(row):
    assert row.get_number("income") == 1000.0
    assert row.get_number("code") == 42.0
    with pytest.raises(ColumnTypeError, match="not a number"):
        row.get_number("name")
    with pytest.raises(ColumnTypeError):
        row.get_number("note")


def test_get_string(row):
    assert row.get_string("income") == "1000"
    assert row.get_string("note") == ""


def test_get_boolean(row):
    assert row.get_boolean("active") is True
    with pytest.raises(ColumnTypeError, match="not a boolean"):
        row.get_boolean("name")


def test_is_blank(row):
    assert row.is_blank("note")
    assert not row.is_blank("name")


def test_to_dict_numbers_and_strings(row):
    assert row.to_dict() == {
        "name": "Alice",
        "income": 1000.0,
        "code": "42",
        "active": "TRUE",
        "note": None,
    }
    numbers = row.numbers()
    assert numbers["income"] == 1000.0
    assert numbers["code"] == 42.0
    assert math.isnan(numbers["name"])
    assert row.strings()["active"] == "TRUE"


def test_repr():
    assert repr(FrostRow({"a": 0}, [1.0])) == "FrostRow({'a': 1.0})"


@pytest.fixture
def incomes():
    return DataFrame([["Name", "Income", "Bonus"], ["Alice", 1000, 100], ["Bob", 2000, ""]])


def test_iterrows(incomes):
    indexes, names = zip(*((i, row["Name"]) for i, row in incomes.iterrows()))
    assert indexes == (0, 1)
    assert names == ("Alice", "Bob")


def test_apply(incomes):
    assert incomes.apply(lambda row: row.get_number("Income") * 0.5) == [500.0, 1000.0]


def test_apply_numeric(incomes):
    result = incomes.apply_numeric(lambda row: row["Income"] + row["Bonus"])
    assert result[0] == 1100.0
    assert math.isnan(result[1])


def test_apply_string(incomes):
    assert incomes.apply_string(lambda row: row["Name"] + ":" + row["Bonus"]) == [
        "Alice:100",
        "Bob:",
    ]


def test_apply_result_as_new_column(incomes):
    total = incomes.apply(lambda row: row.get_number("Income") * 2)
    assert incomes.add_column("Double", total).get_column("Double") == [2000.0, 4000.0]


def test_map_cols_numeric(incomes):
    result = incomes.map_cols_numeric(sum, "Income", "Bonus")
    assert result[0] == 1100.0
    assert math.isnan(result[1])


def test_map_cols_numeric_text_column(incomes):
    with pytest.raises(ColumnTypeError):
        incomes.map_cols_numeric(sum, "Name")
