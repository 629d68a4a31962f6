import pytest

from frosts import DataFrame, equal, not_blank
from frosts.errors import DimensionMismatchError, MembershipError


@pytest.fixture
def employees():
    return DataFrame(
        [
            ["Name", "Dept", "Salary"],
            ["Alice", "Eng", 120],
            ["Bob", "HR", 85],
            ["Carol", "Eng", 95],
            ["Dan", "", 70],
        ]
    )


def test_filter(employees):
    result = employees.filter("Salary", lambda v: v > 90)
    assert result.get_column("Name") == ["Alice", "Carol"]
    assert len(employees) == 4


def test_filter_inplace(employees):
    assert employees.filter("Dept", equal("Eng"), inplace=True) is employees
    assert employees.get_column("Name") == ["Alice", "Carol"]


def test_filter_no_rows_keeps_columns(employees):
    result = employees.filter("Salary", lambda v: v > 1000)
    assert result.shape == (0, 3)
    assert result.columns == ["Name", "Dept", "Salary"]


def test_filter_missing_column(employees):
    with pytest.raises(MembershipError):
        employees.filter("Team", not_blank)


def test_query(employees):
    result = employees.query(lambda row: row["Dept"] == "Eng" and row["Salary"] < 100)
    assert result.get_column("Name") == ["Carol"]


def test_query_missing_column(employees):
    with pytest.raises(MembershipError):
        employees.query(lambda row: row["Team"] == "Red")


def test_is_in(employees):
    assert employees.is_in("Dept", ["HR", ""]).get_column("Name") == ["Bob", "Dan"]
    assert employees.isin("Name", {"Alice"}).shape == (1, 3)


def test_isnt_in(employees):
    assert employees.isnt_in("Dept", ["Eng"]).get_column("Name") == ["Bob", "Dan"]


def test_unique_single_column(employees):
    assert employees.unique("Dept").to_array() == [["Dept"], ["Eng"], ["HR"], [""]]


def test_unique_combinations():
    df = DataFrame([["a", "b"], [1, "x"], [1, "x"], [1, "y"], [2, "x"]])
    assert df.unique("a", "b").to_array() == [
        ["a", "b"],
        [1.0, "x"],
        [1.0, "y"],
        [2.0, "x"],
    ]


def test_unique_all_columns():
    df = DataFrame([["a", "b"], [1, "x"], [1, "x"]])
    assert df.unique().shape == (1, 2)


def test_drop_rows(employees):
    result = employees.drop_rows(0, -1)
    assert result.get_column("Name") == ["Bob", "Carol"]


def test_drop_rows_out_of_range_negative(employees):
    with pytest.raises(DimensionMismatchError, match="got index -5"):
        employees.drop_rows(-5)


def test_drop_rows_ignores_positions_past_the_end(employees):
    assert len(employees.drop_rows(10)) == 4


def test_head_and_tail(employees):
    assert employees.head(2).get_column("Name") == ["Alice", "Bob"]
    assert employees.tail(2).get_column("Name") == ["Carol", "Dan"]


def test_head_and_tail_of_small_dataframe_return_it(employees):
    assert employees.head() is employees
    assert employees.tail(4) is employees


def test_unique_integral_numbers_are_the_same_value():
    df = DataFrame([["v"], [1], [1.0], ["x"], ["1"]])
    assert df.dtypes == {"v": "string"}
    assert df.unique("v").to_array() == [["v"], [1], ["x"], ["1"]]
