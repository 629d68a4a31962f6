import math

import pytest

from frosts import DataFrame
from frosts.compute.sorting import compare_values
from frosts.errors import MembershipError, PolicyError


@pytest.fixture
def people():
    return DataFrame(
        [
            ["name", "age", "city"],
            ["Bob", 30, "Rome"],
            ["Alice", 25, "Milan"],
            ["Carl", 30, "Turin"],
            ["Dora", "", "Rome"],
        ]
    )


def test_sort_single_column(people):
    assert people.sort_by("name").get_column("name") == ["Alice", "Bob", "Carl", "Dora"]


def test_sort_descending(people):
    result = people.sort_by("name", ascending=False)
    assert result.get_column("name") == ["Dora", "Carl", "Bob", "Alice"]


def test_sort_is_stable(people):
    assert people.sort_by("age").get_column("name") == ["Alice", "Bob", "Carl", "Dora"]


def test_blanks_go_last_in_both_directions(people):
    assert people.sort_by("age").get_column("name")[-1] == "Dora"
    assert people.sort_by("age", ascending=False).get_column("name") == [
        "Bob",
        "Carl",
        "Alice",
        "Dora",
    ]


def test_sort_multiple_columns(people):
    result = people.sort_by(["city", "age"], ascending=[True, False])
    assert result.get_column("name") == ["Alice", "Bob", "Dora", "Carl"]


def test_sort_with_mapping(people):
    result = people.sort_by({"age": False, "name": False})
    assert result.get_column("name") == ["Carl", "Bob", "Alice", "Dora"]


def test_sort_inplace(people):
    assert people.sort_by("name", inplace=True) is people
    assert people.get_column("name")[0] == "Alice"


def test_sort_ascending_length_mismatch(people):
    with pytest.raises(PolicyError, match="same length"):
        people.sort_by(["name", "age"], ascending=[True, False, True])


def test_sort_missing_column(people):
    with pytest.raises(MembershipError):
        people.sort_by("height")


def test_compare_values_falls_back_to_text():
    assert compare_values(1.0, 2.0) == -1
    assert compare_values("b", "a") == 1
    assert compare_values(10.0, "9") == -1
    assert compare_values("x", "x") == 0


def test_sort_mixed_column():
    df = DataFrame([["v"], ["b"], ["10"], ["a"]])
    assert df.sort_by("v").get_column("v") == ["10", "a", "b"]


def test_nan_goes_last_in_both_directions():
    df = DataFrame([["v"], [3.0], [float("nan")], [1.0], [2.0], [0.0]])
    ascending = df.sort_by("v").get_column("v")
    assert ascending[:4] == [0.0, 1.0, 2.0, 3.0]
    assert math.isnan(ascending[4])
    descending = df.sort_by("v", ascending=False).get_column("v")
    assert descending[:4] == [3.0, 2.0, 1.0, 0.0]
    assert math.isnan(descending[4])
