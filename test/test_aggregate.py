import math

import pytest

from frosts import DataFrame
from frosts.compute.aggregate import (
    AGGREGATIONS,
    CountAggregation,
    GroupAggregation,
    MaxAggregation,
    MeanAggregation,
    MinAggregation,
    StdDevAggregation,
    SumAggregation,
    get_aggregation,
)
from frosts.errors import (
    ColumnTypeError,
    KeyCollisionError,
    MembershipError,
    PolicyError,
)

TEST_DATA = [
    ["city", "shop", "n_employees"],
    ["New York", "Shop A", 10],
    ["New York", "Shop B", 15],
    ["Los Angeles", "Shop A", 8],
    ["Los Angeles", "Shop A2", 12],
    ["New York", "Shop B", 20],
]


@pytest.fixture
def shops():
    return DataFrame(TEST_DATA)


@pytest.mark.parametrize(
    "aggregation, expected",
    [
        ("sum", [45.0, 20.0]),
        ("mean", [15.0, 10.0]),
        ("count", [3.0, 2.0]),
        ("min", [10.0, 8.0]),
        ("max", [20.0, 12.0]),
    ],
)
def test_group_by_single_key(shops, aggregation, expected):
    result = shops.group_by("city", {"n_employees": aggregation})
    assert result.columns == ["city", f"n_employees_{aggregation}"]
    assert result.get_column("city") == ["New York", "Los Angeles"]
    assert result.get_column(f"n_employees_{aggregation}") == expected


def test_group_by_multiple_keys(shops):
    result = shops.group_by(["city", "shop"], {"n_employees": "sum"})
    assert result.sort_by(["city", "shop"]).to_array() == [
        ["city", "shop", "n_employees_sum"],
        ["Los Angeles", "Shop A", 8.0],
        ["Los Angeles", "Shop A2", 12.0],
        ["New York", "Shop A", 10.0],
        ["New York", "Shop B", 35.0],
    ]


def test_group_by_multiple_aggregations(shops):
    result = shops.group_by("city", {"n_employees": ["sum", "count"], "shop": "count"})
    assert result.columns == [
        "city",
        "n_employees_sum",
        "n_employees_count",
        "shop_count",
    ]


def test_group_sums_add_up_to_column_sum(shops):
    grouped = shops.group_by("city", {"n_employees": "sum"})
    assert grouped.sum("n_employees_sum") == shops.sum("n_employees")


def test_numeric_keys_are_numbers_again():
    df = DataFrame([["year", "v"], [2020, 1], [2021, 2], [2020, 3]])
    result = df.group_by("year", {"v": "sum"})
    assert result.dtypes["year"] == "number"
    assert result.get_column("year") == [2020.0, 2021.0]


def test_count_excludes_blanks():
    df = DataFrame([["k", "v"], ["a", 1], ["a", ""], ["b", ""]])
    result = df.group_by("k", {"v": ["count", "sum"]})
    assert result.get_column("v_count") == [1.0, 0.0]
    assert result.get_column("v_sum") == [1.0, 0.0]


def test_mean_of_group_without_values_is_nan():
    df = DataFrame([["k", "v"], ["a", 1], ["b", ""]])
    means = df.group_by("k", {"v": "mean"}).get_column("v_mean")
    assert means[0] == 1.0
    assert math.isnan(means[1])


def test_std_dev_sample():
    df = DataFrame([["v"], *[[v] for v in [2, 4, 4, 4, 5, 5, 7, 9]]])
    assert df.std_dev("v") == pytest.approx(2.138089935)
    assert df.std_dev("v", bessel=False) == pytest.approx(2.0)


def test_std_dev_single_value_is_nan():
    assert math.isnan(DataFrame([["v"], [3]]).std_dev("v"))


def test_group_by_std_dev():
    df = DataFrame([["k", "v"], ["a", 1], ["a", 3], ["b", 5]])
    deviations = df.group_by("k", {"v": "std_dev"}).get_column("v_std_dev")
    assert deviations[0] == pytest.approx(math.sqrt(2))
    assert math.isnan(deviations[1])


def test_separator_in_key_values(shops):
    df = DataFrame([["k", "v"], ["a~~~b", 1]])
    with pytest.raises(KeyCollisionError, match="internal separator"):
        df.group_by("k", {"v": "sum"})


def test_separator_in_key_column_name():
    df = DataFrame([["k~~~1", "v"], ["a", 1]])
    with pytest.raises(KeyCollisionError, match="internal separator"):
        df.group_by("k~~~1", {"v": "sum"})


def test_numeric_aggregation_of_text_column(shops):
    with pytest.raises(ColumnTypeError, match="'shop' is not numeric"):
        shops.group_by("city", {"shop": "sum"})


def test_unknown_aggregation(shops):
    with pytest.raises(PolicyError, match="Unsupported aggregation 'median'"):
        shops.group_by("city", {"n_employees": "median"})


def test_group_by_missing_column(shops):
    with pytest.raises(MembershipError):
        shops.group_by("country", {"n_employees": "sum"})
    with pytest.raises(MembershipError):
        shops.group_by("city", {"employees": "sum"})


def test_group_by_empty_dataframe():
    df = DataFrame([["k", "v"]])
    assert df.group_by("k", {"v": "count"}).to_array() == [["k", "v_count"]]


def test_aggregations_registry():
    assert set(AGGREGATIONS) == {"sum", "mean", "count", "min", "max", "std_dev"}
    aggregation = get_aggregation("max", "price")
    assert isinstance(aggregation, MaxAggregation)
    assert aggregation.output_name == "price_max"
    assert str(aggregation) == "MaxAggregation(price)"


@pytest.mark.parametrize(
    "aggregation, expected",
    [
        (SumAggregation("v"), 0.0),
        (CountAggregation("v"), 0),
    ],
)
def test_aggregations_without_values(aggregation, expected):
    assert aggregation.compute([None, ""]) == expected


@pytest.mark.parametrize(
    "aggregation", [MeanAggregation("v"), MinAggregation("v"), MaxAggregation("v")]
)
def test_aggregations_without_values_are_nan(aggregation):
    assert math.isnan(aggregation.compute([None]))


def test_std_dev_population():
    assert StdDevAggregation("v", bessel=False).compute([1.0, 3.0]) == 1.0


def test_group_aggregation_str():
    grouping = GroupAggregation(["city"], [SumAggregation("n")], "~~~")
    assert str(grouping) == "GroupAggregation(keys=['city'], aggregations=[SumAggregation(n)])"


def test_group_aggregation_groups():
    grouping = GroupAggregation(["k"], [], "~~~")
    groups = grouping.group(["k", "v"], [["a", 1.0], ["b", 2.0], ["a", 3.0]])
    assert groups == {"a": [["a", 1.0], ["a", 3.0]], "b": [["b", 2.0]]}


def test_group_by_all_numeric_columns():
    df = DataFrame([["k", "a", "label", "b"], ["x", 1, "p", 2], ["x", 3, "q", 4], ["y", 5, "r", 6]])
    result = df.group_by("k", "all", "sum")
    assert result.to_array() == [
        ["k", "a_sum", "b_sum"],
        ["x", 4.0, 6.0],
        ["y", 5.0, 6.0],
    ]


def test_group_by_all_with_many_aggregations(shops):
    result = shops.group_by("city", "all", ["min", "max"])
    assert result.columns == ["city", "n_employees_min", "n_employees_max"]
    assert result.get_column("n_employees_max") == [20.0, 12.0]


def test_group_by_all_excludes_numeric_keys():
    df = DataFrame([["year", "n"], [2020, 1], [2020, 2], [2021, 3]])
    result = df.group_by("year", "all", "count")
    assert result.to_array() == [["year", "n_count"], [2020.0, 2.0], [2021.0, 1.0]]


def test_group_by_all_requires_agg(shops):
    with pytest.raises(PolicyError, match="requires an agg"):
        shops.group_by("city", "all")


def test_group_by_unknown_mode(shops):
    with pytest.raises(PolicyError, match='mapping or "all"'):
        shops.group_by("city", "every")
