import math

import pytest

from frosts import DataFrame, FrostConfig
from frosts.compute.aggregate import MaxAggregation, MinAggregation, median, quantile
from frosts.errors import ColumnTypeError, MembershipError, PolicyError


@pytest.fixture
def numbers():
    return DataFrame([["v", "w", "label"], [1, 10, "a"], [2, "", "b"], [3, 30, "c"], [4, 40, "d"]])


def test_basic_statistics(numbers):
    assert numbers.count("v") == 4
    assert numbers.count("w") == 3
    assert numbers.count("label") == 4
    assert numbers.sum("v") == 10.0
    assert numbers.mean("v") == 2.5
    assert numbers.average("w") == pytest.approx(80 / 3)
    assert numbers.min("v") == 1.0
    assert numbers.max("w") == 40.0


def test_quantile_interpolates(numbers):
    assert numbers.quantile("v", 50) == 2.5
    assert numbers.quantile("v", 25) == 1.75
    assert numbers.quantile("v", 0) == 1.0
    assert numbers.quantile("v", 100) == 4.0
    assert numbers.median("w") == 30.0


def test_quantile_out_of_range(numbers):
    with pytest.raises(PolicyError, match="between 0 and 100"):
        numbers.quantile("v", 101)


def test_quantile_helpers():
    assert quantile([4.0, 1.0, 3.0, 2.0], 50) == 2.5
    assert median([5.0, None, 1.0]) == 3.0
    assert math.isnan(quantile([], 50))


@pytest.mark.parametrize("method", ["sum", "mean", "min", "max", "std_dev", "median"])
def test_numeric_statistics_require_numbers(numbers, method):
    with pytest.raises(ColumnTypeError, match="'label' is not numeric"):
        getattr(numbers, method)("label")


def test_statistics_of_missing_column(numbers):
    with pytest.raises(MembershipError):
        numbers.sum("z")
    with pytest.raises(MembershipError):
        numbers.count("z")


def test_describe(numbers):
    result = numbers.describe()
    assert result.columns == [
        "Column",
        "Count",
        "Mean",
        "Standard Deviation",
        "Minimum",
        "1st Quartile",
        "Median",
        "3rd Quartile",
        "Maximum",
    ]
    assert result.get_column("Column") == ["v", "w"]
    v_row = result.to_array(headers=False)[0]
    assert v_row[1] == 4.0
    assert v_row[2] == 2.5
    assert v_row[3] == pytest.approx(1.2909944)
    assert v_row[4:] == [1.0, 1.75, 2.5, 3.25, 4.0]


def test_describe_without_numeric_columns():
    result = DataFrame([["a"], ["x"]]).describe()
    assert len(result) == 0


@pytest.fixture
def unparsed_text():
    # "x" is outside of the type detection sample, so the column is numeric.
    return DataFrame([["v"], ["1"], ["x"], ["3"]], config=FrostConfig(sample_size=2))


def test_nan_propagates_to_statistics(unparsed_text):
    assert unparsed_text.dtypes == {"v": "number"}
    assert math.isnan(unparsed_text.get_column("v")[1])
    for statistic in (unparsed_text.min, unparsed_text.max, unparsed_text.median):
        assert math.isnan(statistic("v"))
    assert math.isnan(unparsed_text.quantile("v", 25))
    assert math.isnan(unparsed_text.sum("v"))


def test_nan_propagates_to_group_by(unparsed_text):
    df = unparsed_text.add_column("k", ["a", "a", "a"])
    result = df.group_by("k", {"v": ["min", "max", "sum"]})
    assert result.columns == ["k", "v_min", "v_max", "v_sum"]
    assert all(math.isnan(v) for v in result.to_array(headers=False)[0][1:])


def test_nan_propagates_to_describe(unparsed_text):
    summary = dict(zip(*unparsed_text.describe().to_array()))
    assert math.isnan(summary["Minimum"])
    assert math.isnan(summary["Median"])
    assert math.isnan(summary["Maximum"])


def test_min_max_aggregations_with_nan():
    assert math.isnan(MinAggregation("v").compute([1.0, math.nan]))
    assert math.isnan(MaxAggregation("v").compute([math.nan, 1.0]))
    assert math.isnan(quantile([1.0, math.nan, 3.0], 50))
    assert MinAggregation("v").compute([2.0, 1.0]) == 1.0
