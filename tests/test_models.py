# thirdpartylib
import pytest
# projectlib
from turnip_chart.data.models import (
    InputSeries,
    Possibility,
    PredictionSet,
    PriceRange,
    as_input_series,
    optional_price,
)
from turnip_chart.geometry.errors import (
    InvalidDomain,
    InvalidPattern,
    InvalidProbability,
    MalformedRange,
    MalformedSeries,
)


def test_price_range_validation():
    assert PriceRange(90, 110).degenerate is False
    assert PriceRange(100, 100).degenerate is True
    with pytest.raises(MalformedRange):
        PriceRange(120, 100)
    with pytest.raises(InvalidDomain):
        PriceRange(float("nan"), 100)
    with pytest.raises(InvalidDomain):
        PriceRange(None, 100)  # pyright: ignore[reportArgumentType]


def test_price_range_coerce():
    assert PriceRange.coerce({"min": 90, "max": 110}) == PriceRange(90, 110)
    assert PriceRange.coerce((90, 110)) == PriceRange(90, 110)
    with pytest.raises(MalformedRange):
        PriceRange.coerce({"min": 90})


def test_price_range_overlap_includes_touching():
    assert PriceRange(10, 20).overlaps(PriceRange(20, 30))
    assert not PriceRange(10, 20).overlaps(PriceRange(21, 30))


def test_input_series_splits_baseline():
    series = InputSeries.from_values([100, 90] + [None] * 11)
    assert series.baseline_price == 100.0
    assert series.observed_prices[0] == 90.0
    assert len(series.values) == 13
    assert list(series.known()) == [(0, 100.0), (1, 90.0)]


def test_input_series_rejects_bad_input():
    with pytest.raises(MalformedSeries):
        InputSeries.from_values([100] * 12)
    with pytest.raises(InvalidDomain):
        InputSeries.from_values([100, float("inf")] + [None] * 11)


def test_as_input_series_passes_through():
    series = InputSeries(None, (None,) * 12)
    assert as_input_series(series) is series
    assert list(series.known()) == []


def test_possibility_from_prices():
    possibility = Possibility.from_prices(
        2, "Decreasing", 0.25, [{"min": 100, "max": 100}] * 13
    )
    assert possibility.baseline_price == PriceRange(100, 100)
    assert len(possibility.predicted_prices) == 12
    assert [slot for slot, _ in possibility.predicted()] == list(range(1, 13))
    assert possibility.prices[0] == possibility.baseline_price


def test_possibility_validation():
    with pytest.raises(MalformedSeries):
        Possibility.from_prices(0, "Fluctuating", 0.5, [(1, 2)] * 12)
    with pytest.raises(InvalidProbability):
        Possibility.from_prices(0, "Fluctuating", 1.5, [(1, 2)] * 13)
    with pytest.raises(InvalidProbability):
        Possibility.from_prices(0, "Fluctuating", float("nan"), [(1, 2)] * 13)
    with pytest.raises(MalformedRange):
        Possibility.from_prices(0, "Fluctuating", 0.5, [(3, 2)] * 13)


@pytest.mark.parametrize("probability", [None, "abc", float("inf")])
def test_possibility_rejects_non_numeric_probability(probability):
    with pytest.raises(InvalidProbability):
        Possibility.from_prices(0, "Fluctuating", probability, [(1, 2)] * 13)


@pytest.mark.parametrize("number", [2.5, None, "x", True])
def test_possibility_rejects_non_integer_pattern(number):
    with pytest.raises(InvalidPattern):
        Possibility.from_prices(number, "Decreasing", 0.5, [(1, 2)] * 13)


def test_possibility_accepts_whole_float_pattern():
    possibility = Possibility.from_prices(2.0, "Decreasing", 0.5, [(1, 2)] * 13)
    assert possibility.pattern_number == 2
    assert type(possibility.pattern_number) is int


def test_prediction_set_takes_first_as_baseline(make_possibility):
    baseline = make_possibility(4, 1.0)
    other = make_possibility(1, 0.5)
    predictions = PredictionSet.from_possibilities([baseline, other])
    assert predictions.baseline is baseline
    assert predictions.predictions == (other,)
    assert min(predictions.domain_values()) == 100.0
    with pytest.raises(InvalidDomain):
        PredictionSet.from_possibilities([])


def test_optional_price():
    assert optional_price(None) is None
    assert optional_price(float("nan")) is None
    assert optional_price(97) == 97.0
