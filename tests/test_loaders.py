# stdlib
import json
# thirdpartylib
import polars as pl
import pytest
# projectlib
from turnip_chart.data.loaders import (
    load_possibilities,
    parse_prices,
    possibilities_from_frame,
)
from turnip_chart.data.models import PriceRange
from turnip_chart.geometry.errors import (
    InvalidDomain,
    InvalidProbability,
    MalformedSeries,
)


def record(number, description, probability, low, high):
    prices = [{"min": 100, "max": 100}] + [
        {"min": low, "max": high} for _ in range(12)
    ]
    return {
        "pattern_number": number,
        "pattern_description": description,
        "category_total_probability": probability,
        "prices": prices,
    }


@pytest.fixture
def records():
    return [
        record(4, "All patterns", 1.0, 40, 600),
        record(1, "Large spike", 0.6, 40, 600),
        record(2, "Decreasing", 0.4, 40, 90),
    ]


def test_load_possibilities(tmp_path, records):
    path = tmp_path / "possibilities.json"
    path.write_text(json.dumps(records), encoding="utf-8")
    predictions = load_possibilities(path)
    assert predictions.baseline.pattern_number == 4
    assert [p.pattern_description for p in predictions.predictions] == [
        "Large spike", "Decreasing"
    ]
    assert predictions.predictions[1].predicted_prices[0] == PriceRange(40, 90)


def test_baseline_may_omit_probability(tmp_path, records):
    del records[0]["category_total_probability"]
    path = tmp_path / "possibilities.json"
    path.write_text(json.dumps(records), encoding="utf-8")
    predictions = load_possibilities(path)
    assert predictions.baseline.category_total_probability == 1.0
    assert predictions.predictions[0].category_total_probability == 0.6


def test_baseline_only_file_without_probability(tmp_path, records):
    baseline = records[0]
    del baseline["category_total_probability"]
    path = tmp_path / "possibilities.json"
    path.write_text(json.dumps([baseline]), encoding="utf-8")
    predictions = load_possibilities(path)
    assert predictions.baseline.category_total_probability == 1.0
    assert predictions.predictions == ()


def test_prediction_requires_probability(records):
    records[1]["category_total_probability"] = None
    with pytest.raises(InvalidProbability):
        possibilities_from_frame(pl.DataFrame(records))


def test_load_possibilities_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_possibilities(tmp_path / "missing.json")


def test_frame_requires_fields(records):
    df = pl.DataFrame(records).drop("prices")
    with pytest.raises(MalformedSeries):
        possibilities_from_frame(df)


def test_frame_requires_rows(records):
    df = pl.DataFrame(records).clear()
    with pytest.raises(InvalidDomain):
        possibilities_from_frame(df)


def test_parse_prices():
    series = parse_prices("97,86,,90")
    assert series.values[:5] == (97.0, 86.0, None, 90.0, None)
    assert len(series.values) == 13
    assert parse_prices("97.86.90").values[:3] == (97.0, 86.0, 90.0)
    assert parse_prices("").values == (None,) * 13


def test_parse_prices_rejects_bad_input():
    with pytest.raises(InvalidDomain):
        parse_prices("97,abc")
    with pytest.raises(MalformedSeries):
        parse_prices(",".join(["90"] * 14))
