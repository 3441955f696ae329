# thirdpartylib
import pytest
# projectlib
from turnip_chart.geometry.transform import update_chart
from turnip_chart.visualization.primitives import (
    LINE_STROKE,
    bar_rects,
    extent_segments,
    input_segments,
    primitives_frame,
)


@pytest.fixture
def geometry(make_possibility, baseline):
    possibilities = [
        baseline,
        make_possibility(0, 0.8, {1: (90, 110), 2: (95, 120)}),
        make_possibility(1, 0.4, {1: (85, 140)}),
    ]
    inputs = [100.0, 98.0] + [None] * 11
    return update_chart(inputs, possibilities, width=1000)


def test_bar_rects(geometry):
    x, y = geometry.x, geometry.y
    rects = bar_rects(geometry)
    # Large spike is drawn first, behind fluctuating
    assert [r.slot for r in rects] == [1, 1, 2]
    spike, fluct = rects[0], rects[1]
    assert fluct.x == x.slot(1)
    assert fluct.width == x.bandwidth()
    assert fluct.y == y(110)
    assert fluct.height == y(90) - y(110)
    assert fluct.height > 0
    # factor 0.6: inset by a fifth of the band on each side
    assert spike.x == pytest.approx(x.slot(1) + 0.2 * 67)
    assert spike.width == pytest.approx(67 - 0.4 * 67)
    assert spike.color == "#4dac26"


def test_line_segments_span_band(geometry):
    x = geometry.x
    extents = extent_segments(geometry)
    # Lower then upper bracket for each of the three baseline slots
    assert len(extents) == 6
    assert [s.slot for s in extents] == [1, 2, 3, 1, 2, 3]
    assert extents[0].y == geometry.y(80)
    assert extents[3].y == geometry.y(120)
    for seg in extents:
        assert seg.x2 - seg.x1 == x.bandwidth()
    inputs = input_segments(geometry)
    assert [(s.slot, s.y) for s in inputs] == [
        (0, geometry.y(100)),
        (1, geometry.y(98)),
    ]


def test_primitives_frame(geometry):
    df = primitives_frame(geometry)
    assert df["kind"].value_counts().to_dict() == {
        "extent": 6, "bar": 3, "input": 2
    }
    assert list(df["kind"].iloc[:3]) == ["bar"] * 3
    lines = df[df["kind"] != "bar"]
    assert (lines["y1"] == lines["y2"]).all()
    assert (lines["color"] == LINE_STROKE).all()
    assert df[df["kind"] == "bar"]["width"].notna().all()
