# stdlib
from dataclasses import dataclass, asdict
from typing import List, Optional
# thirdpartylib
import pandas as pd
# projectlib
from turnip_chart.geometry.transform import ChartGeometry
from turnip_chart.utils.typing import PrimitiveKind

# Stroke colors of the bar outlines and the extent/input lines
BAR_STROKE = "#0004"
LINE_STROKE = "#000"


@dataclass(frozen=True, slots=True)
class Rect:
    slot: int
    x: float
    y: int
    width: float
    height: int
    color: str


@dataclass(frozen=True, slots=True)
class Segment:
    """Horizontal line spanning one slot's band."""
    slot: int
    x1: int
    x2: int
    y: int


def bar_rects(geometry: ChartGeometry) -> List[Rect]:
    """Pixel rectangles of every pattern's bars, back to front."""
    x, y = geometry.x, geometry.y
    rects = []
    for pattern in geometry.patterns:
        width = x.bandwidth() - pattern.x_pad * 2
        for bar in pattern.prices:
            top = y(bar.max)
            rects.append(
                Rect(
                    slot=bar.slot,
                    x=pattern.x_pad + x.slot(bar.slot),
                    y=top,
                    width=width,
                    height=y(bar.min) - top,
                    color=pattern.color,
                )
            )
    return rects

def _segment(geometry: ChartGeometry, slot: int, value: float) -> Segment:
    x1 = geometry.x.slot(slot)
    return Segment(slot, x1, x1 + geometry.x.bandwidth(), geometry.y(value))

def extent_segments(geometry: ChartGeometry) -> List[Segment]:
    """Lower then upper bracket line of every day extent."""
    lower = [_segment(geometry, e.slot, e.min) for e in geometry.extents]
    upper = [_segment(geometry, e.slot, e.max) for e in geometry.extents]
    return lower + upper

def input_segments(geometry: ChartGeometry) -> List[Segment]:
    return [_segment(geometry, m.slot, m.value) for m in geometry.inputs]

def primitives_frame(geometry: ChartGeometry) -> pd.DataFrame:
    """
    Tabulate every drawable primitive in paint order.

    Bars come first (back to front), then extent lines, then input
    lines. Rectangle rows fill ``x``, ``y``, ``width`` and ``height``;
    line rows fill ``x1``, ``x2``, ``y1`` and ``y2``.

    Parameters
    ----------
    geometry : ChartGeometry
        Output of the geometry transform.

    Returns
    -------
    pandas.DataFrame
        One row per primitive with columns ``kind, slot, x, y, width,
        height, x1, x2, y1, y2, color``.
    """
    rows: List[dict[str, object]] = []

    def add(kind: PrimitiveKind, record: dict[str, object],
            color: Optional[str] = None) -> None:
        rows.append({"kind": kind, **record, "color": color})

    for rect in bar_rects(geometry):
        add("bar", asdict(rect), rect.color)
    for kind, segments in (
        ("extent", extent_segments(geometry)),
        ("input", input_segments(geometry)),
    ):
        for seg in segments:
            add(
                kind,
                {
                    "slot": seg.slot,
                    "x1": seg.x1,
                    "x2": seg.x2,
                    "y1": seg.y,
                    "y2": seg.y,
                },
                LINE_STROKE,
            )
    columns = [
        "kind", "slot", "x", "y", "width", "height",
        "x1", "x2", "y1", "y2", "color",
    ]
    return pd.DataFrame(rows, columns=columns)
