# stdlib
import math
from pathlib import Path
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple
# projectlib
from turnip_chart.config.env import CHART_WIDTH
from turnip_chart.data.models import (
    InputSeries,
    Possibility,
    PredictionSet,
    PriceRange,
    as_input_series,
    as_prediction_set,
)
from turnip_chart.data.naming import slot_labels, validate_labels
from turnip_chart.data.schemas import Pattern
from turnip_chart.geometry.errors import InvalidPattern
from turnip_chart.geometry.layout import ChartLayout
from turnip_chart.geometry.scales import BandScale, PowScale, build_scales
from turnip_chart.utils.formatting import display_percentage
from turnip_chart.utils.logging import Logger
from turnip_chart.utils.typing import Address, PriceList, Verbosity

# Number of bar widths a pattern can be drawn with
CONFIDENCE_TIERS = 5
# Members of one pattern must agree on its probability within this
PROBABILITY_TOLERANCE = 1e-9


@dataclass(frozen=True, slots=True)
class PriceBar:
    """Merged predicted range of one pattern at one slot."""
    slot: int
    min: float
    max: float


@dataclass(frozen=True, slots=True)
class PatternGroup:
    """All predictions of one pattern, ready to be drawn as bars."""
    pattern: Pattern
    description: str
    probability: float
    factor: float
    x_pad: float
    prices: Tuple[PriceBar, ...]

    @property
    def order(self) -> int:
        return self.pattern.order

    @property
    def color(self) -> str:
        return self.pattern.color

    @property
    def color_fg(self) -> str:
        return self.pattern.color_fg


@dataclass(frozen=True, slots=True)
class DayExtent:
    """Baseline min/max bracket at one slot."""
    slot: int
    min: float
    max: float


@dataclass(frozen=True, slots=True)
class InputMarker:
    """Observed price at one slot."""
    slot: int
    value: float


@dataclass(frozen=True, slots=True)
class LegendEntry:
    description: str
    probability: float
    label: str
    color: str
    color_fg: str


@dataclass(frozen=True, slots=True)
class ChartGeometry:
    """
    Everything the presentation layer needs to draw one chart.

    ``patterns`` is in draw order (back to front), ``legend`` in
    descending probability.
    """
    layout: ChartLayout
    labels: Tuple[str, ...]
    x: BandScale
    y: PowScale
    patterns: Tuple[PatternGroup, ...]
    extents: Tuple[DayExtent, ...]
    inputs: Tuple[InputMarker, ...]
    legend: Tuple[LegendEntry, ...]


def confidence_factor(probability: float, max_probability: float) -> float:
    """
    Quantize a probability relative to the most likely pattern.

    The ratio is rounded up to the next fifth, so the result is one of
    0.2, 0.4, 0.6, 0.8 or 1.0. Patterns with zero probability land in
    the narrowest tier; if every pattern has zero probability they all
    get full width.

    Examples
    --------
    >>> confidence_factor(0.5, 1.0)
    0.6
    >>> confidence_factor(0.1, 1.0)
    0.2
    """
    if max_probability <= 0:
        return 1.0
    # Round before ceil so float noise cannot bump a ratio up a tier
    tiers = math.ceil(
        round(probability / max_probability * CONFIDENCE_TIERS, 9)
    )
    tiers = min(CONFIDENCE_TIERS, max(1, tiers))
    return tiers / CONFIDENCE_TIERS

def merge_range(merged: List[PriceBar], slot: int, price: PriceRange) -> None:
    """
    Fold one predicted range into a pattern's bars, in place.

    Every bar at ``slot`` that overlaps (or touches) ``price`` is
    absorbed into a single bar, so a range bridging two existing bars
    joins them. Degenerate ranges are ignored.
    """
    if price.degenerate:
        return
    keep: List[PriceBar] = []
    for bar in merged:
        span = PriceRange(bar.min, bar.max)
        if bar.slot == slot and price.overlaps(span):
            price = PriceRange(min(price.min, span.min), max(price.max, span.max))
        else:
            keep.append(bar)
    keep.append(PriceBar(slot, price.min, price.max))
    merged[:] = keep

def merge_possibilities(
        members: Sequence[Possibility],
    ) -> Tuple[PriceBar, ...]:
    """Union of the predicted ranges of ``members``, sorted by slot."""
    merged: List[PriceBar] = []
    for possibility in members:
        for slot, price in possibility.predicted():
            merge_range(merged, slot, price)
    return tuple(sorted(merged, key=lambda bar: (bar.slot, bar.min)))

def day_extents(baseline: Possibility) -> Tuple[DayExtent, ...]:
    """Baseline brackets for predicted slots that are not yet pinned."""
    return tuple(
        DayExtent(slot, price.min, price.max)
        for slot, price in baseline.predicted()
        if not price.degenerate
    )

def input_markers(inputs: InputSeries) -> Tuple[InputMarker, ...]:
    """One marker per observed slot, the purchase slot included."""
    return tuple(InputMarker(slot, value) for slot, value in inputs.known())


class GeometryTransform(object):
    """
    Turn observed prices and pattern predictions into chart geometry.

    The transform is stateless between calls: every ``transform`` call
    validates its input, builds fresh scales and recomputes every
    primitive. Nothing is returned if any part of the input is
    rejected.
    """

    def __init__(
            self,
            *,
            verbosity: Verbosity = 0,
            log_address: Address = Path.cwd(),
            write_log: bool = False,
        ) -> None:
        """
        Parameters
        ----------
        verbosity : Verbosity, default 0
            1 logs a summary per update, 2 adds per-pattern detail.
        log_address : Address, default Path.cwd()
            Directory of ``log.txt`` when ``write_log`` is True.
        write_log : bool, default False
            Append log messages to a file instead of printing them.
        """
        self.log = Logger(
            verbose=verbosity, log_dir=log_address, write_log=write_log
        )

    def group(
            self, predictions: Sequence[Possibility]
        ) -> Dict[Pattern, List[Possibility]]:
        """
        Group predictions by pattern in first-appearance order.

        Raises
        ------
        InvalidPattern
            If a pattern number is outside the palette, or members of
            one pattern disagree on its probability.
        """
        groups: Dict[Pattern, List[Possibility]] = {}
        for possibility in predictions:
            pattern = Pattern.from_number(possibility.pattern_number)
            members = groups.setdefault(pattern, [])
            if members:
                expected = members[0].category_total_probability
                actual = possibility.category_total_probability
                if abs(expected - actual) > PROBABILITY_TOLERANCE:
                    raise InvalidPattern(
                        f"Pattern {pattern.value} has inconsistent "
                        f"probabilities {expected} and {actual}."
                    )
            members.append(possibility)
        return groups

    def pattern_groups(
            self,
            groups: Dict[Pattern, List[Possibility]],
            bandwidth: float,
        ) -> List[PatternGroup]:
        """Merge each group's ranges and size its bars by confidence."""
        if not groups:
            return []
        max_probability = max(
            members[0].category_total_probability
            for members in groups.values()
        )
        result = []
        for pattern, members in groups.items():
            first = members[0]
            factor = confidence_factor(
                first.category_total_probability, max_probability
            )
            prices = merge_possibilities(members)
            self.log(
                f"Pattern {pattern.name}: {len(members)} possibilities "
                f"merged into {len(prices)} bars, factor {factor}",
                verbosity=2,
            )
            result.append(
                PatternGroup(
                    pattern=pattern,
                    description=first.pattern_description,
                    probability=first.category_total_probability,
                    factor=factor,
                    # Narrow bars as probability decreases
                    x_pad=(1 - factor) * bandwidth / 2,
                    prices=prices,
                )
            )
        return result

    def legend(self, patterns: Sequence[PatternGroup]) -> List[LegendEntry]:
        # sorted() is stable, so ties keep their grouping order
        ordered = sorted(patterns, key=lambda p: p.probability, reverse=True)
        return [
            LegendEntry(
                description=p.description,
                probability=p.probability,
                label=display_percentage(p.probability),
                color=p.color,
                color_fg=p.color_fg,
            )
            for p in ordered
        ]

    def transform(
            self,
            inputs: InputSeries,
            predictions: PredictionSet,
            *,
            width: float = CHART_WIDTH,
            labels: Optional[Sequence[str]] = None,
        ) -> ChartGeometry:
        """
        Compute the full chart geometry.

        Parameters
        ----------
        inputs : InputSeries
            Observed prices.
        predictions : PredictionSet
            Baseline record and per-pattern predictions.
        width : float, default ``CHART_WIDTH``
            Measured pixel width of the drawing surface.
        labels : Sequence[str], optional
            Thirteen localized slot labels. English labels are used if
            omitted.

        Returns
        -------
        ChartGeometry
            Scales and primitives for the presentation layer.

        Raises
        ------
        ChartDataError
            Any of its subclasses when the input is rejected.
        """
        labels = (
            slot_labels() if labels is None else validate_labels(labels)
        )
        layout = ChartLayout.from_width(width)
        groups = self.group(predictions.predictions)
        # Vertical domain covers the input and the whole baseline
        values = [value for _, value in inputs.known()]
        values.extend(predictions.domain_values())
        x, y = build_scales(layout, labels, values)

        patterns = self.pattern_groups(groups, x.bandwidth())
        legend = self.legend(patterns)
        patterns.sort(key=lambda p: p.order)
        extents = day_extents(predictions.baseline)
        inputs_drawn = input_markers(inputs)
        self.log(
            f"Chart update: {len(patterns)} patterns, "
            f"{sum(len(p.prices) for p in patterns)} bars, "
            f"{len(extents)} extents, {len(inputs_drawn)} inputs, "
            f"price domain {y.domain}",
            verbosity=1,
        )
        return ChartGeometry(
            layout=layout,
            labels=labels,
            x=x,
            y=y,
            patterns=tuple(patterns),
            extents=extents,
            inputs=inputs_drawn,
            legend=tuple(legend),
        )


def update_chart(
        input: "InputSeries | PriceList",
        possibilities: "PredictionSet | Sequence[Possibility]",
        *,
        width: float = CHART_WIDTH,
        labels: Optional[Sequence[str]] = None,
        verbosity: Verbosity = 0,
    ) -> ChartGeometry:
    """
    Build the chart geometry for one update.

    Parameters
    ----------
    input : InputSeries | Sequence[float | None]
        Observed prices, either as an ``InputSeries`` or a flat list of
        13 prices with ``None`` for slots not yet observed.
    possibilities : PredictionSet | Sequence[Possibility]
        Predictions. A plain sequence is read with its first record as
        the baseline, the way the predictor emits them.
    width : float, default ``CHART_WIDTH``
        Measured pixel width of the drawing surface.
    labels : Sequence[str], optional
        Thirteen localized slot labels.
    verbosity : Verbosity, default 0
        Logging verbosity.

    Returns
    -------
    ChartGeometry
        Scales and primitives for the presentation layer.
    """
    transform = GeometryTransform(verbosity=verbosity)
    return transform.transform(
        as_input_series(input),
        as_prediction_set(possibilities),
        width=width,
        labels=labels,
    )
