# stdlib
import math
import numbers
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence, Tuple
# projectlib
from turnip_chart.data.schemas import (
    BASELINE_SLOT,
    PREDICTED_SLOTS,
    SLOT_COUNT,
)
from turnip_chart.geometry.errors import (
    InvalidDomain,
    InvalidPattern,
    InvalidProbability,
    MalformedRange,
    MalformedSeries,
)
from turnip_chart.utils.typing import Price, PriceList, RangeRecord

def _finite(value: float, what: str) -> float:
    """Coerce to float, rejecting NaN and infinities."""
    try:
        value = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidDomain(f"{what} must be a number, got {value!r}.") from e
    if not math.isfinite(value):
        raise InvalidDomain(f"{what} must be a finite number, got {value}.")
    return value

def _check_length(values: Sequence[object], what: str) -> None:
    if len(values) != SLOT_COUNT:
        raise MalformedSeries(
            f"{what} must cover {SLOT_COUNT} slots, got {len(values)}."
        )

def _pattern_number(value: object) -> int:
    """Accept whole numbers only, never truncating."""
    if isinstance(value, bool):
        raise InvalidPattern(f"Pattern number {value!r} is not an integer.")
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, numbers.Real) and float(value).is_integer():
        return int(value)
    raise InvalidPattern(f"Pattern number {value!r} is not an integer.")

def _probability(value: object, pattern: int) -> float:
    try:
        probability = float(value)  # pyright: ignore[reportArgumentType]
    except (TypeError, ValueError) as e:
        raise InvalidProbability(
            f"Probability {value!r} of pattern {pattern} is not a number."
        ) from e
    if not math.isfinite(probability) or not 0.0 <= probability <= 1.0:
        raise InvalidProbability(
            f"Probability {probability} of pattern {pattern} is outside "
            "[0, 1]."
        )
    return probability


@dataclass(frozen=True, slots=True)
class PriceRange:
    """Predicted price bounds for one slot under one possibility."""
    min: float
    max: float

    def __post_init__(self) -> None:
        low = _finite(self.min, "Range minimum")
        high = _finite(self.max, "Range maximum")
        if low > high:
            raise MalformedRange(
                f"Range minimum {low} exceeds maximum {high}."
            )
        object.__setattr__(self, "min", low)
        object.__setattr__(self, "max", high)

    @classmethod
    def coerce(cls, record: "RangeRecord | PriceRange") -> "PriceRange":
        """Build from a ``{"min", "max"}`` mapping or a ``(min, max)`` pair."""
        if isinstance(record, PriceRange):
            return record
        if isinstance(record, dict):
            try:
                return cls(record["min"], record["max"])
            except KeyError as e:
                raise MalformedRange(
                    f"Price range record {record!r} lacks {e.args[0]!r}."
                ) from e
        low, high = record
        return cls(low, high)

    @property
    def degenerate(self) -> bool:
        """True when the range collapses to a single price."""
        return self.min == self.max

    def overlaps(self, other: "PriceRange") -> bool:
        # Touching ranges count as overlapping
        return self.min <= other.max and self.max >= other.min


@dataclass(frozen=True, slots=True)
class InputSeries:
    """
    Prices the user has observed over the week.

    ``baseline_price`` is the Sunday purchase price (slot 0) and
    ``observed_prices`` the twelve Monday AM..Saturday PM slots. ``None``
    marks a slot that has not been observed yet.
    """
    baseline_price: Price
    observed_prices: Tuple[Price, ...]

    def __post_init__(self) -> None:
        if len(self.observed_prices) != len(PREDICTED_SLOTS):
            raise MalformedSeries(
                f"Expected {len(PREDICTED_SLOTS)} observed prices, "
                f"got {len(self.observed_prices)}."
            )
        object.__setattr__(
            self,
            "baseline_price",
            self._clean(self.baseline_price, BASELINE_SLOT),
        )
        object.__setattr__(
            self,
            "observed_prices",
            tuple(
                self._clean(value, slot)
                for slot, value in zip(PREDICTED_SLOTS, self.observed_prices)
            ),
        )

    @staticmethod
    def _clean(value: Price, slot: int) -> Price:
        if value is None:
            return None
        return _finite(value, f"Input price at slot {slot}")

    @classmethod
    def from_values(cls, values: PriceList) -> "InputSeries":
        """Split a flat 13-slot price list into baseline and observed."""
        values = list(values)
        _check_length(values, "Input series")
        return cls(values[0], tuple(values[1:]))

    @property
    def values(self) -> Tuple[Price, ...]:
        """All 13 slots in order, slot 0 first."""
        return (self.baseline_price, *self.observed_prices)

    def known(self) -> Iterator[Tuple[int, float]]:
        """Yield ``(slot, price)`` for every observed slot."""
        for slot, value in enumerate(self.values):
            if value is not None:
                yield slot, value


@dataclass(frozen=True, slots=True)
class Possibility:
    """
    One concrete predicted price trajectory.

    The pattern number is kept as a plain integer: the aggregate
    baseline record carries a number outside the pattern palette, so it
    is only resolved to a ``Pattern`` when predictions are grouped.
    """
    pattern_number: int
    pattern_description: str
    category_total_probability: float
    baseline_price: PriceRange
    predicted_prices: Tuple[PriceRange, ...]

    def __post_init__(self) -> None:
        number = _pattern_number(self.pattern_number)
        probability = _probability(self.category_total_probability, number)
        if len(self.predicted_prices) != len(PREDICTED_SLOTS):
            raise MalformedSeries(
                f"Pattern {self.pattern_number} predicts "
                f"{len(self.predicted_prices)} slots, expected "
                f"{len(PREDICTED_SLOTS)}."
            )
        object.__setattr__(self, "category_total_probability", probability)
        object.__setattr__(self, "pattern_number", number)

    @classmethod
    def from_prices(
            cls,
            pattern_number: int,
            pattern_description: str,
            category_total_probability: float,
            prices: Sequence["RangeRecord | PriceRange"],
        ) -> "Possibility":
        """
        Build a possibility from a flat 13-slot list of price ranges.

        Parameters
        ----------
        pattern_number : int
            Identifier of the pattern this trajectory belongs to.
        pattern_description : str
            Human readable pattern name.
        category_total_probability : float
            Probability of the whole pattern, shared by its members.
        prices : Sequence[RangeRecord | PriceRange]
            Thirteen ranges, slot 0 first, as mappings with ``min`` and
            ``max`` keys, ``(min, max)`` pairs, or ``PriceRange``.

        Returns
        -------
        Possibility
            The validated possibility.

        Raises
        ------
        MalformedSeries
            If ``prices`` does not hold exactly 13 entries.
        MalformedRange
            If any range has ``min > max``.
        """
        _check_length(prices, f"Prices of pattern {pattern_number}")
        ranges = tuple(PriceRange.coerce(price) for price in prices)
        return cls(
            pattern_number,
            pattern_description,
            category_total_probability,
            ranges[0],
            ranges[1:],
        )

    @property
    def prices(self) -> Tuple[PriceRange, ...]:
        """All 13 ranges in order, slot 0 first."""
        return (self.baseline_price, *self.predicted_prices)

    def predicted(self) -> Iterator[Tuple[int, PriceRange]]:
        """Yield ``(slot, range)`` for slots 1..12."""
        yield from zip(PREDICTED_SLOTS, self.predicted_prices)


@dataclass(frozen=True, slots=True)
class PredictionSet:
    """
    Everything the predictor produced for one week.

    ``baseline`` is the aggregate record covering all patterns; it
    drives the vertical domain and the day extents but is never grouped
    into a pattern. ``predictions`` are the per-pattern trajectories.
    """
    baseline: Possibility
    predictions: Tuple[Possibility, ...] = ()

    @classmethod
    def from_possibilities(
            cls, possibilities: Sequence[Possibility]
        ) -> "PredictionSet":
        """Treat the first record as the baseline, the rest as predictions."""
        if not possibilities:
            raise InvalidDomain(
                "At least the baseline possibility is required."
            )
        return cls(possibilities[0], tuple(possibilities[1:]))

    def domain_values(self) -> Iterator[float]:
        """Every bound of the baseline, slot 0 included."""
        for price in self.baseline.prices:
            yield price.min
            yield price.max


def as_input_series(values: "InputSeries | PriceList") -> InputSeries:
    if isinstance(values, InputSeries):
        return values
    return InputSeries.from_values(values)

def as_prediction_set(
        possibilities: "PredictionSet | Sequence[Possibility]",
    ) -> PredictionSet:
    if isinstance(possibilities, PredictionSet):
        return possibilities
    return PredictionSet.from_possibilities(possibilities)

def optional_price(value: Optional[float]) -> Price:
    """Normalize an empty cell (None or NaN) to ``None``."""
    if value is None:
        return None
    value = float(value)
    return None if math.isnan(value) else value
